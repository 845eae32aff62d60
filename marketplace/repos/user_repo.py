from __future__ import annotations

import itertools
from dataclasses import replace
from typing import Protocol

from marketplace.models.user import SubscriptionTier, User


class UsernameTakenError(ValueError):
    pass


class UserRepo(Protocol):
    async def get_by_id(self, user_id: int) -> User | None: ...
    async def get_by_username(self, username: str) -> User | None: ...
    async def add(self, *, username: str, email: str, password_hash: str) -> User: ...
    async def update_password_hash(self, user_id: int, password_hash: str) -> None: ...
    async def update_subscription(
        self,
        user_id: int,
        subscription_tier: SubscriptionTier,
        has_unlimited_access: bool,
    ) -> User | None: ...


class InMemoryUserRepo:
    def __init__(self) -> None:
        self._by_id: dict[int, User] = {}
        self._by_username: dict[str, User] = {}
        self._ids = itertools.count(1)

    def clear(self) -> None:
        self._by_id.clear()
        self._by_username.clear()
        self._ids = itertools.count(1)

    async def get_by_id(self, user_id: int) -> User | None:
        return self._by_id.get(user_id)

    async def get_by_username(self, username: str) -> User | None:
        return self._by_username.get(username)

    async def add(self, *, username: str, email: str, password_hash: str) -> User:
        if username in self._by_username:
            raise UsernameTakenError(username)
        user = User(
            id=next(self._ids),
            username=username,
            email=email,
            password_hash=password_hash,
        )
        self._store(user)
        return user

    async def update_password_hash(self, user_id: int, password_hash: str) -> None:
        u = self._by_id.get(user_id)
        if u is None:
            raise KeyError("user not found")
        self._store(replace(u, password_hash=password_hash))

    async def update_subscription(
        self,
        user_id: int,
        subscription_tier: SubscriptionTier,
        has_unlimited_access: bool,
    ) -> User | None:
        u = self._by_id.get(user_id)
        if u is None:
            return None
        updated = replace(
            u,
            subscription_tier=subscription_tier,
            has_unlimited_access=has_unlimited_access,
        )
        self._store(updated)
        return updated

    def _store(self, user: User) -> None:
        self._by_id[user.id] = user
        self._by_username[user.username] = user
