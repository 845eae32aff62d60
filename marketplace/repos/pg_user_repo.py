"""PostgreSQL implementation of UserRepo."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.tables import UserRow
from marketplace.models.user import SubscriptionTier, User
from marketplace.repos.user_repo import UsernameTakenError


class PgUserRepo:
    """Satisfies the UserRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: int) -> User | None:
        stmt = select(UserRow).where(UserRow.id == user_id)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_user(row)

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(UserRow).where(UserRow.username == username)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_user(row)

    async def add(self, *, username: str, email: str, password_hash: str) -> User:
        row = UserRow(
            username=username,
            email=email,
            password_hash=password_hash,
            subscription_tier="free",
            has_unlimited_access=False,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(row)
                await self._session.flush()
        except IntegrityError:
            raise UsernameTakenError(username) from None
        return _row_to_user(row)

    async def update_password_hash(self, user_id: int, password_hash: str) -> None:
        stmt = (
            update(UserRow)
            .where(UserRow.id == user_id)
            .values(password_hash=password_hash)
        )
        await self._session.execute(stmt)

    async def update_subscription(
        self,
        user_id: int,
        subscription_tier: SubscriptionTier,
        has_unlimited_access: bool,
    ) -> User | None:
        stmt = (
            update(UserRow)
            .where(UserRow.id == user_id)
            .values(
                subscription_tier=subscription_tier,
                has_unlimited_access=has_unlimited_access,
            )
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_by_id(user_id)


def _row_to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        subscription_tier=row.subscription_tier,  # type: ignore[arg-type]
        has_unlimited_access=row.has_unlimited_access,
    )
