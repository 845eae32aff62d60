from __future__ import annotations

import logging

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from marketplace.core.errors import Conflict, InvalidArgument
from marketplace.models.user import User
from marketplace.repos.user_repo import UsernameTakenError, UserRepo

logger = logging.getLogger(__name__)

_ph = PasswordHasher()


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise ValueError("password must be non-empty")
    # Argon2 includes salt+params in the returned encoded string.
    return _ph.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return _ph.verify(password_hash, plain_password)
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False


async def register_user(
    repo: UserRepo, *, username: str, email: str, password: str
) -> User:
    if not password:
        raise InvalidArgument("Password must not be empty")
    if await repo.get_by_username(username) is not None:
        raise Conflict("Username already exists")
    try:
        user = await repo.add(
            username=username, email=email, password_hash=hash_password(password)
        )
    except UsernameTakenError:
        # lost a race with a concurrent registration
        raise Conflict("Username already exists") from None
    logger.info("Registered user=%s username=%s", user.id, username)
    return user


async def authenticate_user(
    repo: UserRepo, username: str, password: str
) -> User | None:
    user = await repo.get_by_username(username)
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None

    # Upgrade the stored hash if the hasher's parameters changed.
    try:
        if _ph.check_needs_rehash(user.password_hash):
            await repo.update_password_hash(user.id, _ph.hash(password))
            logger.info("Rehashed password for user=%s", user.id)
    except InvalidHash:
        return None

    return user
