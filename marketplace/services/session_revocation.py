"""Revocation list for session tokens.

Session cookies are self-contained JWTs, so logging out has to remember
the token's ``jti`` until the token would have expired anyway.  Entries
carry a TTL equal to the token's remaining lifetime and clean themselves
up.  Redis is used when REDIS_URL is configured so every API instance
sees the same list; otherwise the list is per-process.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from marketplace.core.metrics import SESSION_REVOCATION_CHECKS
from marketplace.db.redis import redis_pool


@runtime_checkable
class SessionRevocationList(Protocol):
    async def revoke(self, jti: str, expires_at: float) -> None:
        """Reject the session with this jti until *expires_at*."""
        ...

    async def is_revoked(self, jti: str) -> bool: ...


class InMemorySessionRevocationList:
    def __init__(self) -> None:
        # jti -> expiry timestamp (Unix seconds)
        self._revoked: dict[str, float] = {}

    def clear(self) -> None:
        self._revoked.clear()

    async def revoke(self, jti: str, expires_at: float) -> None:
        if expires_at <= time.time():
            return
        self._revoked[jti] = expires_at

    async def is_revoked(self, jti: str) -> bool:
        exp = self._revoked.get(jti)
        if exp is None:
            SESSION_REVOCATION_CHECKS.labels(result="valid").inc()
            return False
        # Mimic Redis TTL expiry
        if exp < time.time():
            del self._revoked[jti]
            SESSION_REVOCATION_CHECKS.labels(result="valid").inc()
            return False
        SESSION_REVOCATION_CHECKS.labels(result="revoked").inc()
        return True


class RedisSessionRevocationList:
    _PREFIX = "revoked:session:"

    def __init__(self, redis_client) -> None:
        self._redis = redis_client

    async def revoke(self, jti: str, expires_at: float) -> None:
        ttl_seconds = int(expires_at - time.time())
        if ttl_seconds <= 0:
            return
        # SETEX sets value and TTL atomically.
        await self._redis.setex(f"{self._PREFIX}{jti}", ttl_seconds, "1")

    async def is_revoked(self, jti: str) -> bool:
        revoked = bool(await self._redis.exists(f"{self._PREFIX}{jti}"))
        SESSION_REVOCATION_CHECKS.labels(
            result="revoked" if revoked else "valid"
        ).inc()
        return revoked


if redis_pool is not None:
    revocation_list: SessionRevocationList = RedisSessionRevocationList(redis_pool)
else:
    revocation_list = InMemorySessionRevocationList()
