"""Redis connection management.

Mirrors engine.py: when REDIS_URL is configured we create a shared
connection pool; when it is None (local dev, tests) consumers fall back
to in-memory implementations and no Redis server is needed.

Redis holds the session revocation list: a logout must be visible to
every API instance, and entries expire on their own when the session
token would have.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis

from marketplace.core.config import SETTINGS

logger = logging.getLogger(__name__)

if SETTINGS.redis_url:
    redis_pool: aioredis.Redis | None = aioredis.from_url(  # type: ignore[type-arg]
        SETTINGS.redis_url,
        decode_responses=True,
        max_connections=20,
    )
else:
    redis_pool = None


@asynccontextmanager
async def lifespan_redis():
    """Startup/shutdown hook for Redis - mirrors lifespan_db()."""
    if redis_pool is None:
        logger.info("No REDIS_URL configured - session revocation is in-memory")
        yield
        return

    try:
        await redis_pool.ping()  # type: ignore[misc]
        logger.info("Redis connected: %s", SETTINGS.redis_url)
    except Exception:
        # Start anyway; revocation checks will surface errors per request.
        logger.exception("Redis connection failed on startup")

    yield

    await redis_pool.aclose()
    logger.info("Redis connection pool closed")
