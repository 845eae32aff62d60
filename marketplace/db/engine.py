"""Async SQLAlchemy engine and session factory.

When DATABASE_URL is configured, provides:
- async engine for PostgreSQL via asyncpg
- async session factory (request-scoped sessions come from
  marketplace.api.dependencies.get_repos)
- FastAPI lifespan hook for startup/shutdown (seeds sample data)

When DATABASE_URL is None, engine and factory are None and the app
falls back to in-memory repositories.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from marketplace.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all table models."""


if SETTINGS.database_url:
    engine = create_async_engine(
        SETTINGS.database_url,
        echo=SETTINGS.is_dev,  # log SQL in dev only
        pool_size=5,
        max_overflow=15,
    )
    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
else:
    engine = None
    async_session_factory = None


@asynccontextmanager
async def lifespan_db():
    """Startup/shutdown hook for the database engine."""
    if engine is None or async_session_factory is None:
        logger.info("No DATABASE_URL configured - using in-memory repositories")
        yield
        return

    logger.info("Database engine created: %s", engine.url)
    if SETTINGS.seed_sample_data:
        # Imported here: seed pulls in the Pg repos, which import tables,
        # which import Base from this module.
        from marketplace.db.seed import seed_database

        async with async_session_factory() as session:
            await seed_database(session)
            await session.commit()
    yield
    await engine.dispose()
    logger.info("Database engine disposed")
