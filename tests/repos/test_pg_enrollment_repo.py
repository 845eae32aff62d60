"""Postgres enrollment repository tests.

Run only when TEST_DATABASE_URL points at a scratch Postgres database
(asyncpg URL).  Each test works inside one outer transaction that is
rolled back at the end, so nothing is left behind.
"""

from __future__ import annotations

import asyncio
import os
import uuid
from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from marketplace.db import tables  # noqa: F401  (registers the tables on Base)
from marketplace.db.engine import Base
from marketplace.repos.enrollment_repo import DuplicateEnrollmentError
from marketplace.repos.registry import Repos, build_pg_repos

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "").strip()

pytestmark = pytest.mark.skipif(
    not TEST_DATABASE_URL, reason="TEST_DATABASE_URL not set"
)


async def _user_and_course(repos: Repos) -> tuple[int, int]:
    user = await repos.users.add(
        username=f"pg-{uuid.uuid4().hex[:12]}",
        email="pg@example.com",
        password_hash="x",
    )
    category = await repos.catalog.add_category(name="Testing", icon="flask")
    instructor = await repos.catalog.add_instructor(name="Ann", avatar="", bio="")
    course = await repos.catalog.add_course(
        title="Postgres basics",
        description="",
        image="",
        price=0,
        difficulty="beginner",
        duration="2 weeks",
        category_id=category.id,
        instructor_id=instructor.id,
    )
    return user.id, course.id


async def _duplicate_enrollment_scenario() -> None:
    engine = create_async_engine(TEST_DATABASE_URL)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with engine.connect() as conn:
            outer = await conn.begin()
            session = AsyncSession(bind=conn, expire_on_commit=False)
            try:
                repos = build_pg_repos(session)
                user_id, course_id = await _user_and_course(repos)

                first = await repos.enrollments.add(
                    user_id=user_id, course_id=course_id, enrolled_at=datetime.now(UTC)
                )
                assert first.status == "active"
                assert first.progress == 0

                with pytest.raises(DuplicateEnrollmentError):
                    await repos.enrollments.add(
                        user_id=user_id,
                        course_id=course_id,
                        enrolled_at=datetime.now(UTC),
                    )

                # The failed insert only rolled back its savepoint.
                rows = await repos.enrollments.list_by_user(user_id)
                assert [e.id for e in rows] == [first.id]
            finally:
                await session.close()
                await outer.rollback()
    finally:
        await engine.dispose()


def test_duplicate_enrollment_raises_and_keeps_session_usable() -> None:
    asyncio.run(_duplicate_enrollment_scenario())
