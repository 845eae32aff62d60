"""PostgreSQL implementation of EnrollmentRepo.

Uniqueness of (user_id, course_id) is enforced by the
uq_enrollments_user_course constraint.  The insert runs inside a
SAVEPOINT so a constraint violation rolls back only the insert and the
request transaction stays usable.
"""

from __future__ import annotations

import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.tables import EnrollmentRow
from marketplace.models.enrollment import Enrollment, EnrollmentStatus
from marketplace.repos.enrollment_repo import DuplicateEnrollmentError


class PgEnrollmentRepo:
    """Satisfies the EnrollmentRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, enrollment_id: int) -> Enrollment | None:
        row = await self._session.get(EnrollmentRow, enrollment_id)
        return _row_to_enrollment(row) if row is not None else None

    async def get_for_user_and_course(
        self, user_id: int, course_id: int
    ) -> Enrollment | None:
        stmt = select(EnrollmentRow).where(
            EnrollmentRow.user_id == user_id,
            EnrollmentRow.course_id == course_id,
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return _row_to_enrollment(row) if row is not None else None

    async def list_by_user(self, user_id: int) -> list[Enrollment]:
        stmt = (
            select(EnrollmentRow)
            .where(EnrollmentRow.user_id == user_id)
            .order_by(EnrollmentRow.id)
        )
        rows = (await self._session.execute(stmt)).scalars()
        return [_row_to_enrollment(r) for r in rows]

    async def add(
        self, *, user_id: int, course_id: int, enrolled_at: datetime.datetime
    ) -> Enrollment:
        row = EnrollmentRow(
            user_id=user_id,
            course_id=course_id,
            enrolled_at=enrolled_at,
            status="active",
            progress=0,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(row)
                await self._session.flush()
        except IntegrityError:
            raise DuplicateEnrollmentError(user_id, course_id) from None
        return _row_to_enrollment(row)

    async def update_progress(
        self, enrollment_id: int, *, progress: int, status: EnrollmentStatus
    ) -> Enrollment | None:
        stmt = (
            update(EnrollmentRow)
            .where(EnrollmentRow.id == enrollment_id)
            .values(progress=progress, status=status)
            .returning(EnrollmentRow)
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return _row_to_enrollment(row) if row is not None else None


def _row_to_enrollment(row: EnrollmentRow) -> Enrollment:
    return Enrollment(
        id=row.id,
        user_id=row.user_id,
        course_id=row.course_id,
        enrolled_at=row.enrolled_at,
        status=row.status,  # type: ignore[arg-type]
        progress=row.progress,
    )
