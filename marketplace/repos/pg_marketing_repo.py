"""PostgreSQL implementation of MarketingRepo."""

from __future__ import annotations

import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.tables import ContactSubmissionRow, TestimonialRow, WaitlistRow
from marketplace.models.marketing import ContactSubmission, Testimonial, WaitlistEntry
from marketplace.repos.marketing_repo import DuplicateWaitlistEmailError


class PgMarketingRepo:
    """Satisfies the MarketingRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_waitlist_entry(
        self,
        *,
        name: str,
        email: str,
        created_at: datetime.datetime,
        interest: str | None = None,
        course_id: int | None = None,
    ) -> WaitlistEntry:
        row = WaitlistRow(
            name=name,
            email=email,
            interest=interest,
            course_id=course_id,
            created_at=created_at,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(row)
                await self._session.flush()
        except IntegrityError:
            raise DuplicateWaitlistEmailError(email) from None
        return _row_to_waitlist(row)

    async def list_waitlist_entries(self) -> list[WaitlistEntry]:
        rows = (await self._session.execute(select(WaitlistRow))).scalars()
        return [_row_to_waitlist(r) for r in rows]

    async def add_contact_submission(
        self,
        *,
        name: str,
        email: str,
        subject: str,
        message: str,
        created_at: datetime.datetime,
    ) -> ContactSubmission:
        row = ContactSubmissionRow(
            name=name,
            email=email,
            subject=subject,
            message=message,
            created_at=created_at,
        )
        self._session.add(row)
        await self._session.flush()
        return _row_to_contact(row)

    async def list_contact_submissions(self) -> list[ContactSubmission]:
        rows = (await self._session.execute(select(ContactSubmissionRow))).scalars()
        return [_row_to_contact(r) for r in rows]

    async def list_testimonials(self) -> list[Testimonial]:
        rows = (await self._session.execute(select(TestimonialRow))).scalars()
        return [_row_to_testimonial(r) for r in rows]

    async def add_testimonial(
        self, *, name: str, avatar: str, rating: int, text: str, program: str
    ) -> Testimonial:
        row = TestimonialRow(
            name=name, avatar=avatar, rating=rating, text=text, program=program
        )
        self._session.add(row)
        await self._session.flush()
        return _row_to_testimonial(row)


def _row_to_waitlist(row: WaitlistRow) -> WaitlistEntry:
    return WaitlistEntry(
        id=row.id,
        name=row.name,
        email=row.email,
        created_at=row.created_at,
        interest=row.interest,
        course_id=row.course_id,
    )


def _row_to_contact(row: ContactSubmissionRow) -> ContactSubmission:
    return ContactSubmission(
        id=row.id,
        name=row.name,
        email=row.email,
        subject=row.subject,
        message=row.message,
        created_at=row.created_at,
    )


def _row_to_testimonial(row: TestimonialRow) -> Testimonial:
    return Testimonial(
        id=row.id,
        name=row.name,
        avatar=row.avatar,
        rating=row.rating,
        text=row.text,
        program=row.program,
    )
