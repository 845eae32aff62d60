from __future__ import annotations

import datetime
import itertools
from typing import Protocol

from marketplace.models.marketing import ContactSubmission, Testimonial, WaitlistEntry


class DuplicateWaitlistEmailError(ValueError):
    pass


class MarketingRepo(Protocol):
    async def add_waitlist_entry(
        self,
        *,
        name: str,
        email: str,
        created_at: datetime.datetime,
        interest: str | None = None,
        course_id: int | None = None,
    ) -> WaitlistEntry: ...
    async def list_waitlist_entries(self) -> list[WaitlistEntry]: ...

    async def add_contact_submission(
        self,
        *,
        name: str,
        email: str,
        subject: str,
        message: str,
        created_at: datetime.datetime,
    ) -> ContactSubmission: ...
    async def list_contact_submissions(self) -> list[ContactSubmission]: ...

    async def list_testimonials(self) -> list[Testimonial]: ...
    async def add_testimonial(
        self, *, name: str, avatar: str, rating: int, text: str, program: str
    ) -> Testimonial: ...


class InMemoryMarketingRepo:
    def __init__(self) -> None:
        self._waitlist: dict[int, WaitlistEntry] = {}
        self._contacts: dict[int, ContactSubmission] = {}
        self._testimonials: dict[int, Testimonial] = {}
        self._ids = itertools.count(1)

    def clear(self) -> None:
        self._waitlist.clear()
        self._contacts.clear()
        self._testimonials.clear()
        self._ids = itertools.count(1)

    async def add_waitlist_entry(
        self,
        *,
        name: str,
        email: str,
        created_at: datetime.datetime,
        interest: str | None = None,
        course_id: int | None = None,
    ) -> WaitlistEntry:
        if any(e.email == email for e in self._waitlist.values()):
            raise DuplicateWaitlistEmailError(email)
        entry = WaitlistEntry(
            id=next(self._ids),
            name=name,
            email=email,
            created_at=created_at,
            interest=interest,
            course_id=course_id,
        )
        self._waitlist[entry.id] = entry
        return entry

    async def list_waitlist_entries(self) -> list[WaitlistEntry]:
        return list(self._waitlist.values())

    async def add_contact_submission(
        self,
        *,
        name: str,
        email: str,
        subject: str,
        message: str,
        created_at: datetime.datetime,
    ) -> ContactSubmission:
        submission = ContactSubmission(
            id=next(self._ids),
            name=name,
            email=email,
            subject=subject,
            message=message,
            created_at=created_at,
        )
        self._contacts[submission.id] = submission
        return submission

    async def list_contact_submissions(self) -> list[ContactSubmission]:
        return list(self._contacts.values())

    async def list_testimonials(self) -> list[Testimonial]:
        return list(self._testimonials.values())

    async def add_testimonial(
        self, *, name: str, avatar: str, rating: int, text: str, program: str
    ) -> Testimonial:
        testimonial = Testimonial(
            id=next(self._ids),
            name=name,
            avatar=avatar,
            rating=rating,
            text=text,
            program=program,
        )
        self._testimonials[testimonial.id] = testimonial
        return testimonial
