from __future__ import annotations

import datetime
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WaitlistEntry:
    id: int
    name: str
    email: str
    created_at: datetime.datetime
    interest: str | None = None
    course_id: int | None = None


@dataclass(frozen=True, slots=True)
class ContactSubmission:
    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime.datetime


@dataclass(frozen=True, slots=True)
class Testimonial:
    id: int
    name: str
    avatar: str
    rating: int
    text: str
    program: str
