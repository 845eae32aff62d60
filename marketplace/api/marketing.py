"""Public marketing endpoints: waitlist signup, contact form, testimonials."""

from __future__ import annotations

import datetime
import logging

from fastapi import APIRouter, status
from pydantic import EmailStr, Field

from marketplace.api.dependencies import ReposDep
from marketplace.api.schemas import MAX_ROW_ID, CamelModel
from marketplace.core.errors import InvalidArgument
from marketplace.repos.marketing_repo import DuplicateWaitlistEmailError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["marketing"])


class WaitlistIn(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    interest: str | None = None
    course_id: int | None = Field(default=None, le=MAX_ROW_ID)


class WaitlistOut(CamelModel):
    id: int
    name: str
    email: str
    interest: str | None
    course_id: int | None
    created_at: datetime.datetime


class ContactIn(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ContactOut(CamelModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime.datetime


class TestimonialOut(CamelModel):
    id: int
    name: str
    avatar: str
    rating: int
    text: str
    program: str


@router.post(
    "/waitlist", response_model=WaitlistOut, status_code=status.HTTP_201_CREATED
)
async def join_waitlist(payload: WaitlistIn, repos: ReposDep) -> WaitlistOut:
    try:
        entry = await repos.marketing.add_waitlist_entry(
            name=payload.name,
            email=str(payload.email).lower(),
            interest=payload.interest,
            course_id=payload.course_id,
            created_at=datetime.datetime.now(datetime.UTC),
        )
    except DuplicateWaitlistEmailError:
        raise InvalidArgument("Email is already on the waitlist") from None
    logger.info("Waitlist signup id=%s", entry.id)
    return WaitlistOut(
        id=entry.id,
        name=entry.name,
        email=entry.email,
        interest=entry.interest,
        course_id=entry.course_id,
        created_at=entry.created_at,
    )


@router.post(
    "/contact", response_model=ContactOut, status_code=status.HTTP_201_CREATED
)
async def submit_contact(payload: ContactIn, repos: ReposDep) -> ContactOut:
    submission = await repos.marketing.add_contact_submission(
        name=payload.name,
        email=str(payload.email),
        subject=payload.subject,
        message=payload.message,
        created_at=datetime.datetime.now(datetime.UTC),
    )
    logger.info("Contact submission id=%s", submission.id)
    return ContactOut(
        id=submission.id,
        name=submission.name,
        email=submission.email,
        subject=submission.subject,
        message=submission.message,
        created_at=submission.created_at,
    )


@router.get("/testimonials", response_model=list[TestimonialOut])
async def list_testimonials(repos: ReposDep) -> list[TestimonialOut]:
    return [
        TestimonialOut(
            id=t.id,
            name=t.name,
            avatar=t.avatar,
            rating=t.rating,
            text=t.text,
            program=t.program,
        )
        for t in await repos.marketing.list_testimonials()
    ]
