"""Enrollment and progress endpoints.

All state changes go through ``enrollment_service``; this module only
parses input and shapes output.
"""

from __future__ import annotations

from fastapi import APIRouter, status
from pydantic import Field, StrictInt

from marketplace.api.dependencies import CurrentUser, ReposDep, RowId
from marketplace.api.schemas import (
    MAX_ROW_ID,
    CamelModel,
    EnrollmentOut,
    EnrollmentWithCourseOut,
    LearningContentOut,
)
from marketplace.services import enrollment_service

router = APIRouter(prefix="/api", tags=["enrollments"])


class EnrollIn(CamelModel):
    course_id: StrictInt = Field(le=MAX_ROW_ID)


class ProgressIn(CamelModel):
    # StrictInt: 55.0, "55" and true are rejected rather than coerced.
    # The 0..100 range is checked by the service.
    progress: StrictInt


@router.get("/enrollments", response_model=list[EnrollmentWithCourseOut])
async def list_enrollments(
    user: CurrentUser, repos: ReposDep
) -> list[EnrollmentWithCourseOut]:
    details = await enrollment_service.list_enrollments(repos, user.id)
    return [EnrollmentWithCourseOut.from_detail(d) for d in details]


@router.post(
    "/enrollments",
    response_model=EnrollmentOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_enrollment(
    payload: EnrollIn, user: CurrentUser, repos: ReposDep
) -> EnrollmentOut:
    enrollment = await enrollment_service.enroll(repos, user, payload.course_id)
    return EnrollmentOut.from_domain(enrollment)


@router.patch("/enrollments/{enrollment_id}/progress", response_model=EnrollmentOut)
async def update_progress(
    enrollment_id: RowId, payload: ProgressIn, user: CurrentUser, repos: ReposDep
) -> EnrollmentOut:
    enrollment = await enrollment_service.update_progress(
        repos, user.id, enrollment_id, payload.progress
    )
    return EnrollmentOut.from_domain(enrollment)


@router.post("/enrollments/{enrollment_id}/advance", response_model=EnrollmentOut)
async def advance(
    enrollment_id: RowId, user: CurrentUser, repos: ReposDep
) -> EnrollmentOut:
    enrollment = await enrollment_service.advance(repos, user.id, enrollment_id)
    return EnrollmentOut.from_domain(enrollment)


@router.get(
    "/courses/{course_id}/learning-content", response_model=LearningContentOut
)
async def learning_content(
    course_id: RowId, user: CurrentUser, repos: ReposDep
) -> LearningContentOut:
    content = await enrollment_service.get_learning_content(repos, user.id, course_id)
    return LearningContentOut.from_domain(content)
