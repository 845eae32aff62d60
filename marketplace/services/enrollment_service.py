"""Enrollment ledger operations.

Every mutation goes through here: the API layer never writes enrollments
directly.  Access is decided by ``access_policy.can_enroll``; uniqueness
of (user, course) is re-checked at write time by the repository, so two
concurrent requests can never both create an enrollment.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from marketplace.core.errors import (
    Conflict,
    Forbidden,
    InvalidArgument,
    NotFound,
    PaymentRequired,
)
from marketplace.core.metrics import ENROLLMENT_ATTEMPTS, PROGRESS_UPDATES
from marketplace.models.enrollment import (
    MAX_PROGRESS,
    MIN_PROGRESS,
    Enrollment,
    EnrollmentDetail,
    EnrollmentStatus,
)
from marketplace.models.user import User
from marketplace.repos.enrollment_repo import DuplicateEnrollmentError
from marketplace.repos.registry import Repos
from marketplace.services import learning_content
from marketplace.services.access_policy import DenyReason, can_enroll

logger = logging.getLogger(__name__)

ALREADY_ENROLLED_MESSAGE = "Already enrolled in this course"
COURSE_NOT_FOUND_MESSAGE = "Course not found"
ENROLLMENT_NOT_FOUND_MESSAGE = "Enrollment not found"


async def enroll(repos: Repos, user: User, course_id: int) -> Enrollment:
    existing = await repos.enrollments.get_for_user_and_course(user.id, course_id)
    course = await repos.catalog.get_course(course_id)
    decision = can_enroll(user, course, already_enrolled=existing is not None)

    if not decision.allowed:
        ENROLLMENT_ATTEMPTS.labels(result=decision.reason.value).inc()
        logger.info(
            "Enrollment denied user=%s course=%s reason=%s",
            user.id,
            course_id,
            decision.reason.value,
        )
        if decision.reason is DenyReason.ALREADY_ENROLLED:
            raise Conflict(ALREADY_ENROLLED_MESSAGE)
        if decision.reason is DenyReason.COURSE_NOT_FOUND:
            raise NotFound(COURSE_NOT_FOUND_MESSAGE)
        raise PaymentRequired(
            course_price=course.price,
            subscription_tier=user.subscription_tier,
        )

    try:
        enrollment = await repos.enrollments.add(
            user_id=user.id, course_id=course_id, enrolled_at=datetime.now(UTC)
        )
    except DuplicateEnrollmentError:
        ENROLLMENT_ATTEMPTS.labels(result=DenyReason.ALREADY_ENROLLED.value).inc()
        logger.info(
            "Concurrent duplicate enrollment rejected user=%s course=%s",
            user.id,
            course_id,
        )
        raise Conflict(ALREADY_ENROLLED_MESSAGE) from None

    ENROLLMENT_ATTEMPTS.labels(result="created").inc()
    logger.info(
        "Enrollment created",
        extra={
            "user_id": user.id,
            "course_id": course_id,
            "enrollment_id": enrollment.id,
        },
    )
    return enrollment


async def list_enrollments(repos: Repos, user_id: int) -> list[EnrollmentDetail]:
    """The user's enrollments, each joined with its course for display.

    Enrollments whose course has vanished from the catalog are skipped.
    """
    enrollments = await repos.enrollments.list_by_user(user_id)
    details = await repos.catalog.get_course_details(
        {e.course_id for e in enrollments}
    )
    return [
        EnrollmentDetail(enrollment=e, course=details[e.course_id])
        for e in sorted(enrollments, key=lambda e: e.id)
        if e.course_id in details
    ]


def status_for_progress(
    current: EnrollmentStatus, progress: int
) -> EnrollmentStatus:
    """Keep status consistent with progress; cancelled is left alone."""
    if current == "cancelled":
        return current
    if progress == MAX_PROGRESS:
        return "completed"
    if current == "completed":
        return "active"
    return current


async def _get_owned(repos: Repos, user_id: int, enrollment_id: int) -> Enrollment:
    enrollment = await repos.enrollments.get(enrollment_id)
    if enrollment is None:
        raise NotFound(ENROLLMENT_NOT_FOUND_MESSAGE)
    if enrollment.user_id != user_id:
        logger.warning(
            "Progress update denied: user=%s does not own enrollment=%s",
            user_id,
            enrollment_id,
        )
        raise Forbidden("Not your enrollment")
    return enrollment


async def _write_progress(
    repos: Repos, enrollment: Enrollment, progress: int, kind: str
) -> Enrollment:
    status = status_for_progress(enrollment.status, progress)
    updated = await repos.enrollments.update_progress(
        enrollment.id, progress=progress, status=status
    )
    if updated is None:
        raise NotFound(ENROLLMENT_NOT_FOUND_MESSAGE)
    PROGRESS_UPDATES.labels(kind=kind).inc()
    logger.info(
        "Progress %s -> %d (status=%s)",
        kind,
        progress,
        status,
        extra={
            "user_id": enrollment.user_id,
            "course_id": enrollment.course_id,
            "enrollment_id": enrollment.id,
        },
    )
    return updated


async def update_progress(
    repos: Repos, user_id: int, enrollment_id: int, progress: int
) -> Enrollment:
    # bool is an int subclass; True must not pass as 1
    if isinstance(progress, bool) or not isinstance(progress, int):
        raise InvalidArgument("Progress must be an integer")
    if not MIN_PROGRESS <= progress <= MAX_PROGRESS:
        raise InvalidArgument(
            f"Progress must be between {MIN_PROGRESS} and {MAX_PROGRESS}"
        )
    enrollment = await _get_owned(repos, user_id, enrollment_id)
    return await _write_progress(repos, enrollment, progress, "set")


async def advance(repos: Repos, user_id: int, enrollment_id: int) -> Enrollment:
    """Complete the next curriculum step."""
    enrollment = await _get_owned(repos, user_id, enrollment_id)
    progress = learning_content.next_step_progress(
        enrollment.progress, learning_content.total_steps()
    )
    return await _write_progress(repos, enrollment, progress, "advance")


async def get_learning_content(
    repos: Repos, user_id: int, course_id: int
) -> learning_content.LearningContent:
    details = await repos.catalog.get_course_details([course_id])
    course = details.get(course_id)
    if course is None:
        raise NotFound(COURSE_NOT_FOUND_MESSAGE)
    enrollment = await repos.enrollments.get_for_user_and_course(user_id, course_id)
    if enrollment is None:
        raise Forbidden("Not enrolled in this course")
    return learning_content.build_learning_content(enrollment, course)
