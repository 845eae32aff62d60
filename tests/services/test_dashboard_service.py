from __future__ import annotations

from datetime import UTC, datetime

import pytest

from marketplace.models.catalog import Course
from marketplace.models.enrollment import Enrollment
from marketplace.services.dashboard_service import compute_stats, estimate_course_hours

_NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _enrollment(eid: int, progress: int, status: str = "active", course_id: int = 1):
    return Enrollment(
        id=eid,
        user_id=1,
        course_id=course_id,
        enrolled_at=_NOW,
        status=status,  # type: ignore[arg-type]
        progress=progress,
    )


def _course(cid: int, duration: str) -> Course:
    return Course(
        id=cid,
        title="c",
        description="d",
        image="i",
        price=0,
        difficulty="Beginner",
        duration=duration,
        category_id=1,
        instructor_id=1,
    )


def test_empty_set_is_all_zero() -> None:
    stats = compute_stats([])
    assert stats.enrolled_courses == 0
    assert stats.average_progress == 0
    assert stats.completion_rate == 0
    assert stats.total_courses_time == 0


def test_mixed_set() -> None:
    stats = compute_stats(
        [_enrollment(1, 0), _enrollment(2, 45), _enrollment(3, 100)]
    )
    assert stats.enrolled_courses == 3
    assert stats.active_courses == 2
    assert stats.completed_courses == 1
    assert stats.not_started_courses == 1
    assert stats.average_progress == 48
    assert stats.completion_rate == 33


def test_completed_status_counts_as_completed() -> None:
    stats = compute_stats([_enrollment(1, 60, status="completed")])
    assert stats.completed_courses == 1
    assert stats.active_courses == 0


def test_cancelled_is_neither_active_nor_not_started() -> None:
    stats = compute_stats([_enrollment(1, 0, status="cancelled")])
    assert stats.active_courses == 0
    assert stats.not_started_courses == 0
    assert stats.completed_courses == 0


def test_average_rounds_down() -> None:
    stats = compute_stats([_enrollment(1, 99), _enrollment(2, 100)])
    assert stats.average_progress == 99


def test_total_time_sums_course_hours() -> None:
    courses = {1: _course(1, "8 weeks"), 2: _course(2, "2 months")}
    stats = compute_stats(
        [_enrollment(1, 0, course_id=1), _enrollment(2, 0, course_id=2)], courses
    )
    assert stats.total_courses_time == 8 * 5 + 2 * 20


@pytest.mark.parametrize(
    ("duration", "hours"),
    [
        ("8 weeks", 40),
        ("1 week", 5),
        ("3 months", 60),
        ("12 hours", 12),
        ("10 Days", 10),
        ("self-paced", 0),
        ("", 0),
    ],
)
def test_estimate_course_hours(duration: str, hours: int) -> None:
    assert estimate_course_hours(duration) == hours
