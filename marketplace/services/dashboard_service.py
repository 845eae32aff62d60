"""Dashboard statistics derived from a user's enrollments.

Recomputed on every read; nothing here is persisted or cached.

Averages round down: ``average_progress = floor(mean(progress))`` and
``completion_rate = floor(completed * 100 / enrolled)``.  An empty
enrollment set yields zeros.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from marketplace.models.catalog import Course
from marketplace.models.enrollment import MAX_PROGRESS, DashboardStats, Enrollment
from marketplace.repos.registry import Repos

# Estimated study hours per unit of a course's free-text duration.
HOURS_PER_UNIT: dict[str, int] = {
    "hour": 1,
    "day": 1,
    "week": 5,
    "month": 20,
}

_DURATION_RE = re.compile(r"(\d+)\s*(hour|day|week|month)s?", re.IGNORECASE)


def estimate_course_hours(duration: str) -> int:
    """Estimate study hours from text like "8 weeks".  Unparseable -> 0."""
    match = _DURATION_RE.search(duration or "")
    if match is None:
        return 0
    amount, unit = match.groups()
    return int(amount) * HOURS_PER_UNIT[unit.lower()]


def is_active(enrollment: Enrollment) -> bool:
    return enrollment.status == "active" and enrollment.progress < MAX_PROGRESS


def is_completed(enrollment: Enrollment) -> bool:
    return enrollment.progress == MAX_PROGRESS or enrollment.status == "completed"


def is_not_started(enrollment: Enrollment) -> bool:
    return enrollment.progress == 0 and enrollment.status == "active"


def compute_stats(
    enrollments: Iterable[Enrollment],
    courses: dict[int, Course] | None = None,
) -> DashboardStats:
    """Aggregate *enrollments*; *courses* (by id) feeds the hours estimate."""
    items = list(enrollments)
    total = len(items)
    if total == 0:
        return DashboardStats(
            enrolled_courses=0,
            active_courses=0,
            completed_courses=0,
            not_started_courses=0,
            average_progress=0,
            completion_rate=0,
            total_courses_time=0,
        )

    completed = sum(1 for e in items if is_completed(e))
    hours = 0
    if courses:
        hours = sum(
            estimate_course_hours(courses[e.course_id].duration)
            for e in items
            if e.course_id in courses
        )

    return DashboardStats(
        enrolled_courses=total,
        active_courses=sum(1 for e in items if is_active(e)),
        completed_courses=completed,
        not_started_courses=sum(1 for e in items if is_not_started(e)),
        average_progress=sum(e.progress for e in items) // total,
        completion_rate=completed * 100 // total,
        total_courses_time=hours,
    )


async def get_dashboard_stats(repos: Repos, user_id: int) -> DashboardStats:
    enrollments = await repos.enrollments.list_by_user(user_id)
    details = await repos.catalog.get_course_details(
        {e.course_id for e in enrollments}
    )
    return compute_stats(enrollments, {cid: d.course for cid, d in details.items()})
