from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Literal

from marketplace.models.catalog import CourseDetail

EnrollmentStatus = Literal["active", "completed", "cancelled"]

MIN_PROGRESS = 0
MAX_PROGRESS = 100


@dataclass(frozen=True, slots=True)
class Enrollment:
    """One user bound to one course.  At most one per (user_id, course_id)."""

    id: int
    user_id: int
    course_id: int
    enrolled_at: datetime.datetime
    status: EnrollmentStatus = "active"
    progress: int = 0


@dataclass(frozen=True, slots=True)
class EnrollmentDetail:
    """Read-time join of an enrollment with its course for the dashboard/UI."""

    enrollment: Enrollment
    course: CourseDetail


@dataclass(frozen=True, slots=True)
class DashboardStats:
    enrolled_courses: int
    active_courses: int
    completed_courses: int
    not_started_courses: int
    average_progress: int
    completion_rate: int
    total_courses_time: int
