"""Response models shared across routers.

Wire format is camelCase; Python attributes stay snake_case.  Each
``from_domain`` builds the response from a frozen domain dataclass, so
routers never hand internal objects (or password hashes) to clients.
"""

from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from marketplace.models.catalog import Category, Course, CourseDetail, Instructor
from marketplace.models.enrollment import DashboardStats, Enrollment, EnrollmentDetail
from marketplace.models.user import User
from marketplace.services.learning_content import LearningContent


# Primary keys are Postgres INTEGER columns.
MAX_ROW_ID = 2**31 - 1


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserOut(CamelModel):
    id: int
    username: str
    email: str
    subscription_tier: str
    has_unlimited_access: bool

    @classmethod
    def from_domain(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            subscription_tier=user.subscription_tier,
            has_unlimited_access=user.has_unlimited_access,
        )


class CategoryOut(CamelModel):
    id: int
    name: str
    icon: str
    course_count: int

    @classmethod
    def from_domain(cls, c: Category) -> CategoryOut:
        return cls(id=c.id, name=c.name, icon=c.icon, course_count=c.course_count)


class InstructorOut(CamelModel):
    id: int
    name: str
    avatar: str
    bio: str

    @classmethod
    def from_domain(cls, i: Instructor) -> InstructorOut:
        return cls(id=i.id, name=i.name, avatar=i.avatar, bio=i.bio)


class CourseOut(CamelModel):
    id: int
    title: str
    description: str
    image: str
    price: float
    difficulty: str
    duration: str
    category_id: int
    instructor_id: int
    is_popular: bool
    is_new: bool
    rating: float

    @classmethod
    def from_domain(cls, c: Course) -> CourseOut:
        return cls(
            id=c.id,
            title=c.title,
            description=c.description,
            image=c.image,
            price=c.price,
            difficulty=c.difficulty,
            duration=c.duration,
            category_id=c.category_id,
            instructor_id=c.instructor_id,
            is_popular=c.is_popular,
            is_new=c.is_new,
            rating=c.rating,
        )


class CourseDetailOut(CourseOut):
    instructor: InstructorOut | None = None
    category: CategoryOut | None = None

    @classmethod
    def from_detail(cls, d: CourseDetail) -> CourseDetailOut:
        base = CourseOut.from_domain(d.course)
        return cls(
            **base.model_dump(),
            instructor=InstructorOut.from_domain(d.instructor) if d.instructor else None,
            category=CategoryOut.from_domain(d.category) if d.category else None,
        )


class EnrollmentOut(CamelModel):
    id: int
    user_id: int
    course_id: int
    status: Literal["active", "completed", "cancelled"]
    progress: int
    enrolled_at: datetime.datetime

    @classmethod
    def from_domain(cls, e: Enrollment) -> EnrollmentOut:
        return cls(
            id=e.id,
            user_id=e.user_id,
            course_id=e.course_id,
            status=e.status,
            progress=e.progress,
            enrolled_at=e.enrolled_at,
        )


class EnrollmentWithCourseOut(EnrollmentOut):
    course: CourseDetailOut

    @classmethod
    def from_detail(cls, d: EnrollmentDetail) -> EnrollmentWithCourseOut:
        base = EnrollmentOut.from_domain(d.enrollment)
        return cls(**base.model_dump(), course=CourseDetailOut.from_detail(d.course))


class DashboardStatsOut(CamelModel):
    enrolled_courses: int
    active_courses: int
    completed_courses: int
    not_started_courses: int
    average_progress: int
    completion_rate: int
    total_courses_time: int

    @classmethod
    def from_domain(cls, s: DashboardStats) -> DashboardStatsOut:
        return cls(
            enrolled_courses=s.enrolled_courses,
            active_courses=s.active_courses,
            completed_courses=s.completed_courses,
            not_started_courses=s.not_started_courses,
            average_progress=s.average_progress,
            completion_rate=s.completion_rate,
            total_courses_time=s.total_courses_time,
        )


class LearningStepOut(CamelModel):
    id: int
    title: str
    type: Literal["video", "text", "quiz", "download"]
    content: str
    duration: str | None = None
    is_completed: bool


class LearningSectionOut(CamelModel):
    id: int
    title: str
    steps: list[LearningStepOut]


class InstructorSummaryOut(CamelModel):
    name: str
    avatar: str


class LearningContentOut(CamelModel):
    id: int
    title: str
    instructor: InstructorSummaryOut
    progress: int
    enrollment_id: int
    sections: list[LearningSectionOut]

    @classmethod
    def from_domain(cls, lc: LearningContent) -> LearningContentOut:
        return cls(
            id=lc.course_id,
            title=lc.title,
            instructor=InstructorSummaryOut(
                name=lc.instructor_name, avatar=lc.instructor_avatar
            ),
            progress=lc.progress,
            enrollment_id=lc.enrollment_id,
            sections=[
                LearningSectionOut(
                    id=section.id,
                    title=section.title,
                    steps=[
                        LearningStepOut(
                            id=step.id,
                            title=step.title,
                            type=step.type,
                            content=step.content,
                            duration=step.duration,
                            is_completed=step.is_completed,
                        )
                        for step in section.steps
                    ],
                )
                for section in lc.sections
            ],
        )
