from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Category:
    id: int
    name: str
    icon: str
    course_count: int = 0


@dataclass(frozen=True, slots=True)
class Instructor:
    id: int
    name: str
    avatar: str
    bio: str


@dataclass(frozen=True, slots=True)
class Course:
    id: int
    title: str
    description: str
    image: str
    price: float
    difficulty: str  # Beginner|Intermediate|Advanced|All Levels
    duration: str  # free text, e.g. "8 weeks"
    category_id: int
    instructor_id: int
    is_popular: bool = False
    is_new: bool = False
    rating: float = 0.0

    @property
    def is_free(self) -> bool:
        return self.price == 0


@dataclass(frozen=True, slots=True)
class CourseDetail:
    """A course joined with its instructor and category for display."""

    course: Course
    instructor: Instructor | None
    category: Category | None
