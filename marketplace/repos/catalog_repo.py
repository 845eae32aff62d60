from __future__ import annotations

import itertools
from collections.abc import Iterable
from typing import Protocol

from marketplace.models.catalog import Category, Course, CourseDetail, Instructor


class CatalogRepo(Protocol):
    async def list_categories(self) -> list[Category]: ...
    async def get_category(self, category_id: int) -> Category | None: ...
    async def add_category(
        self, *, name: str, icon: str, course_count: int = 0
    ) -> Category: ...

    async def list_instructors(self) -> list[Instructor]: ...
    async def get_instructor(self, instructor_id: int) -> Instructor | None: ...
    async def add_instructor(self, *, name: str, avatar: str, bio: str) -> Instructor: ...

    async def list_courses(self, category_id: int | None = None) -> list[Course]: ...
    async def get_course(self, course_id: int) -> Course | None: ...
    async def get_course_details(
        self, course_ids: Iterable[int]
    ) -> dict[int, CourseDetail]: ...
    async def add_course(
        self,
        *,
        title: str,
        description: str,
        image: str,
        price: float,
        difficulty: str,
        duration: str,
        category_id: int,
        instructor_id: int,
        is_popular: bool = False,
        is_new: bool = False,
        rating: float = 0.0,
    ) -> Course: ...


class InMemoryCatalogRepo:
    def __init__(self) -> None:
        self._categories: dict[int, Category] = {}
        self._instructors: dict[int, Instructor] = {}
        self._courses: dict[int, Course] = {}
        self._category_ids = itertools.count(1)
        self._instructor_ids = itertools.count(1)
        self._course_ids = itertools.count(1)

    def clear(self) -> None:
        self._categories.clear()
        self._instructors.clear()
        self._courses.clear()
        self._category_ids = itertools.count(1)
        self._instructor_ids = itertools.count(1)
        self._course_ids = itertools.count(1)

    # --- categories ---

    async def list_categories(self) -> list[Category]:
        return list(self._categories.values())

    async def get_category(self, category_id: int) -> Category | None:
        return self._categories.get(category_id)

    async def add_category(
        self, *, name: str, icon: str, course_count: int = 0
    ) -> Category:
        category = Category(
            id=next(self._category_ids), name=name, icon=icon, course_count=course_count
        )
        self._categories[category.id] = category
        return category

    # --- instructors ---

    async def list_instructors(self) -> list[Instructor]:
        return list(self._instructors.values())

    async def get_instructor(self, instructor_id: int) -> Instructor | None:
        return self._instructors.get(instructor_id)

    async def add_instructor(self, *, name: str, avatar: str, bio: str) -> Instructor:
        instructor = Instructor(
            id=next(self._instructor_ids), name=name, avatar=avatar, bio=bio
        )
        self._instructors[instructor.id] = instructor
        return instructor

    # --- courses ---

    async def list_courses(self, category_id: int | None = None) -> list[Course]:
        courses = self._courses.values()
        if category_id is not None:
            return [c for c in courses if c.category_id == category_id]
        return list(courses)

    async def get_course(self, course_id: int) -> Course | None:
        return self._courses.get(course_id)

    async def get_course_details(
        self, course_ids: Iterable[int]
    ) -> dict[int, CourseDetail]:
        details: dict[int, CourseDetail] = {}
        for course_id in course_ids:
            course = self._courses.get(course_id)
            if course is None:
                continue
            details[course_id] = CourseDetail(
                course=course,
                instructor=self._instructors.get(course.instructor_id),
                category=self._categories.get(course.category_id),
            )
        return details

    async def add_course(
        self,
        *,
        title: str,
        description: str,
        image: str,
        price: float,
        difficulty: str,
        duration: str,
        category_id: int,
        instructor_id: int,
        is_popular: bool = False,
        is_new: bool = False,
        rating: float = 0.0,
    ) -> Course:
        if price < 0:
            raise ValueError("price must be non-negative")
        course = Course(
            id=next(self._course_ids),
            title=title,
            description=description,
            image=image,
            price=float(price),
            difficulty=difficulty,
            duration=duration,
            category_id=category_id,
            instructor_id=instructor_id,
            is_popular=is_popular,
            is_new=is_new,
            rating=float(rating),
        )
        self._courses[course.id] = course
        return course
