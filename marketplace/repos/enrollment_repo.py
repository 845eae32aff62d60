from __future__ import annotations

import datetime
import itertools
import threading
from dataclasses import replace
from typing import Protocol

from marketplace.models.enrollment import Enrollment, EnrollmentStatus


class DuplicateEnrollmentError(ValueError):
    """An enrollment for this (user_id, course_id) pair already exists."""

    def __init__(self, user_id: int, course_id: int) -> None:
        super().__init__(f"user={user_id} already enrolled in course={course_id}")
        self.user_id = user_id
        self.course_id = course_id


class EnrollmentRepo(Protocol):
    async def get(self, enrollment_id: int) -> Enrollment | None: ...
    async def get_for_user_and_course(
        self, user_id: int, course_id: int
    ) -> Enrollment | None: ...
    async def list_by_user(self, user_id: int) -> list[Enrollment]: ...
    async def add(
        self, *, user_id: int, course_id: int, enrolled_at: datetime.datetime
    ) -> Enrollment: ...
    async def update_progress(
        self, enrollment_id: int, *, progress: int, status: EnrollmentStatus
    ) -> Enrollment | None: ...


class InMemoryEnrollmentRepo:
    """Dict-backed ledger.

    The (user_id, course_id) index plays the role of the unique
    constraint; check-and-insert runs under a lock so concurrent callers
    on other threads cannot both pass the check.
    """

    def __init__(self) -> None:
        self._by_id: dict[int, Enrollment] = {}
        self._by_pair: dict[tuple[int, int], int] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def clear(self) -> None:
        with self._lock:
            self._by_id.clear()
            self._by_pair.clear()
            self._ids = itertools.count(1)

    async def get(self, enrollment_id: int) -> Enrollment | None:
        return self._by_id.get(enrollment_id)

    async def get_for_user_and_course(
        self, user_id: int, course_id: int
    ) -> Enrollment | None:
        enrollment_id = self._by_pair.get((user_id, course_id))
        if enrollment_id is None:
            return None
        return self._by_id.get(enrollment_id)

    async def list_by_user(self, user_id: int) -> list[Enrollment]:
        return [e for e in self._by_id.values() if e.user_id == user_id]

    async def add(
        self, *, user_id: int, course_id: int, enrolled_at: datetime.datetime
    ) -> Enrollment:
        with self._lock:
            if (user_id, course_id) in self._by_pair:
                raise DuplicateEnrollmentError(user_id, course_id)
            enrollment = Enrollment(
                id=next(self._ids),
                user_id=user_id,
                course_id=course_id,
                enrolled_at=enrolled_at,
            )
            self._by_id[enrollment.id] = enrollment
            self._by_pair[(user_id, course_id)] = enrollment.id
        return enrollment

    async def update_progress(
        self, enrollment_id: int, *, progress: int, status: EnrollmentStatus
    ) -> Enrollment | None:
        with self._lock:
            current = self._by_id.get(enrollment_id)
            if current is None:
                return None
            updated = replace(current, progress=progress, status=status)
            self._by_id[enrollment_id] = updated
        return updated
