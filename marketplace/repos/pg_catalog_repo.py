"""PostgreSQL implementation of CatalogRepo."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.tables import CategoryRow, CourseRow, InstructorRow
from marketplace.models.catalog import Category, Course, CourseDetail, Instructor


class PgCatalogRepo:
    """Satisfies the CatalogRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # --- categories ---

    async def list_categories(self) -> list[Category]:
        rows = (await self._session.execute(select(CategoryRow))).scalars()
        return [_row_to_category(r) for r in rows]

    async def get_category(self, category_id: int) -> Category | None:
        row = await self._session.get(CategoryRow, category_id)
        return _row_to_category(row) if row is not None else None

    async def add_category(
        self, *, name: str, icon: str, course_count: int = 0
    ) -> Category:
        row = CategoryRow(name=name, icon=icon, course_count=course_count)
        self._session.add(row)
        await self._session.flush()
        return _row_to_category(row)

    # --- instructors ---

    async def list_instructors(self) -> list[Instructor]:
        rows = (await self._session.execute(select(InstructorRow))).scalars()
        return [_row_to_instructor(r) for r in rows]

    async def get_instructor(self, instructor_id: int) -> Instructor | None:
        row = await self._session.get(InstructorRow, instructor_id)
        return _row_to_instructor(row) if row is not None else None

    async def add_instructor(self, *, name: str, avatar: str, bio: str) -> Instructor:
        row = InstructorRow(name=name, avatar=avatar, bio=bio)
        self._session.add(row)
        await self._session.flush()
        return _row_to_instructor(row)

    # --- courses ---

    async def list_courses(self, category_id: int | None = None) -> list[Course]:
        stmt = select(CourseRow).order_by(CourseRow.id)
        if category_id is not None:
            stmt = stmt.where(CourseRow.category_id == category_id)
        rows = (await self._session.execute(stmt)).scalars()
        return [_row_to_course(r) for r in rows]

    async def get_course(self, course_id: int) -> Course | None:
        row = await self._session.get(CourseRow, course_id)
        return _row_to_course(row) if row is not None else None

    async def get_course_details(
        self, course_ids: Iterable[int]
    ) -> dict[int, CourseDetail]:
        ids = list(set(course_ids))
        if not ids:
            return {}
        stmt = (
            select(CourseRow, InstructorRow, CategoryRow)
            .outerjoin(InstructorRow, InstructorRow.id == CourseRow.instructor_id)
            .outerjoin(CategoryRow, CategoryRow.id == CourseRow.category_id)
            .where(CourseRow.id.in_(ids))
        )
        details: dict[int, CourseDetail] = {}
        for course_row, instructor_row, category_row in await self._session.execute(
            stmt
        ):
            details[course_row.id] = CourseDetail(
                course=_row_to_course(course_row),
                instructor=(
                    _row_to_instructor(instructor_row)
                    if instructor_row is not None
                    else None
                ),
                category=(
                    _row_to_category(category_row) if category_row is not None else None
                ),
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
        row = CourseRow(
            title=title,
            description=description,
            image=image,
            price=price,
            difficulty=difficulty,
            duration=duration,
            category_id=category_id,
            instructor_id=instructor_id,
            is_popular=is_popular,
            is_new=is_new,
            rating=rating,
        )
        self._session.add(row)
        await self._session.flush()
        return _row_to_course(row)


def _row_to_category(row: CategoryRow) -> Category:
    return Category(
        id=row.id, name=row.name, icon=row.icon, course_count=row.course_count
    )


def _row_to_instructor(row: InstructorRow) -> Instructor:
    return Instructor(id=row.id, name=row.name, avatar=row.avatar, bio=row.bio)


def _row_to_course(row: CourseRow) -> Course:
    return Course(
        id=row.id,
        title=row.title,
        description=row.description,
        image=row.image,
        price=row.price,
        difficulty=row.difficulty,
        duration=row.duration,
        category_id=row.category_id,
        instructor_id=row.instructor_id,
        is_popular=row.is_popular,
        is_new=row.is_new,
        rating=row.rating,
    )
