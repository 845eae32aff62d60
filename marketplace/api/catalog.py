from __future__ import annotations

from fastapi import APIRouter, Query

from marketplace.api.dependencies import ReposDep, RowId
from marketplace.api.schemas import (
    MAX_ROW_ID,
    CategoryOut,
    CourseDetailOut,
    CourseOut,
    InstructorOut,
)
from marketplace.core.errors import NotFound

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/categories", response_model=list[CategoryOut])
async def list_categories(repos: ReposDep) -> list[CategoryOut]:
    return [CategoryOut.from_domain(c) for c in await repos.catalog.list_categories()]


@router.get("/categories/{category_id}", response_model=CategoryOut)
async def get_category(category_id: RowId, repos: ReposDep) -> CategoryOut:
    category = await repos.catalog.get_category(category_id)
    if category is None:
        raise NotFound("Category not found")
    return CategoryOut.from_domain(category)


@router.get("/courses", response_model=list[CourseOut])
async def list_courses(
    repos: ReposDep,
    category_id: int | None = Query(
        default=None, alias="categoryId", le=MAX_ROW_ID
    ),
) -> list[CourseOut]:
    courses = await repos.catalog.list_courses(category_id=category_id)
    return [CourseOut.from_domain(c) for c in courses]


@router.get("/courses/{course_id}", response_model=CourseDetailOut)
async def get_course(course_id: RowId, repos: ReposDep) -> CourseDetailOut:
    details = await repos.catalog.get_course_details([course_id])
    if course_id not in details:
        raise NotFound("Course not found")
    return CourseDetailOut.from_detail(details[course_id])


@router.get("/instructors", response_model=list[InstructorOut])
async def list_instructors(repos: ReposDep) -> list[InstructorOut]:
    return [InstructorOut.from_domain(i) for i in await repos.catalog.list_instructors()]


@router.get("/instructors/{instructor_id}", response_model=InstructorOut)
async def get_instructor(instructor_id: RowId, repos: ReposDep) -> InstructorOut:
    instructor = await repos.catalog.get_instructor(instructor_id)
    if instructor is None:
        raise NotFound("Instructor not found")
    return InstructorOut.from_domain(instructor)
