"""Learning content: per-step completion reconstructed from progress.

Only the enrollment's scalar ``progress`` is persisted.  Each step of the
curriculum gets a completion threshold from its 1-based position *i*
among *T* total steps::

    threshold(i) = ceil(i * 100 / T)

and is complete iff ``progress >= threshold(i)``.  For the default
10-step curriculum the thresholds are 10, 20, ..., 100.  Lowering
progress therefore "uncompletes" later steps.

Advancing by one step moves progress to the next threshold instead of
adding a fixed amount, so a curriculum of any length reaches exactly 100
on its last step.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from marketplace.models.catalog import CourseDetail
from marketplace.models.enrollment import MAX_PROGRESS, Enrollment

StepType = Literal["video", "text", "quiz", "download"]


@dataclass(frozen=True, slots=True)
class StepTemplate:
    title: str
    type: StepType
    content: str
    duration: str | None = None


@dataclass(frozen=True, slots=True)
class SectionTemplate:
    title: str
    steps: tuple[StepTemplate, ...]


@dataclass(frozen=True, slots=True)
class LearningStep:
    id: int
    title: str
    type: StepType
    content: str
    duration: str | None
    is_completed: bool


@dataclass(frozen=True, slots=True)
class LearningSection:
    id: int
    title: str
    steps: tuple[LearningStep, ...]


@dataclass(frozen=True, slots=True)
class LearningContent:
    course_id: int
    title: str
    instructor_name: str
    instructor_avatar: str
    progress: int
    enrollment_id: int
    sections: tuple[LearningSection, ...]


DEFAULT_CURRICULUM: tuple[SectionTemplate, ...] = (
    SectionTemplate(
        title="Getting Started",
        steps=(
            StepTemplate(
                "Welcome to {course}",
                "video",
                "An overview of what you will learn in {course}.",
                "5:30",
            ),
            StepTemplate(
                "Course Resources",
                "download",
                "Slides, exercise files and reference sheets for {course}.",
            ),
            StepTemplate(
                "Setting Up Your Environment",
                "text",
                "Install the tools used throughout {course}.",
            ),
        ),
    ),
    SectionTemplate(
        title="Core Concepts",
        steps=(
            StepTemplate(
                "Fundamentals",
                "video",
                "The foundational ideas behind {course}.",
                "12:45",
            ),
            StepTemplate(
                "Working Through an Example",
                "video",
                "A guided walkthrough applying the fundamentals.",
                "18:20",
            ),
            StepTemplate(
                "Key Terms and Patterns",
                "text",
                "A written reference for the concepts covered so far.",
            ),
            StepTemplate(
                "Check Your Understanding",
                "quiz",
                "A short quiz on the core concepts of {course}.",
            ),
        ),
    ),
    SectionTemplate(
        title="Putting It Into Practice",
        steps=(
            StepTemplate(
                "Project Walkthrough",
                "video",
                "Build a complete project using what you learned in {course}.",
                "25:10",
            ),
            StepTemplate(
                "Project Starter Kit",
                "download",
                "Starter code and assets for the final project.",
            ),
            StepTemplate(
                "Final Assessment",
                "quiz",
                "Demonstrate your mastery of {course}.",
            ),
        ),
    ),
)


def total_steps(curriculum: Sequence[SectionTemplate] = DEFAULT_CURRICULUM) -> int:
    return sum(len(section.steps) for section in curriculum)


def step_threshold(index: int, total: int) -> int:
    """Completion threshold for 1-based step *index* of *total* steps."""
    if total <= 0:
        raise ValueError("curriculum must have at least one step")
    if not 1 <= index <= total:
        raise ValueError(f"step index must be in [1, {total}] (got {index})")
    # ceil(index * 100 / total) in integer arithmetic
    return -(-index * MAX_PROGRESS // total)


def completed_step_count(progress: int, total: int) -> int:
    return sum(
        1 for i in range(1, total + 1) if progress >= step_threshold(i, total)
    )


def next_step_progress(progress: int, total: int) -> int:
    """Progress after completing one more step, capped at 100."""
    done = completed_step_count(progress, total)
    if done >= total:
        return MAX_PROGRESS
    return step_threshold(done + 1, total)


def build_learning_content(
    enrollment: Enrollment,
    course: CourseDetail,
    curriculum: Sequence[SectionTemplate] = DEFAULT_CURRICULUM,
) -> LearningContent:
    total = total_steps(curriculum)
    title = course.course.title

    sections: list[LearningSection] = []
    position = 0
    for section_no, section in enumerate(curriculum, start=1):
        steps: list[LearningStep] = []
        for template in section.steps:
            position += 1
            steps.append(
                LearningStep(
                    id=position,
                    title=template.title.format(course=title),
                    type=template.type,
                    content=template.content.format(course=title),
                    duration=template.duration,
                    is_completed=enrollment.progress
                    >= step_threshold(position, total),
                )
            )
        sections.append(
            LearningSection(id=section_no, title=section.title, steps=tuple(steps))
        )

    instructor = course.instructor
    return LearningContent(
        course_id=course.course.id,
        title=title,
        instructor_name=instructor.name if instructor else "",
        instructor_avatar=instructor.avatar if instructor else "",
        progress=enrollment.progress,
        enrollment_id=enrollment.id,
        sections=tuple(sections),
    )
