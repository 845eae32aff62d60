"""Sample catalog and testimonial data.

Seeding is skipped when the store already has categories, so it is safe
to run on every startup.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.repos.registry import Repos, build_pg_repos

logger = logging.getLogger(__name__)

_UNSPLASH = "https://images.unsplash.com"

SAMPLE_CATEGORIES: list[dict] = [
    {"name": "Programming", "icon": "code", "course_count": 24},
    {"name": "Data Science", "icon": "chart-line", "course_count": 18},
    {"name": "Design", "icon": "paint-brush", "course_count": 15},
    {"name": "Business", "icon": "briefcase", "course_count": 12},
    {"name": "Marketing", "icon": "bullhorn", "course_count": 10},
    {"name": "IT & Software", "icon": "cogs", "course_count": 22},
    {"name": "Languages", "icon": "language", "course_count": 8},
    {"name": "Personal Development", "icon": "lightbulb", "course_count": 14},
]

SAMPLE_INSTRUCTORS: list[dict] = [
    {
        "name": "John Smith",
        "avatar": f"{_UNSPLASH}/photo-1472099645785-5658abf4ff4e?w=256&h=256",
        "bio": "Senior Web Developer with 10+ years of experience",
    },
    {
        "name": "Sarah Johnson",
        "avatar": f"{_UNSPLASH}/photo-1580489944761-15a19d654956?w=256&h=256",
        "bio": "Data Scientist and Machine Learning Engineer",
    },
    {
        "name": "Michael Chen",
        "avatar": f"{_UNSPLASH}/photo-1573496359142-b8d87734a5a2?w=256&h=256",
        "bio": "UX/UI Designer with experience at top tech companies",
    },
]

# category/instructor indexes are 0-based positions in the lists above.
SAMPLE_COURSES: list[dict] = [
    {
        "title": "Web Development Bootcamp",
        "description": (
            "Learn modern web development with JavaScript, React, and Node.js "
            "in this comprehensive bootcamp."
        ),
        "image": f"{_UNSPLASH}/photo-1517694712202-14dd9538aa97?w=1200&h=600",
        "price": 499,
        "difficulty": "Intermediate",
        "duration": "8 weeks",
        "category": 0,
        "instructor": 0,
        "is_popular": True,
        "is_new": False,
        "rating": 4.9,
    },
    {
        "title": "Data Science Fundamentals",
        "description": (
            "Master the core concepts of data analysis, Python programming, "
            "and machine learning algorithms."
        ),
        "image": f"{_UNSPLASH}/photo-1551434678-e076c223a692?w=1200&h=600",
        "price": 399,
        "difficulty": "Beginner",
        "duration": "6 weeks",
        "category": 1,
        "instructor": 1,
        "is_popular": False,
        "is_new": True,
        "rating": 4.7,
    },
    {
        "title": "UX/UI Design Masterclass",
        "description": (
            "Learn the principles of user experience and interface design to "
            "create beautiful, functional web applications."
        ),
        "image": f"{_UNSPLASH}/photo-1545235617-9465d2a55698?w=1200&h=600",
        "price": 549,
        "difficulty": "All Levels",
        "duration": "10 weeks",
        "category": 2,
        "instructor": 2,
        "is_popular": False,
        "is_new": False,
        "rating": 4.8,
    },
    {
        "title": "JavaScript for Beginners",
        "description": (
            "Start your programming journey with JavaScript, the language of "
            "the web."
        ),
        "image": f"{_UNSPLASH}/photo-1579468118864-1b9ea3c0db4a?w=1200&h=600",
        "price": 299,
        "difficulty": "Beginner",
        "duration": "4 weeks",
        "category": 0,
        "instructor": 0,
        "is_popular": True,
        "is_new": False,
        "rating": 4.6,
    },
    {
        "title": "Advanced React & Redux",
        "description": (
            "Take your React skills to the next level with advanced patterns "
            "and Redux state management."
        ),
        "image": f"{_UNSPLASH}/photo-1633356122102-3fe601e05bd2?w=1200&h=600",
        "price": 449,
        "difficulty": "Advanced",
        "duration": "6 weeks",
        "category": 0,
        "instructor": 0,
        "is_popular": False,
        "is_new": True,
        "rating": 4.9,
    },
    {
        "title": "Python for Data Analysis",
        "description": (
            "Learn how to use Python for data manipulation, visualization, "
            "and analysis."
        ),
        "image": f"{_UNSPLASH}/photo-1515879218367-8466d910aaa4?w=1200&h=600",
        "price": 349,
        "difficulty": "Intermediate",
        "duration": "5 weeks",
        "category": 1,
        "instructor": 1,
        "is_popular": True,
        "is_new": False,
        "rating": 4.8,
    },
    {
        "title": "Intro to Personal Productivity",
        "description": (
            "A short free primer on planning, focus, and building habits "
            "that stick."
        ),
        "image": f"{_UNSPLASH}/photo-1484480974693-6ca0a78fb36b?w=1200&h=600",
        "price": 0,
        "difficulty": "Beginner",
        "duration": "2 weeks",
        "category": 7,
        "instructor": 2,
        "is_popular": False,
        "is_new": True,
        "rating": 4.5,
    },
]

SAMPLE_TESTIMONIALS: list[dict] = [
    {
        "name": "Emily Walker",
        "avatar": f"{_UNSPLASH}/photo-1494790108377-be9c29b29330?w=256&h=256",
        "rating": 5,
        "text": (
            "The Web Development Bootcamp was exactly what I needed to "
            "transition into tech. Within 3 months of completing the course, "
            "I landed my first developer job."
        ),
        "program": "Web Development Graduate",
    },
    {
        "name": "David Kim",
        "avatar": f"{_UNSPLASH}/photo-1506794778202-cad84cf45f1d?w=256&h=256",
        "rating": 4,
        "text": (
            "The Data Science course gave me practical skills I use daily. "
            "The instructors were knowledgeable and the projects helped build "
            "a strong portfolio."
        ),
        "program": "Data Science Graduate",
    },
    {
        "name": "Jessica Rodriguez",
        "avatar": f"{_UNSPLASH}/photo-1517841905240-472988babdf9?w=256&h=256",
        "rating": 5,
        "text": (
            "I took the UX/UI Design Masterclass while working full-time, and "
            "the flexible schedule was perfect."
        ),
        "program": "UX/UI Design Graduate",
    },
]


async def seed_repos(repos: Repos) -> bool:
    """Populate an empty store with sample data.  Returns True if seeded."""
    if await repos.catalog.list_categories():
        logger.info("Catalog already has data, skipping sample seed")
        return False

    categories = [await repos.catalog.add_category(**c) for c in SAMPLE_CATEGORIES]
    instructors = [
        await repos.catalog.add_instructor(**i) for i in SAMPLE_INSTRUCTORS
    ]
    for data in SAMPLE_COURSES:
        fields = {k: v for k, v in data.items() if k not in ("category", "instructor")}
        await repos.catalog.add_course(
            category_id=categories[data["category"]].id,
            instructor_id=instructors[data["instructor"]].id,
            **fields,
        )
    for t in SAMPLE_TESTIMONIALS:
        await repos.marketing.add_testimonial(**t)

    logger.info(
        "Seeded sample data: %d categories, %d instructors, %d courses",
        len(categories),
        len(instructors),
        len(SAMPLE_COURSES),
    )
    return True


async def seed_database(session: AsyncSession) -> bool:
    return await seed_repos(build_pg_repos(session))
