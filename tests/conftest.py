from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from marketplace.db.seed import seed_repos
from marketplace.main import app
from marketplace.models.catalog import Course
from marketplace.repos.registry import memory_repos
from marketplace.services.session_revocation import revocation_list

# Ensure repo root is on sys.path so `import marketplace` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Seeded ids: courses 1-6 are priced, 7 is free.
PAID_COURSE_ID = 1
FREE_COURSE_ID = 7

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def reset_store() -> None:
    """Fresh seeded in-memory store for every test."""
    memory_repos.clear()
    asyncio.run(seed_repos(memory_repos))


@pytest.fixture(autouse=True)
def reset_revocation_list() -> None:
    if hasattr(revocation_list, "clear"):
        revocation_list.clear()  # type: ignore[union-attr]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def register(
    client: TestClient, username: str = "alice", password: str = DEFAULT_PASSWORD
) -> dict:
    """Register a user; the client's cookie jar now holds their session."""
    resp = client.post(
        "/api/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def auth_client() -> TestClient:
    """A client logged in as a free-tier user."""
    c = TestClient(app)
    register(c)
    return c


def add_course(price: float, duration: str = "3 weeks") -> Course:
    """Add a course to the seeded catalog (category 1, instructor 1)."""
    return asyncio.run(
        memory_repos.catalog.add_course(
            title=f"Course at ${price:g}",
            description="Test course",
            image="https://example.com/course.png",
            price=price,
            difficulty="Beginner",
            duration=duration,
            category_id=1,
            instructor_id=1,
        )
    )
