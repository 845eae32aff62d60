from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import add_course


def test_stats_empty_for_new_user(auth_client: TestClient) -> None:
    resp = auth_client.get("/api/dashboard/stats")
    assert resp.status_code == 200
    assert resp.json() == {
        "enrolledCourses": 0,
        "activeCourses": 0,
        "completedCourses": 0,
        "notStartedCourses": 0,
        "averageProgress": 0,
        "completionRate": 0,
        "totalCoursesTime": 0,
    }


def test_stats_reflect_enrollments(auth_client: TestClient) -> None:
    courses = [add_course(price=0, duration=f"{n} weeks") for n in (1, 2, 4)]
    ids = [
        auth_client.post("/api/enrollments", json={"courseId": c.id}).json()["id"]
        for c in courses
    ]
    for enrollment_id, progress in zip(ids, (0, 45, 100), strict=True):
        auth_client.patch(
            f"/api/enrollments/{enrollment_id}/progress", json={"progress": progress}
        )

    stats = auth_client.get("/api/dashboard/stats").json()
    assert stats["enrolledCourses"] == 3
    assert stats["activeCourses"] == 2
    assert stats["completedCourses"] == 1
    assert stats["notStartedCourses"] == 1
    assert stats["averageProgress"] == 48
    assert stats["completionRate"] == 33
    # 7 weeks at 5 hours/week
    assert stats["totalCoursesTime"] == 35


def test_stats_recomputed_after_progress_change(auth_client: TestClient) -> None:
    course = add_course(price=0)
    enrollment_id = auth_client.post(
        "/api/enrollments", json={"courseId": course.id}
    ).json()["id"]
    assert auth_client.get("/api/dashboard/stats").json()["notStartedCourses"] == 1

    auth_client.patch(
        f"/api/enrollments/{enrollment_id}/progress", json={"progress": 100}
    )
    stats = auth_client.get("/api/dashboard/stats").json()
    assert stats["notStartedCourses"] == 0
    assert stats["completionRate"] == 100


def test_stats_require_session(client: TestClient) -> None:
    assert client.get("/api/dashboard/stats").status_code == 401
