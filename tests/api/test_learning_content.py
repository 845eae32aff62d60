from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import FREE_COURSE_ID, PAID_COURSE_ID


def _enroll_with_progress(c: TestClient, progress: int) -> int:
    enrollment_id = c.post(
        "/api/enrollments", json={"courseId": FREE_COURSE_ID}
    ).json()["id"]
    c.patch(f"/api/enrollments/{enrollment_id}/progress", json={"progress": progress})
    return enrollment_id


def _completed_ids(body: dict) -> list[int]:
    return [
        step["id"]
        for section in body["sections"]
        for step in section["steps"]
        if step["isCompleted"]
    ]


def test_learning_content_shape(auth_client: TestClient) -> None:
    enrollment_id = _enroll_with_progress(auth_client, 0)

    resp = auth_client.get(f"/api/courses/{FREE_COURSE_ID}/learning-content")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == FREE_COURSE_ID
    assert body["title"] == "Intro to Personal Productivity"
    assert body["instructor"]["name"] == "Michael Chen"
    assert body["enrollmentId"] == enrollment_id
    assert body["progress"] == 0
    assert len(body["sections"]) == 3

    steps = [s for section in body["sections"] for s in section["steps"]]
    assert len(steps) == 10
    assert {s["type"] for s in steps} <= {"video", "text", "quiz", "download"}
    assert _completed_ids(body) == []


def test_progress_35_completes_first_three_steps(auth_client: TestClient) -> None:
    _enroll_with_progress(auth_client, 35)
    body = auth_client.get(f"/api/courses/{FREE_COURSE_ID}/learning-content").json()
    assert body["progress"] == 35
    assert _completed_ids(body) == [1, 2, 3]


def test_lowering_progress_uncompletes_later_steps(auth_client: TestClient) -> None:
    enrollment_id = _enroll_with_progress(auth_client, 100)
    url = f"/api/courses/{FREE_COURSE_ID}/learning-content"
    assert len(_completed_ids(auth_client.get(url).json())) == 10

    auth_client.patch(
        f"/api/enrollments/{enrollment_id}/progress", json={"progress": 20}
    )
    assert _completed_ids(auth_client.get(url).json()) == [1, 2]


def test_learning_content_requires_enrollment(auth_client: TestClient) -> None:
    resp = auth_client.get(f"/api/courses/{PAID_COURSE_ID}/learning-content")
    assert resp.status_code == 403
    assert resp.json()["message"] == "Not enrolled in this course"


def test_learning_content_unknown_course_is_404(auth_client: TestClient) -> None:
    resp = auth_client.get("/api/courses/9999/learning-content")
    assert resp.status_code == 404


def test_learning_content_requires_session(client: TestClient) -> None:
    resp = client.get(f"/api/courses/{FREE_COURSE_ID}/learning-content")
    assert resp.status_code == 401
