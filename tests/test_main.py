from __future__ import annotations

from fastapi.testclient import TestClient

from marketplace.main import app


def _operations() -> set[tuple[str, str]]:
    pairs: set[tuple[str, str]] = set()
    for path, methods in app.openapi()["paths"].items():
        for method in methods:
            pairs.add((method.upper(), path))
    return pairs


def test_api_surface_is_mounted() -> None:
    expected = {
        ("POST", "/api/register"),
        ("POST", "/api/login"),
        ("POST", "/api/logout"),
        ("GET", "/api/user"),
        ("GET", "/api/categories"),
        ("GET", "/api/categories/{category_id}"),
        ("GET", "/api/courses"),
        ("GET", "/api/courses/{course_id}"),
        ("GET", "/api/instructors"),
        ("GET", "/api/instructors/{instructor_id}"),
        ("GET", "/api/enrollments"),
        ("POST", "/api/enrollments"),
        ("PATCH", "/api/enrollments/{enrollment_id}/progress"),
        ("POST", "/api/enrollments/{enrollment_id}/advance"),
        ("GET", "/api/courses/{course_id}/learning-content"),
        ("GET", "/api/dashboard/stats"),
        ("PATCH", "/api/user/subscription"),
        ("POST", "/api/subscriptions/upgrade"),
        ("POST", "/api/waitlist"),
        ("POST", "/api/contact"),
        ("GET", "/api/testimonials"),
        ("GET", "/health"),
        ("GET", "/ready"),
    }
    assert expected <= _operations()


def test_metrics_endpoint_is_mounted_but_undocumented() -> None:
    assert "/metrics" not in app.openapi()["paths"]
    assert TestClient(app).get("/metrics").status_code == 200


def test_unknown_route_is_json_404() -> None:
    resp = TestClient(app).get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Not Found"}
