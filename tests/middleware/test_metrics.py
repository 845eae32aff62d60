"""Prometheus metrics tests.

The default registry is global and counters never reset, so every test
asserts on the delta between a before and after reading.
"""

from __future__ import annotations

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from tests.conftest import FREE_COURSE_ID, PAID_COURSE_ID


def _get_sample(name: str, labels: dict | None = None) -> float:
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def test_request_counter_increments(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/health")
    assert _get_sample("http_requests_total", labels) - before >= 1


def test_request_endpoint_label_uses_route_template(client: TestClient) -> None:
    labels = {
        "method": "GET",
        "endpoint": "/api/courses/{course_id}",
        "status_code": "200",
    }
    before = _get_sample("http_requests_total", labels)
    client.get("/api/courses/1")
    client.get("/api/courses/2")
    assert _get_sample("http_requests_total", labels) - before == 2


def test_request_duration_histogram_observes(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health"}
    before = _get_sample("http_request_duration_seconds_count", labels)
    client.get("/health")
    assert _get_sample("http_request_duration_seconds_count", labels) - before >= 1


def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "http_requests_total" in resp.text
    assert "enrollment_attempts_total" in resp.text


def test_metrics_endpoint_not_self_instrumented(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/metrics", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/metrics")
    client.get("/metrics")
    assert _get_sample("http_requests_total", labels) == before


def test_enrollment_attempts_counted_by_result(auth_client: TestClient) -> None:
    created = {"result": "created"}
    payment = {"result": "payment_required"}
    before_created = _get_sample("enrollment_attempts_total", created)
    before_payment = _get_sample("enrollment_attempts_total", payment)

    auth_client.post("/api/enrollments", json={"courseId": FREE_COURSE_ID})
    auth_client.post("/api/enrollments", json={"courseId": PAID_COURSE_ID})

    assert _get_sample("enrollment_attempts_total", created) - before_created == 1
    assert _get_sample("enrollment_attempts_total", payment) - before_payment == 1


def test_nested_route_template_is_used_for_enrollment_paths(
    auth_client: TestClient,
) -> None:
    enrollment = auth_client.post(
        "/api/enrollments", json={"courseId": FREE_COURSE_ID}
    ).json()
    labels = {
        "method": "PATCH",
        "endpoint": "/api/enrollments/{enrollment_id}/progress",
        "status_code": "200",
    }
    before = _get_sample("http_requests_total", labels)
    auth_client.patch(
        f"/api/enrollments/{enrollment['id']}/progress", json={"progress": 30}
    )
    assert _get_sample("http_requests_total", labels) - before == 1
    raw = {
        "method": "PATCH",
        "endpoint": f"/api/enrollments/{enrollment['id']}/progress",
        "status_code": "200",
    }
    assert _get_sample("http_requests_total", raw) == 0


def test_unknown_path_is_labelled_unmatched(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "unmatched", "status_code": "404"}
    before = _get_sample("http_requests_total", labels)
    client.get("/api/no-such-thing/1")
    client.get("/api/no-such-thing/2")
    assert _get_sample("http_requests_total", labels) - before == 2
