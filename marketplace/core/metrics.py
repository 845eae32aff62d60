"""Application metrics (Prometheus client).

All metrics live in this one module so there is a single inventory of
what the service measures.  Other modules import a metric and
increment/observe it at the point of action.

  Counter:   only goes up (requests served, enrollments created)
  Gauge:     goes up and down (in-flight requests)
  Histogram: bucketed observations (request latency percentiles)

Prometheus scrapes GET /metrics; see api/metrics_endpoint.py.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (recorded by MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Domain metrics
# ---------------------------------------------------------------------------

ENROLLMENT_ATTEMPTS = Counter(
    "enrollment_attempts_total",
    "Enrollment requests by outcome",
    # created|already_enrolled|course_not_found|payment_required
    ["result"],
)

PROGRESS_UPDATES = Counter(
    "progress_updates_total",
    "Enrollment progress mutations",
    ["kind"],  # "set" (PATCH progress) or "advance" (next step)
)

SESSION_REVOCATION_CHECKS = Counter(
    "session_revocation_checks_total",
    "Session revocation lookups by result",
    ["result"],  # "revoked" or "valid"
)
