"""
Name: Prometheus Metrics

Responsibilities:
  - Define and expose Prometheus metrics
  - Record request latency/count, login and password-change outcomes

Collaborators:
  - crosscutting/middleware.py: records request metrics
  - identity/authentication.py, application/usecases/change_password.py

Constraints:
  - Low cardinality labels only (endpoint, method, status, outcome - NOT user_id)

Notes:
  - Metrics live on a dedicated CollectorRegistry
"""

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

_requests_total = Counter(
    "portal_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
    registry=_registry,
)

# Buckets: 10ms .. 10s
_request_latency = Histogram(
    "portal_request_latency_seconds",
    "HTTP request latency in seconds",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

_login_attempts = Counter(
    "portal_login_attempts_total",
    "Login attempts by outcome",
    ["outcome"],
    registry=_registry,
)

_password_changes = Counter(
    "portal_password_changes_total",
    "Password change attempts by outcome",
    ["outcome"],
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """
    R: Record HTTP request metrics.

    Args:
        endpoint: Request path (e.g., "/api/image/abc")
        method: HTTP method
        status_code: Response status code
        latency_seconds: Request duration in seconds
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_login_attempt(outcome: str) -> None:
    _login_attempts.labels(outcome=outcome).inc()


def record_password_change(outcome: str) -> None:
    _password_changes.labels(outcome=outcome).inc()


def _normalize_endpoint(path: str) -> str:
    """
    R: Normalize endpoint path to prevent high cardinality.

    Replaces image ids and numeric ids with placeholders.
    """
    path = re.sub(r"/[0-9a-f]{16}(?=/|$)", "/{id}", path)
    path = re.sub(r"/\d+(?=/|$)", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    """R: Bucket status code (2xx, 3xx, 4xx, 5xx)."""
    if 200 <= code < 300:
        return "2xx"
    elif 300 <= code < 400:
        return "3xx"
    elif 400 <= code < 500:
        return "4xx"
    elif 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """
    R: Generate Prometheus metrics response.

    Returns:
        Tuple of (body_bytes, content_type)
    """
    return generate_latest(_registry), CONTENT_TYPE_LATEST
