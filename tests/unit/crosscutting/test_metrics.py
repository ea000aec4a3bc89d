"""
Name: Metrics Tests
"""

import pytest

from campusportal.crosscutting.metrics import (
    _normalize_endpoint,
    _status_bucket,
    get_metrics_response,
    record_login_attempt,
    record_request_metrics,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/api/image/0123456789abcdef", "/api/image/{id}"),
        ("/event/42", "/event/{id}"),
        ("/infoscreen/7/", "/infoscreen/{id}/"),
        ("/event/create", "/event/create"),
        ("/healthz", "/healthz"),
    ],
)
def test_normalize_endpoint(path, expected):
    assert _normalize_endpoint(path) == expected


@pytest.mark.parametrize(
    "code,bucket", [(204, "2xx"), (307, "3xx"), (404, "4xx"), (503, "5xx"), (99, "other")]
)
def test_status_bucket(code, bucket):
    assert _status_bucket(code) == bucket


def test_exposition_contains_recorded_series():
    record_request_metrics("/event/3", "GET", 200, 0.02)
    record_login_attempt("success")

    body, content_type = get_metrics_response()

    text = body.decode()
    assert 'portal_requests_total{endpoint="/event/{id}",method="GET",status="2xx"}' in text
    assert 'portal_login_attempts_total{outcome="success"}' in text
    assert content_type.startswith("text/plain")
