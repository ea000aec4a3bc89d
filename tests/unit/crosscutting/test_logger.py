"""
Name: JSON Formatter Tests
"""

import json
import logging

import pytest

from campusportal.context import clear_context, request_id_var
from campusportal.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("campusportal", logging.INFO, __file__, 1, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_sensitive_extras_are_dropped():
    line = JSONFormatter().format(
        _record(user_id=3, password="pw", salt=b"s", token="t", Authorization="Bearer x")
    )
    payload = json.loads(line)
    assert payload["user_id"] == 3
    for key in ("password", "salt", "token", "Authorization"):
        assert key not in payload


def test_request_context_is_included():
    request_id_var.set("req-1")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()
    assert payload["request_id"] == "req-1"
    assert payload["message"] == "hello"
