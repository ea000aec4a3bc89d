"""
Name: Session Token Tests

Responsibilities:
  - Round-trip issue/decode for a valid identity
  - Reject expired, forged and mistyped tokens without raising
  - Bearer header beats cookie when both are present
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from starlette.requests import Request

from campusportal.domain.entities import Identity
from campusportal.identity.sessions import (
    JWT_ALGORITHM,
    SessionSettings,
    decode_session,
    extract_session_token,
    issue_session,
    resolve_session,
)

pytestmark = pytest.mark.unit

SETTINGS = SessionSettings(
    secret="unit-test-secret",
    ttl_minutes=30,
    cookie_name="portal_session",
    cookie_secure=False,
)


def _request(headers: dict[str, str] | None = None) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


def test_issue_then_decode_returns_subject():
    token, expires_in = issue_session(Identity(id=7, email="a@example.com"), SETTINGS)
    session = decode_session(token, SETTINGS)

    assert expires_in == 30 * 60
    assert session is not None
    assert session.subject == 7
    assert session.email == "a@example.com"


def test_token_never_carries_roles_or_credentials():
    token, _ = issue_session(Identity(id=7, email="a@example.com"), SETTINGS)
    payload = jwt.decode(token, SETTINGS.secret, algorithms=[JWT_ALGORITHM])
    assert set(payload) == {"sub", "email", "typ", "iat", "exp"}


def test_expired_token_is_rejected():
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token, _ = issue_session(Identity(id=7, email="a@example.com"), SETTINGS, now=issued)
    assert decode_session(token, SETTINGS) is None


def test_wrong_secret_is_rejected():
    token, _ = issue_session(Identity(id=7, email="a@example.com"), SETTINGS)
    other = SessionSettings("another-secret", 30, "portal_session", False)
    assert decode_session(token, other) is None


def test_garbage_token_is_rejected():
    assert decode_session("not-a-jwt", SETTINGS) is None


@pytest.mark.parametrize(
    "claims",
    [
        {"sub": "7", "typ": "access"},
        {"sub": "abc", "typ": "session"},
        {"sub": "0", "typ": "session"},
        {"typ": "session"},
    ],
)
def test_unexpected_claims_are_rejected(claims):
    now = datetime.now(timezone.utc)
    payload = {**claims, "exp": int((now + timedelta(minutes=5)).timestamp())}
    token = jwt.encode(payload, SETTINGS.secret, algorithm=JWT_ALGORITHM)
    assert decode_session(token, SETTINGS) is None


class TestExtraction:
    def test_bearer_header(self):
        request = _request({"Authorization": "Bearer abc.def"})
        assert extract_session_token(request, SETTINGS) == "abc.def"

    def test_cookie(self):
        request = _request({"Cookie": "portal_session=from-cookie"})
        assert extract_session_token(request, SETTINGS) == "from-cookie"

    def test_header_wins_over_cookie(self):
        request = _request(
            {"Authorization": "Bearer from-header", "Cookie": "portal_session=c"}
        )
        assert extract_session_token(request, SETTINGS) == "from-header"

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer   ", "token"])
    def test_malformed_header_is_ignored(self, header):
        assert extract_session_token(_request({"Authorization": header}), SETTINGS) is None

    def test_resolve_without_token(self):
        assert resolve_session(_request(), SETTINGS) is None

    def test_resolve_with_cookie(self):
        token, _ = issue_session(Identity(id=3, email="b@example.com"), SETTINGS)
        session = resolve_session(_request({"Cookie": f"portal_session={token}"}), SETTINGS)
        assert session is not None and session.subject == 3
