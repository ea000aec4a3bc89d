"""
Name: Session Issuer / Resolver (JWT)

Responsibilities:
  - Mint signed session tokens bound to a user's stable identifier
  - Resolve the session of an incoming request (Bearer header or cookie)

Collaborators:
  - identity/authentication.py: produces the Identity that is signed
  - identity/gate.py: resolves sessions for every protected request
  - api/auth_routes.py: sets and clears the session cookie

Constraints:
  - Tokens carry only sub/email/iat/exp/typ; never roles, salt or hash
  - resolve_session never raises for a missing, expired or forged token
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Request

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import Identity

JWT_ALGORITHM = "HS256"
TOKEN_TYPE = "session"


@dataclass(frozen=True)
class SessionSettings:
    secret: str
    ttl_minutes: int
    cookie_name: str
    cookie_secure: bool

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionSettings":
        return cls(
            secret=settings.session_secret,
            ttl_minutes=settings.session_ttl_minutes,
            cookie_name=settings.session_cookie_name,
            cookie_secure=settings.session_cookie_secure,
        )


@dataclass(frozen=True)
class Session:
    """R: Resolved session. subject is the user's stable identifier."""

    subject: int
    email: str
    expires_at: datetime


def issue_session(
    identity: Identity, settings: SessionSettings, now: datetime | None = None
) -> tuple[str, int]:
    """R: Create a signed session token; returns (token, expires_in seconds)."""
    issued_at = now or datetime.now(timezone.utc)
    expires_in = settings.ttl_minutes * 60
    payload = {
        "sub": str(identity.id),
        "email": identity.email,
        "typ": TOKEN_TYPE,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(seconds=expires_in)).timestamp()),
    }
    token = jwt.encode(payload, settings.secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def _parse_subject(raw) -> Optional[int]:
    if not isinstance(raw, str) or not raw.isdigit():
        return None
    subject = int(raw)
    return subject if subject > 0 else None


def decode_session(token: str, settings: SessionSettings) -> Optional[Session]:
    """
    R: Validate a session token.

    Returns:
        None for expired, forged or malformed tokens and for subjects
        that do not parse to a positive integer
    """
    try:
        payload = jwt.decode(token, settings.secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.debug("Session expired")
        return None
    except jwt.InvalidTokenError:
        logger.debug("Session token rejected")
        return None

    if payload.get("typ") != TOKEN_TYPE:
        return None
    subject = _parse_subject(payload.get("sub"))
    if subject is None:
        return None

    return Session(
        subject=subject,
        email=str(payload.get("email") or ""),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_session_token(request: Request, settings: SessionSettings) -> str | None:
    """R: Resolve session token from Authorization header or cookie."""
    token = _extract_bearer_token(request.headers.get("Authorization"))
    if token:
        return token
    return request.cookies.get(settings.cookie_name) or None


def resolve_session(request: Request, settings: SessionSettings) -> Optional[Session]:
    """R: Session of the current request, or None when there is none."""
    token = extract_session_token(request, settings)
    if not token:
        return None
    return decode_session(token, settings)
