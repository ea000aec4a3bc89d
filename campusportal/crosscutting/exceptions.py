"""
Name: Internal Exceptions

Responsibilities:
  - Typed internal errors with a stable error_code
  - error_id for correlating responses with logs
  - Human message without secrets

Collaborators:
  - api/exception_handlers.py: maps these to RFC 7807 responses
  - crosscutting/logger.py
"""

from __future__ import annotations

from uuid import uuid4


class PortalError(Exception):
    """R: Base for internal portal errors."""

    error_code: str = "PORTAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(PortalError):
    """Database failures (connection, query, timeout, pool)."""

    error_code = "DATABASE_ERROR"


class GeocodingError(PortalError):
    """Upstream geocoding service unreachable or answered garbage."""

    error_code = "GEOCODING_ERROR"


class ConfigurationFatal(PortalError):
    """Missing or invalid required configuration. Raised at startup only."""

    error_code = "CONFIGURATION_FATAL"
