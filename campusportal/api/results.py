"""
Name: Use Case Error Mapping

Responsibilities:
  - Translate use case PortalError results into HTTP exceptions
"""

from ..application.usecases.results import PortalError, PortalErrorCode
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    conflict,
    not_found,
    unsupported_media,
)


def raise_for_error(error: PortalError | None) -> None:
    """R: Raise the HTTP exception matching a use case error, if any."""
    if error is None:
        return
    if error.code == PortalErrorCode.NOT_FOUND:
        raise not_found()
    if error.code == PortalErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == PortalErrorCode.UNSUPPORTED_MEDIA:
        raise unsupported_media(error.message)
    if error.code == PortalErrorCode.PAYLOAD_TOO_LARGE:
        raise AppHTTPException(413, ErrorCode.PAYLOAD_TOO_LARGE, error.message)
    errors = [{"field": error.resource}] if error.resource else None
    raise AppHTTPException(400, ErrorCode.VALIDATION_ERROR, error.message, errors)
