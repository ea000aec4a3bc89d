"""
Name: FastAPI Exception Handlers

Responsibilities:
  - Translate application exceptions into RFC 7807 responses
  - Render framework errors (unknown route, wrong method, body validation)
    in the same problem+json shape
  - Turn LoginRequired into a redirect to the login page
  - Log service failures with request_id + error_id

Collaborators:
  - crosscutting.error_responses: AppHTTPException, problem_response
  - crosscutting.exceptions: PortalError and subclasses
  - infrastructure.storage.errors: StorageError hierarchy
  - identity.gate: LoginRequired

Constraints:
  - Every 404 has the same body whatever produced it
  - Unhandled exceptions never leak internals in production
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    NOT_FOUND_DETAIL,
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    code_for_status,
    problem_response,
)
from ..crosscutting.exceptions import (
    ConfigurationFatal,
    DatabaseError,
    GeocodingError,
    PortalError,
)
from ..crosscutting.logger import logger
from ..identity.gate import LoginRequired
from ..infrastructure.storage.errors import StorageError, StorageNotFoundError


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_service_error(
    request: Request,
    *,
    exc: PortalError,
    code: ErrorCode,
    status_code: int,
) -> JSONResponse:
    """Shared rendering for typed service errors."""
    request_id = _request_id_from(request)

    logger.error(
        "Service error",
        extra={
            "code": code.value,
            "error_id": getattr(exc, "error_id", None),
            "error_message": getattr(exc, "message", str(exc)),
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=exc.message,
        errors=[{"error_id": exc.error_id, "request_id": request_id}],
    )
    return await app_exception_handler(request, app_exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.DATABASE_ERROR, status_code=503
    )


async def geocoding_error_handler(request: Request, exc: GeocodingError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.SERVICE_UNAVAILABLE, status_code=503
    )


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.INTERNAL_ERROR, status_code=500
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    if isinstance(exc, StorageNotFoundError):
        logger.warning("Stored object missing", extra={"key": exc.key})
        return problem_response(
            request,
            status_code=404,
            code=ErrorCode.NOT_FOUND,
            detail=NOT_FOUND_DETAIL,
        )

    logger.error(
        "Storage error",
        extra={"error_message": str(exc), "request_id": _request_id_from(request)},
    )
    return problem_response(
        request,
        status_code=503,
        code=ErrorCode.STORAGE_ERROR,
        detail="File storage is temporarily unavailable",
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """R: Unknown routes and wrong methods in problem+json."""
    code = code_for_status(exc.status_code)
    detail = NOT_FOUND_DETAIL if exc.status_code == 404 else str(exc.detail)
    return problem_response(
        request,
        status_code=exc.status_code,
        code=code,
        detail=detail,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return problem_response(
        request,
        status_code=422,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Request validation failed",
        errors=errors,
    )


async def login_required_handler(
    request: Request, exc: LoginRequired
) -> RedirectResponse:
    return RedirectResponse(exc.location, status_code=307)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Fallback for untyped exceptions.

    - Full log with stack trace.
    - Generic body in production.
    """
    request_id = _request_id_from(request)

    logger.error(
        "Unhandled exception",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    try:
        production = get_settings().is_production()
    except ConfigurationFatal:
        production = True
    detail = "An unexpected error occurred" if production else str(exc)

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
        errors=[{"request_id": request_id}],
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Register handlers on the FastAPI app.

    AppHTTPException is registered alongside the Starlette base class so
    that the more specific handler wins; Exception is the final fallback.
    """
    app.add_exception_handler(LoginRequired, login_required_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(GeocodingError, geocoding_error_handler)
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
