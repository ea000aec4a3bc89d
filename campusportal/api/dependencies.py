"""
Name: Gate Dependencies (FastAPI)

Responsibilities:
  - Bind AuthorizationGate decisions to FastAPI routes
  - Pages: unauthenticated callers are redirected to the login page
  - APIs: unauthenticated callers get 401
  - Both: denied callers get the generic 404

Collaborators:
  - identity.gate: AuthorizationGate, Requirement, LoginRequired
  - container.get_container
  - api/exception_handlers.py: renders LoginRequired and AppHTTPException

Notes:
  - Role failures are 404 for pages and APIs alike
"""

from typing import Awaitable, Callable

from fastapi import Depends, Request

from ..container import Container, get_container
from ..crosscutting.error_responses import not_found, unauthorized
from ..identity.gate import (
    ANY_USER,
    GateOutcome,
    LoginRequired,
    Principal,
    Requirement,
    requested_url,
)


def require_page(
    requirement: Requirement = ANY_USER,
) -> Callable[..., Awaitable[Principal]]:
    """R: Dependency for page routes."""

    async def _dependency(
        request: Request, container: Container = Depends(get_container)
    ) -> Principal:
        decision = await container.gate.check(request, requirement)
        if decision.outcome is GateOutcome.UNAUTHENTICATED:
            raise LoginRequired(container.settings.login_path, requested_url(request))
        if decision.outcome is GateOutcome.NOT_FOUND:
            raise not_found()
        return decision.principal

    return _dependency


def require_api(
    requirement: Requirement = ANY_USER,
) -> Callable[..., Awaitable[Principal]]:
    """R: Dependency for API routes."""

    async def _dependency(
        request: Request, container: Container = Depends(get_container)
    ) -> Principal:
        decision = await container.gate.check(request, requirement)
        if decision.outcome is GateOutcome.UNAUTHENTICATED:
            raise unauthorized()
        if decision.outcome is GateOutcome.NOT_FOUND:
            raise not_found()
        return decision.principal

    return _dependency
