"""
Name: Authorization Gate

Responsibilities:
  - Resolve the caller's session and account for a request
  - Load role memberships fresh from the store and apply the role policy
  - Evaluate custom async predicates after role checks
  - Decide ALLOW / UNAUTHENTICATED / NOT_FOUND

Collaborators:
  - identity/sessions.py: resolve_session
  - identity/roles.py: satisfies
  - domain.repositories.UserRepository
  - api/dependencies.py: turns decisions into redirects, 401s and 404s

Constraints:
  - Roles are never read from the token and never cached between requests
  - Denials are reported as NOT_FOUND, never as a distinct forbidden outcome
  - The gate mutates nothing

Notes:
  - A session whose subject no longer maps to an account counts as
    unauthenticated
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, FrozenSet, Optional, Tuple
from urllib.parse import quote

from fastapi import Request

from ..context import user_id_var
from ..crosscutting.logger import logger
from ..domain.entities import Role, User
from ..domain.repositories import UserRepository
from .roles import satisfies
from .sessions import SessionSettings, resolve_session


@dataclass(frozen=True)
class Principal:
    """R: Authenticated caller with the role set read for this request."""

    user: User
    roles: FrozenSet[Role] = field(default_factory=frozenset)

    @property
    def user_id(self) -> int:
        return self.user.id


Predicate = Callable[[Principal, Request], Awaitable[bool]]


@dataclass(frozen=True)
class Requirement:
    """
    R: Declarative access constraint.

    Attributes:
        role: A single required role
        roles: Alternative roles (any one suffices)
        custom: Async predicate evaluated after role checks
    """

    role: Optional[Role] = None
    roles: Tuple[Role, ...] = ()
    custom: Optional[Predicate] = None

    def required_roles(self) -> FrozenSet[Role]:
        declared = set(self.roles)
        if self.role is not None:
            declared.add(self.role)
        return frozenset(declared)


class GateOutcome(str, Enum):
    ALLOW = "ALLOW"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class GateDecision:
    outcome: GateOutcome
    principal: Optional[Principal] = None

    @property
    def allowed(self) -> bool:
        return self.outcome is GateOutcome.ALLOW


class LoginRequired(Exception):
    """R: Raised by page dependencies for unauthenticated callers."""

    def __init__(self, login_path: str, callback_url: str):
        super().__init__(callback_url)
        self.login_path = login_path
        self.callback_url = callback_url

    @property
    def location(self) -> str:
        return build_login_redirect(self.login_path, self.callback_url)


def build_login_redirect(login_path: str, callback_url: str) -> str:
    """R: Login entry point with the percent-encoded callback URL."""
    return f"{login_path}?callbackUrl={quote(callback_url, safe='')}"


def requested_url(request: Request) -> str:
    """R: Path plus query string of the original request."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class AuthorizationGate:
    """R: Guard applied to every protected page and API route."""

    def __init__(self, users: UserRepository, session_settings: SessionSettings):
        self.users = users
        self.session_settings = session_settings

    async def check(self, request: Request, requirement: Requirement) -> GateDecision:
        session = resolve_session(request, self.session_settings)
        if session is None:
            return GateDecision(GateOutcome.UNAUTHENTICATED)

        user = await self.users.get_user_by_id(session.subject)
        if user is None:
            logger.info("Session subject has no account", extra={"subject": session.subject})
            return GateDecision(GateOutcome.UNAUTHENTICATED)

        user_id_var.set(str(user.id))
        roles = frozenset(await self.users.list_roles(user.id))
        principal = Principal(user=user, roles=roles)

        if not satisfies(roles, requirement.required_roles()):
            logger.debug(
                "Gate denied by role",
                extra={"required": sorted(r.value for r in requirement.required_roles())},
            )
            return GateDecision(GateOutcome.NOT_FOUND, principal)

        if requirement.custom is not None and not await requirement.custom(
            principal, request
        ):
            logger.debug("Gate denied by predicate")
            return GateDecision(GateOutcome.NOT_FOUND, principal)

        return GateDecision(GateOutcome.ALLOW, principal)


async def administers_organizer(principal: Principal, request: Request) -> bool:
    """R: Predicate: the caller currently administers an organizer."""
    return principal.user.organizer_id is not None


ANY_USER = Requirement()
EVENT_EDITOR = Requirement(role=Role.EVENT_EDITOR, custom=administers_organizer)
INFO_SCREEN_EDITOR = Requirement(role=Role.INFO_SCREEN_EDITOR)
GLOBAL_ADMIN = Requirement(role=Role.GLOBAL_ADMIN)
