"""
Name: Credential Authentication

Responsibilities:
  - Verify an email/password pair against the credential store
  - Record last_login on success (best effort)

Collaborators:
  - domain.repositories.UserRepository
  - identity/passwords.py: PasswordHasher
  - crosscutting/metrics.py: login outcome counter

Constraints:
  - Unknown email and wrong password fail identically (InvalidCredentials)
  - The returned Identity never carries salt or hash
  - Key derivation runs in the threadpool, off the event loop

Notes:
  - Unknown emails still pay for one key derivation so response time
    does not reveal whether the account exists
  - A failed last_login write is logged and suppressed; the login stands
"""

from datetime import datetime, timezone
from typing import Callable

from starlette.concurrency import run_in_threadpool

from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_login_attempt
from ..domain.entities import Identity
from ..domain.repositories import UserRepository
from .passwords import PasswordHasher, generate_salt


class InvalidCredentials(Exception):
    """Raised for any failed login, whatever the cause."""


def normalize_email(email: str) -> str:
    return email.strip().lower()


class Authenticator:
    """R: Session issuer's credential check."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        clock: Callable[[], datetime] | None = None,
    ):
        self.users = users
        self.hasher = hasher
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._dummy_salt = generate_salt()
        self._dummy_hash = hasher.derive("", self._dummy_salt)

    async def authenticate(self, email: str, password: str) -> Identity:
        """
        R: Return the caller's identity or raise InvalidCredentials.
        """
        user = await self.users.get_user_by_email(normalize_email(email))
        if user is None:
            await run_in_threadpool(
                self.hasher.verify, password, self._dummy_salt, self._dummy_hash
            )
            record_login_attempt("invalid_credentials")
            logger.info("Login failed")
            raise InvalidCredentials()

        if not await run_in_threadpool(
            self.hasher.verify, password, user.salt, user.password_hash
        ):
            record_login_attempt("invalid_credentials")
            logger.info("Login failed")
            raise InvalidCredentials()

        await self._record_login(user.id)
        record_login_attempt("success")
        logger.info("Login succeeded", extra={"user_id": user.id})
        return user.identity()

    async def _record_login(self, user_id: int) -> None:
        try:
            await self.users.record_login(user_id, self._clock())
        except DatabaseError as exc:
            logger.warning(
                "Could not persist last_login",
                extra={"user_id": user_id, "error_id": exc.error_id},
            )
