"""
Name: Change Password Use Case

Responsibilities:
  - Validate an old/new password pair against policy (length bounds)
  - Re-verify the old password against the stored salt+hash
  - Rotate salt and hash and stamp last_password_change atomically

Collaborators:
  - domain.repositories.UserRepository
  - identity.passwords.PasswordHasher
  - crosscutting.metrics (outcome counter)

Constraints:
  - Checks run in a fixed order; the first failure wins
  - The new salt is always fresh; the old one is never reused
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

from starlette.concurrency import run_in_threadpool

from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_password_change
from ...domain.repositories import UserRepository
from ...identity.passwords import PasswordHasher


class PasswordChangeFailure(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    MISSING_FIELDS = "MISSING_FIELDS"
    PASSWORD_UNCHANGED = "PASSWORD_UNCHANGED"
    POLICY_VIOLATION = "POLICY_VIOLATION"
    OLD_PASSWORD_INCORRECT = "OLD_PASSWORD_INCORRECT"


@dataclass
class ChangePasswordInput:
    user_id: int | None
    old_password: str | None
    new_password: str | None


@dataclass
class ChangePasswordResult:
    success: bool
    failure: PasswordChangeFailure | None = None
    message: str | None = None


class ChangePasswordUseCase:
    """R: Rotate a user's password after re-verifying the old one."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        min_length: int = 8,
        max_length: int = 512,
        clock: Callable[[], datetime] | None = None,
    ):
        self.users = users
        self.hasher = hasher
        self.min_length = min_length
        self.max_length = max_length
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _fail(self, failure: PasswordChangeFailure, message: str) -> ChangePasswordResult:
        record_password_change(failure.value.lower())
        logger.info("Password change rejected", extra={"failure": failure.value})
        return ChangePasswordResult(success=False, failure=failure, message=message)

    async def execute(self, input_data: ChangePasswordInput) -> ChangePasswordResult:
        if input_data.user_id is None:
            return self._fail(PasswordChangeFailure.UNAUTHORIZED, "Unauthorized")

        old_password = input_data.old_password
        new_password = input_data.new_password
        if not old_password or not new_password:
            return self._fail(PasswordChangeFailure.MISSING_FIELDS, "Missing fields")

        if old_password == new_password:
            return self._fail(
                PasswordChangeFailure.PASSWORD_UNCHANGED,
                "New password must be different",
            )

        if len(new_password) < self.min_length:
            return self._fail(
                PasswordChangeFailure.POLICY_VIOLATION,
                f"New password must be at least {self.min_length} characters",
            )

        if len(new_password) > self.max_length:
            return self._fail(
                PasswordChangeFailure.POLICY_VIOLATION,
                f"New password must be at most {self.max_length} characters",
            )

        user = await self.users.get_user_by_id(input_data.user_id)
        if user is None:
            return self._fail(PasswordChangeFailure.UNAUTHORIZED, "Unauthorized")

        if not await run_in_threadpool(
            self.hasher.verify, old_password, user.salt, user.password_hash
        ):
            return self._fail(
                PasswordChangeFailure.OLD_PASSWORD_INCORRECT, "Old password incorrect"
            )

        salt, password_hash = await run_in_threadpool(
            self.hasher.new_credentials, new_password
        )
        updated = await self.users.update_password(
            user.id,
            salt=salt,
            password_hash=password_hash,
            changed_at=self._clock(),
        )
        if not updated:
            return self._fail(PasswordChangeFailure.UNAUTHORIZED, "Unauthorized")

        record_password_change("success")
        logger.info("Password changed", extra={"user_id": user.id})
        return ChangePasswordResult(success=True)
