"""
Name: Change Password Use Case Tests

Responsibilities:
  - Policy checks run in order and the first failure wins
  - Successful rotation replaces salt and hash and stamps the change time
  - The new password authenticates; the old one no longer does
"""

import asyncio
import time
from datetime import datetime, timezone

import pytest

from campusportal.application.usecases import (
    ChangePasswordInput,
    ChangePasswordUseCase,
    PasswordChangeFailure,
)
from campusportal.domain.entities import User
from campusportal.identity.authentication import Authenticator, InvalidCredentials
from campusportal.identity.passwords import PasswordHasher
from campusportal.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit

OLD = "abc12345"


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture
def users(hasher) -> InMemoryUserRepository:
    repo = InMemoryUserRepository()
    salt, password_hash = hasher.new_credentials(OLD)
    repo.add_user(
        User(id=1, email="editor@example.com", salt=salt, password_hash=password_hash)
    )
    return repo


@pytest.fixture
def use_case(users, hasher) -> ChangePasswordUseCase:
    return ChangePasswordUseCase(users, hasher, min_length=8)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "user_id,old,new,failure,message",
    [
        (None, OLD, "abc12346", PasswordChangeFailure.UNAUTHORIZED, "Unauthorized"),
        (1, "", "abc12346", PasswordChangeFailure.MISSING_FIELDS, "Missing fields"),
        (1, OLD, None, PasswordChangeFailure.MISSING_FIELDS, "Missing fields"),
        (
            1,
            OLD,
            OLD,
            PasswordChangeFailure.PASSWORD_UNCHANGED,
            "New password must be different",
        ),
        (
            1,
            OLD,
            "short",
            PasswordChangeFailure.POLICY_VIOLATION,
            "New password must be at least 8 characters",
        ),
        (
            1,
            OLD,
            "x" * 513,
            PasswordChangeFailure.POLICY_VIOLATION,
            "New password must be at most 512 characters",
        ),
        (
            1,
            "wrong-old",
            "abc12346",
            PasswordChangeFailure.OLD_PASSWORD_INCORRECT,
            "Old password incorrect",
        ),
        (42, OLD, "abc12346", PasswordChangeFailure.UNAUTHORIZED, "Unauthorized"),
    ],
)
async def test_rejections(use_case, users, user_id, old, new, failure, message):
    before = await users.get_user_by_id(1)

    result = await use_case.execute(ChangePasswordInput(user_id, old, new))

    assert result.success is False
    assert result.failure is failure
    assert result.message == message
    after = await users.get_user_by_id(1)
    assert (after.salt, after.password_hash) == (before.salt, before.password_hash)
    assert after.last_password_change is None


@pytest.mark.asyncio
async def test_unchanged_is_reported_before_length(use_case):
    result = await use_case.execute(ChangePasswordInput(1, "short", "short"))
    assert result.failure is PasswordChangeFailure.PASSWORD_UNCHANGED


@pytest.mark.asyncio
async def test_success_rotates_salt_and_hash(use_case, users):
    before = await users.get_user_by_id(1)
    called_at = datetime.now(timezone.utc)

    result = await use_case.execute(ChangePasswordInput(1, OLD, "abc12346"))

    assert result.success is True
    after = await users.get_user_by_id(1)
    assert after.salt != before.salt
    assert after.password_hash != before.password_hash
    assert after.last_password_change >= called_at
    assert after.password_change_required is False


@pytest.mark.asyncio
async def test_new_password_logs_in_and_old_does_not(use_case, users, hasher):
    await use_case.execute(ChangePasswordInput(1, OLD, "abc12346"))
    authenticator = Authenticator(users, hasher)

    identity = await authenticator.authenticate("editor@example.com", "abc12346")

    assert identity.id == 1
    with pytest.raises(InvalidCredentials):
        await authenticator.authenticate("editor@example.com", OLD)


class SlowHasher(PasswordHasher):
    def derive(self, password: str, salt: bytes) -> bytes:
        time.sleep(0.02)
        return super().derive(password, salt)


@pytest.mark.asyncio
async def test_rotation_does_not_block_the_event_loop(users):
    use_case = ChangePasswordUseCase(users, SlowHasher(), min_length=8)
    ticks = 0

    async def ticker():
        nonlocal ticks
        while True:
            await asyncio.sleep(0.005)
            ticks += 1

    task = asyncio.create_task(ticker())
    try:
        result = await use_case.execute(ChangePasswordInput(1, OLD, "abc12346"))
    finally:
        task.cancel()

    assert result.success is True
    assert ticks > 0
