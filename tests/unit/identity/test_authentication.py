"""
Name: Authenticator Tests

Responsibilities:
  - Successful login returns an Identity and records last_login
  - Unknown email and wrong password fail identically
  - A failing last_login write does not fail the login
  - Key derivation does not block the event loop
"""

import asyncio
import time
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from campusportal.crosscutting.exceptions import DatabaseError
from campusportal.domain.entities import Identity, User
from campusportal.identity.authentication import Authenticator, InvalidCredentials
from campusportal.identity.passwords import PasswordHasher
from campusportal.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture
def users(hasher) -> InMemoryUserRepository:
    repo = InMemoryUserRepository()
    salt, password_hash = hasher.new_credentials("abc12345")
    repo.add_user(
        User(id=1, email="editor@example.com", salt=salt, password_hash=password_hash)
    )
    return repo


@pytest.fixture
def authenticator(users, hasher) -> Authenticator:
    return Authenticator(users, hasher, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_success_returns_identity_and_records_login(authenticator, users):
    identity = await authenticator.authenticate("editor@example.com", "abc12345")

    assert identity == Identity(id=1, email="editor@example.com")
    assert (await users.get_user_by_id(1)).last_login == NOW


@pytest.mark.asyncio
async def test_email_is_case_insensitive(authenticator):
    identity = await authenticator.authenticate("  Editor@Example.COM ", "abc12345")
    assert identity.id == 1


@pytest.mark.asyncio
async def test_unknown_email_and_wrong_password_fail_the_same_way(authenticator):
    with pytest.raises(InvalidCredentials) as unknown:
        await authenticator.authenticate("nobody@example.com", "abc12345")
    with pytest.raises(InvalidCredentials) as wrong:
        await authenticator.authenticate("editor@example.com", "abc12346")

    assert type(unknown.value) is type(wrong.value)
    assert str(unknown.value) == str(wrong.value)


@pytest.mark.asyncio
async def test_failed_login_does_not_touch_last_login(authenticator, users):
    with pytest.raises(InvalidCredentials):
        await authenticator.authenticate("editor@example.com", "wrong")
    assert (await users.get_user_by_id(1)).last_login is None


@pytest.mark.asyncio
async def test_last_login_write_failure_is_suppressed(users, hasher):
    users.record_login = AsyncMock(side_effect=DatabaseError("write failed"))
    authenticator = Authenticator(users, hasher, clock=lambda: NOW)

    identity = await authenticator.authenticate("editor@example.com", "abc12345")

    assert identity.id == 1
    users.record_login.assert_awaited_once_with(1, NOW)


class SlowHasher(PasswordHasher):
    def verify(self, password: str, salt: bytes, expected: bytes) -> bool:
        time.sleep(0.05)
        return super().verify(password, salt, expected)


async def _ticks_during(coro) -> int:
    ticks = 0

    async def ticker():
        nonlocal ticks
        while True:
            await asyncio.sleep(0.005)
            ticks += 1

    task = asyncio.create_task(ticker())
    try:
        await coro
    finally:
        task.cancel()
    return ticks


@pytest.mark.asyncio
async def test_verification_runs_off_the_event_loop(users):
    authenticator = Authenticator(users, SlowHasher(), clock=lambda: NOW)

    ticks = await _ticks_during(
        authenticator.authenticate("editor@example.com", "abc12345")
    )

    assert ticks > 0


@pytest.mark.asyncio
async def test_unknown_email_verification_runs_off_the_event_loop(users):
    authenticator = Authenticator(users, SlowHasher(), clock=lambda: NOW)

    async def attempt():
        with pytest.raises(InvalidCredentials):
            await authenticator.authenticate("nobody@example.com", "abc12345")

    assert await _ticks_during(attempt()) > 0
