"""
Name: Account Provisioning Tests

Responsibilities:
  - New accounts get fresh credentials the portal accepts at sign-in
  - Existing accounts only change roles; the password is never requested
  - Revocation takes effect on the next gated request
"""

import asyncio

import pytest

from campusportal.application.provisioning import provision_user
from campusportal.domain.entities import Role
from campusportal.identity.passwords import PasswordHasher
from campusportal.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


def _no_prompt() -> str:
    raise AssertionError("password requested for an existing account")


@pytest.mark.asyncio
async def test_creates_user_with_roles_and_organizer():
    users = InMemoryUserRepository()

    result = await provision_user(
        users,
        PasswordHasher(),
        email="  New.Editor@Example.com ",
        password=lambda: "abc12345",
        grant=[Role.EVENT_EDITOR, Role.EVENT_EDITOR],
        organizer_id=7,
    )

    assert result.created is True
    assert result.granted == [Role.EVENT_EDITOR]
    user = await users.get_user_by_email("new.editor@example.com")
    assert user.organizer_id == 7
    assert user.password_change_required is True
    assert await users.list_roles(user.id) == {Role.EVENT_EDITOR}


@pytest.mark.asyncio
async def test_existing_user_only_changes_roles():
    users = InMemoryUserRepository()
    first = await provision_user(
        users,
        PasswordHasher(),
        email="editor@example.com",
        password=lambda: "abc12345",
        grant=[Role.EVENT_EDITOR, Role.GLOBAL_ADMIN],
    )

    again = await provision_user(
        users,
        PasswordHasher(),
        email="EDITOR@example.com",
        password=_no_prompt,
        grant=[Role.INFO_SCREEN_EDITOR],
        revoke=[Role.GLOBAL_ADMIN],
    )

    assert again.created is False
    assert again.user.id == first.user.id
    assert again.revoked == [Role.GLOBAL_ADMIN]
    assert await users.list_roles(first.user.id) == {
        Role.EVENT_EDITOR,
        Role.INFO_SCREEN_EDITOR,
    }
    stored = await users.get_user_by_id(first.user.id)
    assert stored.password_hash == first.user.password_hash


@pytest.mark.asyncio
@pytest.mark.parametrize("email,password", [("   ", "abc12345"), ("a@b.c", "")])
async def test_missing_email_or_password_is_rejected(email, password):
    users = InMemoryUserRepository()
    with pytest.raises(ValueError):
        await provision_user(
            users, PasswordHasher(), email=email, password=lambda: password
        )
    assert await users.get_user_by_email("a@b.c") is None


def test_provisioned_account_signs_in_and_revocation_applies(client, container):
    result = asyncio.run(
        provision_user(
            container.users,
            PasswordHasher(),
            email="screens@example.com",
            password=lambda: "abc12345",
            grant=[Role.INFO_SCREEN_EDITOR],
        )
    )
    response = client.post(
        "/auth/signin", json={"email": "screens@example.com", "password": "abc12345"}
    )
    assert response.status_code == 200
    assert client.get("/infoscreen").status_code == 200

    asyncio.run(
        provision_user(
            container.users,
            PasswordHasher(),
            email="screens@example.com",
            password=_no_prompt,
            revoke=[Role.INFO_SCREEN_EDITOR],
        )
    )

    assert result.created is True
    assert client.get("/infoscreen").status_code == 404
