"""
Name: Authentication Route Tests

Responsibilities:
  - Sign-in sets the session cookie and never reveals which part failed
  - Session introspection reads roles fresh
  - Sign-out clears the cookie
  - Password change endpoint status mapping
"""

import asyncio

import pytest

from campusportal.api.auth_routes import safe_callback
from campusportal.domain.entities import Role

DEFAULT_PASSWORD = "correct-horse"

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, "/"),
        ("", "/"),
        ("/event/3?tab=a", "/event/3?tab=a"),
        ("https://evil.example/", "/"),
        ("//evil.example/", "/"),
        ("/\\evil.example", "/"),
        ("event", "/"),
    ],
)
def test_safe_callback(raw, expected):
    assert safe_callback(raw) == expected


def test_signin_page_echoes_safe_callback(client):
    assert client.get("/auth/signin?callbackUrl=%2Fprofile").json() == {
        "callbackUrl": "/profile"
    }
    assert client.get("/auth/signin?callbackUrl=//evil.example").json() == {
        "callbackUrl": "/"
    }


def test_signin_sets_cookie_and_returns_token(client, seed_user, container):
    user = seed_user("Editor@Example.com", password_changed=False)

    response = client.post(
        "/auth/signin",
        json={
            "email": "  editor@EXAMPLE.com ",
            "password": DEFAULT_PASSWORD,
            "callbackUrl": "/event",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"] == {"id": user.id, "email": "Editor@Example.com"}
    assert body["callbackUrl"] == "/event"
    assert body["passwordChangeRequired"] is True
    assert body["tokenType"] == "bearer"
    assert body["expiresIn"] == container.settings.session_ttl_minutes * 60
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{container.settings.session_cookie_name}=")
    assert "httponly" in set_cookie.lower()
    assert "samesite=lax" in set_cookie.lower()


def test_unknown_email_and_wrong_password_answer_identically(client, seed_user):
    seed_user("editor@example.com")

    unknown = client.post(
        "/auth/signin", json={"email": "nobody@example.com", "password": DEFAULT_PASSWORD}
    )
    wrong = client.post(
        "/auth/signin", json={"email": "editor@example.com", "password": "nope"}
    )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()
    assert "set-cookie" not in wrong.headers


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "editor@example.com", "password": ""},
        {"email": "e@", "password": DEFAULT_PASSWORD},
        {"email": "editor@example.com"},
        {"email": 42, "password": ["x"]},
        {},
    ],
)
def test_malformed_login_is_a_generic_credential_failure(client, seed_user, payload):
    seed_user("editor@example.com")

    response = client.post("/auth/signin", json=payload)

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials."


def test_signin_records_last_login(client, seed_user, container, sign_in):
    user = seed_user("editor@example.com")
    sign_in("editor@example.com")

    stored = asyncio.run(container.users.get_user_by_id(user.id))
    assert stored.last_login is not None


def test_session_reports_fresh_roles(client, seed_user, container, sign_in):

    user = seed_user("editor@example.com", roles=[Role.INFO_SCREEN_EDITOR])
    sign_in("editor@example.com")

    first = client.get("/auth/session").json()
    asyncio.run(container.users.add_role(user.id, Role.GLOBAL_ADMIN))
    second = client.get("/auth/session").json()

    assert first["roles"] == ["INFO_SCREEN_EDITOR"]
    assert second["roles"] == ["GLOBAL_ADMIN", "INFO_SCREEN_EDITOR"]


def test_session_accepts_bearer_token(client, seed_user, sign_in):
    seed_user("editor@example.com")
    token = sign_in("editor@example.com").json()["accessToken"]
    client.cookies.clear()

    response = client.get("/auth/session", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "editor@example.com"


def test_session_without_login_is_401(client):
    response = client.get("/auth/session")
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_signout_clears_session(client, seed_user, sign_in):
    seed_user("editor@example.com")
    sign_in("editor@example.com")

    assert client.post("/auth/signout").json() == {"ok": True}
    assert client.get("/auth/session").status_code == 401


def test_session_of_deleted_account_is_unauthenticated(client, seed_user, container, sign_in):
    user = seed_user("editor@example.com")
    sign_in("editor@example.com")
    container.users._users.pop(user.id)

    assert client.get("/auth/session").status_code == 401


class TestChangePassword:
    def test_requires_login(self, client):
        response = client.post(
            "/api/change-password",
            json={"oldPassword": DEFAULT_PASSWORD, "newPassword": "abcdefgh1"},
        )
        assert response.status_code == 401

    def test_get_is_method_not_allowed(self, client, seed_user, sign_in):
        seed_user("editor@example.com")
        sign_in("editor@example.com")
        assert client.get("/api/change-password").status_code == 405

    @pytest.mark.parametrize(
        "payload,message",
        [
            (None, "Missing fields"),
            ({"oldPassword": DEFAULT_PASSWORD}, "Missing fields"),
            (
                {"oldPassword": DEFAULT_PASSWORD, "newPassword": DEFAULT_PASSWORD},
                "New password must be different",
            ),
            (
                {"oldPassword": DEFAULT_PASSWORD, "newPassword": "short"},
                "New password must be at least 8 characters",
            ),
            (
                {"oldPassword": DEFAULT_PASSWORD, "newPassword": "x" * 600},
                "New password must be at most 512 characters",
            ),
            ({"oldPassword": 123, "newPassword": "abcdefgh1"}, "Missing fields"),
            (["oldPassword", "newPassword"], "Missing fields"),
            (
                {"oldPassword": "not-my-password", "newPassword": "abcdefgh1"},
                "Old password incorrect",
            ),
        ],
    )
    def test_rejections_answer_400(self, client, seed_user, sign_in, payload, message):
        seed_user("editor@example.com")
        sign_in("editor@example.com")

        response = client.post("/api/change-password", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": message}

    def test_malformed_json_answers_400(self, client, seed_user, sign_in):
        seed_user("editor@example.com")
        sign_in("editor@example.com")

        response = client.post(
            "/api/change-password",
            content=b"{oldPassword:",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing fields"}

    def test_success_rotates_password(self, client, seed_user, sign_in):
        seed_user("editor@example.com", password_changed=False)
        sign_in("editor@example.com")

        response = client.post(
            "/api/change-password",
            json={"oldPassword": DEFAULT_PASSWORD, "newPassword": "abcdefgh1"},
        )

        assert response.json() == {"success": True}
        assert client.get("/auth/session").json()["passwordChangeRequired"] is False
        assert (
            client.post(
                "/auth/signin",
                json={"email": "editor@example.com", "password": DEFAULT_PASSWORD},
            ).status_code
            == 401
        )
        sign_in("editor@example.com", "abcdefgh1")
