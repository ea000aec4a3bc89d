"""
Name: Authentication Routes

Responsibilities:
  - Login page data and credential exchange for a session cookie/token
  - Sign-out (cookie removal)
  - Current session introspection
  - Password rotation for the signed-in user

Collaborators:
  - identity.authentication.Authenticator
  - identity.sessions: issue_session
  - application.usecases.ChangePasswordUseCase
  - api/dependencies.py: require_api

Constraints:
  - A failed login never says whether the email exists
  - callbackUrl is honoured only for same-origin paths
  - Password change failures answer 400 {"error": message}
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from ..application.usecases import (
    ChangePasswordInput,
    PasswordChangeFailure,
)
from ..container import Container, get_container
from ..crosscutting.error_responses import unauthorized
from ..identity.authentication import InvalidCredentials
from ..identity.gate import Principal
from ..identity.sessions import issue_session
from .dependencies import require_api
from .schemas import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    SessionResponse,
    UserOut,
)

router = APIRouter(tags=["auth"])

DEFAULT_CALLBACK = "/"


def safe_callback(callback_url: Optional[str]) -> str:
    """R: Keep callbacks on this origin (relative path, no scheme, no //)."""
    if not callback_url or not callback_url.startswith("/"):
        return DEFAULT_CALLBACK
    if callback_url.startswith("//") or "\\" in callback_url:
        return DEFAULT_CALLBACK
    return callback_url


def _set_session_cookie(
    response: Response, container: Container, token: str, expires_in: int
) -> None:
    settings = container.session_settings
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


@router.get("/auth/signin")
def signin_page(callbackUrl: Optional[str] = None):
    """R: Data for the login page."""
    return {"callbackUrl": safe_callback(callbackUrl)}


@router.post("/auth/signin", response_model=LoginResponse)
async def signin(
    req: LoginRequest,
    response: Response,
    container: Container = Depends(get_container),
):
    try:
        identity = await container.authenticator.authenticate(req.email, req.password)
    except InvalidCredentials:
        raise unauthorized("Invalid credentials.") from None

    user = await container.users.get_user_by_id(identity.id)
    if user is None:
        raise unauthorized("Invalid credentials.")

    token, expires_in = issue_session(identity, container.session_settings)
    _set_session_cookie(response, container, token, expires_in)

    return LoginResponse(
        user=UserOut(id=identity.id, email=identity.email),
        callback_url=safe_callback(req.callback_url),
        password_change_required=user.password_change_required,
        access_token=token,
        expires_in=expires_in,
    )


@router.post("/auth/signout")
def signout(response: Response, container: Container = Depends(get_container)):
    response.delete_cookie(key=container.session_settings.cookie_name, path="/")
    return {"ok": True}


@router.get("/auth/session", response_model=SessionResponse)
async def session(principal: Principal = Depends(require_api())):
    """R: Who am I (roles read fresh for this request)."""
    user = principal.user
    return SessionResponse(
        user=UserOut(id=user.id, email=user.email),
        roles=sorted(role.value for role in principal.roles),
        password_change_required=user.password_change_required,
        organizer_id=user.organizer_id,
    )


async def _json_object(request: Request) -> dict:
    """R: Decode a JSON object body; anything else reads as empty."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("/api/change-password")
async def change_password(
    request: Request,
    principal: Principal = Depends(require_api()),
    container: Container = Depends(get_container),
):
    req = ChangePasswordRequest.model_validate(await _json_object(request))
    use_case = container.change_password_use_case()
    result = await use_case.execute(
        ChangePasswordInput(
            user_id=principal.user_id,
            old_password=req.old_password,
            new_password=req.new_password,
        )
    )
    if result.success:
        return {"success": True}

    status_code = 401 if result.failure == PasswordChangeFailure.UNAUTHORIZED else 400
    return JSONResponse(status_code=status_code, content={"error": result.message})
