"""
Name: Account Provisioning

Responsibilities:
  - Create a portal user with fresh salt + PBKDF2 hash (idempotent by email)
  - Grant and revoke roles on new or existing accounts

Collaborators:
  - domain.repositories.UserRepository
  - identity.passwords.PasswordHasher
  - scripts/create_user.py (CLI entry point)

Notes:
  - There is no self-registration endpoint; this is the only way in
  - New accounts have no last_password_change, so the portal asks for a
    rotation after the first login
  - The password is only requested when an account is actually created
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from starlette.concurrency import run_in_threadpool

from ..crosscutting.logger import logger
from ..domain.entities import Role, User
from ..domain.repositories import UserRepository
from ..identity.authentication import normalize_email
from ..identity.passwords import PasswordHasher


@dataclass
class ProvisionResult:
    user: User
    created: bool
    granted: List[Role] = field(default_factory=list)
    revoked: List[Role] = field(default_factory=list)


async def provision_user(
    users: UserRepository,
    hasher: PasswordHasher,
    *,
    email: str,
    password: Callable[[], str],
    grant: Iterable[Role] = (),
    revoke: Iterable[Role] = (),
    organizer_id: Optional[int] = None,
) -> ProvisionResult:
    normalized = normalize_email(email)
    if not normalized:
        raise ValueError("Email is required.")

    user = await users.get_user_by_email(normalized)
    created = user is None
    if user is None:
        secret = password()
        if not secret:
            raise ValueError("Password is required.")
        salt, password_hash = await run_in_threadpool(hasher.new_credentials, secret)
        user = await users.create_user(
            email=normalized,
            salt=salt,
            password_hash=password_hash,
            organizer_id=organizer_id,
        )
        logger.info("Provisioned user", extra={"user_id": user.id})

    granted = sorted(set(grant), key=lambda role: role.value)
    revoked = sorted(set(revoke) - set(granted), key=lambda role: role.value)
    for role in granted:
        await users.add_role(user.id, role)
    for role in revoked:
        await users.remove_role(user.id, role)

    return ProvisionResult(user=user, created=created, granted=granted, revoked=revoked)
