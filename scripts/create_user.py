"""
Name: User Provisioning Script

Responsibilities:
  - Create a portal user (idempotent); there is no self-registration
  - Grant or revoke roles and optionally attach an organizer

Usage:
  DATABASE_URL=... python scripts/create_user.py --email a@b.c \
      --role EVENT_EDITOR --organizer-id 3
  DATABASE_URL=... python scripts/create_user.py --email a@b.c \
      --revoke-role GLOBAL_ADMIN

Notes:
  - Writes go through PostgresUserRepository, the same store the portal reads
  - Re-running for an existing email only changes roles
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import os
import sys

from campusportal.application.provisioning import provision_user
from campusportal.domain.entities import Role
from campusportal.identity.passwords import PasswordHasher
from campusportal.infrastructure.db.pool import close_pool, open_pool
from campusportal.infrastructure.repositories import PostgresUserRepository


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt_email() -> str:
    email = input("Email: ").strip().lower()
    if not email:
        raise SystemExit("Email is required.")
    return email


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args() -> argparse.Namespace:
    argv = sys.argv[1:]
    if argv and argv[0] == "--":
        argv = argv[1:]
    roles = [role.value for role in Role]
    parser = argparse.ArgumentParser(description="Create a portal user (idempotent).")
    parser.add_argument("--email", help="User email (will be normalized)")
    parser.add_argument(
        "--password",
        help="Initial password (omit to be prompted securely)",
    )
    parser.add_argument(
        "--role",
        action="append",
        default=[],
        choices=roles,
        help="Role to grant (repeatable)",
    )
    parser.add_argument(
        "--revoke-role",
        action="append",
        default=[],
        choices=roles,
        help="Role to revoke (repeatable)",
    )
    parser.add_argument(
        "--organizer-id",
        type=int,
        default=None,
        help="Organizer the user administers",
    )
    return parser.parse_args(argv)


async def _run(db_url: str, args: argparse.Namespace, email: str) -> None:
    pool = await open_pool(db_url, min_size=1, max_size=1)
    try:
        result = await provision_user(
            PostgresUserRepository(pool),
            PasswordHasher(),
            email=email,
            password=lambda: args.password or _prompt_password(),
            grant=[Role(value) for value in args.role],
            revoke=[Role(value) for value in args.revoke_role],
            organizer_id=args.organizer_id,
        )
    finally:
        await close_pool(pool)

    granted = [role.value for role in result.granted]
    revoked = [role.value for role in result.revoked]
    if result.created:
        print(f"Created user: id={result.user.id} email={email} roles={granted}")
    else:
        print(
            f"User already exists: id={result.user.id} email={email} "
            f"roles+={granted} roles-={revoked}"
        )


def main() -> None:
    args = _parse_args()
    db_url = _require_database_url()
    email = args.email or _prompt_email()
    try:
        asyncio.run(_run(db_url, args, email))
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
