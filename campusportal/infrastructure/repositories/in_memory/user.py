"""
Name: In-Memory User Repository

Responsibilities:
  - Store admin users and role memberships in memory (tests/local dev)
  - Mirror the PostgreSQL repository's semantics (case-insensitive email,
    atomic credential replacement)

Constraints / Notes:
  - Thread-safe access (Lock)
  - add_user() seeds records synchronously for fixtures
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, Iterable, Optional, Set

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Role, User


class InMemoryUserRepository:
    """R: Thread-safe in-memory credential store."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._roles: Dict[int, Set[Role]] = {}
        self._ids = count(1)

    def add_user(self, user: User, roles: Iterable[Role] = ()) -> User:
        """R: Seed a user (sync helper for fixtures and dev bootstrap)."""
        with self._lock:
            self._users[user.id] = user
            self._roles[user.id] = set(roles)
        return user

    def _find_by_email(self, email: str) -> Optional[User]:
        normalized = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == normalized:
                return user
        return None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user = self._find_by_email(email)
            return replace(user) if user else None

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    async def list_roles(self, user_id: int) -> Set[Role]:
        with self._lock:
            if user_id not in self._users:
                return set()
            return set(self._roles.get(user_id, set()))

    async def record_login(self, user_id: int, at: datetime) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                self._users[user_id] = replace(user, last_login=at)

    async def update_password(
        self,
        user_id: int,
        *,
        salt: bytes,
        password_hash: bytes,
        changed_at: datetime,
    ) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            self._users[user_id] = replace(
                user,
                salt=salt,
                password_hash=password_hash,
                last_password_change=changed_at,
            )
            return True

    async def set_organizer(self, user_id: int, organizer_id: Optional[int]) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                self._users[user_id] = replace(user, organizer_id=organizer_id)

    async def create_user(
        self,
        *,
        email: str,
        salt: bytes,
        password_hash: bytes,
        organizer_id: Optional[int] = None,
    ) -> User:
        with self._lock:
            if self._find_by_email(email) is not None:
                raise DatabaseError(f"User creation failed: duplicate email {email}")
            user_id = next(self._ids)
            while user_id in self._users:
                user_id = next(self._ids)
            user = User(
                id=user_id,
                email=email,
                salt=salt,
                password_hash=password_hash,
                organizer_id=organizer_id,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user_id] = user
            self._roles[user_id] = set()
            return replace(user)

    async def add_role(self, user_id: int, role: Role) -> None:
        with self._lock:
            if user_id in self._users:
                self._roles.setdefault(user_id, set()).add(role)

    async def remove_role(self, user_id: int, role: Role) -> None:
        with self._lock:
            self._roles.get(user_id, set()).discard(role)
