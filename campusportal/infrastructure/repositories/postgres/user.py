"""
Name: PostgreSQL User Repository

Responsibilities:
  - Load admin users for authentication by email or ID
  - Read role memberships (always uncached)
  - Rotate credentials and record logins

Collaborators:
  - psycopg_pool.AsyncConnectionPool (injected)
  - domain.entities.User, Role

Constraints:
  - Email lookups use lower(email) on both sides
  - Password rotation is a single UPDATE of salt, password and
    last_password_change
"""

from datetime import datetime
from typing import Optional, Set

import psycopg
from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Role, User

_USER_COLUMNS = """
    id, email, salt, password, last_login, last_password_change,
    admins_event_organizer_id, created_at
"""


def _row_to_user(row) -> User:
    return User(
        id=row[0],
        email=row[1],
        salt=bytes(row[2]),
        password_hash=bytes(row[3]),
        last_login=row[4],
        last_password_change=row[5],
        organizer_id=row[6],
        created_at=row[7],
    )


class PostgresUserRepository:
    """R: Credential store accessor backed by PostgreSQL."""

    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def get_user_by_email(self, email: str) -> Optional[User]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"""
                    SELECT {_USER_COLUMNS}
                    FROM admin_users
                    WHERE lower(email) = lower(%s)
                    """,
                    (email,),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresUserRepository: Get by email failed: {exc}")
            raise DatabaseError("User lookup failed", original_error=exc) from exc

        return _row_to_user(row) if row else None

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {_USER_COLUMNS} FROM admin_users WHERE id = %s",
                    (user_id,),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresUserRepository: Get by id failed: {exc}")
            raise DatabaseError("User lookup failed", original_error=exc) from exc

        return _row_to_user(row) if row else None

    async def list_roles(self, user_id: int) -> Set[Role]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "SELECT role FROM admin_user_roles WHERE user_id = %s",
                    (user_id,),
                )
                rows = await cur.fetchall()
        except psycopg.Error as exc:
            logger.error(f"PostgresUserRepository: List roles failed: {exc}")
            raise DatabaseError("Role lookup failed", original_error=exc) from exc

        roles: Set[Role] = set()
        for (value,) in rows:
            try:
                roles.add(Role(value))
            except ValueError:
                logger.warning("Unknown role in database", extra={"role": value})
        return roles

    async def record_login(self, user_id: int, at: datetime) -> None:
        try:
            async with self._pool.connection() as conn:
                await conn.execute(
                    "UPDATE admin_users SET last_login = %s WHERE id = %s",
                    (at, user_id),
                )
        except psycopg.Error as exc:
            raise DatabaseError("last_login update failed", original_error=exc) from exc

    async def update_password(
        self,
        user_id: int,
        *,
        salt: bytes,
        password_hash: bytes,
        changed_at: datetime,
    ) -> bool:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    """
                    UPDATE admin_users
                    SET salt = %s, password = %s, last_password_change = %s
                    WHERE id = %s
                    """,
                    (salt, password_hash, changed_at, user_id),
                )
                updated = cur.rowcount
        except psycopg.Error as exc:
            logger.error(f"PostgresUserRepository: Password update failed: {exc}")
            raise DatabaseError("Password update failed", original_error=exc) from exc

        return updated == 1

    async def set_organizer(self, user_id: int, organizer_id: Optional[int]) -> None:
        try:
            async with self._pool.connection() as conn:
                await conn.execute(
                    """
                    UPDATE admin_users
                    SET admins_event_organizer_id = %s
                    WHERE id = %s
                    """,
                    (organizer_id, user_id),
                )
        except psycopg.Error as exc:
            logger.error(f"PostgresUserRepository: Set organizer failed: {exc}")
            raise DatabaseError("Organizer selection failed", original_error=exc) from exc

    async def create_user(
        self,
        *,
        email: str,
        salt: bytes,
        password_hash: bytes,
        organizer_id: Optional[int] = None,
    ) -> User:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"""
                    INSERT INTO admin_users (email, salt, password, admins_event_organizer_id)
                    VALUES (%s, %s, %s, %s)
                    RETURNING {_USER_COLUMNS}
                    """,
                    (email, salt, password_hash, organizer_id),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresUserRepository: Create user failed: {exc}")
            raise DatabaseError("User creation failed", original_error=exc) from exc

        if not row:
            raise DatabaseError("User creation failed: no row returned")
        return _row_to_user(row)

    async def add_role(self, user_id: int, role: Role) -> None:
        try:
            async with self._pool.connection() as conn:
                await conn.execute(
                    """
                    INSERT INTO admin_user_roles (user_id, role)
                    VALUES (%s, %s)
                    ON CONFLICT DO NOTHING
                    """,
                    (user_id, role.value),
                )
        except psycopg.Error as exc:
            raise DatabaseError("Role grant failed", original_error=exc) from exc

    async def remove_role(self, user_id: int, role: Role) -> None:
        try:
            async with self._pool.connection() as conn:
                await conn.execute(
                    "DELETE FROM admin_user_roles WHERE user_id = %s AND role = %s",
                    (user_id, role.value),
                )
        except psycopg.Error as exc:
            raise DatabaseError("Role revocation failed", original_error=exc) from exc
