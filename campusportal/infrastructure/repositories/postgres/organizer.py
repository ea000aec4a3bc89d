"""
Name: PostgreSQL Organizer Repository

Responsibilities:
  - Read organizers and update organizer profiles
"""

from typing import Any, Dict, List, Optional

import psycopg
from psycopg import sql
from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import ORGANIZER_PROFILE_FIELDS, Organizer

_COLUMNS = ("id", "event_limit") + ORGANIZER_PROFILE_FIELDS
_SELECT = ", ".join(_COLUMNS)


def _row_to_organizer(row) -> Organizer:
    return Organizer(**dict(zip(_COLUMNS, row)))


class PostgresOrganizerRepository:
    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def get_organizer(self, organizer_id: int) -> Optional[Organizer]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {_SELECT} FROM event_organizers WHERE id = %s",
                    (organizer_id,),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresOrganizerRepository: Get failed: {exc}")
            raise DatabaseError("Organizer lookup failed", original_error=exc) from exc

        return _row_to_organizer(row) if row else None

    async def list_organizers(self) -> List[Organizer]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {_SELECT} FROM event_organizers ORDER BY name ASC, id ASC"
                )
                rows = await cur.fetchall()
        except psycopg.Error as exc:
            logger.error(f"PostgresOrganizerRepository: List failed: {exc}")
            raise DatabaseError("Organizer listing failed", original_error=exc) from exc

        return [_row_to_organizer(row) for row in rows]

    async def update_profile(
        self, organizer_id: int, fields: Dict[str, Any]
    ) -> bool:
        """R: Update whitelisted profile columns only."""
        updates = {k: v for k, v in fields.items() if k in ORGANIZER_PROFILE_FIELDS}
        if not updates:
            return await self.get_organizer(organizer_id) is not None

        query = sql.SQL("UPDATE event_organizers SET {} WHERE id = %s").format(
            sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(column)) for column in updates
            )
        )
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(query, (*updates.values(), organizer_id))
                updated = cur.rowcount
        except psycopg.Error as exc:
            logger.error(f"PostgresOrganizerRepository: Update failed: {exc}")
            raise DatabaseError("Organizer update failed", original_error=exc) from exc

        return updated == 1
