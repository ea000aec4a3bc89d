"""
Name: PostgreSQL Event Repository

Responsibilities:
  - Organizer-scoped CRUD over events
  - Count upcoming events for the per-organizer limit

Constraints:
  - Every statement filters on organizer_id; foreign rows look missing
  - venue_data is stored as jsonb
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

import psycopg
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Event, EventValues

_SELECT = """
    id, organizer_id, title, description, date, online, event_type, image,
    venue, venue_address, registration_deadline, registration_link, price,
    venue_data
"""


def _row_to_event(row) -> Event:
    return Event(
        id=row[0],
        organizer_id=row[1],
        values=EventValues(
            title=row[2],
            description=row[3],
            date=row[4],
            online=row[5],
            event_type=row[6],
            image=row[7],
            venue=row[8],
            venue_address=row[9],
            registration_deadline=row[10],
            registration_link=row[11],
            price=row[12],
        ),
        venue_data=row[13],
    )


def _value_params(values: EventValues, venue_data: Optional[Dict[str, Any]]) -> tuple:
    return (
        values.title,
        values.description,
        values.date,
        values.online,
        values.event_type,
        values.image,
        values.venue,
        values.venue_address,
        values.registration_deadline,
        values.registration_link,
        values.price,
        Jsonb(venue_data) if venue_data is not None else None,
    )


class PostgresEventRepository:
    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def list_events(self, organizer_id: int) -> List[Event]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"""
                    SELECT {_SELECT} FROM events
                    WHERE organizer_id = %s
                    ORDER BY date DESC, id DESC
                    """,
                    (organizer_id,),
                )
                rows = await cur.fetchall()
        except psycopg.Error as exc:
            logger.error(f"PostgresEventRepository: List failed: {exc}")
            raise DatabaseError("Event listing failed", original_error=exc) from exc

        return [_row_to_event(row) for row in rows]

    async def get_event(self, organizer_id: int, event_id: int) -> Optional[Event]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {_SELECT} FROM events WHERE id = %s AND organizer_id = %s",
                    (event_id, organizer_id),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresEventRepository: Get failed: {exc}")
            raise DatabaseError("Event lookup failed", original_error=exc) from exc

        return _row_to_event(row) if row else None

    async def count_upcoming(self, organizer_id: int, now: datetime) -> int:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "SELECT count(*) FROM events WHERE organizer_id = %s AND date >= %s",
                    (organizer_id, now),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresEventRepository: Count failed: {exc}")
            raise DatabaseError("Event count failed", original_error=exc) from exc

        return int(row[0]) if row else 0

    async def create_event(
        self,
        organizer_id: int,
        values: EventValues,
        venue_data: Optional[Dict[str, Any]],
    ) -> int:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    """
                    INSERT INTO events (
                        title, description, date, online, event_type, image,
                        venue, venue_address, registration_deadline,
                        registration_link, price, venue_data, organizer_id
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (*_value_params(values, venue_data), organizer_id),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresEventRepository: Create failed: {exc}")
            raise DatabaseError("Event creation failed", original_error=exc) from exc

        if not row:
            raise DatabaseError("Event creation failed: no row returned")
        return int(row[0])

    async def update_event(
        self,
        organizer_id: int,
        event_id: int,
        values: EventValues,
        venue_data: Optional[Dict[str, Any]],
    ) -> bool:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    """
                    UPDATE events SET
                        title = %s, description = %s, date = %s, online = %s,
                        event_type = %s, image = %s, venue = %s,
                        venue_address = %s, registration_deadline = %s,
                        registration_link = %s, price = %s, venue_data = %s
                    WHERE id = %s AND organizer_id = %s
                    """,
                    (*_value_params(values, venue_data), event_id, organizer_id),
                )
                updated = cur.rowcount
        except psycopg.Error as exc:
            logger.error(f"PostgresEventRepository: Update failed: {exc}")
            raise DatabaseError("Event update failed", original_error=exc) from exc

        return updated == 1

    async def delete_event(self, organizer_id: int, event_id: int) -> bool:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "DELETE FROM events WHERE id = %s AND organizer_id = %s",
                    (event_id, organizer_id),
                )
                deleted = cur.rowcount
        except psycopg.Error as exc:
            logger.error(f"PostgresEventRepository: Delete failed: {exc}")
            raise DatabaseError("Event deletion failed", original_error=exc) from exc

        return deleted == 1
