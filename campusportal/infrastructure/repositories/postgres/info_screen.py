"""
Name: PostgreSQL Info-Screen Repository

Responsibilities:
  - CRUD over info-screen campaigns
  - List active campaigns ordered for display
"""

from datetime import datetime
from typing import List, Optional

import psycopg
from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import InfoScreen, InfoScreenValues

_SELECT = """
    id, comment, position, campaign_start, campaign_end,
    media_de_id, media_en_id, external_link_de, external_link_en
"""


def _row_to_info_screen(row) -> InfoScreen:
    return InfoScreen(
        id=row[0],
        values=InfoScreenValues(
            comment=row[1],
            position=row[2],
            campaign_start=row[3],
            campaign_end=row[4],
            media_de=row[5],
            media_en=row[6],
            external_link_de=row[7],
            external_link_en=row[8],
        ),
    )


def _value_params(values: InfoScreenValues) -> tuple:
    return (
        values.comment,
        values.position,
        values.campaign_start,
        values.campaign_end,
        values.media_de,
        values.media_en,
        values.external_link_de,
        values.external_link_en,
    )


class PostgresInfoScreenRepository:
    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def list_active(self, now: datetime) -> List[InfoScreen]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"""
                    SELECT {_SELECT} FROM info_screens
                    WHERE campaign_end IS NULL OR campaign_end > %s
                    ORDER BY position ASC, id ASC
                    """,
                    (now,),
                )
                rows = await cur.fetchall()
        except psycopg.Error as exc:
            logger.error(f"PostgresInfoScreenRepository: List failed: {exc}")
            raise DatabaseError("Info-screen listing failed", original_error=exc) from exc

        return [_row_to_info_screen(row) for row in rows]

    async def get_info_screen(self, info_screen_id: int) -> Optional[InfoScreen]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {_SELECT} FROM info_screens WHERE id = %s",
                    (info_screen_id,),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresInfoScreenRepository: Get failed: {exc}")
            raise DatabaseError("Info-screen lookup failed", original_error=exc) from exc

        return _row_to_info_screen(row) if row else None

    async def create_info_screen(self, values: InfoScreenValues) -> int:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    """
                    INSERT INTO info_screens (
                        comment, position, campaign_start, campaign_end,
                        media_de_id, media_en_id, external_link_de, external_link_en
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    _value_params(values),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresInfoScreenRepository: Create failed: {exc}")
            raise DatabaseError("Info-screen creation failed", original_error=exc) from exc

        if not row:
            raise DatabaseError("Info-screen creation failed: no row returned")
        return int(row[0])

    async def update_info_screen(
        self, info_screen_id: int, values: InfoScreenValues
    ) -> bool:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    """
                    UPDATE info_screens SET
                        comment = %s, position = %s, campaign_start = %s,
                        campaign_end = %s, media_de_id = %s, media_en_id = %s,
                        external_link_de = %s, external_link_en = %s
                    WHERE id = %s
                    """,
                    (*_value_params(values), info_screen_id),
                )
                updated = cur.rowcount
        except psycopg.Error as exc:
            logger.error(f"PostgresInfoScreenRepository: Update failed: {exc}")
            raise DatabaseError("Info-screen update failed", original_error=exc) from exc

        return updated == 1

    async def delete_info_screen(self, info_screen_id: int) -> bool:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "DELETE FROM info_screens WHERE id = %s", (info_screen_id,)
                )
                deleted = cur.rowcount
        except psycopg.Error as exc:
            logger.error(f"PostgresInfoScreenRepository: Delete failed: {exc}")
            raise DatabaseError("Info-screen deletion failed", original_error=exc) from exc

        return deleted == 1
