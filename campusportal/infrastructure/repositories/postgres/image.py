"""
Name: PostgreSQL Image Metadata Repository
"""

from typing import Optional

import psycopg
from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Image


class PostgresImageRepository:
    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def save_image(self, image: Image) -> None:
        try:
            async with self._pool.connection() as conn:
                await conn.execute(
                    "INSERT INTO images (id, mime_type, owner_id) VALUES (%s, %s, %s)",
                    (image.id, image.mime_type, image.owner_id),
                )
        except psycopg.Error as exc:
            logger.error(f"PostgresImageRepository: Save failed: {exc}")
            raise DatabaseError("Image metadata save failed", original_error=exc) from exc

    async def get_image(self, image_id: str) -> Optional[Image]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "SELECT id, mime_type, owner_id, created_at FROM images WHERE id = %s",
                    (image_id,),
                )
                row = await cur.fetchone()
        except psycopg.Error as exc:
            logger.error(f"PostgresImageRepository: Get failed: {exc}")
            raise DatabaseError("Image lookup failed", original_error=exc) from exc

        if not row:
            return None
        return Image(id=row[0], mime_type=row[1], owner_id=row[2], created_at=row[3])
