"""
Name: In-Memory Image Metadata Repository
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Image


class InMemoryImageRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._images: Dict[str, Image] = {}

    async def save_image(self, image: Image) -> None:
        with self._lock:
            if image.id in self._images:
                raise DatabaseError(f"Image metadata save failed: duplicate id {image.id}")
            self._images[image.id] = replace(
                image, created_at=image.created_at or datetime.now(timezone.utc)
            )

    async def get_image(self, image_id: str) -> Optional[Image]:
        with self._lock:
            image = self._images.get(image_id)
            return replace(image) if image else None
