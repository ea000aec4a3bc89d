"""
Name: In-Memory Organizer Repository
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Any, Dict, List, Optional

from ....domain.entities import ORGANIZER_PROFILE_FIELDS, Organizer


class InMemoryOrganizerRepository:
    """R: Thread-safe in-memory organizer store."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._organizers: Dict[int, Organizer] = {}

    def add_organizer(self, organizer: Organizer) -> Organizer:
        with self._lock:
            self._organizers[organizer.id] = organizer
        return organizer

    async def get_organizer(self, organizer_id: int) -> Optional[Organizer]:
        with self._lock:
            organizer = self._organizers.get(organizer_id)
            return replace(organizer) if organizer else None

    async def list_organizers(self) -> List[Organizer]:
        with self._lock:
            organizers = [replace(o) for o in self._organizers.values()]
        organizers.sort(key=lambda o: (o.name, o.id))
        return organizers

    async def update_profile(
        self, organizer_id: int, fields: Dict[str, Any]
    ) -> bool:
        updates = {k: v for k, v in fields.items() if k in ORGANIZER_PROFILE_FIELDS}
        with self._lock:
            organizer = self._organizers.get(organizer_id)
            if organizer is None:
                return False
            self._organizers[organizer_id] = replace(organizer, **updates)
            return True
