"""
Name: In-Memory Info-Screen Repository
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from itertools import count
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import InfoScreen, InfoScreenValues


class InMemoryInfoScreenRepository:
    """R: Thread-safe in-memory info-screen store."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._screens: Dict[int, InfoScreen] = {}
        self._ids = count(1)

    async def list_active(self, now: datetime) -> List[InfoScreen]:
        with self._lock:
            screens = [replace(s) for s in self._screens.values() if s.is_active(now)]
        screens.sort(key=lambda s: (s.values.position, s.id))
        return screens

    async def get_info_screen(self, info_screen_id: int) -> Optional[InfoScreen]:
        with self._lock:
            screen = self._screens.get(info_screen_id)
            return replace(screen) if screen else None

    async def create_info_screen(self, values: InfoScreenValues) -> int:
        with self._lock:
            screen_id = next(self._ids)
            self._screens[screen_id] = InfoScreen(id=screen_id, values=replace(values))
            return screen_id

    async def update_info_screen(
        self, info_screen_id: int, values: InfoScreenValues
    ) -> bool:
        with self._lock:
            if info_screen_id not in self._screens:
                return False
            self._screens[info_screen_id] = InfoScreen(
                id=info_screen_id, values=replace(values)
            )
            return True

    async def delete_info_screen(self, info_screen_id: int) -> bool:
        with self._lock:
            return self._screens.pop(info_screen_id, None) is not None
