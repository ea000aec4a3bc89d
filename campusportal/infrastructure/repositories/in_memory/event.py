"""
Name: In-Memory Event Repository

Constraints / Notes:
  - Ordering aligned with Postgres: date DESC, id DESC
  - Organizer scoping identical to the Postgres repository
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from itertools import count
from threading import Lock
from typing import Any, Dict, List, Optional

from ....domain.entities import Event, EventValues


class InMemoryEventRepository:
    """R: Thread-safe in-memory event store."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: Dict[int, Event] = {}
        self._ids = count(1)

    def _owned(self, organizer_id: int, event_id: int) -> Optional[Event]:
        event = self._events.get(event_id)
        if event is None or event.organizer_id != organizer_id:
            return None
        return event

    async def list_events(self, organizer_id: int) -> List[Event]:
        with self._lock:
            events = [
                replace(e) for e in self._events.values() if e.organizer_id == organizer_id
            ]
        events.sort(key=lambda e: (e.values.date, e.id), reverse=True)
        return events

    async def get_event(self, organizer_id: int, event_id: int) -> Optional[Event]:
        with self._lock:
            event = self._owned(organizer_id, event_id)
            return replace(event) if event else None

    async def count_upcoming(self, organizer_id: int, now: datetime) -> int:
        with self._lock:
            return sum(
                1
                for e in self._events.values()
                if e.organizer_id == organizer_id and e.values.date >= now
            )

    async def create_event(
        self,
        organizer_id: int,
        values: EventValues,
        venue_data: Optional[Dict[str, Any]],
    ) -> int:
        with self._lock:
            event_id = next(self._ids)
            self._events[event_id] = Event(
                id=event_id,
                organizer_id=organizer_id,
                values=replace(values),
                venue_data=venue_data,
            )
            return event_id

    async def update_event(
        self,
        organizer_id: int,
        event_id: int,
        values: EventValues,
        venue_data: Optional[Dict[str, Any]],
    ) -> bool:
        with self._lock:
            event = self._owned(organizer_id, event_id)
            if event is None:
                return False
            self._events[event_id] = replace(
                event, values=replace(values), venue_data=venue_data
            )
            return True

    async def delete_event(self, organizer_id: int, event_id: int) -> bool:
        with self._lock:
            if self._owned(organizer_id, event_id) is None:
                return False
            del self._events[event_id]
            return True
