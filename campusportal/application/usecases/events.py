"""
Name: Event Use Cases

Responsibilities:
  - List an organizer's events together with its upcoming-event limit
  - Fetch a single owned event
  - Apply Create/Update/Delete commands scoped to the caller's organizer
  - Geocode venue addresses (best effort) before persisting

Collaborators:
  - domain.repositories.EventRepository, OrganizerRepository
  - domain.services.GeocodingService (optional)

Constraints:
  - Events of another organizer behave exactly like missing events
  - A rejected address (non-OK geocoding status) blocks the write;
    an unreachable geocoder does not
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

from ...crosscutting.exceptions import GeocodingError
from ...crosscutting.logger import logger
from ...domain.entities import EventValues
from ...domain.repositories import EventRepository, OrganizerRepository
from ...domain.services import GeocodingService
from .results import (
    EventLimit,
    GetEventResult,
    ListEventsResult,
    MutationResult,
    PortalError,
    PortalErrorCode,
    not_found,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CreateEvent:
    values: EventValues


@dataclass
class UpdateEvent:
    id: int
    values: EventValues


@dataclass
class DeleteEvent:
    id: int


EventCommand = Union[CreateEvent, UpdateEvent, DeleteEvent]


class ListEventsUseCase:
    """R: Events of an organizer plus {count of upcoming events, limit}."""

    def __init__(
        self,
        events: EventRepository,
        organizers: OrganizerRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.events = events
        self.organizers = organizers
        self._clock = clock

    async def execute(self, organizer_id: int) -> ListEventsResult:
        organizer = await self.organizers.get_organizer(organizer_id)
        if organizer is None:
            return ListEventsResult(error=not_found("Organizer"))

        events = await self.events.list_events(organizer_id)
        upcoming = await self.events.count_upcoming(organizer_id, self._clock())
        return ListEventsResult(
            events=events,
            event_limit=EventLimit(count=upcoming, limit=organizer.event_limit),
        )


class GetEventUseCase:
    def __init__(self, events: EventRepository):
        self.events = events

    async def execute(self, organizer_id: int, event_id: int) -> GetEventResult:
        event = await self.events.get_event(organizer_id, event_id)
        if event is None:
            return GetEventResult(error=not_found("Event"))
        return GetEventResult(event=event)


class ManageEventUseCase:
    """R: Apply one event command on behalf of an organizer."""

    def __init__(
        self,
        events: EventRepository,
        organizers: OrganizerRepository,
        geocoder: Optional[GeocodingService] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.events = events
        self.organizers = organizers
        self.geocoder = geocoder
        self._clock = clock

    async def execute(self, organizer_id: int, command: EventCommand) -> MutationResult:
        if isinstance(command, DeleteEvent):
            if not await self.events.delete_event(organizer_id, command.id):
                return MutationResult(error=not_found("Event"))
            logger.info("Event deleted", extra={"event_id": command.id})
            return MutationResult(id=command.id)

        if isinstance(command, CreateEvent):
            error = await self._check_limit(organizer_id, command.values)
            if error:
                return MutationResult(error=error)

        venue_data, error = await self._geocode(command.values.venue_address)
        if error:
            return MutationResult(error=error)

        if isinstance(command, CreateEvent):
            event_id = await self.events.create_event(
                organizer_id, command.values, venue_data
            )
            logger.info("Event created", extra={"event_id": event_id})
            return MutationResult(id=event_id)

        if not await self.events.update_event(
            organizer_id, command.id, command.values, venue_data
        ):
            return MutationResult(error=not_found("Event"))
        logger.info("Event updated", extra={"event_id": command.id})
        return MutationResult(id=command.id)

    async def _check_limit(
        self, organizer_id: int, values: EventValues
    ) -> PortalError | None:
        now = self._clock()
        if values.date < now:
            return None
        organizer = await self.organizers.get_organizer(organizer_id)
        if organizer is None:
            return not_found("Organizer")
        upcoming = await self.events.count_upcoming(organizer_id, now)
        if upcoming >= organizer.event_limit:
            return PortalError(
                PortalErrorCode.CONFLICT,
                f"Event limit of {organizer.event_limit} upcoming events reached",
                "Event",
            )
        return None

    async def _geocode(
        self, address: str | None
    ) -> tuple[Dict[str, Any] | None, PortalError | None]:
        if not address or not address.strip() or self.geocoder is None:
            return None, None

        try:
            result = await self.geocoder.geocode(address.strip())
        except GeocodingError as exc:
            logger.warning(
                "Geocoding unavailable, storing event without venue data",
                extra={"error_id": exc.error_id},
            )
            return None, None

        if not result.ok:
            logger.warning("Geocoding rejected address", extra={"status": result.status})
            return None, PortalError(
                PortalErrorCode.VALIDATION_ERROR, "Invalid address.", "venueAddress"
            )
        return result.results[0], None
