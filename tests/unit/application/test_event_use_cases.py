"""
Name: Event Use Case Tests

Responsibilities:
  - Organizer scoping (foreign events behave like missing ones)
  - Upcoming-event limit on create
  - Geocoding: rejected address blocks, unreachable service does not
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from campusportal.application.usecases import (
    CreateEvent,
    DeleteEvent,
    GetEventUseCase,
    ListEventsUseCase,
    ManageEventUseCase,
    PortalErrorCode,
    UpdateEvent,
)
from campusportal.crosscutting.exceptions import GeocodingError
from campusportal.domain.entities import EventValues, Organizer
from campusportal.domain.services import GeocodingResult
from campusportal.infrastructure.repositories import (
    InMemoryEventRepository,
    InMemoryOrganizerRepository,
)

pytestmark = pytest.mark.unit

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _values(days: int = 7, **overrides) -> EventValues:
    data = {
        "title": "Welcome Party",
        "description": "Drinks and music",
        "date": NOW + timedelta(days=days),
        "online": False,
        "event_type": "party",
        "image": "0123456789abcdef",
    }
    data.update(overrides)
    return EventValues(**data)


@pytest.fixture
def events() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def organizers() -> InMemoryOrganizerRepository:
    repo = InMemoryOrganizerRepository()
    repo.add_organizer(Organizer(id=1, name="Student Council", event_limit=2))
    repo.add_organizer(Organizer(id=2, name="Astronomy Club"))
    return repo


@pytest.fixture
def manage(events, organizers) -> ManageEventUseCase:
    return ManageEventUseCase(events, organizers, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_create_then_list_reports_limit(manage, events, organizers):
    created = await manage.execute(1, CreateEvent(_values()))
    await manage.execute(1, CreateEvent(_values(days=-3, title="Past")))

    result = await ListEventsUseCase(events, organizers, clock=lambda: NOW).execute(1)

    assert created.id is not None
    assert [e.values.title for e in result.events] == ["Welcome Party", "Past"]
    assert (result.event_limit.count, result.event_limit.limit) == (1, 2)


@pytest.mark.asyncio
async def test_list_for_unknown_organizer_is_not_found(events, organizers):
    result = await ListEventsUseCase(events, organizers).execute(99)
    assert result.error.code is PortalErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_upcoming_limit_blocks_create(manage):
    await manage.execute(1, CreateEvent(_values(days=1)))
    await manage.execute(1, CreateEvent(_values(days=2)))

    result = await manage.execute(1, CreateEvent(_values(days=3)))

    assert result.id is None
    assert result.error.code is PortalErrorCode.CONFLICT


@pytest.mark.asyncio
async def test_past_events_ignore_the_limit(manage):
    await manage.execute(1, CreateEvent(_values(days=1)))
    await manage.execute(1, CreateEvent(_values(days=2)))

    result = await manage.execute(1, CreateEvent(_values(days=-1)))

    assert result.error is None


@pytest.mark.asyncio
async def test_update_is_not_limited(manage):
    first = await manage.execute(1, CreateEvent(_values(days=1)))
    await manage.execute(1, CreateEvent(_values(days=2)))

    result = await manage.execute(1, UpdateEvent(first.id, _values(days=5, title="Moved")))

    assert result.id == first.id


@pytest.mark.asyncio
async def test_foreign_event_behaves_like_missing(manage, events):
    created = await manage.execute(2, CreateEvent(_values()))

    get = await GetEventUseCase(events).execute(1, created.id)
    update = await manage.execute(1, UpdateEvent(created.id, _values(title="Hijack")))
    delete = await manage.execute(1, DeleteEvent(created.id))

    assert get.error.code is PortalErrorCode.NOT_FOUND
    assert update.error.code is PortalErrorCode.NOT_FOUND
    assert delete.error.code is PortalErrorCode.NOT_FOUND
    assert (await events.get_event(2, created.id)).values.title == "Welcome Party"


@pytest.mark.asyncio
async def test_delete_own_event(manage, events):
    created = await manage.execute(1, CreateEvent(_values()))

    result = await manage.execute(1, DeleteEvent(created.id))

    assert result.id == created.id
    assert await events.get_event(1, created.id) is None


class TestGeocoding:
    @pytest.mark.asyncio
    async def test_geocoded_venue_data_is_stored(self, events, organizers):
        place = {"formatted_address": "Main St 1", "geometry": {"location": {}}}
        geocoder = AsyncMock()
        geocoder.geocode.return_value = GeocodingResult("OK", [place])
        manage = ManageEventUseCase(events, organizers, geocoder, clock=lambda: NOW)

        result = await manage.execute(
            1, CreateEvent(_values(venue_address="  Main St 1 "))
        )

        geocoder.geocode.assert_awaited_once_with("Main St 1")
        assert (await events.get_event(1, result.id)).venue_data == place

    @pytest.mark.asyncio
    async def test_rejected_address_blocks_write(self, events, organizers):
        geocoder = AsyncMock()
        geocoder.geocode.return_value = GeocodingResult("ZERO_RESULTS")
        manage = ManageEventUseCase(events, organizers, geocoder, clock=lambda: NOW)

        result = await manage.execute(1, CreateEvent(_values(venue_address="Nowhere")))

        assert result.error.code is PortalErrorCode.VALIDATION_ERROR
        assert result.error.message == "Invalid address."
        assert await events.list_events(1) == []

    @pytest.mark.asyncio
    async def test_unreachable_geocoder_stores_without_venue_data(self, events, organizers):
        geocoder = AsyncMock()
        geocoder.geocode.side_effect = GeocodingError("down")
        manage = ManageEventUseCase(events, organizers, geocoder, clock=lambda: NOW)

        result = await manage.execute(1, CreateEvent(_values(venue_address="Main St 1")))

        assert result.error is None
        assert (await events.get_event(1, result.id)).venue_data is None

    @pytest.mark.asyncio
    async def test_blank_address_skips_geocoding(self, events, organizers):
        geocoder = AsyncMock()
        manage = ManageEventUseCase(events, organizers, geocoder, clock=lambda: NOW)

        await manage.execute(1, CreateEvent(_values(venue_address="   ")))

        geocoder.geocode.assert_not_awaited()
