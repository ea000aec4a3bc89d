"""
Name: Info-Screen Use Case Tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from campusportal.application.usecases import (
    CreateInfoScreen,
    DeleteInfoScreen,
    GetInfoScreenUseCase,
    ListActiveInfoScreensUseCase,
    ManageInfoScreenUseCase,
    PortalErrorCode,
    UpdateInfoScreen,
)
from campusportal.domain.entities import InfoScreenValues
from campusportal.infrastructure.repositories import InMemoryInfoScreenRepository

pytestmark = pytest.mark.unit

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def _values(**overrides) -> InfoScreenValues:
    data = {"comment": "Welcome week", "position": 1.0, "media_de": "0123456789abcdef"}
    data.update(overrides)
    return InfoScreenValues(**data)


@pytest.fixture
def screens() -> InMemoryInfoScreenRepository:
    return InMemoryInfoScreenRepository()


@pytest.fixture
def manage(screens) -> ManageInfoScreenUseCase:
    return ManageInfoScreenUseCase(screens)


@pytest.mark.asyncio
async def test_media_is_required(manage):
    result = await manage.execute(CreateInfoScreen(_values(media_de=None)))
    assert result.error.code is PortalErrorCode.VALIDATION_ERROR
    assert result.error.resource == "media"


@pytest.mark.asyncio
async def test_english_media_alone_is_enough(manage):
    result = await manage.execute(
        CreateInfoScreen(_values(media_de=None, media_en="fedcba9876543210"))
    )
    assert result.error is None


@pytest.mark.asyncio
async def test_end_before_start_is_rejected(manage):
    result = await manage.execute(
        CreateInfoScreen(
            _values(campaign_start=NOW, campaign_end=NOW - timedelta(days=1))
        )
    )
    assert result.error.resource == "campaignEnd"


@pytest.mark.asyncio
async def test_list_active_orders_by_position_and_hides_ended(manage, screens):
    await manage.execute(CreateInfoScreen(_values(comment="second", position=2.0)))
    await manage.execute(CreateInfoScreen(_values(comment="first", position=0.5)))
    await manage.execute(
        CreateInfoScreen(
            _values(comment="ended", position=0.1, campaign_end=NOW - timedelta(hours=1))
        )
    )

    result = await ListActiveInfoScreensUseCase(screens, clock=lambda: NOW).execute()

    assert [s.values.comment for s in result.info_screens] == ["first", "second"]


@pytest.mark.asyncio
async def test_update_and_delete_unknown_are_not_found(manage):
    update = await manage.execute(UpdateInfoScreen(7, _values()))
    delete = await manage.execute(DeleteInfoScreen(7))
    assert update.error.code is PortalErrorCode.NOT_FOUND
    assert delete.error.code is PortalErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_update_then_get(manage, screens):
    created = await manage.execute(CreateInfoScreen(_values()))
    await manage.execute(UpdateInfoScreen(created.id, _values(comment="Exam week")))

    result = await GetInfoScreenUseCase(screens).execute(created.id)

    assert result.info_screen.values.comment == "Exam week"
