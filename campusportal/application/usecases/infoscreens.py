"""
Name: Info-Screen Use Cases

Responsibilities:
  - List active campaigns in display order
  - Fetch one campaign
  - Apply Create/Update/Delete commands with campaign validation
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Union

from ...crosscutting.logger import logger
from ...domain.entities import InfoScreenValues
from ...domain.repositories import InfoScreenRepository
from .results import (
    GetInfoScreenResult,
    ListInfoScreensResult,
    MutationResult,
    PortalError,
    PortalErrorCode,
    not_found,
)


@dataclass
class CreateInfoScreen:
    values: InfoScreenValues


@dataclass
class UpdateInfoScreen:
    id: int
    values: InfoScreenValues


@dataclass
class DeleteInfoScreen:
    id: int


InfoScreenCommand = Union[CreateInfoScreen, UpdateInfoScreen, DeleteInfoScreen]


def validate_campaign(values: InfoScreenValues) -> PortalError | None:
    """R: A campaign needs media and must not end before it starts."""
    if not values.media_de and not values.media_en:
        return PortalError(
            PortalErrorCode.VALIDATION_ERROR,
            "At least one of mediaDe or mediaEn is required",
            "media",
        )
    start, end = values.campaign_start, values.campaign_end
    if start is not None and end is not None and end < start:
        return PortalError(
            PortalErrorCode.VALIDATION_ERROR,
            "campaignEnd must not precede campaignStart",
            "campaignEnd",
        )
    return None


class ListActiveInfoScreensUseCase:
    def __init__(
        self,
        info_screens: InfoScreenRepository,
        clock: Callable[[], datetime] | None = None,
    ):
        self.info_screens = info_screens
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def execute(self) -> ListInfoScreensResult:
        return ListInfoScreensResult(
            info_screens=await self.info_screens.list_active(self._clock())
        )


class GetInfoScreenUseCase:
    def __init__(self, info_screens: InfoScreenRepository):
        self.info_screens = info_screens

    async def execute(self, info_screen_id: int) -> GetInfoScreenResult:
        screen = await self.info_screens.get_info_screen(info_screen_id)
        if screen is None:
            return GetInfoScreenResult(error=not_found("InfoScreen"))
        return GetInfoScreenResult(info_screen=screen)


class ManageInfoScreenUseCase:
    """R: Apply one info-screen command."""

    def __init__(self, info_screens: InfoScreenRepository):
        self.info_screens = info_screens

    async def execute(self, command: InfoScreenCommand) -> MutationResult:
        if isinstance(command, DeleteInfoScreen):
            if not await self.info_screens.delete_info_screen(command.id):
                return MutationResult(error=not_found("InfoScreen"))
            logger.info("Info-screen deleted", extra={"info_screen_id": command.id})
            return MutationResult(id=command.id)

        error = validate_campaign(command.values)
        if error:
            return MutationResult(error=error)

        if isinstance(command, CreateInfoScreen):
            screen_id = await self.info_screens.create_info_screen(command.values)
            logger.info("Info-screen created", extra={"info_screen_id": screen_id})
            return MutationResult(id=screen_id)

        if not await self.info_screens.update_info_screen(command.id, command.values):
            return MutationResult(error=not_found("InfoScreen"))
        logger.info("Info-screen updated", extra={"info_screen_id": command.id})
        return MutationResult(id=command.id)
