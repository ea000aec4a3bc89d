"""
Name: Organizer Profile Use Cases

Responsibilities:
  - Read and update the profile of the organizer a user administers
"""

from typing import Any, Dict

from ...crosscutting.logger import logger
from ...domain.repositories import OrganizerRepository
from .results import GetProfileResult, MutationResult, not_found


class GetOrganizerProfileUseCase:
    def __init__(self, organizers: OrganizerRepository):
        self.organizers = organizers

    async def execute(self, organizer_id: int) -> GetProfileResult:
        organizer = await self.organizers.get_organizer(organizer_id)
        if organizer is None:
            return GetProfileResult(error=not_found("Organizer"))
        return GetProfileResult(organizer=organizer)


class UpdateOrganizerProfileUseCase:
    """R: Overwrite profile fields; unknown keys are ignored by the repository."""

    def __init__(self, organizers: OrganizerRepository):
        self.organizers = organizers

    async def execute(self, organizer_id: int, fields: Dict[str, Any]) -> MutationResult:
        if not await self.organizers.update_profile(organizer_id, fields):
            return MutationResult(error=not_found("Organizer"))
        logger.info(
            "Organizer profile updated",
            extra={"organizer_id": organizer_id, "fields": sorted(fields)},
        )
        return MutationResult(id=organizer_id)
