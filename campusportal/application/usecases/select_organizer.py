"""
Name: Select Organizer Use Case

Responsibilities:
  - List organizers with the caller's current selection flagged
  - Switch the organizer a global admin is acting for
"""

from ...crosscutting.logger import logger
from ...domain.entities import User
from ...domain.repositories import OrganizerRepository, UserRepository
from .results import OrganizerChoice, SelectOrganizerResult, not_found


class SelectOrganizerUseCase:
    def __init__(self, users: UserRepository, organizers: OrganizerRepository):
        self.users = users
        self.organizers = organizers

    async def execute(
        self, user: User, organizer_id: int | None = None
    ) -> SelectOrganizerResult:
        if organizer_id is not None:
            if await self.organizers.get_organizer(organizer_id) is None:
                return SelectOrganizerResult(error=not_found("Organizer"))
            await self.users.set_organizer(user.id, organizer_id)
            logger.info("Organizer selected", extra={"organizer_id": organizer_id})
            return SelectOrganizerResult(selected_id=organizer_id)

        organizers = await self.organizers.list_organizers()
        return SelectOrganizerResult(
            choices=[
                OrganizerChoice(organizer=o, selected=o.id == user.organizer_id)
                for o in organizers
            ],
            selected_id=user.organizer_id,
        )
