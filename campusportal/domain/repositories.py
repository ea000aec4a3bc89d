"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define contracts for persistence of users, roles, organizers,
    events, info-screens and image metadata
  - Provide abstraction over storage technology

Collaborators:
  - domain.entities
  - Implementations in infrastructure.repositories (postgres, in_memory)

Constraints:
  - Pure interfaces (Protocol), no implementation
  - All methods are coroutines (non-blocking I/O)
  - Must not leak infrastructure details

Notes:
  - Using typing.Protocol for structural subtyping
  - Enables testing with in-memory repositories
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Set

from .entities import (
    Event,
    EventValues,
    Image,
    InfoScreen,
    InfoScreenValues,
    Organizer,
    Role,
    User,
)


class UserRepository(Protocol):
    """
    R: Credential store accessor.

    Implementations must provide:
      - Case-insensitive lookup by email
      - Fresh (uncached) role membership reads
      - Atomic replacement of the {salt, hash, last_password_change} triple
    """

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch a user by email, compared case-insensitively."""
        ...

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        ...

    async def list_roles(self, user_id: int) -> Set[Role]:
        """
        R: Current role memberships of a user.

        Must always hit the store; callers rely on revocations being
        visible on the very next call.
        """
        ...

    async def record_login(self, user_id: int, at: datetime) -> None:
        ...

    async def update_password(
        self,
        user_id: int,
        *,
        salt: bytes,
        password_hash: bytes,
        changed_at: datetime,
    ) -> bool:
        """
        R: Replace salt, hash and last_password_change in one statement.

        Returns:
            False when the user no longer exists
        """
        ...

    async def set_organizer(self, user_id: int, organizer_id: Optional[int]) -> None:
        ...

    async def create_user(
        self,
        *,
        email: str,
        salt: bytes,
        password_hash: bytes,
        organizer_id: Optional[int] = None,
    ) -> User:
        ...

    async def add_role(self, user_id: int, role: Role) -> None:
        ...

    async def remove_role(self, user_id: int, role: Role) -> None:
        ...


class OrganizerRepository(Protocol):
    """R: Interface for event organizer persistence."""

    async def get_organizer(self, organizer_id: int) -> Optional[Organizer]:
        ...

    async def list_organizers(self) -> List[Organizer]:
        """R: All organizers ordered by name."""
        ...

    async def update_profile(
        self, organizer_id: int, fields: Dict[str, Any]
    ) -> bool:
        """R: Update profile columns; returns False when the organizer is gone."""
        ...


class EventRepository(Protocol):
    """
    R: Interface for event persistence.

    Every read and write is scoped to an organizer; an event owned by
    another organizer behaves exactly like a missing one.
    """

    async def list_events(self, organizer_id: int) -> List[Event]:
        """R: Events of an organizer, newest date first."""
        ...

    async def get_event(self, organizer_id: int, event_id: int) -> Optional[Event]:
        ...

    async def count_upcoming(self, organizer_id: int, now: datetime) -> int:
        ...

    async def create_event(
        self,
        organizer_id: int,
        values: EventValues,
        venue_data: Optional[Dict[str, Any]],
    ) -> int:
        ...

    async def update_event(
        self,
        organizer_id: int,
        event_id: int,
        values: EventValues,
        venue_data: Optional[Dict[str, Any]],
    ) -> bool:
        """R: True iff exactly one owned row changed."""
        ...

    async def delete_event(self, organizer_id: int, event_id: int) -> bool:
        ...


class InfoScreenRepository(Protocol):
    """R: Interface for info-screen campaign persistence."""

    async def list_active(self, now: datetime) -> List[InfoScreen]:
        """R: Campaigns ending after now (or open-ended), by position ascending."""
        ...

    async def get_info_screen(self, info_screen_id: int) -> Optional[InfoScreen]:
        ...

    async def create_info_screen(self, values: InfoScreenValues) -> int:
        ...

    async def update_info_screen(
        self, info_screen_id: int, values: InfoScreenValues
    ) -> bool:
        ...

    async def delete_info_screen(self, info_screen_id: int) -> bool:
        ...


class ImageRepository(Protocol):
    """R: Interface for image metadata persistence."""

    async def save_image(self, image: Image) -> None:
        ...

    async def get_image(self, image_id: str) -> Optional[Image]:
        ...
