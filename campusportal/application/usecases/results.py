"""
Name: Use Case Results

Responsibilities:
  - Provide consistent error/result types for portal use cases
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ...domain.entities import Event, Image, InfoScreen, Organizer


class PortalErrorCode(str, Enum):
    """R: Error codes for portal use cases."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNSUPPORTED_MEDIA = "UNSUPPORTED_MEDIA"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"


@dataclass
class PortalError:
    code: PortalErrorCode
    message: str
    resource: str | None = None


@dataclass
class EventLimit:
    count: int
    limit: int


@dataclass
class ListEventsResult:
    events: List[Event] = field(default_factory=list)
    event_limit: Optional[EventLimit] = None
    error: PortalError | None = None


@dataclass
class GetEventResult:
    event: Event | None = None
    error: PortalError | None = None


@dataclass
class MutationResult:
    """R: Outcome of a create/update/delete; id echoes the affected record."""

    id: int | None = None
    error: PortalError | None = None


@dataclass
class ListInfoScreensResult:
    info_screens: List[InfoScreen] = field(default_factory=list)


@dataclass
class GetInfoScreenResult:
    info_screen: InfoScreen | None = None
    error: PortalError | None = None


@dataclass
class OrganizerChoice:
    organizer: Organizer
    selected: bool


@dataclass
class SelectOrganizerResult:
    choices: List[OrganizerChoice] = field(default_factory=list)
    selected_id: int | None = None
    error: PortalError | None = None


@dataclass
class GetProfileResult:
    organizer: Organizer | None = None
    error: PortalError | None = None


@dataclass
class UploadImageResult:
    image_id: str | None = None
    error: PortalError | None = None


@dataclass
class DownloadImageResult:
    image: Image | None = None
    content: bytes = b""
    error: PortalError | None = None


def not_found(resource: str) -> PortalError:
    return PortalError(PortalErrorCode.NOT_FOUND, f"{resource} not found", resource)
