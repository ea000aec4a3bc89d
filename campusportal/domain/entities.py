"""
Name: Domain Entities

Responsibilities:
  - Define the portal's core records (User, Organizer, Event, InfoScreen, Image)
  - Define the closed Role set
  - Provide type safety for the domain layer

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - No dependencies on infrastructure or frameworks
  - Simple dataclasses

Notes:
  - User.salt and User.password_hash are always replaced together
  - Role memberships are not carried on User; they are loaded per request
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class Role(str, Enum):
    """R: Closed set of role memberships a user may hold."""

    EVENT_EDITOR = "EVENT_EDITOR"
    INFO_SCREEN_EDITOR = "INFO_SCREEN_EDITOR"
    GLOBAL_ADMIN = "GLOBAL_ADMIN"


@dataclass
class User:
    """
    R: Durable admin account.

    Attributes:
        id: Stable numeric identifier (session subject)
        email: Unique, compared case-insensitively
        salt: Random bytes, replaced on every password rotation
        password_hash: Key derived from (password, salt)
        last_login: Set on every successful authentication
        last_password_change: None until the provisioned password is rotated
        organizer_id: Organizer the user currently administers
    """

    id: int
    email: str
    salt: bytes
    password_hash: bytes
    last_login: Optional[datetime] = None
    last_password_change: Optional[datetime] = None
    organizer_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def password_change_required(self) -> bool:
        return self.last_password_change is None

    def identity(self) -> "Identity":
        return Identity(id=self.id, email=self.email)


@dataclass(frozen=True)
class Identity:
    """R: What a successful login hands out. Never carries salt or hash."""

    id: int
    email: str


@dataclass
class Organizer:
    id: int
    name: str
    description: Optional[str] = None
    logo_img: Optional[str] = None
    cover_img: Optional[str] = None
    event_limit: int = 10
    social_website: Optional[str] = None
    social_email: Optional[str] = None
    social_phone: Optional[str] = None
    social_facebook: Optional[str] = None
    social_instagram: Optional[str] = None
    social_twitter: Optional[str] = None
    social_linkedin: Optional[str] = None
    social_tiktok: Optional[str] = None
    social_youtube: Optional[str] = None
    social_telegram: Optional[str] = None


ORGANIZER_PROFILE_FIELDS = (
    "name",
    "description",
    "logo_img",
    "cover_img",
    "social_website",
    "social_email",
    "social_phone",
    "social_facebook",
    "social_instagram",
    "social_twitter",
    "social_linkedin",
    "social_tiktok",
    "social_youtube",
    "social_telegram",
)


@dataclass
class EventValues:
    """R: Editable fields of an event (shared by create and update)."""

    title: str
    description: str
    date: datetime
    online: bool
    event_type: str
    image: str
    venue: Optional[str] = None
    venue_address: Optional[str] = None
    registration_deadline: Optional[datetime] = None
    registration_link: Optional[str] = None
    price: Optional[str] = None


@dataclass
class Event:
    id: int
    organizer_id: int
    values: EventValues
    venue_data: Optional[Dict[str, Any]] = None


@dataclass
class InfoScreenValues:
    comment: str
    position: float
    campaign_start: Optional[datetime] = None
    campaign_end: Optional[datetime] = None
    media_de: Optional[str] = None
    media_en: Optional[str] = None
    external_link_de: Optional[str] = None
    external_link_en: Optional[str] = None


@dataclass
class InfoScreen:
    id: int
    values: InfoScreenValues

    @property
    def media(self) -> Optional[str]:
        """R: Preferred media (German first, English fallback)."""
        return self.values.media_de or self.values.media_en

    def is_active(self, now: datetime) -> bool:
        end = self.values.campaign_end
        return end is None or end > now


@dataclass
class Image:
    """
    R: Metadata of an uploaded image. Bytes live in object storage.

    Attributes:
        id: 16 lowercase hex characters
        mime_type: Content-Type given at upload time
        owner_id: Uploading user
    """

    id: str
    mime_type: str
    owner_id: int
    created_at: Optional[datetime] = None
