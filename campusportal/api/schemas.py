"""
Name: API Schemas

Responsibilities:
  - Request bodies validated at the boundary (one model per method)
  - Response models for page data and API results (camelCase on the wire)

Collaborators:
  - api/*_routes.py
  - domain.entities (conversion helpers)

Constraints:
  - Mutation bodies forbid unknown fields; a Create body carrying an id
    is rejected before it reaches a use case
  - Naive datetimes are interpreted as UTC
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..domain.entities import (
    Event,
    EventValues,
    InfoScreen,
    InfoScreenValues,
    Organizer,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictBody(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


# =============================================================================
# Auth
# =============================================================================


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


class LoginRequest(CamelModel):
    """R: Anything malformed falls through to the generic credential failure."""

    email: str = ""
    password: str = ""
    callback_url: Optional[str] = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def text_or_empty(cls, v: Any) -> str:
        return _text(v) or ""

    @field_validator("callback_url", mode="before")
    @classmethod
    def text_or_none(cls, v: Any) -> Optional[str]:
        return _text(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ChangePasswordRequest(CamelModel):
    """R: Non-string values count as missing; policy lives in the use case."""

    old_password: Optional[str] = None
    new_password: Optional[str] = None

    @field_validator("old_password", "new_password", mode="before")
    @classmethod
    def text_or_none(cls, v: Any) -> Optional[str]:
        return _text(v)


class UserOut(CamelModel):
    id: int
    email: str


class LoginResponse(CamelModel):
    user: UserOut
    callback_url: str
    password_change_required: bool
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class SessionResponse(CamelModel):
    user: UserOut
    roles: List[str]
    password_change_required: bool
    organizer_id: Optional[int] = None


# =============================================================================
# Events
# =============================================================================


class EventValuesBody(StrictBody):
    title: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., max_length=20_000)
    date: datetime
    online: bool
    event_type: str = Field(..., min_length=1, max_length=100)
    image: str = Field(..., min_length=1, max_length=64)
    venue: Optional[str] = Field(default=None, max_length=300)
    venue_address: Optional[str] = Field(default=None, max_length=500)
    registration_deadline: Optional[datetime] = None
    registration_link: Optional[str] = Field(default=None, max_length=2000)
    price: Optional[str] = Field(default=None, max_length=100)

    @field_validator("date", "registration_deadline")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def to_values(self) -> EventValues:
        return EventValues(
            title=self.title,
            description=self.description,
            date=self.date,
            online=self.online,
            event_type=self.event_type,
            image=self.image,
            venue=self.venue,
            venue_address=self.venue_address,
            registration_deadline=self.registration_deadline,
            registration_link=self.registration_link,
            price=self.price,
        )


class CreateEventBody(EventValuesBody):
    """PUT /api/event"""


class UpdateEventBody(EventValuesBody):
    """POST /api/event"""

    id: int = Field(..., gt=0)


class DeleteEventBody(StrictBody):
    """DELETE /api/event"""

    id: int = Field(..., gt=0)


class IdResponse(BaseModel):
    id: int


class EventSummaryOut(CamelModel):
    id: int
    title: str
    date: datetime
    registration_deadline: Optional[datetime] = None
    image: str

    @classmethod
    def from_event(cls, event: Event) -> "EventSummaryOut":
        return cls(
            id=event.id,
            title=event.values.title,
            date=event.values.date,
            registration_deadline=event.values.registration_deadline,
            image=event.values.image,
        )


class EventOut(EventSummaryOut):
    description: str
    online: bool
    event_type: str
    venue: Optional[str] = None
    venue_address: Optional[str] = None
    venue_data: Optional[Dict[str, Any]] = None
    registration_link: Optional[str] = None
    price: Optional[str] = None

    @classmethod
    def from_event(cls, event: Event) -> "EventOut":
        v = event.values
        return cls(
            id=event.id,
            title=v.title,
            date=v.date,
            registration_deadline=v.registration_deadline,
            image=v.image,
            description=v.description,
            online=v.online,
            event_type=v.event_type,
            venue=v.venue,
            venue_address=v.venue_address,
            venue_data=event.venue_data,
            registration_link=v.registration_link,
            price=v.price,
        )


class EventLimitOut(CamelModel):
    count: int
    limit: int


class EventListPage(CamelModel):
    events: List[EventSummaryOut]
    event_limit: EventLimitOut


class EventPage(CamelModel):
    event: Optional[EventOut] = None


# =============================================================================
# Info-screens
# =============================================================================


class InfoScreenValuesBody(StrictBody):
    comment: str = Field(..., max_length=1000)
    position: float
    campaign_start: Optional[datetime] = None
    campaign_end: Optional[datetime] = None
    media_de: Optional[str] = Field(default=None, max_length=64)
    media_en: Optional[str] = Field(default=None, max_length=64)
    external_link_de: Optional[str] = Field(default=None, max_length=2000)
    external_link_en: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("campaign_start", "campaign_end")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def to_values(self) -> InfoScreenValues:
        return InfoScreenValues(
            comment=self.comment,
            position=self.position,
            campaign_start=self.campaign_start,
            campaign_end=self.campaign_end,
            media_de=self.media_de,
            media_en=self.media_en,
            external_link_de=self.external_link_de,
            external_link_en=self.external_link_en,
        )


class CreateInfoScreenBody(InfoScreenValuesBody):
    """PUT /api/infoscreen"""


class UpdateInfoScreenBody(InfoScreenValuesBody):
    """POST /api/infoscreen"""

    id: int = Field(..., gt=0)


class DeleteInfoScreenBody(StrictBody):
    """DELETE /api/infoscreen"""

    id: int = Field(..., gt=0)


class InfoScreenSummaryOut(CamelModel):
    id: int
    comment: str
    campaign_start: Optional[datetime] = None
    campaign_end: Optional[datetime] = None
    media: Optional[str] = None

    @classmethod
    def from_info_screen(cls, screen: InfoScreen) -> "InfoScreenSummaryOut":
        return cls(
            id=screen.id,
            comment=screen.values.comment,
            campaign_start=screen.values.campaign_start,
            campaign_end=screen.values.campaign_end,
            media=screen.media,
        )


class InfoScreenOut(CamelModel):
    id: int
    comment: str
    position: float
    campaign_start: Optional[datetime] = None
    campaign_end: Optional[datetime] = None
    media_de: Optional[str] = None
    media_en: Optional[str] = None
    external_link_de: Optional[str] = None
    external_link_en: Optional[str] = None

    @classmethod
    def from_info_screen(cls, screen: InfoScreen) -> "InfoScreenOut":
        v = screen.values
        return cls(
            id=screen.id,
            comment=v.comment,
            position=v.position,
            campaign_start=v.campaign_start,
            campaign_end=v.campaign_end,
            media_de=v.media_de,
            media_en=v.media_en,
            external_link_de=v.external_link_de,
            external_link_en=v.external_link_en,
        )


class InfoScreenListPage(CamelModel):
    info_screens: List[InfoScreenSummaryOut]


class InfoScreenPage(CamelModel):
    info_screen: Optional[InfoScreenOut] = None


# =============================================================================
# Organizers
# =============================================================================


class ProfileBody(StrictBody):
    """POST /api/profile; omitted fields stay unchanged."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=20_000)
    logo_img: Optional[str] = Field(default=None, max_length=64)
    cover_img: Optional[str] = Field(default=None, max_length=64)
    social_website: Optional[str] = Field(default=None, max_length=2000)
    social_email: Optional[str] = Field(default=None, max_length=320)
    social_phone: Optional[str] = Field(default=None, max_length=100)
    social_facebook: Optional[str] = Field(default=None, max_length=2000)
    social_instagram: Optional[str] = Field(default=None, max_length=2000)
    social_twitter: Optional[str] = Field(default=None, max_length=2000)
    social_linkedin: Optional[str] = Field(default=None, max_length=2000)
    social_tiktok: Optional[str] = Field(default=None, max_length=2000)
    social_youtube: Optional[str] = Field(default=None, max_length=2000)
    social_telegram: Optional[str] = Field(default=None, max_length=2000)

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class OrganizerOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    logo_img: Optional[str] = None
    cover_img: Optional[str] = None
    event_limit: int
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

    @classmethod
    def from_organizer(cls, organizer: Organizer) -> "OrganizerOut":
        return cls.model_validate(organizer, from_attributes=True)


class ProfilePage(CamelModel):
    organizer: OrganizerOut


class OrganizerChoiceOut(CamelModel):
    id: int
    name: str
    selected: bool


class SelectOrganizerPage(CamelModel):
    organizers: List[OrganizerChoiceOut]


# =============================================================================
# Home / settings
# =============================================================================


class HomePage(CamelModel):
    user: UserOut
    password_change_required: bool
    sections: List[str]


class SettingsPage(CamelModel):
    last_password_change: Optional[datetime] = None
    password_change_required: bool
    min_password_length: int
