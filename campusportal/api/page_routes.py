"""
Name: Page Routes

Responsibilities:
  - Serve the data behind each portal page (home, settings, events,
    organizer selection, profile, info-screens)
  - Apply the page flavour of the gate: unauthenticated callers are
    redirected to the login page with a callbackUrl

Collaborators:
  - api/dependencies.py: require_page
  - application.usecases: list/get use cases
  - identity.roles.satisfies (home page sections)

Constraints:
  - A record that is missing, foreign or addressed with a malformed id
    answers the same 404 as an unknown route
  - /event/{id} and /infoscreen/{id} accept the literal "create"
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from ..container import Container, get_container
from ..crosscutting.error_responses import not_found
from ..domain.entities import Role
from ..identity.gate import (
    ANY_USER,
    EVENT_EDITOR,
    GLOBAL_ADMIN,
    INFO_SCREEN_EDITOR,
    Principal,
)
from ..identity.roles import satisfies
from .dependencies import require_page
from .results import raise_for_error
from .schemas import (
    EventLimitOut,
    EventListPage,
    EventOut,
    EventPage,
    EventSummaryOut,
    HomePage,
    InfoScreenListPage,
    InfoScreenOut,
    InfoScreenPage,
    InfoScreenSummaryOut,
    OrganizerChoiceOut,
    OrganizerOut,
    ProfilePage,
    SelectOrganizerPage,
    SettingsPage,
    UserOut,
)

router = APIRouter(tags=["pages"])

CREATE_SEGMENT = "create"


def _parse_record_id(raw: str) -> int:
    """R: Positive integer id from a path segment, or the generic 404."""
    if not raw.isdigit() or int(raw) <= 0:
        raise not_found()
    return int(raw)


def home_sections(principal: Principal) -> List[str]:
    """R: Sections the caller may open, in menu order."""
    roles = principal.roles
    sections: List[str] = []
    administers = principal.user.organizer_id is not None
    if administers and satisfies(roles, {Role.EVENT_EDITOR}):
        sections.extend(["event", "profile"])
    if satisfies(roles, {Role.GLOBAL_ADMIN}):
        sections.append("select-organizer")
    if satisfies(roles, {Role.INFO_SCREEN_EDITOR}):
        sections.append("infoscreen")
    sections.append("settings")
    return sections


@router.get("/", response_model=HomePage)
async def home(principal: Principal = Depends(require_page(ANY_USER))):
    user = principal.user
    return HomePage(
        user=UserOut(id=user.id, email=user.email),
        password_change_required=user.password_change_required,
        sections=home_sections(principal),
    )


@router.get("/settings", response_model=SettingsPage)
async def settings_page(
    principal: Principal = Depends(require_page(ANY_USER)),
    container: Container = Depends(get_container),
):
    user = principal.user
    return SettingsPage(
        last_password_change=user.last_password_change,
        password_change_required=user.password_change_required,
        min_password_length=container.settings.password_min_length,
    )


# =============================================================================
# Events
# =============================================================================


@router.get("/event", response_model=EventListPage)
async def event_list(
    principal: Principal = Depends(require_page(EVENT_EDITOR)),
    container: Container = Depends(get_container),
):
    result = await container.list_events_use_case().execute(
        principal.user.organizer_id
    )
    raise_for_error(result.error)
    return EventListPage(
        events=[EventSummaryOut.from_event(e) for e in result.events],
        event_limit=EventLimitOut(
            count=result.event_limit.count, limit=result.event_limit.limit
        ),
    )


@router.get("/event/select-organizer", response_model=SelectOrganizerPage)
async def select_organizer(
    organizerId: Optional[str] = None,
    principal: Principal = Depends(require_page(GLOBAL_ADMIN)),
    container: Container = Depends(get_container),
):
    """
    R: Organizer switcher for global admins.

    With a numeric organizerId the selection is stored and the caller is
    sent to the event list; anything else renders the choice list.
    """
    selected: Optional[int] = None
    if organizerId and organizerId.isdigit():
        selected = int(organizerId)

    result = await container.select_organizer_use_case().execute(
        principal.user, selected
    )
    raise_for_error(result.error)
    if selected is not None:
        return RedirectResponse("/event", status_code=307)

    return SelectOrganizerPage(
        organizers=[
            OrganizerChoiceOut(
                id=choice.organizer.id,
                name=choice.organizer.name,
                selected=choice.selected,
            )
            for choice in result.choices
        ]
    )


@router.get("/event/{event_id}", response_model=EventPage)
async def event_detail(
    event_id: str,
    principal: Principal = Depends(require_page(EVENT_EDITOR)),
    container: Container = Depends(get_container),
):
    if event_id == CREATE_SEGMENT:
        return EventPage(event=None)

    result = await container.get_event_use_case().execute(
        principal.user.organizer_id, _parse_record_id(event_id)
    )
    raise_for_error(result.error)
    return EventPage(event=EventOut.from_event(result.event))


# =============================================================================
# Organizer profile
# =============================================================================


@router.get("/profile", response_model=ProfilePage)
async def profile(
    principal: Principal = Depends(require_page(EVENT_EDITOR)),
    container: Container = Depends(get_container),
):
    result = await container.get_profile_use_case().execute(
        principal.user.organizer_id
    )
    raise_for_error(result.error)
    return ProfilePage(organizer=OrganizerOut.from_organizer(result.organizer))


# =============================================================================
# Info-screens
# =============================================================================


@router.get("/infoscreen", response_model=InfoScreenListPage)
async def info_screen_list(
    principal: Principal = Depends(require_page(INFO_SCREEN_EDITOR)),
    container: Container = Depends(get_container),
):
    result = await container.list_info_screens_use_case().execute()
    return InfoScreenListPage(
        info_screens=[
            InfoScreenSummaryOut.from_info_screen(s) for s in result.info_screens
        ]
    )


@router.get("/infoscreen/{info_screen_id}", response_model=InfoScreenPage)
async def info_screen_detail(
    info_screen_id: str,
    principal: Principal = Depends(require_page(INFO_SCREEN_EDITOR)),
    container: Container = Depends(get_container),
):
    if info_screen_id == CREATE_SEGMENT:
        return InfoScreenPage(info_screen=None)

    result = await container.get_info_screen_use_case().execute(
        _parse_record_id(info_screen_id)
    )
    raise_for_error(result.error)
    return InfoScreenPage(info_screen=InfoScreenOut.from_info_screen(result.info_screen))
