"""
Name: Event API Routes

Responsibilities:
  - PUT create / POST update / DELETE delete for the caller's organizer
  - Map each method to its own body model and command

Collaborators:
  - application.usecases.ManageEventUseCase
  - api/dependencies.py: require_api(EVENT_EDITOR)

Constraints:
  - Bodies reject unknown fields (422)
  - Events of other organizers answer 404
"""

from fastapi import APIRouter, Depends

from ..application.usecases import CreateEvent, DeleteEvent, UpdateEvent
from ..container import Container, get_container
from ..identity.gate import EVENT_EDITOR, Principal
from .dependencies import require_api
from .results import raise_for_error
from .schemas import CreateEventBody, DeleteEventBody, IdResponse, UpdateEventBody

router = APIRouter(prefix="/api/event", tags=["events"])


async def _apply(container: Container, principal: Principal, command) -> IdResponse:
    result = await container.manage_event_use_case().execute(
        principal.user.organizer_id, command
    )
    raise_for_error(result.error)
    return IdResponse(id=result.id)


@router.put("", response_model=IdResponse)
async def create_event(
    body: CreateEventBody,
    principal: Principal = Depends(require_api(EVENT_EDITOR)),
    container: Container = Depends(get_container),
):
    return await _apply(container, principal, CreateEvent(values=body.to_values()))


@router.post("", response_model=IdResponse)
async def update_event(
    body: UpdateEventBody,
    principal: Principal = Depends(require_api(EVENT_EDITOR)),
    container: Container = Depends(get_container),
):
    return await _apply(
        container, principal, UpdateEvent(id=body.id, values=body.to_values())
    )


@router.delete("", response_model=IdResponse)
async def delete_event(
    body: DeleteEventBody,
    principal: Principal = Depends(require_api(EVENT_EDITOR)),
    container: Container = Depends(get_container),
):
    return await _apply(container, principal, DeleteEvent(id=body.id))
