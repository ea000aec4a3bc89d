"""
Name: Info-Screen API Routes

Responsibilities:
  - PUT create / POST update / DELETE delete of info-screen campaigns

Collaborators:
  - application.usecases.ManageInfoScreenUseCase
  - api/dependencies.py: require_api(INFO_SCREEN_EDITOR)
"""

from fastapi import APIRouter, Depends

from ..application.usecases import CreateInfoScreen, DeleteInfoScreen, UpdateInfoScreen
from ..container import Container, get_container
from ..identity.gate import INFO_SCREEN_EDITOR, Principal
from .dependencies import require_api
from .results import raise_for_error
from .schemas import (
    CreateInfoScreenBody,
    DeleteInfoScreenBody,
    IdResponse,
    UpdateInfoScreenBody,
)

router = APIRouter(
    prefix="/api/infoscreen",
    tags=["infoscreens"],
    dependencies=[Depends(require_api(INFO_SCREEN_EDITOR))],
)


async def _apply(container: Container, command) -> IdResponse:
    result = await container.manage_info_screen_use_case().execute(command)
    raise_for_error(result.error)
    return IdResponse(id=result.id)


@router.put("", response_model=IdResponse)
async def create_info_screen(
    body: CreateInfoScreenBody, container: Container = Depends(get_container)
):
    return await _apply(container, CreateInfoScreen(values=body.to_values()))


@router.post("", response_model=IdResponse)
async def update_info_screen(
    body: UpdateInfoScreenBody, container: Container = Depends(get_container)
):
    return await _apply(
        container, UpdateInfoScreen(id=body.id, values=body.to_values())
    )


@router.delete("", response_model=IdResponse)
async def delete_info_screen(
    body: DeleteInfoScreenBody, container: Container = Depends(get_container)
):
    return await _apply(container, DeleteInfoScreen(id=body.id))
