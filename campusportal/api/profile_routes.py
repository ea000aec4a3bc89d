"""
Name: Organizer Profile API Routes
"""

from fastapi import APIRouter, Depends, Response

from ..container import Container, get_container
from ..identity.gate import EVENT_EDITOR, Principal
from .dependencies import require_api
from .results import raise_for_error
from .schemas import ProfileBody

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.post("", status_code=204)
async def update_profile(
    body: ProfileBody,
    principal: Principal = Depends(require_api(EVENT_EDITOR)),
    container: Container = Depends(get_container),
):
    """R: Overwrite the given profile fields of the caller's organizer."""
    result = await container.update_profile_use_case().execute(
        principal.user.organizer_id, body.to_fields()
    )
    raise_for_error(result.error)
    return Response(status_code=204)
