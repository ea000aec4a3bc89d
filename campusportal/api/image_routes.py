"""
Name: Image Routes

Responsibilities:
  - Accept raw image uploads (request body + Content-Type)
  - Serve stored images with their recorded content type

Collaborators:
  - application.usecases: UploadImageUseCase, DownloadImageUseCase
  - api/dependencies.py: require_api()

Constraints:
  - The body is read incrementally and abandoned once it passes
    max_upload_bytes; a declared Content-Length above the limit is refused
    before reading
"""

from fastapi import APIRouter, Depends, Request, Response

from ..container import Container, get_container
from ..crosscutting.error_responses import payload_too_large
from ..identity.gate import Principal
from .dependencies import require_api
from .results import raise_for_error

router = APIRouter(prefix="/api", tags=["images"])


def _limit_label(max_bytes: int) -> str:
    if max_bytes >= 1024 * 1024:
        return f"{max_bytes // (1024 * 1024)}MB"
    return f"{max_bytes} bytes"


async def _read_body(request: Request, max_bytes: int) -> bytes:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise payload_too_large(_limit_label(max_bytes))

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise payload_too_large(_limit_label(max_bytes))
    return bytes(body)


@router.post("/upload")
async def upload_image(
    request: Request,
    principal: Principal = Depends(require_api()),
    container: Container = Depends(get_container),
):
    content_type = request.headers.get("content-type")
    use_case = container.upload_image_use_case()
    raise_for_error(use_case.check_content_type(content_type))

    content = await _read_body(request, container.settings.max_upload_bytes)
    result = await use_case.execute(principal.user_id, content, content_type)
    raise_for_error(result.error)
    return {"id": result.image_id}


@router.get("/image/{image_id}")
async def download_image(
    image_id: str,
    principal: Principal = Depends(require_api()),
    container: Container = Depends(get_container),
):
    result = await container.download_image_use_case().execute(image_id)
    raise_for_error(result.error)
    return Response(
        content=result.content,
        media_type=result.image.mime_type,
        headers={"Cache-Control": "private, max-age=86400"},
    )
