"""
Name: Image Use Cases

Responsibilities:
  - Store uploaded image bytes under a fresh random id and record metadata
  - Read image bytes back with their stored content type

Collaborators:
  - domain.repositories.ImageRepository
  - domain.services.FileStoragePort

Constraints:
  - Ids are 8 random bytes rendered as 16 lowercase hex characters
  - Bytes are written before metadata so a listed image always has content
"""

import re
import secrets
from typing import Callable

from ...crosscutting.logger import logger
from ...domain.entities import Image
from ...domain.repositories import ImageRepository
from ...domain.services import FileStoragePort
from .results import (
    DownloadImageResult,
    PortalError,
    PortalErrorCode,
    UploadImageResult,
    not_found,
)

IMAGE_ID_PATTERN = re.compile(r"[0-9a-f]{16}")


def new_image_id() -> str:
    return secrets.token_hex(8)


def storage_key(prefix: str, image_id: str) -> str:
    return f"{prefix.strip('/')}/{image_id}"


def parse_mime_type(content_type: str | None) -> str:
    return (content_type or "").split(";")[0].strip().lower()


class UploadImageUseCase:
    def __init__(
        self,
        images: ImageRepository,
        storage: FileStoragePort,
        *,
        prefix: str = "image-upload",
        max_bytes: int = 10 * 1024 * 1024,
        id_factory: Callable[[], str] = new_image_id,
    ):
        self.images = images
        self.storage = storage
        self.prefix = prefix
        self.max_bytes = max_bytes
        self._id_factory = id_factory

    def check_content_type(self, content_type: str | None) -> PortalError | None:
        """R: Reject uploads whose declared type is missing or not an image."""
        mime_type = parse_mime_type(content_type)
        if not mime_type:
            return PortalError(
                PortalErrorCode.VALIDATION_ERROR, "Content-Type header is required"
            )
        if not mime_type.startswith("image/"):
            return PortalError(
                PortalErrorCode.UNSUPPORTED_MEDIA, f"Unsupported media type {mime_type}"
            )
        return None

    async def execute(
        self, owner_id: int, content: bytes, content_type: str | None
    ) -> UploadImageResult:
        error = self.check_content_type(content_type)
        if error:
            return UploadImageResult(error=error)
        mime_type = parse_mime_type(content_type)
        if len(content) > self.max_bytes:
            return UploadImageResult(
                error=PortalError(
                    PortalErrorCode.PAYLOAD_TOO_LARGE,
                    f"Payload exceeds maximum size of {self.max_bytes} bytes",
                )
            )

        image_id = self._id_factory()
        await self.storage.upload_file(storage_key(self.prefix, image_id), content, mime_type)
        await self.images.save_image(
            Image(id=image_id, mime_type=mime_type, owner_id=owner_id)
        )
        logger.info(
            "Image uploaded",
            extra={"image_id": image_id, "mime_type": mime_type, "size": len(content)},
        )
        return UploadImageResult(image_id=image_id)


class DownloadImageUseCase:
    def __init__(
        self,
        images: ImageRepository,
        storage: FileStoragePort,
        *,
        prefix: str = "image-upload",
    ):
        self.images = images
        self.storage = storage
        self.prefix = prefix

    async def execute(self, image_id: str) -> DownloadImageResult:
        if not IMAGE_ID_PATTERN.fullmatch(image_id or ""):
            return DownloadImageResult(
                error=PortalError(PortalErrorCode.VALIDATION_ERROR, "Malformed image id")
            )

        image = await self.images.get_image(image_id)
        if image is None:
            return DownloadImageResult(error=not_found("Image"))

        content = await self.storage.download_file(storage_key(self.prefix, image_id))
        return DownloadImageResult(image=image, content=content)
