"""
Name: WebDAV Storage Adapter

Responsibilities:
  - Implement FileStoragePort against a WebDAV server (PUT/GET/DELETE)
  - Map HTTP/transport failures to StorageError subtypes

Collaborators:
  - httpx.AsyncClient (injectable for tests via transport)

Constraints:
  - Basic auth credentials come from settings, never logged
  - Missing parent collections are created with MKCOL on 409
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from ...crosscutting.logger import logger
from .errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)


@dataclass(frozen=True)
class WebDavConfig:
    base_url: str
    username: str = ""
    password: str = ""
    timeout_seconds: float = 30.0


class WebDavFileStorageAdapter:
    def __init__(
        self,
        config: WebDavConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        base_url = (config.base_url or "").strip()
        if not base_url:
            raise StorageConfigurationError("WebDAV base URL is required.")

        auth = (config.username, config.password) if config.username else None
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            auth=auth,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def upload_file(
        self, key: str, content: bytes, content_type: str | None
    ) -> None:
        self._require_key(key)
        headers = {"Content-Type": (content_type or "application/octet-stream").strip()}
        response = await self._request("PUT", key, content=content, headers=headers)
        if response.status_code == 409:
            await self._make_collections(key)
            response = await self._request("PUT", key, content=content, headers=headers)
        self._raise_for_status(response, key=key, action="upload")

    async def download_file(self, key: str) -> bytes:
        self._require_key(key)
        response = await self._request("GET", key)
        self._raise_for_status(response, key=key, action="download")
        return response.content

    async def delete_file(self, key: str) -> None:
        self._require_key(key)
        response = await self._request("DELETE", key)
        if response.status_code == 404:
            return
        self._raise_for_status(response, key=key, action="delete")

    async def _make_collections(self, key: str) -> None:
        parts = key.strip("/").split("/")[:-1]
        path = ""
        for part in parts:
            path = f"{path}{part}/"
            response = await self._request("MKCOL", path)
            # 405: collection already exists
            if response.status_code not in (201, 405):
                self._raise_for_status(response, key=path, action="mkcol")

    async def _request(self, method: str, key: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, key.lstrip("/"), **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("Storage unavailable", extra={"action": method, "key": key})
            raise StorageUnavailableError("Storage unavailable (timeout).") from exc
        except httpx.TransportError as exc:
            logger.warning("Storage unavailable", extra={"action": method, "key": key})
            raise StorageUnavailableError("Storage unavailable (connection).") from exc

    @staticmethod
    def _require_key(key: str) -> None:
        if not (key or "").strip():
            raise StorageError("Storage key is required.")

    @staticmethod
    def _raise_for_status(response: httpx.Response, *, key: str, action: str) -> None:
        status = response.status_code
        if status < 300:
            return
        if status == 404:
            raise StorageNotFoundError(key)
        if status in (401, 403):
            raise StoragePermissionError("Invalid storage credentials or permissions.")
        if status >= 500:
            raise StorageUnavailableError(f"Storage returned {status} ({action}).")
        logger.error(
            "Storage request failed",
            extra={"action": action, "key": key, "status_code": status},
        )
        raise StorageError(f"Storage failure ({action}). status={status}")
