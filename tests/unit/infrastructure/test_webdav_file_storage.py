"""
Name: WebDAV Storage Adapter Tests

Notes:
  - Uses httpx.MockTransport; no network access
"""

import httpx
import pytest

from campusportal.infrastructure.storage import (
    StorageConfigurationError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
    WebDavConfig,
    WebDavFileStorageAdapter,
)

pytestmark = pytest.mark.unit


def _adapter(handler, **config) -> WebDavFileStorageAdapter:
    return WebDavFileStorageAdapter(
        WebDavConfig(base_url="https://dav.example.com/files", **config),
        transport=httpx.MockTransport(handler),
    )


def test_base_url_is_required():
    with pytest.raises(StorageConfigurationError):
        WebDavFileStorageAdapter(WebDavConfig(base_url=" "))


@pytest.mark.asyncio
async def test_put_sends_body_and_auth():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201)

    adapter = _adapter(handler, username="portal", password="pw")
    await adapter.upload_file("image-upload/abc", b"data", "image/png")

    request = seen[0]
    assert request.method == "PUT"
    assert request.url.path == "/files/image-upload/abc"
    assert request.headers["Content-Type"] == "image/png"
    assert request.headers["Authorization"].startswith("Basic ")
    assert request.content == b"data"


@pytest.mark.asyncio
async def test_missing_collection_is_created_on_conflict():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path))
        if request.method == "PUT" and calls.count(("PUT", request.url.path)) == 1:
            return httpx.Response(409)
        return httpx.Response(201)

    await _adapter(handler).upload_file("image-upload/abc", b"data", "image/png")

    assert calls == [
        ("PUT", "/files/image-upload/abc"),
        ("MKCOL", "/files/image-upload/"),
        ("PUT", "/files/image-upload/abc"),
    ]


@pytest.mark.asyncio
async def test_get_returns_content():
    adapter = _adapter(lambda request: httpx.Response(200, content=b"bytes"))
    assert await adapter.download_file("image-upload/abc") == b"bytes"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,expected",
    [
        (404, StorageNotFoundError),
        (401, StoragePermissionError),
        (403, StoragePermissionError),
        (503, StorageUnavailableError),
    ],
)
async def test_status_mapping(status, expected):
    adapter = _adapter(lambda request: httpx.Response(status))
    with pytest.raises(expected):
        await adapter.download_file("image-upload/abc")


@pytest.mark.asyncio
async def test_transport_failure_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(StorageUnavailableError):
        await _adapter(handler).download_file("image-upload/abc")


@pytest.mark.asyncio
async def test_delete_of_missing_object_is_ignored():
    adapter = _adapter(lambda request: httpx.Response(404))
    await adapter.delete_file("image-upload/abc")
    await adapter.aclose()
