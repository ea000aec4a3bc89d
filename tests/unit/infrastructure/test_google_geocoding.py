"""
Name: Google Geocoding Adapter Tests
"""

import httpx
import pytest

from campusportal.crosscutting.exceptions import GeocodingError
from campusportal.infrastructure.services import GoogleGeocodingService

pytestmark = pytest.mark.unit


def _service(handler) -> GoogleGeocodingService:
    return GoogleGeocodingService(
        api_key="test-key", transport=httpx.MockTransport(handler)
    )


def test_api_key_is_required():
    with pytest.raises(ValueError):
        GoogleGeocodingService(api_key="")


@pytest.mark.asyncio
async def test_ok_response():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"status": "OK", "results": [{"place_id": "abc"}]}
        )

    result = await _service(handler).geocode("Main St 1")

    assert result.ok
    assert result.results == [{"place_id": "abc"}]
    params = seen[0].url.params
    assert params["address"] == "Main St 1"
    assert params["key"] == "test-key"
    assert params["language"] == "de"


@pytest.mark.asyncio
async def test_zero_results_is_not_ok():
    result = await _service(
        lambda request: httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})
    ).geocode("Nowhere")
    assert result.status == "ZERO_RESULTS"
    assert not result.ok


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [httpx.Response(500), httpx.Response(200, content=b"not json")],
)
async def test_failures_raise_geocoding_error(response):
    with pytest.raises(GeocodingError):
        await _service(lambda request: response).geocode("Main St 1")


@pytest.mark.asyncio
async def test_transport_failure_raises_geocoding_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    service = _service(handler)
    with pytest.raises(GeocodingError):
        await service.geocode("Main St 1")
    await service.aclose()
