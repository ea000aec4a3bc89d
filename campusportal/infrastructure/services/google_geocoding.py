"""
Name: Google Geocoding Adapter

Responsibilities:
  - Implement GeocodingService against the Google Geocoding JSON API
  - Translate transport/HTTP failures into GeocodingError

Collaborators:
  - domain.services.GeocodingService, GeocodingResult
  - httpx (HTTP client; transport injectable for tests)

Constraints:
  - The API key is sent as a query parameter and never logged
"""

from __future__ import annotations

from typing import Optional

import httpx

from ...crosscutting.exceptions import GeocodingError
from ...crosscutting.logger import logger
from ...domain.services import GeocodingResult

_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleGeocodingService:
    """R: Geocode postal addresses with Google Maps."""

    def __init__(
        self,
        *,
        api_key: str,
        language: str = "de",
        region: str = "de",
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("GCP_API_KEY is required for geocoding")
        self._api_key = api_key
        self._language = language
        self._region = region
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def geocode(self, address: str) -> GeocodingResult:
        params = {
            "address": address,
            "key": self._api_key,
            "language": self._language,
            "region": self._region,
        }
        try:
            response = await self._client.get(_GEOCODE_URL, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "geocoding request failed",
                extra={"status": exc.response.status_code},
            )
            raise GeocodingError("Geocoding request failed", original_error=exc) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("geocoding error", extra={"error": type(exc).__name__})
            raise GeocodingError("Geocoding service unreachable", original_error=exc) from exc

        status = str(data.get("status") or "UNKNOWN_ERROR")
        results = data.get("results") or []
        if status == "OK" and len(results) != 1:
            logger.warning("Geocoding returned multiple results", extra={"count": len(results)})
        return GeocodingResult(status=status, results=list(results))
