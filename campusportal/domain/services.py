"""
Name: Domain Service Interfaces

Responsibilities:
  - Define contracts for object storage and geocoding
  - Keep the application layer independent from httpx/boto3

Collaborators:
  - infrastructure.storage: local, WebDAV and S3 adapters
  - infrastructure.services.google_geocoding

Constraints:
  - Pure interfaces (Protocol), no implementation
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol


class FileStoragePort(Protocol):
    """R: Binary object storage addressed by opaque keys."""

    async def upload_file(
        self, key: str, content: bytes, content_type: str | None
    ) -> None:
        ...

    async def download_file(self, key: str) -> bytes:
        """
        R: Read a whole object.

        Raises:
            StorageNotFoundError: If the key does not exist
        """
        ...

    async def delete_file(self, key: str) -> None:
        ...


@dataclass
class GeocodingResult:
    """
    R: Outcome of a geocoding lookup.

    Attributes:
        status: Upstream status string ("OK", "ZERO_RESULTS", ...)
        results: Raw result objects, best match first
    """

    status: str
    results: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == "OK" and bool(self.results)


class GeocodingService(Protocol):
    """R: Resolve a postal address to coordinates and place data."""

    async def geocode(self, address: str) -> GeocodingResult:
        """
        Raises:
            GeocodingError: If the upstream service cannot be reached
        """
        ...
