"""
Name: S3-compatible Storage Adapter

Responsibilities:
  - Implement FileStoragePort against S3 / MinIO
  - Encapsulate boto3 (ClientError never leaks)

Collaborators:
  - boto3/botocore (hidden behind this adapter)
  - infrastructure.storage.errors

Constraints:
  - Fail-fast configuration validation
  - boto3 calls are blocking and run in the threadpool
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.exceptions import (
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)
from starlette.concurrency import run_in_threadpool

from ...crosscutting.logger import logger
from .errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)


@dataclass(frozen=True)
class S3Config:
    """
    S3-compatible storage configuration.

    endpoint_url allows MinIO and other S3-compatible servers.
    """

    bucket: str
    access_key: str
    secret_key: str
    region: Optional[str] = None
    endpoint_url: Optional[str] = None


class S3FileStorageAdapter:
    def __init__(self, config: S3Config, *, client=None) -> None:
        self._bucket = (config.bucket or "").strip()

        if not self._bucket:
            raise StorageConfigurationError("S3 bucket is required.")
        if (
            not (config.access_key or "").strip()
            or not (config.secret_key or "").strip()
        ):
            raise StorageConfigurationError(
                "S3 credentials are required (access_key/secret_key)."
            )

        # Client is injectable for tests
        self._client = client or boto3.client(
            "s3",
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region or None,
            endpoint_url=config.endpoint_url or None,
        )

    async def upload_file(
        self, key: str, content: bytes, content_type: str | None
    ) -> None:
        self._require_key(key)
        effective_ct = (content_type or "application/octet-stream").strip()
        try:
            await run_in_threadpool(
                self._client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=content,
                ContentType=effective_ct,
            )
        except Exception as exc:
            raise self._map_storage_error(exc, key=key, action="upload") from exc

    async def download_file(self, key: str) -> bytes:
        self._require_key(key)

        def _read() -> bytes:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            body = response["Body"]
            try:
                return body.read()
            finally:
                body.close()

        try:
            return await run_in_threadpool(_read)
        except Exception as exc:
            raise self._map_storage_error(exc, key=key, action="download") from exc

    async def delete_file(self, key: str) -> None:
        """Delete is idempotent in S3; missing keys do not raise."""
        self._require_key(key)
        try:
            await run_in_threadpool(
                self._client.delete_object, Bucket=self._bucket, Key=key
            )
        except Exception as exc:
            raise self._map_storage_error(exc, key=key, action="delete") from exc

    @staticmethod
    def _require_key(key: str) -> None:
        if not (key or "").strip():
            raise StorageError("Storage key is required.")

    def _map_storage_error(
        self, exc: Exception, *, key: str, action: str
    ) -> StorageError:
        """R: Translate SDK errors into the storage error vocabulary."""
        if isinstance(exc, StorageError):
            return exc

        if isinstance(
            exc, (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)
        ):
            logger.warning("Storage unavailable", extra={"action": action, "key": key})
            return StorageUnavailableError("Storage unavailable (timeout/connection).")

        if isinstance(exc, ClientError):
            code = str((exc.response.get("Error") or {}).get("Code") or "")

            if code in {"NoSuchKey", "404", "NotFound"}:
                return StorageNotFoundError(key)

            if code in {"AccessDenied", "InvalidAccessKeyId", "SignatureDoesNotMatch"}:
                return StoragePermissionError(
                    "Invalid storage credentials or permissions."
                )

            if code in {"SlowDown", "RequestTimeout", "ServiceUnavailable"}:
                return StorageUnavailableError("Storage temporarily unavailable.")

            logger.exception(
                "Storage ClientError",
                extra={"action": action, "key": key, "code": code},
            )
            return StorageError(f"Storage failure ({action}). code={code}")

        logger.exception("Storage error", extra={"action": action, "key": key})
        return StorageError(f"Storage failure ({action}).")
