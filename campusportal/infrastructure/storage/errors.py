"""
Name: Storage Errors

Responsibilities:
  - Common failure vocabulary for the object storage subsystem
  - Keep boto3/httpx exceptions from leaking to upper layers

Collaborators:
  - infrastructure/storage/*: map SDK/transport errors to these
  - api/exception_handlers.py: maps them to 404/503 responses
"""


class StorageError(Exception):
    """Base for storage subsystem errors."""


class StorageConfigurationError(StorageError):
    """Invalid or incomplete adapter configuration."""


class StorageNotFoundError(StorageError):
    """Object does not exist (e.g. NoSuchKey, HTTP 404)."""

    def __init__(self, key: str):
        super().__init__(f"Object not found in storage. key={key}")
        self.key = key


class StoragePermissionError(StorageError):
    """Invalid credentials or missing permissions."""

    def __init__(self, message: str = "Storage permission denied."):
        super().__init__(message)


class StorageUnavailableError(StorageError):
    """Storage down or temporarily unreachable (timeouts, 5xx)."""

    def __init__(self, message: str = "Storage unavailable."):
        super().__init__(message)
