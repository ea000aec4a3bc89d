"""
Object storage adapters implementing domain.services.FileStoragePort.
"""

from .errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)
from .local_file_storage import LocalFileStorageAdapter
from .s3_file_storage import S3Config, S3FileStorageAdapter
from .webdav_file_storage import WebDavConfig, WebDavFileStorageAdapter

__all__ = [
    "LocalFileStorageAdapter",
    "S3Config",
    "S3FileStorageAdapter",
    "StorageConfigurationError",
    "StorageError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "StorageUnavailableError",
    "WebDavConfig",
    "WebDavFileStorageAdapter",
]
