"""
Name: Local Filesystem Storage Adapter

Responsibilities:
  - Implement FileStoragePort on a directory tree (development, tests)

Constraints:
  - Keys are relative paths; traversal outside the root is rejected
  - Blocking file I/O runs in the threadpool
"""

from __future__ import annotations

from pathlib import Path

from starlette.concurrency import run_in_threadpool

from .errors import StorageError, StorageNotFoundError


class LocalFileStorageAdapter:
    def __init__(self, root: str | Path):
        self._root = Path(root).resolve()

    def _path_for(self, key: str) -> Path:
        if not (key or "").strip():
            raise StorageError("Storage key is required.")
        path = (self._root / key).resolve()
        if self._root not in path.parents:
            raise StorageError(f"Storage key escapes root. key={key}")
        return path

    async def upload_file(
        self, key: str, content: bytes, content_type: str | None
    ) -> None:
        path = self._path_for(key)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

        try:
            await run_in_threadpool(_write)
        except OSError as exc:
            raise StorageError(f"Storage failure (upload). key={key}") from exc

    async def download_file(self, key: str) -> bytes:
        path = self._path_for(key)
        try:
            return await run_in_threadpool(path.read_bytes)
        except FileNotFoundError as exc:
            raise StorageNotFoundError(key) from exc
        except OSError as exc:
            raise StorageError(f"Storage failure (download). key={key}") from exc

    async def delete_file(self, key: str) -> None:
        path = self._path_for(key)
        try:
            await run_in_threadpool(path.unlink, True)
        except OSError as exc:
            raise StorageError(f"Storage failure (delete). key={key}") from exc
