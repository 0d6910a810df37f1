import mimetypes
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO

from casedocs.storage.base import BaseStorage
from casedocs.storage.exceptions import StorageError, StorageNotFoundError
from casedocs.storage.models import ObjectMetadata


class LocalStorage(BaseStorage):
    """Resolves storage keys to files under a root directory."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def get(self, key: str) -> bytes:
        """Read file bytes from disk.

        Raises:
            StorageNotFoundError: if the file does not exist at the resolved path.
            StorageError: if the file exists but cannot be read.
        """
        path = self._resolve_path(key)
        if not path.is_file():
            raise StorageNotFoundError(f"File not found: {path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    @contextmanager
    def open(self, key: str) -> Iterator[BinaryIO]:
        path = self._resolve_path(key)
        if not path.is_file():
            raise StorageNotFoundError(f"File not found: {path}")
        try:
            stream = path.open("rb")
        except OSError as exc:
            raise StorageError(f"Failed to open {path}: {exc}") from exc
        with stream:
            yield stream

    def exists(self, key: str) -> bool:
        return self._resolve_path(key).is_file()

    def get_metadata(self, key: str) -> ObjectMetadata:
        path = self._resolve_path(key)
        if not path.is_file():
            raise StorageNotFoundError(f"File not found: {path}")
        stat = path.stat()
        content_type, _ = mimetypes.guess_type(path.name)
        return ObjectMetadata(
            content_type=content_type or "application/octet-stream",
            content_length=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )

    def _resolve_path(self, key: str) -> Path:
        root = self._files_root.resolve()
        path = (root / key).resolve()
        if not path.is_relative_to(root):
            raise StorageNotFoundError(f"Storage key escapes files root: {key}")
        return path
