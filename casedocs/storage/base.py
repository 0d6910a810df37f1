from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import BinaryIO

from casedocs.storage.models import ObjectMetadata


class BaseStorage(ABC):
    """Contract for the object store holding uploaded documents.

    Implementations raise StorageNotFoundError for missing objects and
    StorageError for anything else, so callers can tell a permanent miss
    from a retryable failure.
    """

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Read the full object at key."""

    @abstractmethod
    def open(self, key: str) -> AbstractContextManager[BinaryIO]:
        """Open the object at key for incremental reading; closed on exit."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if an object exists at key."""

    @abstractmethod
    def get_metadata(self, key: str) -> ObjectMetadata:
        """Read the object's content type, length and user metadata."""
