from abc import ABC, abstractmethod

from casedocs.database.models import AuditLogEntry


class BaseAuditSink(ABC):
    """Contract for destinations of audit events."""

    @abstractmethod
    def write(self, entry: AuditLogEntry) -> None:
        """Persist or forward one audit entry. May raise on failure."""
