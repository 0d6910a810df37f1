from casedocs.audit.base import BaseAuditSink
from casedocs.database.models import AuditLogEntry
from casedocs.database.repositories.audit_log_repository import AuditLogRepository
from casedocs.logging.logger import Log


class LogAuditSink(BaseAuditSink):
    """Writes audit entries to the application log."""

    def write(self, entry: AuditLogEntry) -> None:
        Log.info(
            f"AUDIT {entry.action}",
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            user_id=entry.user_id,
            metadata=entry.metadata,
        )


class DatabaseAuditSink(BaseAuditSink):
    """Stores audit entries in the audit_logs table."""

    def __init__(self, repository: AuditLogRepository) -> None:
        self._repository = repository

    def write(self, entry: AuditLogEntry) -> None:
        self._repository.insert(entry)
