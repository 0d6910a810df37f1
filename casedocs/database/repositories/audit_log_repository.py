from psycopg.types.json import Jsonb

from casedocs.database.connection import get_connection
from casedocs.database.models import AuditLogEntry


class AuditLogRepository:
    """Database operations for the audit_logs table."""

    def insert(self, entry: AuditLogEntry) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO audit_logs (action, resource_type, resource_id, user_id, metadata)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (
                    entry.action,
                    entry.resource_type,
                    entry.resource_id,
                    entry.user_id,
                    Jsonb(entry.metadata),
                ),
            )
            conn.commit()
