from collections.abc import Sequence

from casedocs.audit.actions import DOCUMENT_RESOURCE
from casedocs.audit.base import BaseAuditSink
from casedocs.database.models import AuditLogEntry
from casedocs.logging.logger import Log


class AuditEmitter:
    """Fans audit events out to sinks, fire-and-forget.

    A failing sink is logged and skipped; emit() never raises.
    """

    def __init__(self, sinks: Sequence[BaseAuditSink]) -> None:
        self._sinks = list(sinks)

    def emit(
        self,
        action: str,
        resource_id: str | None,
        *,
        resource_type: str = DOCUMENT_RESOURCE,
        user_id: str | None = None,
        metadata: dict[str, object] | None = None,
    ) -> None:
        entry = AuditLogEntry(
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            user_id=user_id,
            metadata=metadata or {},
        )
        for sink in self._sinks:
            try:
                sink.write(entry)
            except Exception as exc:
                Log.warning(
                    f"Audit sink {type(sink).__name__} failed for {action}: {exc}"
                )
