from dataclasses import dataclass, field


@dataclass(frozen=True)
class NewDocument:
    """Row values for a document created at upload completion."""

    file_name: str
    file_size: int
    mime_type: str
    storage_key: str
    file_hash: str
    uploaded_by: str
    evidence: dict[str, object] = field(default_factory=dict)
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class DocumentStats:
    """Document counts per status."""

    total: int = 0
    pending: int = 0
    processing: int = 0
    completed: int = 0
    failed: int = 0


@dataclass(frozen=True)
class AuditLogEntry:
    """Represents a row for the audit_logs table."""

    action: str
    resource_type: str
    resource_id: str | None = None
    user_id: str | None = None
    metadata: dict[str, object] = field(default_factory=dict)
