from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"

TEXT_EXTRACTION_JOB = "TEXT_EXTRACTION"


class DocumentStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class JobStatus(str, Enum):
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Document:
    """Domain model for an uploaded case document."""

    id: str
    file_name: str
    mime_type: str
    file_size: int
    storage_key: str
    file_hash: str
    uploaded_by: str
    status: DocumentStatus = DocumentStatus.PENDING
    extracted_text: str | None = None


@dataclass(frozen=True)
class ProcessingJob:
    """One attempt to extract text from a document."""

    id: str
    document_id: str
    status: JobStatus
    started_at: datetime
    job_type: str = TEXT_EXTRACTION_JOB
    progress: int = 0
    completed_at: datetime | None = None
    result: dict[str, object] = field(default_factory=dict)
    error: str | None = None


@dataclass(frozen=True)
class ExtractionOutcome:
    """Text produced for a document and the strategy that produced it."""

    text: str
    strategy: str
