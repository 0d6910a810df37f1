from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from casedocs.database.connection import get_connection, get_transaction
from casedocs.processor.exceptions import DocumentNotFoundError
from casedocs.processor.models import (
    TEXT_EXTRACTION_JOB,
    DocumentStatus,
    JobStatus,
    ProcessingJob,
)


class ProcessingRepository:
    """Database operations for processing_jobs and the document state they drive.

    Each state transition writes the job and its document in one
    transaction, so the two never disagree about the outcome of a run.
    """

    def start_job(self, document_id: str) -> ProcessingJob:
        """Create a PROCESSING job and move the document to PROCESSING.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_transaction() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET status = %s, extracted_text = NULL, updated_at = NOW()
                    WHERE id = %s
                    """,
                    (DocumentStatus.PROCESSING.value, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
                cur.execute(
                    """
                    INSERT INTO processing_jobs
                    (document_id, job_type, status, progress, started_at)
                    VALUES (%s, %s, %s, 0, NOW())
                    RETURNING id, document_id, job_type, status, progress,
                              started_at, completed_at, result, error
                    """,
                    (document_id, TEXT_EXTRACTION_JOB, JobStatus.PROCESSING.value),
                )
                row = cur.fetchone()

        if row is None:
            raise RuntimeError("INSERT INTO processing_jobs returned no row")
        return _row_to_job(row)

    def complete(
        self,
        job_id: str,
        document_id: str,
        extracted_text: str,
        result: dict[str, object],
    ) -> None:
        """Store extracted text and mark both job and document COMPLETED."""
        with get_transaction() as conn:
            conn.execute(
                """
                UPDATE documents
                SET status = %s, extracted_text = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (DocumentStatus.COMPLETED.value, extracted_text, document_id),
            )
            conn.execute(
                """
                UPDATE processing_jobs
                SET status = %s, progress = 100, completed_at = NOW(), result = %s
                WHERE id = %s
                """,
                (JobStatus.COMPLETED.value, Jsonb(result), job_id),
            )

    def fail(self, job_id: str, document_id: str, error: str) -> None:
        """Mark both job and document FAILED, keeping no partial text."""
        with get_transaction() as conn:
            conn.execute(
                """
                UPDATE documents
                SET status = %s, extracted_text = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (DocumentStatus.FAILED.value, document_id),
            )
            conn.execute(
                """
                UPDATE processing_jobs
                SET status = %s, error = %s, completed_at = NOW()
                WHERE id = %s
                """,
                (JobStatus.FAILED.value, error, job_id),
            )

    def find_job(self, job_id: str) -> ProcessingJob | None:
        """Find a job by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, job_type, status, progress,
                           started_at, completed_at, result, error
                    FROM processing_jobs
                    WHERE id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_job(row)

    def count_jobs_for_document(self, document_id: str) -> int:
        """Number of jobs ever started for a document."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT COUNT(*) FROM processing_jobs WHERE document_id = %s",
                    (document_id,),
                )
                row = cur.fetchone()
        return int(row[0]) if row is not None else 0


def _row_to_job(row: dict[str, Any]) -> ProcessingJob:
    return ProcessingJob(
        id=str(row["id"]),
        document_id=str(row["document_id"]),
        job_type=row["job_type"],
        status=JobStatus(row["status"]),
        progress=row["progress"],
        started_at=row["started_at"],
        completed_at=row["completed_at"],
        result=row["result"] or {},
        error=row["error"],
    )
