from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from casedocs.database.connection import get_connection
from casedocs.database.models import DocumentStats, NewDocument
from casedocs.processor.exceptions import DocumentNotFoundError
from casedocs.processor.models import Document, DocumentStatus

_DOCUMENT_COLUMNS = """
    id, file_name, file_size, mime_type, storage_key, file_hash,
    uploaded_by, status, extracted_text
"""


class DocumentsRepository:
    """Database operations for the documents table."""

    def find_by_id(self, document_id: str) -> Document:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _row_to_document(row)

    def create(self, document: NewDocument) -> Document:
        """Insert a PENDING document created at upload completion."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents
                    (file_name, file_size, mime_type, storage_key, file_hash,
                     uploaded_by, status, evidence, metadata)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_DOCUMENT_COLUMNS}
                    """,
                    (
                        document.file_name,
                        document.file_size,
                        document.mime_type,
                        document.storage_key,
                        document.file_hash,
                        document.uploaded_by,
                        DocumentStatus.PENDING.value,
                        Jsonb(document.evidence),
                        Jsonb(document.metadata),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO documents returned no row")
        return _row_to_document(row)

    def claim_next_pending(self, conn: psycopg.Connection[Any]) -> Document | None:
        """Claim the oldest PENDING document using SELECT FOR UPDATE SKIP LOCKED.

        The claimed document is moved to PROCESSING in the same transaction,
        so concurrent workers never pick up the same document.
        """
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"""
                SELECT {_DOCUMENT_COLUMNS}
                FROM documents
                WHERE status = %s
                ORDER BY created_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (DocumentStatus.PENDING.value,),
            )
            row = cur.fetchone()

        if row is None:
            conn.commit()
            return None

        conn.execute(
            """
            UPDATE documents
            SET status = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (DocumentStatus.PROCESSING.value, row["id"]),
        )
        conn.commit()
        return _row_to_document({**row, "status": DocumentStatus.PROCESSING.value})

    def requeue(self, document_id: str) -> None:
        """Return a document to PENDING so a new job picks it up."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET status = %s, extracted_text = NULL, updated_at = NOW()
                    WHERE id = %s
                    """,
                    (DocumentStatus.PENDING.value, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def mark_failed(self, document_id: str) -> bool:
        """Move a PROCESSING document to FAILED when no job was recorded for the run.

        Returns False when the document is missing or not PROCESSING.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET status = %s, extracted_text = NULL, updated_at = NOW()
                    WHERE id = %s AND status = %s
                    """,
                    (
                        DocumentStatus.FAILED.value,
                        document_id,
                        DocumentStatus.PROCESSING.value,
                    ),
                )
                updated = cur.rowcount > 0
            conn.commit()
        return updated

    def count_by_status(self) -> DocumentStats:
        """Count documents per processing status."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT status, COUNT(*) FROM documents GROUP BY status")
                rows = cur.fetchall()

        counts = {str(status): int(count) for status, count in rows}
        return DocumentStats(
            total=sum(counts.values()),
            pending=counts.get(DocumentStatus.PENDING.value, 0),
            processing=counts.get(DocumentStatus.PROCESSING.value, 0),
            completed=counts.get(DocumentStatus.COMPLETED.value, 0),
            failed=counts.get(DocumentStatus.FAILED.value, 0),
        )


def _row_to_document(row: dict[str, Any]) -> Document:
    return Document(
        id=str(row["id"]),
        file_name=row["file_name"],
        file_size=row["file_size"],
        mime_type=row["mime_type"],
        storage_key=row["storage_key"],
        file_hash=row["file_hash"],
        uploaded_by=row["uploaded_by"],
        status=DocumentStatus(row["status"]),
        extracted_text=row["extracted_text"],
    )
