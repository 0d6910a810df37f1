from collections.abc import Callable
from datetime import datetime, timezone

from casedocs.audit.actions import DOCUMENT_UPLOAD
from casedocs.audit.emitter import AuditEmitter
from casedocs.database.models import NewDocument
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.integrity.hashing import build_evidence_record, hash_stream
from casedocs.logging.logger import Log
from casedocs.processor.exceptions import IntegrityError
from casedocs.processor.models import Document
from casedocs.storage.base import BaseStorage
from casedocs.storage.exceptions import StorageNotFoundError


class UploadCompletionService:
    """Registers an uploaded object as a PENDING document.

    The SHA-256 of the stored bytes is computed here, once, by streaming
    the object, and signed into an evidence record that travels with the
    document row.

    This is the API the upload front end calls once the client reports its
    direct-to-storage upload as finished; the worker then picks up the
    PENDING document:

        service = UploadCompletionService(storage, DocumentsRepository(), audit)
        document = service.complete_upload(
            file_name="lease.pdf",
            mime_type="application/pdf",
            storage_key="firm-1/user-1/lease.pdf",
            uploader_id="user-1",
        )
    """

    def __init__(
        self,
        storage: BaseStorage,
        documents_repo: DocumentsRepository,
        audit: AuditEmitter,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._storage = storage
        self._documents_repo = documents_repo
        self._audit = audit
        self._clock = clock

    def complete_upload(
        self,
        *,
        file_name: str,
        mime_type: str,
        storage_key: str,
        uploader_id: str,
        declared_hash: str | None = None,
        metadata: dict[str, object] | None = None,
    ) -> Document:
        """Verify the stored object, hash it and create the document record.

        Raises:
            StorageNotFoundError: if nothing was uploaded at storage_key.
            IntegrityError: if declared_hash does not match the stored bytes.
        """
        if not self._storage.exists(storage_key):
            raise StorageNotFoundError(
                f"File not found at {storage_key}. Upload may have failed."
            )
        object_metadata = self._storage.get_metadata(storage_key)
        file_size = object_metadata.content_length
        with self._storage.open(storage_key) as stream:
            file_hash = hash_stream(stream)

        if declared_hash is not None and declared_hash != file_hash:
            raise IntegrityError(
                f"Hash mismatch for {storage_key}: declared {declared_hash}, stored {file_hash}"
            )

        evidence = build_evidence_record(
            file_hash=file_hash,
            file_name=file_name,
            file_size=file_size,
            uploader_id=uploader_id,
            timestamp=self._clock(),
        )
        document = self._documents_repo.create(
            NewDocument(
                file_name=file_name,
                file_size=file_size,
                mime_type=mime_type,
                storage_key=storage_key,
                file_hash=file_hash,
                uploaded_by=uploader_id,
                evidence=evidence.to_dict(),
                metadata={
                    **(metadata or {}),
                    "storedContentType": object_metadata.content_type,
                },
            )
        )
        self._audit.emit(
            DOCUMENT_UPLOAD,
            document.id,
            user_id=uploader_id,
            metadata={
                "fileName": file_name,
                "fileSize": file_size,
                "fileHash": file_hash,
                "signature": evidence.signature,
            },
        )
        Log.info(f"Upload completed: document {document.id} ({file_name}, {file_hash})")
        return document
