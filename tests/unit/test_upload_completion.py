import io
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from casedocs.audit.actions import DOCUMENT_UPLOAD
from casedocs.audit.emitter import AuditEmitter
from casedocs.database.models import NewDocument
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.intake.upload_completion import UploadCompletionService
from casedocs.integrity.hashing import hash_bytes, verify_evidence_record
from casedocs.integrity.models import EvidenceRecord
from casedocs.processor.exceptions import IntegrityError
from casedocs.processor.models import Document
from casedocs.storage.base import BaseStorage
from casedocs.storage.exceptions import StorageNotFoundError
from casedocs.storage.models import ObjectMetadata

_DATA = b"Exhibit A: signed lease"
_UPLOADED_AT = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


def _make_service() -> tuple[UploadCompletionService, MagicMock, MagicMock, MagicMock]:
    storage = MagicMock(spec=BaseStorage)
    documents_repo = MagicMock(spec=DocumentsRepository)
    audit = MagicMock(spec=AuditEmitter)

    storage.exists.return_value = True
    storage.open.return_value = io.BytesIO(_DATA)
    storage.get_metadata.return_value = ObjectMetadata(
        content_type="text/plain", content_length=len(_DATA), last_modified=_UPLOADED_AT
    )
    documents_repo.create.side_effect = lambda new: Document(
        id="doc-1",
        file_name=new.file_name,
        mime_type=new.mime_type,
        file_size=new.file_size,
        storage_key=new.storage_key,
        file_hash=new.file_hash,
        uploaded_by=new.uploaded_by,
    )
    service = UploadCompletionService(
        storage, documents_repo, audit, clock=lambda: _UPLOADED_AT
    )
    return service, storage, documents_repo, audit


def _complete(service: UploadCompletionService, **overrides: object) -> Document:
    kwargs: dict[str, object] = {
        "file_name": "lease.txt",
        "mime_type": "text/plain",
        "storage_key": "firm-1/user-1/lease.txt",
        "uploader_id": "user-1",
    }
    kwargs.update(overrides)
    return service.complete_upload(**kwargs)  # type: ignore[arg-type]


class TestCompleteUpload:
    def test_creates_pending_document_with_streamed_hash(self) -> None:
        service, storage, documents_repo, _audit = _make_service()

        document = _complete(service)

        assert document.id == "doc-1"
        assert document.file_hash == hash_bytes(_DATA)
        created: NewDocument = documents_repo.create.call_args.args[0]
        assert created.file_size == len(_DATA)
        assert created.storage_key == "firm-1/user-1/lease.txt"
        storage.open.assert_called_once_with("firm-1/user-1/lease.txt")
        storage.get.assert_not_called()
        assert created.metadata == {"storedContentType": "text/plain"}

    def test_evidence_record_verifies(self) -> None:
        service, _storage, documents_repo, _audit = _make_service()

        _complete(service)

        evidence = documents_repo.create.call_args.args[0].evidence
        assert evidence["timestamp"] == "2024-03-15T09:30:00.000Z"
        record = EvidenceRecord(
            file_hash=evidence["fileHash"],
            file_name=evidence["fileName"],
            file_size=evidence["fileSize"],
            uploader_id=evidence["uploaderId"],
            timestamp=evidence["timestamp"],
            signature=evidence["signature"],
        )
        assert verify_evidence_record(record) is True

    def test_keeps_caller_metadata(self) -> None:
        service, _storage, documents_repo, _audit = _make_service()

        _complete(service, metadata={"caseNumber": "24-CV-118"})

        assert documents_repo.create.call_args.args[0].metadata == {
            "caseNumber": "24-CV-118",
            "storedContentType": "text/plain",
        }

    def test_emits_upload_audit_event(self) -> None:
        service, _storage, _repo, audit = _make_service()

        _complete(service)

        audit.emit.assert_called_once()
        assert audit.emit.call_args.args == (DOCUMENT_UPLOAD, "doc-1")
        assert audit.emit.call_args.kwargs["user_id"] == "user-1"
        assert audit.emit.call_args.kwargs["metadata"]["fileHash"] == hash_bytes(_DATA)

    def test_accepts_matching_declared_hash(self) -> None:
        service, _storage, documents_repo, _audit = _make_service()
        _complete(service, declared_hash=hash_bytes(_DATA))
        documents_repo.create.assert_called_once()


class TestCompleteUploadErrors:
    def test_missing_object_raises_not_found(self) -> None:
        service, storage, documents_repo, audit = _make_service()
        storage.exists.return_value = False

        with pytest.raises(StorageNotFoundError, match="Upload may have failed"):
            _complete(service)

        documents_repo.create.assert_not_called()
        audit.emit.assert_not_called()

    def test_declared_hash_mismatch_raises(self) -> None:
        service, _storage, documents_repo, _audit = _make_service()

        with pytest.raises(IntegrityError, match="Hash mismatch"):
            _complete(service, declared_hash="0" * 64)

        documents_repo.create.assert_not_called()
