from pathlib import Path

import pytest

from casedocs.config.settings import Settings
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.database.repositories.processing_repository import ProcessingRepository
from casedocs.processor.exceptions import DocumentNotFoundError
from casedocs.processor.models import Document, DocumentStatus, JobStatus
from casedocs.processor.processor import build_processor
from casedocs.storage.exceptions import StorageNotFoundError


def _latest_job_id(db_conn, document_id: str) -> str:
    with db_conn.cursor() as cur:
        cur.execute(
            "SELECT id FROM processing_jobs WHERE document_id = %s ORDER BY started_at DESC",
            (document_id,),
        )
        row = cur.fetchone()
    assert row is not None
    return str(row[0])


@pytest.mark.integration
class TestProcessorPipeline:
    def test_plain_text_document_completes(
        self,
        seed_text_document: Document,
        test_settings: Settings,
        files_root: Path,
        db_conn,
    ) -> None:
        processor = build_processor(test_settings, files_root=files_root)

        text = processor.process_document(seed_text_document.id)

        assert text == "Hello"
        document = DocumentsRepository().find_by_id(seed_text_document.id)
        assert document.status is DocumentStatus.COMPLETED
        assert document.extracted_text == "Hello"

        job = ProcessingRepository().find_job(_latest_job_id(db_conn, document.id))
        assert job is not None
        assert job.status is JobStatus.COMPLETED
        assert job.progress == 100
        assert job.result["textLength"] == 5
        assert job.completed_at is not None

    def test_processed_event_is_audited(
        self,
        seed_text_document: Document,
        test_settings: Settings,
        files_root: Path,
        db_conn,
    ) -> None:
        build_processor(test_settings, files_root=files_root).process_document(
            seed_text_document.id
        )

        with db_conn.cursor() as cur:
            cur.execute(
                "SELECT action FROM audit_logs WHERE resource_id = %s",
                (seed_text_document.id,),
            )
            actions = [row[0] for row in cur.fetchall()]
        assert actions == ["document.processed"]

    def test_missing_file_fails_job_and_document(
        self,
        seed_text_document: Document,
        test_settings: Settings,
        tmp_path_factory: pytest.TempPathFactory,
        db_conn,
    ) -> None:
        empty_root = tmp_path_factory.mktemp("empty")
        processor = build_processor(test_settings, files_root=empty_root)

        with pytest.raises(StorageNotFoundError):
            processor.process_document(seed_text_document.id)

        document = DocumentsRepository().find_by_id(seed_text_document.id)
        assert document.status is DocumentStatus.FAILED
        assert document.extracted_text is None
        job = ProcessingRepository().find_job(_latest_job_id(db_conn, document.id))
        assert job is not None
        assert job.status is JobStatus.FAILED
        assert job.error

    def test_nul_characters_are_stripped_before_persisting(
        self,
        seed_text_document: Document,
        test_settings: Settings,
        files_root: Path,
    ) -> None:
        (files_root / seed_text_document.storage_key).write_bytes(b"Hello\x00World")
        processor = build_processor(test_settings, files_root=files_root)

        assert processor.process_document(seed_text_document.id) == "HelloWorld"

        document = DocumentsRepository().find_by_id(seed_text_document.id)
        assert document.status is DocumentStatus.COMPLETED
        assert document.extracted_text == "HelloWorld"

    def test_unknown_document_raises(
        self, integration_pool: None, test_settings: Settings, files_root: Path
    ) -> None:
        processor = build_processor(test_settings, files_root=files_root)
        with pytest.raises(DocumentNotFoundError):
            processor.process_document("doc-missing")
