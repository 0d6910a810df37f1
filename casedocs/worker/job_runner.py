from casedocs.config.settings import Settings
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.database.repositories.processing_repository import ProcessingRepository
from casedocs.logging.logger import Log
from casedocs.processor.models import Document
from casedocs.processor.processor import Processor
from casedocs.storage.exceptions import StorageError


class JobRunner:
    """Run one document, catch exceptions, and apply the retry policy.

    Only transient storage failures are retried, by returning the document
    to PENDING so a fresh job picks it up.
    """

    def __init__(
        self,
        processor: Processor,
        documents_repo: DocumentsRepository,
        processing_repo: ProcessingRepository,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._documents_repo = documents_repo
        self._processing_repo = processing_repo
        self._settings = settings

    def run(self, document: Document) -> None:
        """Process a single claimed document with error handling."""
        Log.info("Running document", document_id=document.id, mime_type=document.mime_type)
        try:
            self._processor.process_document(document.id)
            Log.info(f"Document {document.id} processed successfully")
        except Exception as exc:
            self._handle_failure(document, exc)

    def _handle_failure(self, document: Document, exc: Exception) -> None:
        Log.error(f"Document {document.id} failed: {exc}")
        if not isinstance(exc, StorageError):
            return
        attempts = self._processing_repo.count_jobs_for_document(document.id)
        if attempts >= self._settings.max_processing_attempts:
            Log.error(f"Document {document.id} permanently failed after {attempts} attempts")
            return
        self._documents_repo.requeue(document.id)
        Log.warning(f"Document {document.id} will be retried (attempt {attempts + 1})")
