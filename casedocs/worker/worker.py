import time

from casedocs.config.settings import Settings
from casedocs.database.connection import get_connection
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.logging.logger import Log
from casedocs.processor.models import Document
from casedocs.worker.job_runner import JobRunner


class Worker:
    """Poll loop: claim the oldest PENDING document -> run it -> sleep when idle.

    Claiming moves the document to PROCESSING under FOR UPDATE SKIP LOCKED,
    so several workers can share one documents table.
    """

    def __init__(
        self,
        documents_repo: DocumentsRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._documents_repo = documents_repo
        self._job_runner = job_runner
        self._settings = settings

    def run(self, max_documents: int | None = None) -> int:
        """Process claimed documents until interrupted; return how many ran.

        If max_documents is set, stop after that many (for tests and one-shot runs).
        """
        Log.info(
            "Worker started, polling for pending case documents",
            poll_interval_seconds=self._settings.job_poll_interval_seconds,
        )
        processed = 0
        try:
            while max_documents is None or processed < max_documents:
                document = self._try_claim_document()
                if document is None:
                    Log.debug("No pending case documents, sleeping")
                    time.sleep(self._settings.job_poll_interval_seconds)
                    continue
                Log.info(
                    "Claimed document",
                    document_id=document.id,
                    file_name=document.file_name,
                    mime_type=document.mime_type,
                )
                self._job_runner.run(document)
                processed += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        Log.info("Worker stopped", documents_processed=processed)
        return processed

    def _try_claim_document(self) -> Document | None:
        """Claim the next PENDING document; database errors mean 'try again later'."""
        try:
            with get_connection() as conn:
                return self._documents_repo.claim_next_pending(conn)
        except Exception as exc:
            Log.warning(f"Could not claim a pending document, will retry: {exc}")
            return None
