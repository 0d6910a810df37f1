from concurrent.futures import Future, ThreadPoolExecutor

from casedocs.logging.logger import Log
from casedocs.processor.processor import Processor


class BackgroundProcessor:
    """Fire-and-forget document processing on a thread pool.

    submit() returns immediately; failures are logged when the run ends
    and stay available on the returned Future.

    For callers that process a document right after upload completion
    instead of waiting for the poll loop in casedocs-worker:

        background = BackgroundProcessor(build_processor(settings), settings.max_concurrent_jobs)
        background.submit(document.id)
    """

    def __init__(self, processor: Processor, max_workers: int) -> None:
        self._processor = processor
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="casedocs-job"
        )

    def submit(self, document_id: str) -> "Future[str]":
        future = self._executor.submit(self._processor.process_document, document_id)
        future.add_done_callback(lambda done: self._log_outcome(document_id, done))
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _log_outcome(self, document_id: str, future: "Future[str]") -> None:
        if future.cancelled():
            Log.warning(f"Background processing of document {document_id} was cancelled")
            return
        exc = future.exception()
        if exc is not None:
            Log.error(f"Background processing of document {document_id} failed: {exc}")
        else:
            Log.info(f"Background processing of document {document_id} finished")
