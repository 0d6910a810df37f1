from casedocs.audit.actions import DOCUMENT_PROCESSED, DOCUMENT_PROCESSING_FAILED
from casedocs.audit.emitter import AuditEmitter
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.database.repositories.processing_repository import ProcessingRepository
from casedocs.logging.logger import Log
from casedocs.processor.dispatcher import TextExtractionDispatcher
from casedocs.processor.models import Document, ProcessingJob
from casedocs.processor.pipeline import PipelineContext, PipelineStep
from casedocs.storage.base import BaseStorage


def _require_document(context: PipelineContext, step: str) -> Document:
    if context.document is None:
        raise ValueError(f"PipelineContext.document must be set before {step}")
    return context.document


def _require_job(context: PipelineContext, step: str) -> ProcessingJob:
    if context.job is None:
        raise ValueError(f"PipelineContext.job must be set before {step}")
    return context.job


class LoadDocumentStep(PipelineStep):
    def __init__(self, documents_repo: DocumentsRepository) -> None:
        self._documents_repo = documents_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        context.document = self._documents_repo.find_by_id(context.document_id)
        return context


class StartJobStep(PipelineStep):
    def __init__(self, processing_repo: ProcessingRepository) -> None:
        self._processing_repo = processing_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "starting a job")
        context.job = self._processing_repo.start_job(document.id)
        Log.info("Job started", job_id=context.job.id, document_id=document.id)
        return context


class FetchBytesStep(PipelineStep):
    def __init__(self, storage: BaseStorage) -> None:
        self._storage = storage

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "fetching bytes")
        context.raw_bytes = self._storage.get(document.storage_key)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for document {document.id}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, dispatcher: TextExtractionDispatcher) -> None:
        self._dispatcher = dispatcher

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "text extraction")
        context.outcome = self._dispatcher.extract(document.mime_type, context.raw_bytes)
        Log.info(
            f"Extracted {len(context.outcome.text)} chars from document {document.id} "
            f"using {context.outcome.strategy}"
        )
        return context


class PersistCompletedStep(PipelineStep):
    def __init__(self, processing_repo: ProcessingRepository) -> None:
        self._processing_repo = processing_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "persisting results")
        job = _require_job(context, "persisting results")
        if context.outcome is None:
            raise ValueError("PipelineContext.outcome must be set before persisting results")
        self._processing_repo.complete(
            job.id,
            document.id,
            extracted_text=context.outcome.text,
            result={
                "textLength": len(context.outcome.text),
                "strategy": context.outcome.strategy,
            },
        )
        Log.info("Job completed", job_id=job.id, document_id=document.id)
        return context


class EmitProcessedStep(PipelineStep):
    def __init__(self, audit: AuditEmitter) -> None:
        self._audit = audit

    def run(self, context: PipelineContext) -> PipelineContext:
        job = _require_job(context, "emitting audit events")
        self._audit.emit(
            DOCUMENT_PROCESSED,
            context.document_id,
            metadata={
                "jobId": job.id,
                "textLength": len(context.extracted_text),
                "strategy": context.outcome.strategy if context.outcome else None,
            },
        )
        return context


class MarkFailedStep(PipelineStep):
    """Records a failed run.

    With a job, job and document go FAILED together. Without one (the run
    broke while loading or starting), a document the worker already moved
    to PROCESSING is set FAILED so it never stays PROCESSING without a job.
    """

    def __init__(
        self,
        documents_repo: DocumentsRepository,
        processing_repo: ProcessingRepository,
        audit: AuditEmitter,
    ) -> None:
        self._documents_repo = documents_repo
        self._processing_repo = processing_repo
        self._audit = audit

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.job is None:
            return self._fail_without_job(context)
        self._processing_repo.fail(context.job.id, context.document_id, context.error_message)
        Log.error(f"Job {context.job.id} marked as failed: {context.error_message}")
        self._audit.emit(
            DOCUMENT_PROCESSING_FAILED,
            context.document_id,
            metadata={"jobId": context.job.id, "error": context.error_message},
        )
        return context

    def _fail_without_job(self, context: PipelineContext) -> PipelineContext:
        Log.error(
            f"Document {context.document_id} failed before a job was started: "
            f"{context.error_message}"
        )
        if self._documents_repo.mark_failed(context.document_id):
            self._audit.emit(
                DOCUMENT_PROCESSING_FAILED,
                context.document_id,
                metadata={"jobId": None, "error": context.error_message},
            )
        return context
