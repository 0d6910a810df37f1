from collections.abc import Sequence
from pathlib import Path

from casedocs.audit.emitter import AuditEmitter
from casedocs.audit.sinks import DatabaseAuditSink, LogAuditSink
from casedocs.config.settings import Settings
from casedocs.database.repositories.audit_log_repository import AuditLogRepository
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.database.repositories.processing_repository import ProcessingRepository
from casedocs.docx.docx_extractor import DocxExtractor
from casedocs.extraction.plain_text import PlainTextExtractor
from casedocs.logging.logger import Log
from casedocs.ocr.factory import OcrServiceFactory
from casedocs.pdf.factory import PdfExtractorFactory
from casedocs.processor.dispatcher import TextExtractionDispatcher
from casedocs.processor.pipeline import PipelineContext, PipelineStep
from casedocs.processor.steps import (
    EmitProcessedStep,
    ExtractTextStep,
    FetchBytesStep,
    LoadDocumentStep,
    MarkFailedStep,
    PersistCompletedStep,
    StartJobStep,
)
from casedocs.storage.factory import StorageFactory


class Processor:
    """Runs the text extraction pipeline for one document.

    Pipeline: load -> start job -> fetch -> extract -> persist -> audit.
    Any step failure runs the failed step and re-raises; retries are left
    to the caller.
    """

    def __init__(self, steps: Sequence[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = list(steps)
        self._failed_step = failed_step

    def process_document(self, document_id: str) -> str:
        """Extract and store text for a document, returning the text."""
        Log.info(f"Processing document {document_id}")
        context = PipelineContext(document_id=document_id)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or type(exc).__name__
            self._mark_failed(context)
            raise
        return context.extracted_text

    def _mark_failed(self, context: PipelineContext) -> None:
        try:
            self._failed_step.run(context)
        except Exception as exc:
            Log.exception(
                f"Could not record failure for document {context.document_id}: {exc}"
            )


def build_audit_emitter() -> AuditEmitter:
    return AuditEmitter([LogAuditSink(), DatabaseAuditSink(AuditLogRepository())])


def build_processor(
    settings: Settings,
    files_root: Path | None = None,
    audit: AuditEmitter | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    documents_repo = DocumentsRepository()
    processing_repo = ProcessingRepository()
    storage = StorageFactory.create(settings, files_root=files_root)
    audit = audit or build_audit_emitter()
    dispatcher = TextExtractionDispatcher(
        pdf_extractor=PdfExtractorFactory.create(settings),
        docx_extractor=DocxExtractor(),
        plain_text_extractor=PlainTextExtractor(),
        ocr_service=OcrServiceFactory.create(settings),
    )
    steps: list[PipelineStep] = [
        LoadDocumentStep(documents_repo),
        StartJobStep(processing_repo),
        FetchBytesStep(storage),
        ExtractTextStep(dispatcher),
        PersistCompletedStep(processing_repo),
        EmitProcessedStep(audit),
    ]
    return Processor(
        steps=steps,
        failed_step=MarkFailedStep(documents_repo, processing_repo, audit),
    )
