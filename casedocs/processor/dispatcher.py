from casedocs.docx.docx_extractor import DocxExtractor
from casedocs.extraction.plain_text import PlainTextExtractor
from casedocs.logging.logger import Log
from casedocs.ocr.ocr_service import OcrService
from casedocs.pdf.base import BasePdfExtractor
from casedocs.processor.models import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    TEXT_MIME_TYPE,
    ExtractionOutcome,
)

STRATEGY_PDF_TEXT = "pdf_text"
STRATEGY_PDF_OCR = "pdf_ocr"
STRATEGY_DOCX = "docx"
STRATEGY_PLAIN_TEXT = "plain_text"
STRATEGY_NONE = "none"


class TextExtractionDispatcher:
    """Chooses and runs the extraction strategy for a document's mime type.

    Unknown mime types yield empty text rather than an error; uploads are
    expected to be restricted to supported types before they get here.
    NUL characters are removed from every result, since PostgreSQL text
    columns cannot store them.
    """

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        docx_extractor: DocxExtractor,
        plain_text_extractor: PlainTextExtractor,
        ocr_service: OcrService,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._docx_extractor = docx_extractor
        self._plain_text_extractor = plain_text_extractor
        self._ocr_service = ocr_service

    def extract(self, mime_type: str, data: bytes) -> ExtractionOutcome:
        outcome = self._dispatch(mime_type, data)
        nul_count = outcome.text.count("\x00")
        if nul_count:
            Log.warning(f"Removed {nul_count} NUL characters from {outcome.strategy} text")
            return ExtractionOutcome(outcome.text.replace("\x00", ""), outcome.strategy)
        return outcome

    def _dispatch(self, mime_type: str, data: bytes) -> ExtractionOutcome:
        if mime_type == PDF_MIME_TYPE:
            return self._extract_pdf(data)
        if mime_type == DOCX_MIME_TYPE:
            return ExtractionOutcome(self._docx_extractor.extract(data), STRATEGY_DOCX)
        if mime_type == TEXT_MIME_TYPE:
            return ExtractionOutcome(
                self._plain_text_extractor.extract(data), STRATEGY_PLAIN_TEXT
            )
        Log.warning(f"No extractor for mime type '{mime_type}', storing empty text")
        return ExtractionOutcome("", STRATEGY_NONE)

    def _extract_pdf(self, data: bytes) -> ExtractionOutcome:
        if self._pdf_extractor.is_likely_scanned(data):
            Log.info("PDF appears to be scanned, using OCR")
            return ExtractionOutcome(self._ocr_service.extract_text(data), STRATEGY_PDF_OCR)
        return ExtractionOutcome(self._pdf_extractor.extract(data), STRATEGY_PDF_TEXT)
