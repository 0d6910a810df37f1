from casedocs.logging.logger import Log
from casedocs.ocr.base import BaseOcrClient
from casedocs.ocr.exceptions import OcrError, OcrUnavailableError, UnsupportedTypeError
from casedocs.ocr.models import LINE_BLOCK_TYPE, OcrBlock, OcrResult

OCR_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/tiff",
        "application/pdf",
    }
)

NO_FALLBACK_MESSAGE = "primary OCR unavailable and no fallback engine configured"


def is_ocr_candidate(mime_type: str) -> bool:
    """Return True if files of this mime type may be sent to OCR."""
    return mime_type in OCR_MIME_TYPES


class OcrService:
    """Runs OCR through a primary engine with an optional fallback engine."""

    def __init__(
        self,
        primary: BaseOcrClient,
        fallback: BaseOcrClient | None = None,
    ) -> None:
        self._primary = primary
        self._fallback = fallback

    def detect_text(self, data: bytes) -> OcrResult:
        """Run the primary engine and reduce its output to line text and confidences."""
        return self._detect_with(self._primary, data)

    def extract_text(self, data: bytes) -> str:
        """Return the text detected by the primary engine."""
        return self.detect_text(data).text

    def extract_with_fallback(self, data: bytes, mime_type: str) -> str:
        """Return detected text, trying the fallback engine if the primary fails.

        Raises:
            UnsupportedTypeError: if mime_type is not OCR-eligible.
            OcrUnavailableError: if the primary engine failed and no fallback
                is configured, or the fallback failed as well.
        """
        if not is_ocr_candidate(mime_type):
            raise UnsupportedTypeError(f"File type '{mime_type}' not suitable for OCR")

        try:
            return self._detect_with(self._primary, data).text
        except OcrError as primary_exc:
            if self._fallback is None:
                Log.error(f"OCR engine '{self._primary.name}' failed: {primary_exc}")
                raise OcrUnavailableError(NO_FALLBACK_MESSAGE) from primary_exc
            Log.warning(
                f"OCR engine '{self._primary.name}' failed, "
                f"falling back to '{self._fallback.name}': {primary_exc}"
            )
            try:
                return self._detect_with(self._fallback, data).text
            except OcrError as fallback_exc:
                raise OcrUnavailableError(
                    f"primary OCR unavailable ({primary_exc}) and fallback engine "
                    f"'{self._fallback.name}' failed ({fallback_exc})"
                ) from fallback_exc

    def _detect_with(self, engine: BaseOcrClient, data: bytes) -> OcrResult:
        blocks = engine.detect_document_text(data)
        result = self._lines_to_result(blocks)
        Log.info(
            f"OCR '{engine.name}' completed: {len(result.text)} chars, "
            f"{len(result.line_confidences)} lines, confidence {result.confidence:.1f}"
        )
        return result

    def _lines_to_result(self, blocks: list[OcrBlock]) -> OcrResult:
        lines = [block for block in blocks if block.block_type == LINE_BLOCK_TYPE]
        return OcrResult(
            text="\n".join(line.text for line in lines).strip(),
            line_confidences=[line.confidence for line in lines],
        )
