from abc import ABC, abstractmethod

from casedocs.ocr.models import OcrBlock


class BaseOcrClient(ABC):
    """Contract for OCR engines."""

    name: str = "ocr"

    @abstractmethod
    def detect_document_text(self, data: bytes) -> list[OcrBlock]:
        """Detect text in an image or scanned PDF.

        Returns:
            All blocks reported by the engine, of any block type.

        Raises:
            OcrError: if the engine call fails.
        """
