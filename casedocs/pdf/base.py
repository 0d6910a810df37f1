from abc import ABC, abstractmethod

from casedocs.logging.logger import Log
from casedocs.pdf.exceptions import PdfExtractionError
from casedocs.pdf.models import PdfContent, PdfMetadata

DEFAULT_SCANNED_CHARS_PER_PAGE = 100


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Adapters only implement parsing; text extraction and the scanned
    document heuristic are shared.
    """

    def __init__(self, scanned_chars_per_page: int = DEFAULT_SCANNED_CHARS_PER_PAGE) -> None:
        self._scanned_chars_per_page = scanned_chars_per_page

    @abstractmethod
    def read(self, pdf_bytes: bytes) -> PdfContent:
        """Parse PDF bytes into full text and page count.

        Raises:
            PdfExtractionError: if the PDF cannot be parsed.
        """

    @abstractmethod
    def read_metadata(self, pdf_bytes: bytes) -> PdfMetadata:
        """Read the page count and document information dictionary.

        Raises:
            PdfExtractionError: if the PDF cannot be parsed.
        """

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Returns:
            Extracted text as a single stripped string.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
        content = self.read(pdf_bytes)
        text = content.text.strip()
        Log.info(f"PDF text extracted: {content.page_count} pages, {len(text)} chars")
        return text

    def extract_metadata(self, pdf_bytes: bytes) -> PdfMetadata:
        return self.read_metadata(pdf_bytes)

    def is_likely_scanned(self, pdf_bytes: bytes) -> bool:
        """Return True if the PDF carries too little text to be machine-readable.

        A PDF that cannot be parsed is assumed to be scanned.
        """
        try:
            content = self.read(pdf_bytes)
        except PdfExtractionError as exc:
            return self._assume_scanned_on_parse_failure(exc)
        return self.is_scanned_content(content)

    def is_scanned_content(self, content: PdfContent) -> bool:
        if content.page_count <= 0:
            return True
        text_length = len(content.text.strip())
        avg_chars_per_page = text_length / content.page_count
        is_scanned = avg_chars_per_page < self._scanned_chars_per_page
        Log.debug(
            f"PDF scan check: pages={content.page_count} text_length={text_length} "
            f"avg_chars_per_page={avg_chars_per_page:.1f} scanned={is_scanned}"
        )
        return is_scanned

    def _assume_scanned_on_parse_failure(self, exc: PdfExtractionError) -> bool:
        Log.warning(f"PDF scan check could not parse document, assuming scanned: {exc}")
        return True
