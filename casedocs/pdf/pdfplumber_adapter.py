import io

import pdfplumber

from casedocs.pdf.base import BasePdfExtractor
from casedocs.pdf.exceptions import PdfExtractionError
from casedocs.pdf.models import PdfContent, PdfMetadata


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def read(self, pdf_bytes: bytes) -> PdfContent:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return PdfContent(text="\n".join(pages), page_count=len(pages))
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc

    def read_metadata(self, pdf_bytes: bytes) -> PdfMetadata:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                info = pdf.metadata or {}
                page_count = len(pdf.pages)
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber metadata read failed: {exc}") from exc
        return PdfMetadata(
            pages=page_count,
            title=_text(info.get("Title")),
            author=_text(info.get("Author")),
            subject=_text(info.get("Subject")),
            keywords=_text(info.get("Keywords")),
            creator=_text(info.get("Creator")),
            producer=_text(info.get("Producer")),
        )


def _text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
