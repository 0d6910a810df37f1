import pymupdf

from casedocs.pdf.base import BasePdfExtractor
from casedocs.pdf.exceptions import PdfExtractionError
from casedocs.pdf.models import PdfContent, PdfMetadata


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def read(self, pdf_bytes: bytes) -> PdfContent:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
            return PdfContent(text="\n".join(pages), page_count=len(pages))
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc

    def read_metadata(self, pdf_bytes: bytes) -> PdfMetadata:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                info = doc.metadata or {}
                page_count = doc.page_count
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf metadata read failed: {exc}") from exc
        return PdfMetadata(
            pages=page_count,
            title=info.get("title") or None,
            author=info.get("author") or None,
            subject=info.get("subject") or None,
            keywords=info.get("keywords") or None,
            creator=info.get("creator") or None,
            producer=info.get("producer") or None,
        )
