from casedocs.config.settings import Settings
from casedocs.logging.logger import Log
from casedocs.pdf.base import BasePdfExtractor
from casedocs.pdf.pdfplumber_adapter import PdfPlumberAdapter
from casedocs.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF extractor named by settings.pdf_engine.

    The scanned-document threshold travels with the extractor, so every
    engine applies the same chars-per-page rule.
    """

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        if engine not in cls.ADAPTERS:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        threshold = settings.scanned_chars_per_page_threshold
        Log.debug("PDF extractor selected", engine=engine, scanned_threshold=threshold)
        return cls.ADAPTERS[engine](scanned_chars_per_page=threshold)
