from casedocs.processor.exceptions import ExtractionError


class PdfExtractionError(ExtractionError):
    """Raised when a PDF cannot be parsed."""
