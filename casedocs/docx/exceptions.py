from casedocs.processor.exceptions import ExtractionError


class DocxExtractionError(ExtractionError):
    """Raised when a DOCX document cannot be converted."""
