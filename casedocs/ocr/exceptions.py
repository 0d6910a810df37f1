from casedocs.processor.exceptions import ProcessorError


class OcrError(ProcessorError):
    """Raised when an OCR engine call fails."""


class OcrUnavailableError(OcrError):
    """Raised when primary OCR failed and no fallback engine could recover."""


class UnsupportedTypeError(ProcessorError):
    """Raised when a file type is not eligible for OCR."""

    status_code = 400
