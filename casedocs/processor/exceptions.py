class ProcessorError(Exception):
    """Base exception for all document processing errors."""


class NotFoundError(ProcessorError):
    """Raised when a document or its stored bytes are missing."""


class DocumentNotFoundError(NotFoundError):
    """Raised when a document cannot be found in the database."""


class ExtractionError(ProcessorError):
    """Raised when a format parser fails to produce text."""


class IntegrityError(ProcessorError):
    """Raised when uploaded bytes do not match their declared hash."""
