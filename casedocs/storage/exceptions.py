from casedocs.processor.exceptions import NotFoundError, ProcessorError


class StorageError(ProcessorError):
    """Raised on transient storage failures; the caller may retry."""


class StorageNotFoundError(NotFoundError):
    """Raised when no object exists at a storage key."""
