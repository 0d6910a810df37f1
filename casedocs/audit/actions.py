DOCUMENT_RESOURCE = "document"

DOCUMENT_UPLOAD = "document.upload"
DOCUMENT_PROCESSED = "document.processed"
DOCUMENT_PROCESSING_FAILED = "document.processing_failed"
