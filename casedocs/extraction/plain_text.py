from casedocs.processor.exceptions import ExtractionError


class PlainTextExtractor:
    """Decodes plain text uploads as strict UTF-8."""

    ENCODING = "utf-8"

    def extract(self, data: bytes) -> str:
        try:
            return data.decode(self.ENCODING)
        except UnicodeDecodeError as exc:
            raise ExtractionError(f"Plain text is not valid UTF-8: {exc}") from exc
