import io
from typing import Any

import mammoth

from casedocs.docx.exceptions import DocxExtractionError
from casedocs.logging.logger import Log


class DocxExtractor:
    """Converts DOCX bytes to raw text or HTML using mammoth.

    Converter warnings are logged and never fail the conversion.
    """

    def extract(self, docx_bytes: bytes) -> str:
        """Extract raw text from DOCX bytes.

        Raises:
            DocxExtractionError: if the document cannot be converted.
        """
        return self._convert(mammoth.extract_raw_text, docx_bytes, "text")

    def extract_html(self, docx_bytes: bytes) -> str:
        """Convert DOCX bytes to HTML.

        Raises:
            DocxExtractionError: if the document cannot be converted.
        """
        return self._convert(mammoth.convert_to_html, docx_bytes, "HTML")

    def _convert(self, converter: Any, docx_bytes: bytes, output: str) -> str:
        try:
            result = converter(io.BytesIO(docx_bytes))
        except Exception as exc:
            Log.error(f"DOCX {output} extraction failed: {exc}")
            raise DocxExtractionError(f"Failed to extract {output} from DOCX: {exc}") from exc

        value = result.value.strip()
        if result.messages:
            warnings = "; ".join(str(message.message) for message in result.messages)
            Log.warning(f"DOCX {output} extraction warnings: {warnings}")
        Log.info(
            f"DOCX {output} extracted: {len(value)} chars, {len(result.messages)} warnings"
        )
        return value
