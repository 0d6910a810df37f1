from dataclasses import dataclass, field

LINE_BLOCK_TYPE = "LINE"


@dataclass(frozen=True)
class OcrBlock:
    """One structured block returned by an OCR engine."""

    text: str
    block_type: str
    confidence: float = 0.0


@dataclass
class OcrResult:
    """Line-level OCR output with per-line confidence scores."""

    text: str
    line_confidences: list[float] = field(default_factory=list)

    @property
    def confidence(self) -> float:
        """Arithmetic mean of line confidences; 0.0 when no lines were detected."""
        if not self.line_confidences:
            return 0.0
        return sum(self.line_confidences) / len(self.line_confidences)
