from abc import ABC, abstractmethod
from dataclasses import dataclass

from casedocs.processor.models import Document, ExtractionOutcome, ProcessingJob


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    document: Document | None = None
    job: ProcessingJob | None = None
    raw_bytes: bytes = b""
    outcome: ExtractionOutcome | None = None
    error_message: str = ""

    @property
    def extracted_text(self) -> str:
        return self.outcome.text if self.outcome is not None else ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
