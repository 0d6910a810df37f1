from dataclasses import dataclass


@dataclass(frozen=True)
class PdfContent:
    """Full text and page count of a parsed PDF."""

    text: str
    page_count: int


@dataclass(frozen=True)
class PdfMetadata:
    """Document information dictionary of a PDF."""

    pages: int
    title: str | None = None
    author: str | None = None
    subject: str | None = None
    keywords: str | None = None
    creator: str | None = None
    producer: str | None = None
