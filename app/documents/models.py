from dataclasses import dataclass
from enum import Enum


class DocumentKind(str, Enum):
    """Extraction route chosen for a submitted document."""

    PDF = "pdf"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"


class ExtractionMethod(str, Enum):
    """Which strategy produced the raw text of a document."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    OCR = "ocr"


@dataclass(frozen=True)
class SubmittedDocument:
    """One uploaded file belonging to a single analysis request."""

    name: str
    content_type: str
    byte_size: int
    content: bytes


@dataclass(frozen=True)
class ExtractionResult:
    """Raw text extracted from one document."""

    raw_text: str
    method: ExtractionMethod
    page_count: int | None = None
