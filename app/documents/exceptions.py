from enum import Enum


class ErrorKind(str, Enum):
    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    INVALID_DOCUMENT = "InvalidDocument"
    PDF_EXTRACTION_FAILED = "PdfExtractionFailed"
    OCR_EXTRACTION_FAILED = "OcrExtractionFailed"
    UNEXPECTED_FAILURE = "UnexpectedFailure"


class DocumentError(Exception):
    """Base exception for failures scoped to a single document."""

    kind: ErrorKind = ErrorKind.UNEXPECTED_FAILURE


class UnsupportedFormatError(DocumentError):
    """Raised when the declared content type is neither PDF nor image."""

    kind = ErrorKind.UNSUPPORTED_FORMAT


class InvalidDocumentError(DocumentError):
    """Raised when a document fails its structural preconditions."""

    kind = ErrorKind.INVALID_DOCUMENT


class PdfExtractionFailedError(DocumentError):
    """Raised when both PDF strategies failed to produce text."""

    kind = ErrorKind.PDF_EXTRACTION_FAILED

    def __init__(self, primary_error: str, fallback_error: str) -> None:
        super().__init__("Failed to parse PDF with both methods")
        self.primary_error = primary_error
        self.fallback_error = fallback_error


class OcrExtractionFailedError(DocumentError):
    """Raised when OCR produced no usable text."""

    kind = ErrorKind.OCR_EXTRACTION_FAILED


class UnexpectedFailureError(DocumentError):
    """Raised for any other exception during document processing."""

    kind = ErrorKind.UNEXPECTED_FAILURE
