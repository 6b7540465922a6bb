"""Structural checks run on a PDF upload before any parser is invoked."""

from app.documents.exceptions import InvalidDocumentError

PDF_SIGNATURE = "%PDF-"
PDF_HEADER_LENGTH = 8
DEFAULT_MAX_UPLOAD_BYTES = 100 * 1024 * 1024


def validate_pdf(
    pdf_bytes: bytes,
    filename: str,
    byte_size: int,
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> None:
    """Fail fast on uploads that cannot be a readable PDF.

    Raises:
        InvalidDocumentError: on the first violated precondition.
    """
    if not pdf_bytes:
        raise InvalidDocumentError("Failed to read file content")
    if not (filename or "").lower().endswith(".pdf"):
        raise InvalidDocumentError("Invalid file extension. Please upload a PDF file.")
    if byte_size == 0:
        raise InvalidDocumentError("File is empty")
    if byte_size > max_upload_bytes:
        max_mb = max_upload_bytes // (1024 * 1024)
        raise InvalidDocumentError(f"File is too large. Maximum size is {max_mb}MB.")
    if len(pdf_bytes) < PDF_HEADER_LENGTH:
        raise InvalidDocumentError("File is too small to be a valid PDF")
    header = pdf_bytes[:PDF_HEADER_LENGTH].decode("ascii", errors="replace")
    if PDF_SIGNATURE not in header:
        raise InvalidDocumentError("Invalid PDF format. File may be corrupted.")
