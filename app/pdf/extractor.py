from app.documents.exceptions import PdfExtractionFailedError
from app.documents.models import ExtractionMethod, ExtractionResult
from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor, PdfText
from app.pdf.exceptions import PdfExtractionError
from app.pdf.validator import DEFAULT_MAX_UPLOAD_BYTES, validate_pdf


class PdfTextExtractor:
    """Validates a PDF, then tries the primary adapter and the fallback in turn.

    The fallback only runs once the primary has failed, either by raising or
    by producing whitespace-only text.
    """

    def __init__(
        self,
        primary: BasePdfExtractor,
        fallback: BasePdfExtractor,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._max_upload_bytes = max_upload_bytes

    def extract(self, pdf_bytes: bytes, filename: str, byte_size: int) -> ExtractionResult:
        """Extract raw text from a PDF upload.

        Raises:
            InvalidDocumentError: if the upload fails validation.
            PdfExtractionFailedError: if both strategies failed.
        """
        validate_pdf(pdf_bytes, filename, byte_size, self._max_upload_bytes)
        Log.info(f"Processing PDF {filename} ({byte_size} bytes)")

        try:
            result = self._run(self._primary, pdf_bytes, "No text found in PDF")
            Log.info(
                f"Extracted text from {filename} using primary method: "
                f"{result.page_count} pages, {len(result.text)} chars"
            )
            return ExtractionResult(
                raw_text=result.text,
                method=ExtractionMethod.PRIMARY,
                page_count=result.page_count,
            )
        except PdfExtractionError as primary_exc:
            primary_error = str(primary_exc)
            Log.warning(f"Primary parsing method failed for {filename}: {primary_error}")

        try:
            result = self._run(
                self._fallback, pdf_bytes, "No text extracted using token-stream method"
            )
        except PdfExtractionError as fallback_exc:
            fallback_error = str(fallback_exc)
            Log.error(f"Fallback parsing method failed for {filename}: {fallback_error}")
            raise PdfExtractionFailedError(primary_error, fallback_error) from fallback_exc

        Log.info(
            f"Extracted text from {filename} using fallback method: "
            f"{result.page_count} pages, {len(result.text)} chars"
        )
        return ExtractionResult(
            raw_text=result.text,
            method=ExtractionMethod.FALLBACK,
            page_count=result.page_count,
        )

    @staticmethod
    def _run(adapter: BasePdfExtractor, pdf_bytes: bytes, empty_message: str) -> PdfText:
        try:
            result = adapter.extract(pdf_bytes)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"{adapter.name} extraction failed: {exc}") from exc
        if result is None or not result.text.strip():
            raise PdfExtractionError(empty_message)
        return result
