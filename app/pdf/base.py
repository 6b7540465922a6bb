from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PdfText:
    """Text produced by one PDF adapter."""

    text: str
    page_count: int | None = None


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    name: str = ""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> PdfText:
        """Extract plain text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            PdfText with the text as read (possibly blank) and page count.

        Raises:
            PdfExtractionError: if the parser fails for any reason.
        """
