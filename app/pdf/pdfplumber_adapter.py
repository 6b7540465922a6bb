import io

import pdfplumber

from app.pdf.base import BasePdfExtractor, PdfText
from app.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads the structured text layer of every page using pdfplumber."""

    name = "pdfplumber"

    def extract(self, pdf_bytes: bytes) -> PdfText:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return PdfText(text="\n".join(pages), page_count=len(pages))
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
