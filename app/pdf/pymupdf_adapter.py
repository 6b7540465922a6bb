import pymupdf

from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor, PdfText
from app.pdf.exceptions import PdfExtractionError

_WORD_TEXT_INDEX = 4


class PyMuPdfAdapter(BasePdfExtractor):
    """Rebuilds page text from the PyMuPDF word-token stream.

    Tokens of one page are joined with single spaces, pages with newlines.
    Pages are read strictly in ascending order.
    """

    name = "pymupdf"

    def extract(self, pdf_bytes: bytes) -> PdfText:
        page_number = 0
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                page_count = doc.page_count
                pages: list[str] = []
                for page in doc:
                    page_number += 1
                    words = page.get_text("words")
                    pages.append(" ".join(word[_WORD_TEXT_INDEX] for word in words))
                    Log.debug(f"Processed page {page_number}/{page_count}")
            return PdfText(text="\n".join(pages).strip(), page_count=page_count)
        except Exception as exc:
            raise PdfExtractionError(
                f"pymupdf extraction failed at page {page_number}: {exc}"
            ) from exc
