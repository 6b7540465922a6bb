import io
from collections.abc import Callable

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.documents.models import SubmittedDocument


def _render_pdf(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _render_pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _render_pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _render_pdf([[]])


@pytest.fixture()
def lab_report_pdf_bytes() -> bytes:
    """Generate a lab report PDF carrying every supported metric."""
    return _render_pdf(
        [
            ["Patient Lab Report", "Blood Pressure: 120/80 mmHg"],
            [
                "Blood Glucose: 95 mg/dl",
                "Total Cholesterol: 180.5 mg/dl",
                "TSH: 2.5 mIU/L",
            ],
        ]
    )


@pytest.fixture()
def png_bytes() -> bytes:
    """Generate a small white PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (32, 32), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def make_document() -> Callable[..., SubmittedDocument]:
    def _make(
        content: bytes = b"%PDF-1.7\nfake",
        name: str = "report.pdf",
        content_type: str = "application/pdf",
        byte_size: int | None = None,
    ) -> SubmittedDocument:
        return SubmittedDocument(
            name=name,
            content_type=content_type,
            byte_size=len(content) if byte_size is None else byte_size,
            content=content,
        )

    return _make
