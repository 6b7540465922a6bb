from unittest.mock import MagicMock

import pytest

from app.documents.exceptions import InvalidDocumentError, PdfExtractionFailedError
from app.documents.models import ExtractionMethod
from app.pdf.base import BasePdfExtractor, PdfText
from app.pdf.exceptions import PdfExtractionError
from app.pdf.extractor import PdfTextExtractor
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter

PDF_BYTES = b"%PDF-1.7\nfake body"


def _make_extractor() -> tuple[PdfTextExtractor, MagicMock, MagicMock]:
    primary = MagicMock(spec=BasePdfExtractor)
    primary.name = "primary"
    fallback = MagicMock(spec=BasePdfExtractor)
    fallback.name = "fallback"
    return PdfTextExtractor(primary=primary, fallback=fallback), primary, fallback


def _extract(extractor: PdfTextExtractor, payload: bytes = PDF_BYTES, name: str = "lab.pdf"):  # type: ignore[no-untyped-def]
    return extractor.extract(payload, name, len(payload))


class TestPrimaryStrategy:
    def test_returns_primary_text_without_running_fallback(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.return_value = PdfText(text="BP: 120/80", page_count=3)

        result = _extract(extractor)

        assert result.raw_text == "BP: 120/80"
        assert result.method is ExtractionMethod.PRIMARY
        assert result.page_count == 3
        primary.extract.assert_called_once_with(PDF_BYTES)
        fallback.extract.assert_not_called()

    def test_primary_text_is_returned_as_read(self) -> None:
        extractor, primary, _fallback = _make_extractor()
        primary.extract.return_value = PdfText(text="  BP: 120/80\n", page_count=1)

        result = _extract(extractor)

        assert result.raw_text == "  BP: 120/80\n"
        assert result.method is ExtractionMethod.PRIMARY


class TestFallbackStrategy:
    def test_runs_fallback_once_when_primary_is_blank(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.return_value = PdfText(text="  \n\t ", page_count=1)
        fallback.extract.return_value = PdfText(text="TSH: 2.5 mIU/L", page_count=1)

        result = _extract(extractor)

        assert result.raw_text == "TSH: 2.5 mIU/L"
        assert result.method is ExtractionMethod.FALLBACK
        assert result.page_count == 1
        fallback.extract.assert_called_once_with(PDF_BYTES)

    def test_runs_fallback_once_when_primary_raises(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.side_effect = PdfExtractionError("broken xref")
        fallback.extract.return_value = PdfText(text="recovered", page_count=2)

        result = _extract(extractor)

        assert result.method is ExtractionMethod.FALLBACK
        fallback.extract.assert_called_once()

    def test_unexpected_primary_exception_is_treated_as_failure(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.side_effect = ValueError("boom")
        fallback.extract.return_value = PdfText(text="recovered", page_count=1)

        result = _extract(extractor)

        assert result.raw_text == "recovered"

    def test_primary_runs_before_fallback(self) -> None:
        extractor, primary, fallback = _make_extractor()
        calls: list[str] = []
        primary.extract.side_effect = lambda *_: (calls.append("primary"), PdfText(""))[1]
        fallback.extract.side_effect = lambda *_: (calls.append("fallback"), PdfText("x", 1))[1]

        _extract(extractor)

        assert calls == ["primary", "fallback"]


class TestBothStrategiesFail:
    def test_error_carries_both_messages(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.side_effect = PdfExtractionError("primary exploded")
        fallback.extract.side_effect = PdfExtractionError("fallback exploded")

        with pytest.raises(PdfExtractionFailedError) as exc_info:
            _extract(extractor)

        assert exc_info.value.primary_error == "primary exploded"
        assert exc_info.value.fallback_error == "fallback exploded"
        assert str(exc_info.value) == "Failed to parse PDF with both methods"
        fallback.extract.assert_called_once()

    def test_blank_results_report_empty_text_messages(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.return_value = PdfText(text="")
        fallback.extract.return_value = PdfText(text=" ", page_count=1)

        with pytest.raises(PdfExtractionFailedError) as exc_info:
            _extract(extractor)

        assert exc_info.value.primary_error == "No text found in PDF"
        assert exc_info.value.fallback_error == "No text extracted using token-stream method"


class TestValidation:
    @pytest.mark.parametrize(
        ("payload", "name"),
        [
            (b"", "lab.pdf"),
            (PDF_BYTES, "lab.docx"),
            (b"%PDF", "lab.pdf"),
            (b"PK\x03\x04 zip archive", "lab.pdf"),
        ],
    )
    def test_invalid_upload_runs_no_strategy(self, payload: bytes, name: str) -> None:
        extractor, primary, fallback = _make_extractor()

        with pytest.raises(InvalidDocumentError):
            _extract(extractor, payload, name)

        primary.extract.assert_not_called()
        fallback.extract.assert_not_called()

    def test_oversized_upload_is_rejected(self) -> None:
        primary = MagicMock(spec=BasePdfExtractor)
        fallback = MagicMock(spec=BasePdfExtractor)
        extractor = PdfTextExtractor(primary=primary, fallback=fallback, max_upload_bytes=8)

        with pytest.raises(InvalidDocumentError, match="too large"):
            _extract(extractor)

        primary.extract.assert_not_called()


class TestRealAdapters:
    def test_extracts_generated_report(self, lab_report_pdf_bytes: bytes) -> None:
        extractor = PdfTextExtractor(primary=PdfPlumberAdapter(), fallback=PyMuPdfAdapter())

        result = _extract(extractor, lab_report_pdf_bytes)

        assert result.method is ExtractionMethod.PRIMARY
        assert result.page_count == 2
        assert "Blood Pressure: 120/80" in result.raw_text

    def test_blank_pdf_fails_both_strategies(self, empty_pdf_bytes: bytes) -> None:
        extractor = PdfTextExtractor(primary=PdfPlumberAdapter(), fallback=PyMuPdfAdapter())

        with pytest.raises(PdfExtractionFailedError):
            _extract(extractor, empty_pdf_bytes)
