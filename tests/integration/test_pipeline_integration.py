from collections.abc import Callable

from app.documents.exceptions import ErrorKind
from app.documents.models import ExtractionMethod, SubmittedDocument
from app.metrics.extractor import MetricExtractor
from app.metrics.models import MetricSet
from app.ocr.base import BaseOcrEngine
from app.ocr.extractor import ImageTextExtractor
from app.pdf.extractor import PdfTextExtractor
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter
from app.processor.aggregator import BatchAggregator
from app.processor.merge import SubmissionOrderMerge
from app.processor.processor import DocumentProcessor

MakeDocument = Callable[..., SubmittedDocument]


class CannedOcrEngine(BaseOcrEngine):
    def open(self) -> None:
        pass

    def recognize(self, image_bytes: bytes) -> str:
        return "Thyroid Stimulating Hormone: 3.1 mIU/L\nBlood Glucose: 140 mg/dl"

    def close(self) -> None:
        pass


def _build_processor() -> DocumentProcessor:
    return DocumentProcessor(
        pdf_extractor=PdfTextExtractor(primary=PdfPlumberAdapter(), fallback=PyMuPdfAdapter()),
        image_extractor=ImageTextExtractor(engine_factory=CannedOcrEngine),
        metric_extractor=MetricExtractor(),
    )


def test_pdf_report_to_metrics(
    make_document: MakeDocument, lab_report_pdf_bytes: bytes
) -> None:
    report = _build_processor().process(make_document(content=lab_report_pdf_bytes))

    assert report.extraction.method is ExtractionMethod.PRIMARY
    assert report.metrics == MetricSet(
        systolic_bp=120, diastolic_bp=80, glucose=95.0, cholesterol=180.5, thyroid_tsh=2.5
    )


def test_metric_extraction_is_repeatable_on_extracted_text(
    make_document: MakeDocument, lab_report_pdf_bytes: bytes
) -> None:
    report = _build_processor().process(make_document(content=lab_report_pdf_bytes))
    extractor = MetricExtractor()

    assert extractor.extract(report.extraction.raw_text) == extractor.extract(
        report.extraction.raw_text
    )
    assert extractor.extract(report.extraction.raw_text) == report.metrics


def test_fallback_reads_report_when_primary_fails(
    make_document: MakeDocument, lab_report_pdf_bytes: bytes
) -> None:
    class BrokenPrimary(PdfPlumberAdapter):
        def extract(self, pdf_bytes: bytes):  # type: ignore[no-untyped-def]
            raise RuntimeError("text layer unreadable")

    processor = DocumentProcessor(
        pdf_extractor=PdfTextExtractor(primary=BrokenPrimary(), fallback=PyMuPdfAdapter()),
        image_extractor=ImageTextExtractor(engine_factory=CannedOcrEngine),
        metric_extractor=MetricExtractor(),
    )

    report = processor.process(make_document(content=lab_report_pdf_bytes))

    assert report.extraction.method is ExtractionMethod.FALLBACK
    assert report.extraction.page_count == 2
    assert report.metrics.glucose == 95.0


def test_mixed_batch(
    make_document: MakeDocument, lab_report_pdf_bytes: bytes, empty_pdf_bytes: bytes
) -> None:
    aggregator = BatchAggregator(_build_processor(), SubmissionOrderMerge(), max_workers=4)

    result = aggregator.aggregate(
        [
            make_document(content=empty_pdf_bytes, name="blank.pdf"),
            make_document(content=lab_report_pdf_bytes, name="lab.pdf"),
            make_document(content=b"\x89PNG", name="scan.png", content_type="image/png"),
            make_document(content=b"hello", name="notes.txt", content_type="text/plain"),
        ]
    )

    assert result.succeeded
    assert result.aggregated == MetricSet(
        systolic_bp=120, diastolic_bp=80, glucose=95.0, cholesterol=180.5, thyroid_tsh=2.5
    )
    assert sorted((f.document_name, f.kind) for f in result.failures) == [
        ("blank.pdf", ErrorKind.PDF_EXTRACTION_FAILED),
        ("notes.txt", ErrorKind.UNSUPPORTED_FORMAT),
    ]
