from datetime import datetime, timezone

from app.config.settings import Settings
from app.documents.classifier import classify
from app.documents.exceptions import DocumentError, UnexpectedFailureError, UnsupportedFormatError
from app.documents.models import DocumentKind, ExtractionResult, SubmittedDocument
from app.logging.logger import Log
from app.metrics.extractor import MetricExtractor
from app.ocr.extractor import ImageTextExtractor
from app.ocr.factory import ImageExtractorFactory
from app.pdf.extractor import PdfTextExtractor
from app.pdf.factory import PdfExtractorFactory
from app.processor.models import DocumentReport


class DocumentProcessor:
    """Runs one document through classify -> extract -> metric extraction."""

    def __init__(
        self,
        pdf_extractor: PdfTextExtractor,
        image_extractor: ImageTextExtractor,
        metric_extractor: MetricExtractor,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._image_extractor = image_extractor
        self._metric_extractor = metric_extractor

    def process(self, document: SubmittedDocument) -> DocumentReport:
        """Process a single document.

        Raises:
            DocumentError: any failure scoped to this document. Unexpected
                exceptions are wrapped in UnexpectedFailureError.
        """
        uploaded_at = datetime.now(timezone.utc)
        try:
            extraction = self._extract(document)
        except DocumentError:
            raise
        except Exception as exc:
            raise UnexpectedFailureError(
                f"Unexpected failure processing {document.name}: {exc}"
            ) from exc

        metrics = self._metric_extractor.extract(extraction.raw_text)
        Log.info(
            f"Processed document {document.name} via {extraction.method.value}: "
            f"{metrics.to_dict()}"
        )
        return DocumentReport(
            document_name=document.name,
            extraction=extraction,
            metrics=metrics,
            uploaded_at=uploaded_at,
            analyzed_at=datetime.now(timezone.utc),
        )

    def _extract(self, document: SubmittedDocument) -> ExtractionResult:
        kind = classify(document.content_type)
        if kind is DocumentKind.PDF:
            return self._pdf_extractor.extract(
                document.content, document.name, document.byte_size
            )
        if kind is DocumentKind.IMAGE:
            return self._image_extractor.extract(document.content, document.content_type)
        raise UnsupportedFormatError(f"Unsupported file type: {document.content_type}")


def build_processor(settings: Settings) -> DocumentProcessor:
    """Build a DocumentProcessor with the configured adapters."""
    return DocumentProcessor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        image_extractor=ImageExtractorFactory.create(settings),
        metric_extractor=MetricExtractor(),
    )
