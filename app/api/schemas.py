from pydantic import BaseModel, ConfigDict, Field

from app.documents.exceptions import ErrorKind
from app.documents.models import ExtractionMethod
from app.metrics.models import MetricSet
from app.processor.models import BatchResult, DocumentFailure, DocumentReport

# Wire name of each extraction strategy in /api/parse responses.
PARSE_METHOD_NAMES: dict[ExtractionMethod, str] = {
    ExtractionMethod.PRIMARY: "primary",
    ExtractionMethod.FALLBACK: "pdfjs",
    ExtractionMethod.OCR: "ocr",
}

GENERIC_DOCUMENT_ERROR = "File may be corrupted or unreadable."
GENERIC_SUBMISSION_ERROR = "Error submitting health analysis. Please try again."

_FAILURE_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.UNSUPPORTED_FORMAT: "Unsupported file type.",
}


class ParseInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pages: int | None
    text_length: int = Field(alias="textLength")
    method: str


class ParseResponse(BaseModel):
    text: str
    info: ParseInfo


class ErrorResponse(BaseModel):
    error: str
    details: dict[str, str] | str | None = None


class MetricsPayload(BaseModel):
    bp_systolic: int | None = None
    bp_diastolic: int | None = None
    glucose: float | None = None
    cholesterol: float | None = None
    thyroid: float | None = None

    @classmethod
    def from_metrics(cls, metrics: MetricSet) -> "MetricsPayload":
        return cls(
            bp_systolic=metrics.systolic_bp,
            bp_diastolic=metrics.diastolic_bp,
            glucose=metrics.glucose,
            cholesterol=metrics.cholesterol,
            thyroid=metrics.thyroid_tsh,
        )


class DocumentPayload(BaseModel):
    file_name: str
    method: str
    pages: int | None
    text_length: int
    metrics: MetricsPayload

    @classmethod
    def from_report(cls, report: DocumentReport) -> "DocumentPayload":
        return cls(
            file_name=report.document_name,
            method=report.extraction.method.value,
            pages=report.extraction.page_count,
            text_length=len(report.extraction.raw_text),
            metrics=MetricsPayload.from_metrics(report.metrics),
        )


class FailurePayload(BaseModel):
    file_name: str
    error: str

    @classmethod
    def from_failure(cls, failure: DocumentFailure) -> "FailurePayload":
        return cls(
            file_name=failure.document_name,
            error=_FAILURE_MESSAGES.get(failure.kind, GENERIC_DOCUMENT_ERROR),
        )


class AnalysisResponse(BaseModel):
    analysis_id: int
    metrics: MetricsPayload
    documents: list[DocumentPayload]
    failures: list[FailurePayload]

    @classmethod
    def from_batch(cls, analysis_id: int, batch: BatchResult) -> "AnalysisResponse":
        return cls(
            analysis_id=analysis_id,
            metrics=MetricsPayload.from_metrics(batch.aggregated),
            documents=[DocumentPayload.from_report(r) for r in batch.reports],
            failures=[FailurePayload.from_failure(f) for f in batch.failures],
        )
