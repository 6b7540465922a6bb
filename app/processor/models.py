from dataclasses import dataclass, field
from datetime import datetime

from app.documents.exceptions import ErrorKind
from app.documents.models import ExtractionResult
from app.metrics.models import MetricSet


@dataclass(frozen=True)
class DocumentReport:
    """Outcome of one successfully processed document."""

    document_name: str
    extraction: ExtractionResult
    metrics: MetricSet
    uploaded_at: datetime
    analyzed_at: datetime


@dataclass(frozen=True)
class DocumentFailure:
    """Outcome of one document that could not be processed."""

    document_name: str
    kind: ErrorKind
    message: str


@dataclass
class BatchResult:
    """Everything one analysis request produced."""

    aggregated: MetricSet = field(default_factory=MetricSet)
    reports: list[DocumentReport] = field(default_factory=list)
    failures: list[DocumentFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """False only when documents were submitted and every one of them failed."""
        return bool(self.reports) or not self.failures
