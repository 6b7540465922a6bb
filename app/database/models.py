from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.processor.models import BatchResult


@dataclass(frozen=True)
class AnalysisSubmission:
    """Everything handed to the store for one analysis request.

    ``profile`` carries user-entered metadata (age, height, weight, activity
    level) that the extraction pipeline never inspects.
    """

    user_id: str
    batch: BatchResult
    profile: dict[str, object] = field(default_factory=dict)
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: str = "pending"
