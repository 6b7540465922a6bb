"""Policies that merge per-document metrics into one aggregated set.

The default policy lets the first document to finish processing win each
field. Documents run concurrently, so when two documents report different
values for the same field the outcome depends on completion order and is
not deterministic. Use ``SubmissionOrderMerge`` when a stable result is
required.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import ClassVar

from app.metrics.models import MetricSet
from app.processor.exceptions import UnknownMergeStrategyError
from app.processor.models import DocumentReport


@dataclass(frozen=True)
class CompletedReport:
    """A processed document tagged with its position in the submission."""

    submission_index: int
    report: DocumentReport


def merge_first_present(metric_sets: Iterable[MetricSet]) -> MetricSet:
    """Merge metric sets so that the first present value of each field wins.

    Blood pressure is taken as a pair from one set.
    """
    merged: dict[str, int | float | None] = MetricSet().to_dict()
    for metrics in metric_sets:
        if merged["systolic_bp"] is None and metrics.systolic_bp is not None:
            merged["systolic_bp"] = metrics.systolic_bp
            merged["diastolic_bp"] = metrics.diastolic_bp
        for name in ("glucose", "cholesterol", "thyroid_tsh"):
            value = getattr(metrics, name)
            if merged[name] is None and value is not None:
                merged[name] = value
    return MetricSet(**merged)  # type: ignore[arg-type]


class MergeStrategy(ABC):
    """Contract for aggregation policies."""

    @abstractmethod
    def merge(self, completed: Sequence[CompletedReport]) -> MetricSet:
        """Merge reports given in completion order."""


class FirstCompletedWinsMerge(MergeStrategy):
    """First document to complete wins each field."""

    def merge(self, completed: Sequence[CompletedReport]) -> MetricSet:
        return merge_first_present(item.report.metrics for item in completed)


class SubmissionOrderMerge(MergeStrategy):
    """Earliest submitted document wins each field, regardless of timing."""

    def merge(self, completed: Sequence[CompletedReport]) -> MetricSet:
        ordered = sorted(completed, key=lambda item: item.submission_index)
        return merge_first_present(item.report.metrics for item in ordered)


class MergeStrategyFactory:
    """Creates the merge strategy named in settings."""

    STRATEGIES: ClassVar[dict[str, type[MergeStrategy]]] = {
        "first_completed": FirstCompletedWinsMerge,
        "submission_order": SubmissionOrderMerge,
    }

    @classmethod
    def create(cls, name: str) -> MergeStrategy:
        strategy_cls = cls.STRATEGIES.get(name.lower())
        if strategy_cls is None:
            raise UnknownMergeStrategyError(
                f"Unknown merge strategy '{name}'. Choose from: {list(cls.STRATEGIES)}"
            )
        return strategy_cls()
