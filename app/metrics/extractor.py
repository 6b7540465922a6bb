from collections.abc import Iterable, Sequence

from app.logging.logger import Log
from app.metrics.models import MetricMatch, MetricSet
from app.metrics.patterns import METRIC_FAMILIES, MetricFamily


class FamilyExtractor:
    """Finds the first matching pattern of one metric family."""

    def __init__(self, family: MetricFamily) -> None:
        self._family = family

    @property
    def family(self) -> MetricFamily:
        return self._family

    def extract(self, text: str) -> MetricMatch | None:
        field_count = len(self._family.fields)
        for index, pattern in enumerate(self._family.patterns):
            match = pattern.search(text)
            if match is None:
                continue
            values = {
                name: self._family.value_type(match.group(position))
                for position, name in enumerate(self._family.fields, start=1)
            }
            unit = match.group(field_count + 1) if pattern.groups > field_count else ""
            return MetricMatch(
                family=self._family.name,
                values=values,
                unit=unit,
                pattern_index=index,
            )
        return None


class MetricExtractor:
    """Scans raw report text for every metric family independently.

    Never raises: a family whose extractor fails is logged and left unset.
    """

    def __init__(self, families: Iterable[MetricFamily] = METRIC_FAMILIES) -> None:
        self._extractors: Sequence[FamilyExtractor] = [
            FamilyExtractor(family) for family in families
        ]

    def extract(self, text: str) -> MetricSet:
        values: dict[str, int | float] = {}
        for match in self.extract_matches(text):
            values.update(match.values)
        return MetricSet(**values)  # type: ignore[arg-type]

    def extract_matches(self, text: str) -> list[MetricMatch]:
        matches: list[MetricMatch] = []
        for extractor in self._extractors:
            try:
                match = extractor.extract(text or "")
            except Exception as exc:
                Log.warning(f"Metric family '{extractor.family.name}' extraction failed: {exc}")
                continue
            if match is not None:
                Log.debug(
                    f"Matched {match.family} with pattern {match.pattern_index}: "
                    f"{match.values} {match.unit}".rstrip()
                )
                matches.append(match)
        return matches
