from dataclasses import asdict, dataclass, fields


@dataclass(frozen=True)
class MetricSet:
    """Clinical metrics extracted from one document or merged across a batch.

    Systolic and diastolic pressure come from a single match, so they are
    either both set or both unset.
    """

    systolic_bp: int | None = None
    diastolic_bp: int | None = None
    glucose: float | None = None
    cholesterol: float | None = None
    thyroid_tsh: float | None = None

    def __post_init__(self) -> None:
        if (self.systolic_bp is None) != (self.diastolic_bp is None):
            raise ValueError("systolic_bp and diastolic_bp must be set together")

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, int | float | None]:
        return asdict(self)


@dataclass(frozen=True)
class MetricMatch:
    """Debug record of which pattern produced a family's value."""

    family: str
    values: dict[str, int | float]
    unit: str
    pattern_index: int
