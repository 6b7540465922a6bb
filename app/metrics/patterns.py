"""Ordered pattern table for every metric family.

Each family lists its patterns in priority order. The first pattern that
matches wins and later patterns are not tried. Units are matched but values
are stored as written: no unit conversion happens here.
"""

import re
from dataclasses import dataclass

_FLAGS = re.IGNORECASE

_BP_LABEL = r"(?:BP|Blood\s+Pressure)\s*:?\s*"
_BP_VALUE = r"(\d{2,3})"
_DECIMAL_VALUE = r"(\d{2,3}(?:\.\d{1,2})?)"
_TSH_VALUE = r"(\d+(?:\.\d{1,3})?)"

_GLUCOSE_LABEL = r"(?:Blood\s+Glucose|Blood\s+sugar|FBS|Fasting\s+Blood\s+Sugar)\s*:?\s*"
_CHOLESTEROL_LABEL = r"(?:Total\s+Cholesterol|Cholesterol)\s*:?\s*"
_TSH_LABEL = r"(?:TSH|Thyroid\s+Stimulating\s+Hormone)\s*:?\s*"

_MG_DL = r"\s*(mg/dl)"
_MMOL_L = r"\s*(mmol/l)"
_MIU_L = r"\s*(mIU/L|[μµ]IU/ml)"
_NG_ML = r"\s*(ng/ml)"


@dataclass(frozen=True)
class MetricFamily:
    """One metric family: the fields it fills and its ordered patterns."""

    name: str
    fields: tuple[str, ...]
    value_type: type
    patterns: tuple[re.Pattern[str], ...]


BLOOD_PRESSURE = MetricFamily(
    name="blood_pressure",
    fields=("systolic_bp", "diastolic_bp"),
    value_type=int,
    patterns=(
        re.compile(_BP_LABEL + _BP_VALUE + r"\s*/\s*" + _BP_VALUE, _FLAGS),
        re.compile(_BP_LABEL + _BP_VALUE + r"\s*over\s*" + _BP_VALUE, _FLAGS),
        re.compile(_BP_LABEL + _BP_VALUE + r"\s*[-–]\s*" + _BP_VALUE, _FLAGS),
    ),
)

GLUCOSE = MetricFamily(
    name="glucose",
    fields=("glucose",),
    value_type=float,
    patterns=(
        re.compile(_GLUCOSE_LABEL + _DECIMAL_VALUE + _MG_DL, _FLAGS),
        re.compile(_GLUCOSE_LABEL + _DECIMAL_VALUE + _MMOL_L, _FLAGS),
    ),
)

CHOLESTEROL = MetricFamily(
    name="cholesterol",
    fields=("cholesterol",),
    value_type=float,
    patterns=(
        re.compile(_CHOLESTEROL_LABEL + _DECIMAL_VALUE + _MG_DL, _FLAGS),
        re.compile(_CHOLESTEROL_LABEL + _DECIMAL_VALUE + _MMOL_L, _FLAGS),
    ),
)

THYROID = MetricFamily(
    name="thyroid",
    fields=("thyroid_tsh",),
    value_type=float,
    patterns=(
        re.compile(_TSH_LABEL + _TSH_VALUE + _MIU_L, _FLAGS),
        re.compile(_TSH_LABEL + _TSH_VALUE + _NG_ML, _FLAGS),
    ),
)

METRIC_FAMILIES: tuple[MetricFamily, ...] = (
    BLOOD_PRESSURE,
    GLUCOSE,
    CHOLESTEROL,
    THYROID,
)
