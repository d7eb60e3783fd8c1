"""
analysis/ - Hydrostatic curves and benchmark comparison.
"""

from .curves import (
    Curve,
    CurveGenerator,
    CURVE_SPECS,
    KINDS_REQUIRING_KG,
    DRAFT_LABEL,
    draft_range,
)
from .benchmarks import (
    ReferenceValues,
    MetricResult,
    barge_reference,
    wigley_reference,
    compare,
    all_passed,
    DEFAULT_TOLERANCE,
)

__all__ = [
    "Curve",
    "CurveGenerator",
    "CURVE_SPECS",
    "KINDS_REQUIRING_KG",
    "DRAFT_LABEL",
    "draft_range",
    "ReferenceValues",
    "MetricResult",
    "barge_reference",
    "wigley_reference",
    "compare",
    "all_passed",
    "DEFAULT_TOLERANCE",
]
