"""
analysis/benchmarks.py - Analytical references for hull forms

Closed-form hydrostatics of the rectangular barge and the Wigley parabolic
hull, and comparison of computed samples against them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from hydrocore.physics.hydrostatics import HydrostaticSample


DEFAULT_TOLERANCE = 0.02  # relative


@dataclass(frozen=True)
class ReferenceValues:
    """Expected hydrostatics at one draft, keyed by HydrostaticSample attribute."""
    name: str
    draft: float
    values: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class MetricResult:
    metric: str
    computed: Optional[float]
    expected: float
    relative_error: Optional[float]
    tolerance: float
    passed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "computed": self.computed,
            "expected": self.expected,
            "relative_error": self.relative_error,
            "tolerance": self.tolerance,
            "passed": self.passed,
        }


def barge_reference(length: float, beam: float, draft: float) -> ReferenceValues:
    """Box barge with stations from x = 0 to x = length (exact values)."""
    return ReferenceValues(
        name="rectangular_barge",
        draft=draft,
        values={
            "volume": length * beam * draft,
            "kb": draft / 2.0,
            "lcb": length / 2.0,
            "awp": length * beam,
            "lcf": length / 2.0,
            "bmt": beam ** 2 / (12.0 * draft),
            "bml": length ** 2 / (12.0 * draft),
            "cb": 1.0,
            "cm": 1.0,
            "cp": 1.0,
            "cwp": 1.0,
        },
    )


def wigley_reference(length: float, beam: float, draft: float) -> ReferenceValues:
    """
    Wigley hull y = B/2 (1 - xi^2)(1 - zeta^2) at its design draft.

    V = 4LBT/9, KB = 5T/8, Awp = 2LB/3, It = 4B³L/105, Il = BL³/30.
    """
    volume = 4.0 * length * beam * draft / 9.0
    return ReferenceValues(
        name="wigley",
        draft=draft,
        values={
            "volume": volume,
            "kb": 5.0 * draft / 8.0,
            "lcb": length / 2.0,
            "awp": 2.0 * length * beam / 3.0,
            "lcf": length / 2.0,
            "bmt": 9.0 * beam ** 2 / (105.0 * draft),
            "bml": 3.0 * length ** 2 / (40.0 * draft),
            "cb": 4.0 / 9.0,
            "cm": 2.0 / 3.0,
            "cp": 2.0 / 3.0,
            "cwp": 2.0 / 3.0,
        },
    )


def compare(
    sample: HydrostaticSample,
    reference: ReferenceValues,
    tolerances: Optional[Mapping[str, float]] = None,
) -> List[MetricResult]:
    """
    Relative error of each reference metric.

    Metrics missing from `tolerances` use DEFAULT_TOLERANCE. An undefined
    computed value fails. A zero expected value is compared absolutely.
    """
    tolerances = tolerances or {}
    results: List[MetricResult] = []

    for metric, expected in reference.values.items():
        tolerance = tolerances.get(metric, DEFAULT_TOLERANCE)
        computed = getattr(sample, metric)

        if computed is None:
            results.append(MetricResult(metric, None, expected, None, tolerance, False))
            continue

        if expected == 0.0:
            error = abs(computed)
        else:
            error = abs(computed - expected) / abs(expected)
        results.append(MetricResult(metric, computed, expected, error, tolerance, error <= tolerance))

    return results


def all_passed(results: List[MetricResult]) -> bool:
    return all(r.passed for r in results)
