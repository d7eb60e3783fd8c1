"""
physics/integration.py - Quadrature rules along the hull length

Composite Simpson's rule for equally spaced stations with an even number of
intervals, pairwise trapezoidal otherwise. The choice is a pure function of
the station positions so the method used is reproducible and auditable.
"""

from __future__ import annotations
from typing import Sequence, Tuple
import logging

from hydrocore.core.constants import SPACING_TOLERANCE_M
from hydrocore.core.enums import IntegrationMethod, FallbackReason

logger = logging.getLogger(__name__)


def select_method(
    xs: Sequence[float],
    spacing_tolerance: float = SPACING_TOLERANCE_M,
    prefer_simpson: bool = True,
) -> Tuple[IntegrationMethod, FallbackReason]:
    """
    Decide the longitudinal quadrature rule for a set of stations.

    Returns:
        (method, reason); reason is NONE when Simpson's rule applies or when
        trapezoidal integration was requested outright.
    """
    if not prefer_simpson:
        return IntegrationMethod.TRAPEZOIDAL, FallbackReason.NONE

    n = len(xs)
    if n < 3:
        return IntegrationMethod.TRAPEZOIDAL, FallbackReason.TOO_FEW_STATIONS
    if (n - 1) % 2 != 0:
        return IntegrationMethod.TRAPEZOIDAL, FallbackReason.ODD_INTERVAL_COUNT

    h = xs[1] - xs[0]
    for i in range(1, n - 1):
        if abs((xs[i + 1] - xs[i]) - h) > spacing_tolerance:
            return IntegrationMethod.TRAPEZOIDAL, FallbackReason.IRREGULAR_SPACING

    return IntegrationMethod.SIMPSON, FallbackReason.NONE


def trapezoid_weights(xs: Sequence[float]) -> Tuple[float, ...]:
    """Weights w such that sum(w_i * f_i) is the pairwise trapezoidal integral."""
    n = len(xs)
    if n < 2:
        return tuple(0.0 for _ in xs)

    weights = [0.0] * n
    for i in range(n - 1):
        half = (xs[i + 1] - xs[i]) / 2.0
        weights[i] += half
        weights[i + 1] += half
    return tuple(weights)


def simpson_weights(xs: Sequence[float]) -> Tuple[float, ...]:
    """
    Composite Simpson weights h/3 * [1, 4, 2, 4, ..., 2, 4, 1].

    Assumes equal spacing and an even interval count; h is the mean spacing.
    """
    n = len(xs)
    if n < 3 or (n - 1) % 2 != 0:
        raise ValueError(f"Simpson's rule needs an odd number (>= 3) of points, got {n}")

    h = (xs[-1] - xs[0]) / (n - 1)
    weights = []
    for i in range(n):
        if i == 0 or i == n - 1:
            factor = 1.0
        elif i % 2 == 1:
            factor = 4.0
        else:
            factor = 2.0
        weights.append(factor * h / 3.0)
    return tuple(weights)


def quadrature_weights(xs: Sequence[float], method: IntegrationMethod) -> Tuple[float, ...]:
    if method == IntegrationMethod.SIMPSON:
        return simpson_weights(xs)
    return trapezoid_weights(xs)


def integrate(weights: Sequence[float], values: Sequence[float]) -> float:
    """Weighted sum in fixed station order."""
    total = 0.0
    for w, f in zip(weights, values):
        total += w * f
    return total


def trapezoid(xs: Sequence[float], ys: Sequence[float]) -> float:
    return integrate(trapezoid_weights(xs), ys)


def simpson(xs: Sequence[float], ys: Sequence[float]) -> float:
    return integrate(simpson_weights(xs), ys)
