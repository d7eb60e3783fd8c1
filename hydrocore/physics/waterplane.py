"""
physics/waterplane.py - Waterplane area, centre of flotation and second moments

Half-breadths are interpolated at the draft per station (same rule as the
sections) and integrated along the hull with the trapezoidal rule.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple
import logging

from hydrocore.core.constants import INTERPOLATION_TOLERANCE_M
from hydrocore.geometry.model import HullGeometry
from hydrocore.physics.integration import trapezoid_weights, integrate
from hydrocore.physics.sections import half_breadth_at

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaterplaneResult:
    """Waterplane properties at one draft."""
    area: float  # m²
    lcf: Optional[float]  # m, None when the area is zero
    i_transverse: float  # m⁴, about the centreline
    i_longitudinal: float  # m⁴, about the LCF
    half_breadths: Tuple[float, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "area": self.area,
            "lcf": self.lcf,
            "i_transverse": self.i_transverse,
            "i_longitudinal": self.i_longitudinal,
        }


def waterplane_trimmed(
    geometry: HullGeometry,
    station_drafts: Sequence[float],
    tolerance: float = INTERPOLATION_TOLERANCE_M,
) -> WaterplaneResult:
    """
    Waterplane with a local draft per station, projected on the baseline.

    Returns:
        WaterplaneResult; lcf is None and i_longitudinal 0 for a dry hull
    """
    if len(station_drafts) != len(geometry.stations):
        raise ValueError(
            f"Expected {len(geometry.stations)} station drafts, got {len(station_drafts)}"
        )

    xs = geometry.xs
    zs = geometry.zs
    ys = tuple(
        half_breadth_at(zs, row, draft, tolerance)
        for row, draft in zip(geometry.rows, station_drafts)
    )
    weights = trapezoid_weights(xs)

    area = integrate(weights, [2.0 * y for y in ys])
    i_transverse = integrate(weights, [(2.0 / 3.0) * y ** 3 for y in ys])

    if area == 0.0:
        return WaterplaneResult(
            area=0.0,
            lcf=None,
            i_transverse=i_transverse,
            i_longitudinal=0.0,
            half_breadths=ys,
        )

    lcf = integrate(weights, [2.0 * y * x for y, x in zip(ys, xs)]) / area
    i_longitudinal = integrate(weights, [2.0 * y * (x - lcf) ** 2 for y, x in zip(ys, xs)])

    return WaterplaneResult(
        area=area,
        lcf=lcf,
        i_transverse=i_transverse,
        i_longitudinal=i_longitudinal,
        half_breadths=ys,
    )


def waterplane(
    geometry: HullGeometry,
    draft: float,
    tolerance: float = INTERPOLATION_TOLERANCE_M,
) -> WaterplaneResult:
    """Waterplane at a level draft."""
    return waterplane_trimmed(geometry, [draft] * len(geometry.stations), tolerance)
