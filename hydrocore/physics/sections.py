"""
physics/sections.py - Sectional area and displaced volume

Sections are integrated vertically with trapezoidal strips up to the draft
(mirrored to both sides). Sectional areas are then integrated along the hull
with the rule chosen by integration.select_method; the longitudinal and
vertical moments use the same weights as the volume.
"""

from __future__ import annotations
from bisect import bisect_right
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple
import logging

from hydrocore.core.constants import INTERPOLATION_TOLERANCE_M, SPACING_TOLERANCE_M
from hydrocore.core.enums import IntegrationMethod, FallbackReason
from hydrocore.geometry.model import HullGeometry
from hydrocore.physics.integration import select_method, quadrature_weights, integrate

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class SectionResult:
    """Submerged area of one station."""
    area: float  # m², both sides
    centroid_z: float  # m above baseline; equals the draft when area is zero


@dataclass(frozen=True)
class VolumeResult:
    """Displaced volume and its first moments."""
    volume: float  # m³
    lcb_moment: float  # m⁴, about x = 0
    kb_moment: float  # m⁴, about z = 0
    method: IntegrationMethod
    fallback_reason: FallbackReason
    sections: Tuple[SectionResult, ...] = ()

    @property
    def lcb(self) -> Optional[float]:
        return self.lcb_moment / self.volume if self.volume != 0.0 else None

    @property
    def kb(self) -> Optional[float]:
        return self.kb_moment / self.volume if self.volume != 0.0 else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "volume": self.volume,
            "lcb_moment": self.lcb_moment,
            "kb_moment": self.kb_moment,
            "method": self.method.value,
            "fallback_reason": self.fallback_reason.value,
        }


# =============================================================================
# VERTICAL INTERPOLATION
# =============================================================================

def half_breadth_at(
    zs: Sequence[float],
    ys: Sequence[float],
    draft: float,
    tolerance: float = INTERPOLATION_TOLERANCE_M,
) -> float:
    """
    Half-breadth of one station at z = draft.

    Linear between the bracketing waterlines; zero below the lowest
    waterline; the top offset above the highest (no extrapolation).
    """
    if draft < zs[0] - tolerance:
        return 0.0
    if draft >= zs[-1] - tolerance:
        return ys[-1]

    k = bisect_right(zs, draft) - 1
    k = max(k, 0)
    if abs(draft - zs[k]) <= tolerance:
        return ys[k]
    if abs(zs[k + 1] - draft) <= tolerance:
        return ys[k + 1]
    t = (draft - zs[k]) / (zs[k + 1] - zs[k])
    return ys[k] + (ys[k + 1] - ys[k]) * t


def _section_from_offsets(
    zs: Sequence[float],
    ys: Sequence[float],
    draft: float,
    tolerance: float,
) -> SectionResult:
    if draft <= zs[0]:
        return SectionResult(area=0.0, centroid_z=draft)

    # Waterline ladder clipped at the draft
    ladder_z = []
    ladder_y = []
    for z, y in zip(zs, ys):
        if z <= draft + tolerance:
            ladder_z.append(z)
            ladder_y.append(y)
        else:
            break

    if draft - ladder_z[-1] > tolerance and len(ladder_z) < len(zs):
        ladder_z.append(draft)
        ladder_y.append(half_breadth_at(zs, ys, draft, tolerance))

    half_area = 0.0
    moment = 0.0
    for i in range(len(ladder_z) - 1):
        dz = ladder_z[i + 1] - ladder_z[i]
        strip = (ladder_y[i] + ladder_y[i + 1]) / 2.0 * dz
        half_area += strip
        moment += strip * (ladder_z[i] + ladder_z[i + 1]) / 2.0

    if half_area == 0.0:
        return SectionResult(area=0.0, centroid_z=draft)
    return SectionResult(area=2.0 * half_area, centroid_z=moment / half_area)


# =============================================================================
# SECTION INTEGRATOR
# =============================================================================

def section_area(
    geometry: HullGeometry,
    station_index: int,
    draft: float,
    tolerance: float = INTERPOLATION_TOLERANCE_M,
) -> SectionResult:
    """
    Submerged area and vertical centroid of a station up to a draft.

    Args:
        geometry: Validated hull geometry
        station_index: Station identifier (not its position)
        draft: Waterline height above baseline (m)

    Raises:
        ValueError: if the station index is unknown
    """
    position = geometry.station_position(station_index)
    return _section_from_offsets(geometry.zs, geometry.rows[position], draft, tolerance)


def section_areas(
    geometry: HullGeometry,
    station_drafts: Sequence[float],
    tolerance: float = INTERPOLATION_TOLERANCE_M,
) -> Tuple[SectionResult, ...]:
    """Sections at every station, each at its own local draft."""
    if len(station_drafts) != len(geometry.stations):
        raise ValueError(
            f"Expected {len(geometry.stations)} station drafts, got {len(station_drafts)}"
        )
    zs = geometry.zs
    return tuple(
        _section_from_offsets(zs, row, draft, tolerance)
        for row, draft in zip(geometry.rows, station_drafts)
    )


# =============================================================================
# VOLUME INTEGRATOR
# =============================================================================

def volume_trimmed(
    geometry: HullGeometry,
    station_drafts: Sequence[float],
    spacing_tolerance: float = SPACING_TOLERANCE_M,
    interpolation_tolerance: float = INTERPOLATION_TOLERANCE_M,
    prefer_simpson: bool = True,
) -> VolumeResult:
    """
    Displaced volume with a local draft per station (trimmed waterplane).

    Args:
        geometry: Validated hull geometry
        station_drafts: One draft per station, in station order
    """
    sections = section_areas(geometry, station_drafts, interpolation_tolerance)
    xs = geometry.xs

    method, reason = select_method(xs, spacing_tolerance, prefer_simpson)
    if reason != FallbackReason.NONE:
        logger.debug(f"Volume integration fell back to {method.value}: {reason.value}")
    weights = quadrature_weights(xs, method)

    areas = [s.area for s in sections]
    volume = integrate(weights, areas)
    lcb_moment = integrate(weights, [a * x for a, x in zip(areas, xs)])
    kb_moment = integrate(weights, [s.area * s.centroid_z for s in sections])

    return VolumeResult(
        volume=volume,
        lcb_moment=lcb_moment,
        kb_moment=kb_moment,
        method=method,
        fallback_reason=reason,
        sections=sections,
    )


def volume(
    geometry: HullGeometry,
    draft: float,
    spacing_tolerance: float = SPACING_TOLERANCE_M,
    interpolation_tolerance: float = INTERPOLATION_TOLERANCE_M,
    prefer_simpson: bool = True,
) -> VolumeResult:
    """Displaced volume at a level draft."""
    return volume_trimmed(
        geometry,
        [draft] * len(geometry.stations),
        spacing_tolerance=spacing_tolerance,
        interpolation_tolerance=interpolation_tolerance,
        prefer_simpson=prefer_simpson,
    )
