"""
hydrocore Physics - numerical integration and hydrostatics

Section/volume integration, waterplane analysis and the hydrostatic
calculator that combines them.
"""

from .integration import (
    select_method,
    trapezoid_weights,
    simpson_weights,
    quadrature_weights,
    trapezoid,
    simpson,
)

from .sections import (
    SectionResult,
    VolumeResult,
    half_breadth_at,
    section_area,
    section_areas,
    volume,
    volume_trimmed,
)

from .waterplane import (
    WaterplaneResult,
    waterplane,
    waterplane_trimmed,
)

from .hydrostatics import (
    HydrostaticSample,
    HydrostaticTable,
    HydrostaticCalculator,
    station_drafts_for_trim,
    midship_position,
)

__all__ = [
    # Quadrature
    "select_method",
    "trapezoid_weights",
    "simpson_weights",
    "quadrature_weights",
    "trapezoid",
    "simpson",
    # Sections / volume
    "SectionResult",
    "VolumeResult",
    "half_breadth_at",
    "section_area",
    "section_areas",
    "volume",
    "volume_trimmed",
    # Waterplane
    "WaterplaneResult",
    "waterplane",
    "waterplane_trimmed",
    # Calculator
    "HydrostaticSample",
    "HydrostaticTable",
    "HydrostaticCalculator",
    "station_drafts_for_trim",
    "midship_position",
]
