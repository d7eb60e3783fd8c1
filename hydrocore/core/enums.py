"""
hydrocore Core Enumerations

Enumeration types shared across the engine.
"""

from enum import Enum


class IntegrationMethod(str, Enum):
    """Quadrature rule used to integrate along the hull length."""
    SIMPSON = "simpson"
    TRAPEZOIDAL = "trapezoidal"


class FallbackReason(str, Enum):
    """Why the volume integration fell back from Simpson's rule."""
    NONE = "none"
    TOO_FEW_STATIONS = "too_few_stations"
    ODD_INTERVAL_COUNT = "odd_interval_count"
    IRREGULAR_SPACING = "irregular_spacing"


class CurveKind(str, Enum):
    """
    Tagged kinds of hydrostatic curve.

    Every kind except BONJEAN is sampled from a HydrostaticSample;
    BONJEAN curves are per-station sectional areas.
    """
    DISPLACEMENT = "displacement"
    VOLUME = "volume"
    KB = "kb"
    LCB = "lcb"
    AWP = "awp"
    LCF = "lcf"
    BMT = "bmt"
    BML = "bml"
    KMT = "kmt"
    GMT = "gmt"
    GML = "gml"
    CB = "cb"
    CP = "cp"
    CM = "cm"
    CWP = "cwp"
    TPC = "tpc"
    MCT = "mct"
    BONJEAN = "bonjean"


class TrimState(str, Enum):
    """Lifecycle state of a trim solve."""
    INITIAL = "initial"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITERATIONS_EXCEEDED = "max_iterations_exceeded"

    @property
    def is_terminal(self) -> bool:
        return self in (TrimState.CONVERGED, TrimState.MAX_ITERATIONS_EXCEEDED)
