"""
hydrocore - Intact hydrostatics from hull offset tables

Displacement, centres of buoyancy, metacentric data, form coefficients,
hydrostatic/Bonjean curves and a draft/trim equilibrium solver, computed
deterministically from a station x waterline grid of half-breadths.
"""

from hydrocore.core.constants import HYDROCORE_VERSION
from hydrocore.core.enums import IntegrationMethod, FallbackReason, CurveKind, TrimState
from hydrocore.core.cancellation import CancellationToken
from hydrocore.errors import (
    HydrocoreError,
    GeometryValidationError,
    DegenerateGeometryError,
)
from hydrocore.geometry import (
    Station,
    Waterline,
    HullGeometry,
    LoadingCondition,
    PrincipalDimensions,
    ValidationIssue,
    GeometryValidator,
    require_valid,
    rectangular_barge,
    wigley_hull,
)
from hydrocore.physics import (
    HydrostaticSample,
    HydrostaticTable,
    HydrostaticCalculator,
    section_area,
    volume,
    volume_trimmed,
    waterplane,
    select_method,
)
from hydrocore.analysis import Curve, CurveGenerator
from hydrocore.stability import TrimResult, TrimSolver

__version__ = HYDROCORE_VERSION

__all__ = [
    "IntegrationMethod",
    "FallbackReason",
    "CurveKind",
    "TrimState",
    "CancellationToken",
    "HydrocoreError",
    "GeometryValidationError",
    "DegenerateGeometryError",
    "Station",
    "Waterline",
    "HullGeometry",
    "LoadingCondition",
    "PrincipalDimensions",
    "ValidationIssue",
    "GeometryValidator",
    "require_valid",
    "rectangular_barge",
    "wigley_hull",
    "HydrostaticSample",
    "HydrostaticTable",
    "HydrostaticCalculator",
    "section_area",
    "volume",
    "volume_trimmed",
    "waterplane",
    "select_method",
    "Curve",
    "CurveGenerator",
    "TrimResult",
    "TrimSolver",
]
