"""
geometry/ - Hull geometry model, validation and reference hulls.
"""

from .model import (
    Station,
    Waterline,
    HullGeometry,
    LoadingCondition,
    PrincipalDimensions,
)
from .validator import (
    ValidationIssue,
    GeometryValidator,
    validate_dimensions,
    require_valid,
)
from .library import rectangular_barge, wigley_hull

__all__ = [
    "Station",
    "Waterline",
    "HullGeometry",
    "LoadingCondition",
    "PrincipalDimensions",
    "ValidationIssue",
    "GeometryValidator",
    "validate_dimensions",
    "require_valid",
    "rectangular_barge",
    "wigley_hull",
]
