"""
errors/ - Error Taxonomy

Structured error classification and the engine's exception types.
"""

from .taxonomy import (
    ErrorSeverity,
    ErrorCategory,
    ErrorCode,
    HydroError,
    HydrocoreError,
    GeometryValidationError,
    DegenerateGeometryError,
    create_validation_error,
    create_degenerate_error,
    create_convergence_error,
)

__all__ = [
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorCode",
    "HydroError",
    "HydrocoreError",
    "GeometryValidationError",
    "DegenerateGeometryError",
    "create_validation_error",
    "create_degenerate_error",
    "create_convergence_error",
]
