"""
errors/taxonomy.py - Error classification system

Structured error records plus the exception types raised by the engine.
Validation problems are collected, degenerate quantities are recovered per
field, and trim non-convergence is reported as data rather than raised.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from datetime import datetime, timezone
from enum import Enum
import uuid

if TYPE_CHECKING:
    from hydrocore.geometry.validator import ValidationIssue


class ErrorSeverity(Enum):
    """Error severity levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""
    # Geometry validation errors (1xxx)
    VALIDATION = "validation"

    # Degenerate / undefined quantities (4xxx)
    DEGENERATE = "degenerate"

    # Numerical method provenance (4xxx)
    NUMERICAL = "numerical"

    # Solver convergence (4xxx)
    CONVERGENCE = "convergence"

    # Configuration errors (6xxx)
    CONFIGURATION = "configuration"


class ErrorCode(Enum):
    """Specific error codes."""

    # Validation (1xxx)
    VAL_FAILED = 1001
    VAL_TOO_FEW_STATIONS = 1002
    VAL_TOO_FEW_WATERLINES = 1003
    VAL_NON_MONOTONIC = 1004
    VAL_DUPLICATE_INDEX = 1005
    VAL_NO_BASELINE = 1006
    VAL_MISSING_OFFSET = 1007
    VAL_NEGATIVE_OFFSET = 1008
    VAL_UNKNOWN_REFERENCE = 1009
    VAL_NON_FINITE = 1010
    VAL_DIMENSIONS = 1011

    # Numerical (4xxx)
    NUM_UNDEFINED = 4001
    NUM_FALLBACK = 4002
    NUM_NOT_CONVERGED = 4003
    NUM_OUT_OF_RANGE = 4004

    # System (6xxx)
    SYS_CONFIG = 6001


@dataclass
class HydroError:
    """Structured error representation."""

    error_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    code: ErrorCode = ErrorCode.VAL_FAILED
    category: ErrorCategory = ErrorCategory.VALIDATION
    severity: ErrorSeverity = ErrorSeverity.ERROR

    message: str = ""
    detail: str = ""

    # Context
    source: str = ""  # Component that raised
    path: Optional[str] = None  # Field name if applicable

    # Values
    actual_value: Any = None
    expected_value: Any = None

    recoverable: bool = True

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "source": self.source,
            "path": self.path,
            "recoverable": self.recoverable,
        }


# =============================================================================
# EXCEPTIONS
# =============================================================================

class HydrocoreError(Exception):
    """Base class for engine exceptions. Carries a structured HydroError."""

    def __init__(self, error: HydroError):
        super().__init__(error.message)
        self.error = error


class GeometryValidationError(HydrocoreError):
    """
    Geometry failed validation.

    Always carries every issue found, never just the first.
    """

    def __init__(self, issues: List["ValidationIssue"], source: str = "geometry_validator"):
        self.issues = list(issues)
        summary = "; ".join(issue.message for issue in self.issues[:5])
        if len(self.issues) > 5:
            summary += f"; ... ({len(self.issues) - 5} more)"
        super().__init__(create_validation_error(
            message=f"Hull geometry is invalid ({len(self.issues)} issue(s)): {summary}",
            source=source,
        ))


class DegenerateGeometryError(HydrocoreError):
    """A quantity is mathematically undefined (zero denominator)."""

    def __init__(self, field_name: str, message: str, source: str = "hydrostatics"):
        self.field_name = field_name
        super().__init__(create_degenerate_error(message, source, field_name))


# =============================================================================
# FACTORIES
# =============================================================================

def create_validation_error(
    message: str,
    source: str,
    path: str = None,
    actual: Any = None,
    expected: Any = None,
    code: ErrorCode = ErrorCode.VAL_FAILED,
) -> HydroError:
    """Factory for validation errors."""
    return HydroError(
        code=code,
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.ERROR,
        message=message,
        source=source,
        path=path,
        actual_value=actual,
        expected_value=expected,
        recoverable=False,
    )


def create_degenerate_error(
    message: str,
    source: str,
    path: str = None,
) -> HydroError:
    """Factory for undefined-quantity errors. Recovered per field."""
    return HydroError(
        code=ErrorCode.NUM_UNDEFINED,
        category=ErrorCategory.DEGENERATE,
        severity=ErrorSeverity.WARNING,
        message=message,
        source=source,
        path=path,
        recoverable=True,
    )


def create_convergence_error(
    message: str,
    source: str = "trim_solver",
    actual: Any = None,
    expected: Any = None,
) -> HydroError:
    """Factory for trim non-convergence records (reported, never raised)."""
    return HydroError(
        code=ErrorCode.NUM_NOT_CONVERGED,
        category=ErrorCategory.CONVERGENCE,
        severity=ErrorSeverity.WARNING,
        message=message,
        source=source,
        actual_value=actual,
        expected_value=expected,
        recoverable=True,
    )
