"""
hydrocore core - constants, enumerations and cancellation.
"""

from .enums import IntegrationMethod, FallbackReason, CurveKind, TrimState
from .cancellation import CancellationToken, is_cancelled

__all__ = [
    "IntegrationMethod",
    "FallbackReason",
    "CurveKind",
    "TrimState",
    "CancellationToken",
    "is_cancelled",
]
