"""
contracts/ - Pydantic payloads exchanged with external collaborators.
"""

from .payloads import (
    StationPayload,
    WaterlinePayload,
    OffsetPayload,
    GeometryPayload,
    LoadingConditionPayload,
    PrincipalDimensionsPayload,
    CurveRequestPayload,
    TrimRequestPayload,
    CurveRequest,
    TrimRequest,
)

__all__ = [
    "StationPayload",
    "WaterlinePayload",
    "OffsetPayload",
    "GeometryPayload",
    "LoadingConditionPayload",
    "PrincipalDimensionsPayload",
    "CurveRequestPayload",
    "TrimRequestPayload",
    "CurveRequest",
    "TrimRequest",
]
