"""
contracts/payloads.py - Boundary payload models

Pydantic models for data handed to the engine by external collaborators
(geometry management, loadcase management, vessel metadata, API layers).
Payloads check shape and field ranges; structural geometry checks stay in
GeometryValidator so every geometry problem is reported together.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from hydrocore.analysis.curves import Curve, CurveGenerator
from hydrocore.core.constants import (
    SEAWATER_DENSITY_KG_M3,
    DEFAULT_CURVE_POINTS,
    DEFAULT_MAX_ITERATIONS,
    MIN_CURVE_POINTS,
)
from hydrocore.core.enums import CurveKind
from hydrocore.geometry.model import (
    HullGeometry,
    LoadingCondition,
    PrincipalDimensions,
    Station,
    Waterline,
)
from hydrocore.physics.hydrostatics import HydrostaticCalculator
from hydrocore.stability.trim import TrimResult, TrimSolver


# =============================================================================
# Geometry
# =============================================================================


class StationPayload(BaseModel):
    index: int = Field(..., description="Station identifier")
    x: float = Field(..., description="Longitudinal position (m)")


class WaterlinePayload(BaseModel):
    index: int = Field(..., description="Waterline identifier")
    z: float = Field(..., description="Height above baseline (m)")


class OffsetPayload(BaseModel):
    station_index: int
    waterline_index: int
    y: float = Field(..., description="Half-breadth (m)")


class GeometryPayload(BaseModel):
    """Offset table as received from a geometry-management collaborator."""

    name: str = ""
    stations: List[StationPayload] = Field(default_factory=list)
    waterlines: List[WaterlinePayload] = Field(default_factory=list)
    offsets: List[OffsetPayload] = Field(default_factory=list)

    def to_model(self) -> HullGeometry:
        # Later duplicates of an offset cell replace earlier ones
        return HullGeometry(
            name=self.name,
            stations=tuple(Station(index=s.index, x=s.x) for s in self.stations),
            waterlines=tuple(Waterline(index=w.index, z=w.z) for w in self.waterlines),
            offsets={(o.station_index, o.waterline_index): o.y for o in self.offsets},
        )


# =============================================================================
# Loading condition / vessel dimensions
# =============================================================================


class LoadingConditionPayload(BaseModel):
    name: str = ""
    rho: float = Field(default=SEAWATER_DENSITY_KG_M3, gt=0, description="Fluid density (kg/m³)")
    kg: Optional[float] = Field(None, description="Vertical centre of gravity (m)")
    lcg: Optional[float] = Field(None, description="Longitudinal centre of gravity (m)")

    def to_model(self) -> LoadingCondition:
        return LoadingCondition(rho=self.rho, kg=self.kg, lcg=self.lcg, name=self.name)


class PrincipalDimensionsPayload(BaseModel):
    lpp: float = Field(..., gt=0, description="Length between perpendiculars (m)")
    beam: float = Field(..., gt=0, description="Moulded beam (m)")
    design_draft: Optional[float] = Field(None, gt=0, description="Design draft (m)")

    def to_model(self) -> PrincipalDimensions:
        return PrincipalDimensions(lpp=self.lpp, beam=self.beam, design_draft=self.design_draft)


# =============================================================================
# Requests
# =============================================================================


@dataclass(frozen=True)
class CurveRequest:
    geometry: HullGeometry
    loadcase: LoadingCondition
    dimensions: Optional[PrincipalDimensions]
    kinds: Tuple[CurveKind, ...]
    draft_min: float
    draft_max: float
    n_points: int
    max_workers: Optional[int] = None

    def execute(self) -> List[Curve]:
        generator = CurveGenerator(calculator=HydrostaticCalculator(dimensions=self.dimensions))
        return generator.generate(
            self.geometry,
            self.loadcase,
            self.kinds,
            self.draft_min,
            self.draft_max,
            self.n_points,
            max_workers=self.max_workers,
        )


@dataclass(frozen=True)
class TrimRequest:
    geometry: HullGeometry
    loadcase: LoadingCondition
    dimensions: Optional[PrincipalDimensions]
    target_displacement: float
    max_iterations: int
    tolerance: Optional[float] = None
    initial_draft: Optional[float] = None

    def execute(self) -> TrimResult:
        solver = TrimSolver(calculator=HydrostaticCalculator(dimensions=self.dimensions))
        return solver.solve(
            self.geometry,
            self.loadcase,
            self.target_displacement,
            max_iterations=self.max_iterations,
            tolerance=self.tolerance,
            initial_draft=self.initial_draft,
        )


class CurveRequestPayload(BaseModel):
    """Request for hydrostatic (and Bonjean) curves over a draft range."""

    geometry: GeometryPayload
    loadcase: LoadingConditionPayload = Field(default_factory=LoadingConditionPayload)
    dimensions: Optional[PrincipalDimensionsPayload] = None
    kinds: List[CurveKind] = Field(..., min_length=1)
    draft_min: float
    draft_max: float
    n_points: int = Field(default=DEFAULT_CURVE_POINTS, ge=MIN_CURVE_POINTS)
    max_workers: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def check_draft_range(self) -> "CurveRequestPayload":
        if self.draft_max <= self.draft_min:
            raise ValueError(
                f"draft_max ({self.draft_max}) must be greater than draft_min ({self.draft_min})"
            )
        return self

    def to_model(self) -> CurveRequest:
        return CurveRequest(
            geometry=self.geometry.to_model(),
            loadcase=self.loadcase.to_model(),
            dimensions=self.dimensions.to_model() if self.dimensions else None,
            kinds=tuple(self.kinds),
            draft_min=self.draft_min,
            draft_max=self.draft_max,
            n_points=self.n_points,
            max_workers=self.max_workers,
        )


class TrimRequestPayload(BaseModel):
    """Request for the free-floating draft and trim at a target displacement."""

    geometry: GeometryPayload
    loadcase: LoadingConditionPayload = Field(default_factory=LoadingConditionPayload)
    dimensions: Optional[PrincipalDimensionsPayload] = None
    target_displacement: float = Field(..., gt=0, description="Target displacement (kg)")
    max_iterations: int = Field(default=DEFAULT_MAX_ITERATIONS, ge=1)
    tolerance: Optional[float] = Field(None, gt=0, description="Displacement tolerance (kg)")
    initial_draft: Optional[float] = None

    @field_validator("initial_draft")
    @classmethod
    def validate_initial_draft(cls, v):
        if v is not None and v < 0:
            raise ValueError(f"initial_draft cannot be negative: {v}")
        return v

    def to_model(self) -> TrimRequest:
        return TrimRequest(
            geometry=self.geometry.to_model(),
            loadcase=self.loadcase.to_model(),
            dimensions=self.dimensions.to_model() if self.dimensions else None,
            target_displacement=self.target_displacement,
            max_iterations=self.max_iterations,
            tolerance=self.tolerance,
            initial_draft=self.initial_draft,
        )
