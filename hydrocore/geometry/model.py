"""
geometry/model.py - Hull geometry and loading data structures.

Immutable snapshots handed to the engine by the caller. Offsets are kept as
the caller's (station_index, waterline_index) mapping for validation; a
validated geometry is read through a dense read-only numpy grid indexed by
station and waterline position.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import cached_property
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from hydrocore.core.constants import SEAWATER_DENSITY_KG_M3

if TYPE_CHECKING:
    from hydrocore.geometry.validator import ValidationIssue


OffsetKey = Tuple[int, int]


@dataclass(frozen=True)
class Station:
    """Longitudinal station."""

    index: int
    """Station identifier."""

    x: float
    """Longitudinal position (m from the station origin, positive forward)."""

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "x": self.x}


@dataclass(frozen=True)
class Waterline:
    """Vertical waterline."""

    index: int
    """Waterline identifier."""

    z: float
    """Vertical position (m above baseline)."""

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "z": self.z}


@dataclass(frozen=True)
class HullGeometry:
    """
    Discretized hull: half-breadth offsets on a station x waterline grid.

    Stations and waterlines are kept in caller order; after validation that
    order is strictly increasing in x and z.
    """

    stations: Tuple[Station, ...]
    waterlines: Tuple[Waterline, ...]
    offsets: Mapping[OffsetKey, float]
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "stations", tuple(self.stations))
        object.__setattr__(self, "waterlines", tuple(self.waterlines))
        object.__setattr__(self, "offsets", MappingProxyType(dict(self.offsets)))

    # === AXES ===

    @cached_property
    def xs(self) -> Tuple[float, ...]:
        """Station x positions in order."""
        return tuple(float(s.x) for s in self.stations)

    @cached_property
    def zs(self) -> Tuple[float, ...]:
        """Waterline z positions in order."""
        return tuple(float(w.z) for w in self.waterlines)

    @cached_property
    def station_positions(self) -> Mapping[int, int]:
        """Station index -> position in `stations`."""
        return MappingProxyType({s.index: pos for pos, s in enumerate(self.stations)})

    def station_position(self, station_index: int) -> int:
        """Position of a station in the grid; ValueError if unknown."""
        try:
            return self.station_positions[station_index]
        except KeyError:
            raise ValueError(f"Unknown station index: {station_index}") from None

    # === DENSE GRID ===

    @cached_property
    def grid(self) -> np.ndarray:
        """
        Half-breadths as a read-only (n_stations, n_waterlines) array.

        Requires a complete offset mapping (validated geometry).
        """
        grid = np.empty((len(self.stations), len(self.waterlines)), dtype=np.float64)
        for i, station in enumerate(self.stations):
            for j, waterline in enumerate(self.waterlines):
                grid[i, j] = self.offsets[(station.index, waterline.index)]
        grid.flags.writeable = False
        return grid

    @cached_property
    def rows(self) -> Tuple[Tuple[float, ...], ...]:
        """Grid rows as plain float tuples for the integration loops."""
        return tuple(tuple(float(y) for y in row) for row in self.grid)

    # === DERIVED DIMENSIONS ===

    @property
    def length(self) -> float:
        """Extent of the station range."""
        return self.xs[-1] - self.xs[0] if self.xs else 0.0

    @property
    def max_half_breadth(self) -> float:
        return float(self.grid.max()) if self.offsets else 0.0

    @property
    def n_points(self) -> int:
        return len(self.stations) * len(self.waterlines)

    # === SERIALIZATION ===

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "stations": [s.to_dict() for s in self.stations],
            "waterlines": [w.to_dict() for w in self.waterlines],
            "offsets": [
                {"station_index": s, "waterline_index": w, "y": y}
                for (s, w), y in self.offsets.items()
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HullGeometry":
        return cls(
            name=data.get("name", ""),
            stations=tuple(Station(index=int(s["index"]), x=float(s["x"]))
                           for s in data.get("stations", [])),
            waterlines=tuple(Waterline(index=int(w["index"]), z=float(w["z"]))
                             for w in data.get("waterlines", [])),
            offsets={
                (int(o["station_index"]), int(o["waterline_index"])): float(o["y"])
                for o in data.get("offsets", [])
            },
        )

    @classmethod
    def from_grid(
        cls,
        xs: Sequence[float],
        zs: Sequence[float],
        half_breadths: Any,
        name: str = "",
    ) -> "HullGeometry":
        """
        Build from axis positions and a dense (len(xs), len(zs)) array.

        Station and waterline indices are assigned 0..n-1.
        """
        grid = np.asarray(half_breadths, dtype=np.float64)
        if grid.shape != (len(xs), len(zs)):
            raise ValueError(
                f"Grid shape {grid.shape} does not match axes ({len(xs)}, {len(zs)})"
            )
        return cls(
            name=name,
            stations=tuple(Station(index=i, x=float(x)) for i, x in enumerate(xs)),
            waterlines=tuple(Waterline(index=j, z=float(z)) for j, z in enumerate(zs)),
            offsets={
                (i, j): float(grid[i, j])
                for i in range(len(xs))
                for j in range(len(zs))
            },
        )


@dataclass(frozen=True)
class LoadingCondition:
    """Fluid density and (optional) centre of gravity for one computation."""

    rho: float = SEAWATER_DENSITY_KG_M3
    """Fluid density (kg/m³)."""

    kg: Optional[float] = None
    """Vertical centre of gravity above baseline (m). GM is unknown without it."""

    lcg: Optional[float] = None
    """Longitudinal centre of gravity (m, station coordinates)."""

    name: str = ""

    def __post_init__(self):
        if not self.rho > 0:
            raise ValueError(f"Fluid density must be positive: {self.rho}")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "rho": self.rho, "kg": self.kg, "lcg": self.lcg}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadingCondition":
        return cls(
            rho=data.get("rho", SEAWATER_DENSITY_KG_M3),
            kg=data.get("kg"),
            lcg=data.get("lcg"),
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class PrincipalDimensions:
    """Vessel principal dimensions used to normalise form coefficients."""

    lpp: float
    """Length between perpendiculars (m)."""

    beam: float
    """Moulded beam (m)."""

    design_draft: Optional[float] = None
    """Design draft (m)."""

    def validate(self) -> List["ValidationIssue"]:
        """Positive values, beam <= lpp, draft <= beam, lpp within limit."""
        from hydrocore.geometry.validator import validate_dimensions
        return validate_dimensions(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"lpp": self.lpp, "beam": self.beam, "design_draft": self.design_draft}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrincipalDimensions":
        return cls(
            lpp=data["lpp"],
            beam=data["beam"],
            design_draft=data.get("design_draft"),
        )
