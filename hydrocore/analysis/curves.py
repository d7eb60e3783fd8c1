"""
analysis/curves.py - Hydrostatic curves and Bonjean curves

Samples the hydrostatic calculator over an equally spaced draft range. One
evaluation per draft is shared by every requested kind. Drafts may be
evaluated on a thread pool; output order and values match the sequential
run exactly.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import math
import time

import numpy as np

from hydrocore.bootstrap.config import CurveConfig, get_config
from hydrocore.core.cancellation import CancellationToken, is_cancelled
from hydrocore.core.constants import MIN_CURVE_POINTS
from hydrocore.core.enums import CurveKind
from hydrocore.geometry.model import HullGeometry, LoadingCondition
from hydrocore.geometry.validator import require_valid
from hydrocore.physics.hydrostatics import HydrostaticCalculator, HydrostaticSample
from hydrocore.physics.sections import section_area

logger = logging.getLogger(__name__)


DRAFT_LABEL = "Draft (m)"

# kind -> (sample attribute, y label)
CURVE_SPECS: Dict[CurveKind, Tuple[str, str]] = {
    CurveKind.DISPLACEMENT: ("displacement", "Displacement (kg)"),
    CurveKind.VOLUME: ("volume", "Volume (m³)"),
    CurveKind.KB: ("kb", "KB (m)"),
    CurveKind.LCB: ("lcb", "LCB (m)"),
    CurveKind.AWP: ("awp", "Waterplane Area (m²)"),
    CurveKind.LCF: ("lcf", "LCF (m)"),
    CurveKind.BMT: ("bmt", "BMt (m)"),
    CurveKind.BML: ("bml", "BMl (m)"),
    CurveKind.KMT: ("kmt", "KMt (m)"),
    CurveKind.GMT: ("gmt", "GMt (m)"),
    CurveKind.GML: ("gml", "GMl (m)"),
    CurveKind.CB: ("cb", "Cb"),
    CurveKind.CP: ("cp", "Cp"),
    CurveKind.CM: ("cm", "Cm"),
    CurveKind.CWP: ("cwp", "Cwp"),
    CurveKind.TPC: ("tpc", "TPC (t/cm)"),
    CurveKind.MCT: ("mct", "MCT (t·m/cm)"),
}

KINDS_REQUIRING_KG = frozenset({CurveKind.GMT, CurveKind.GML})


@dataclass(frozen=True)
class Curve:
    """
    Named (draft, value) series ordered by increasing draft.

    A value is None where the quantity is undefined at that draft.
    """
    kind: CurveKind
    x_label: str
    y_label: str
    points: Tuple[Tuple[float, Optional[float]], ...]
    station_index: Optional[int] = None  # Bonjean curves only
    station_x: Optional[float] = None
    complete: bool = True  # False when generation was cancelled

    def __len__(self) -> int:
        return len(self.points)

    @property
    def xs(self) -> Tuple[float, ...]:
        return tuple(p[0] for p in self.points)

    @property
    def ys(self) -> Tuple[Optional[float], ...]:
        return tuple(p[1] for p in self.points)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "kind": self.kind.value,
            "x_label": self.x_label,
            "y_label": self.y_label,
            "points": [{"x": x, "y": y} for x, y in self.points],
            "complete": self.complete,
        }
        if self.station_index is not None:
            data["station_index"] = self.station_index
            data["station_x"] = self.station_x
        return data


def draft_range(draft_min: float, draft_max: float, n_points: int) -> List[float]:
    """
    n_points equally spaced drafts, both ends included.

    Raises:
        ValueError: n_points < 2, non-finite bounds or draft_max <= draft_min
    """
    if n_points < MIN_CURVE_POINTS:
        raise ValueError(f"n_points must be at least {MIN_CURVE_POINTS}, got {n_points}")
    if not (math.isfinite(draft_min) and math.isfinite(draft_max)):
        raise ValueError(f"Draft range must be finite: [{draft_min}, {draft_max}]")
    if draft_max <= draft_min:
        raise ValueError(f"draft_max ({draft_max}) must be greater than draft_min ({draft_min})")
    return [float(t) for t in np.linspace(draft_min, draft_max, n_points)]


class CurveGenerator:
    """Hydrostatic curves over a draft range."""

    def __init__(
        self,
        calculator: Optional[HydrostaticCalculator] = None,
        config: Optional[CurveConfig] = None,
    ):
        self.calculator = calculator or HydrostaticCalculator()
        self.config = config or get_config().curves

    def generate(
        self,
        geometry: HullGeometry,
        loadcase: LoadingCondition,
        kinds: Iterable[CurveKind],
        draft_min: float,
        draft_max: float,
        n_points: Optional[int] = None,
        cancel: Optional[CancellationToken] = None,
        max_workers: Optional[int] = None,
    ) -> List[Curve]:
        """
        One curve per requested kind, in request order.

        BONJEAN in `kinds` appends one curve per station after the others.

        Raises:
            GeometryValidationError: if the geometry is invalid
            ValueError: bad draft range, or GMT/GML without a loadcase KG
        """
        kinds = [CurveKind(k) for k in kinds]
        n_points = n_points if n_points is not None else self.config.default_points
        drafts = draft_range(draft_min, draft_max, n_points)

        if loadcase.kg is None:
            missing = [k.value for k in kinds if k in KINDS_REQUIRING_KG]
            if missing:
                raise ValueError(f"Curve kinds {missing} require a loading condition with kg")

        require_valid(geometry, source="curve_generator")
        start_time = time.perf_counter()

        scalar_kinds = [k for k in kinds if k != CurveKind.BONJEAN]
        curves: List[Curve] = []
        if scalar_kinds:
            samples = self._evaluate_drafts(geometry, loadcase, drafts, cancel, max_workers)
            complete = len(samples) == len(drafts)
            for kind in scalar_kinds:
                attribute, y_label = CURVE_SPECS[kind]
                curves.append(Curve(
                    kind=kind,
                    x_label=DRAFT_LABEL,
                    y_label=y_label,
                    points=tuple((s.draft, getattr(s, attribute)) for s in samples),
                    complete=complete,
                ))

        if CurveKind.BONJEAN in kinds:
            curves.extend(self._bonjean(geometry, drafts, cancel))

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            f"Generated {len(curves)} curve(s) for '{geometry.name}' over "
            f"[{draft_min}, {draft_max}] x {n_points} in {elapsed_ms}ms"
        )
        return curves

    def bonjean(
        self,
        geometry: HullGeometry,
        draft_min: float,
        draft_max: float,
        n_points: Optional[int] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> List[Curve]:
        """Sectional area against draft, one curve per station in station order."""
        n_points = n_points if n_points is not None else self.config.default_points
        drafts = draft_range(draft_min, draft_max, n_points)
        require_valid(geometry, source="curve_generator")
        return self._bonjean(geometry, drafts, cancel)

    # ===== INTERNALS =====

    def _evaluate_drafts(
        self,
        geometry: HullGeometry,
        loadcase: LoadingCondition,
        drafts: Sequence[float],
        cancel: Optional[CancellationToken],
        max_workers: Optional[int],
    ) -> List[HydrostaticSample]:
        """Samples for the leading drafts evaluated before any cancellation."""
        workers = max_workers if max_workers is not None else self.config.max_workers

        def _one(draft: float) -> Optional[HydrostaticSample]:
            if is_cancelled(cancel):
                return None
            return self.calculator.evaluate(geometry, loadcase, draft, validate=False)

        if workers <= 1:
            samples: List[HydrostaticSample] = []
            for draft in drafts:
                sample = _one(draft)
                if sample is None:
                    break
                samples.append(sample)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(_one, drafts))
            samples = []
            for sample in results:
                if sample is None:
                    break
                samples.append(sample)

        if len(samples) < len(drafts):
            logger.info(
                f"Curve generation cancelled after {len(samples)}/{len(drafts)} drafts: "
                f"{cancel.reason if cancel is not None else ''}"
            )
        return samples

    def _bonjean(
        self,
        geometry: HullGeometry,
        drafts: Sequence[float],
        cancel: Optional[CancellationToken],
    ) -> List[Curve]:
        tolerance = self.calculator.config.interpolation_tolerance_m
        columns: List[List[Tuple[float, float]]] = [[] for _ in geometry.stations]

        for draft in drafts:
            if is_cancelled(cancel):
                break
            for column, station in zip(columns, geometry.stations):
                area = section_area(geometry, station.index, draft, tolerance).area
                column.append((draft, area))

        complete = all(len(column) == len(drafts) for column in columns)
        return [
            Curve(
                kind=CurveKind.BONJEAN,
                x_label=DRAFT_LABEL,
                y_label="Sectional Area (m²)",
                points=tuple(column),
                station_index=station.index,
                station_x=station.x,
                complete=complete,
            )
            for column, station in zip(columns, geometry.stations)
        ]
