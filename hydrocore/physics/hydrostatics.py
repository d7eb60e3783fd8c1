"""
physics/hydrostatics.py - Hydrostatic calculator

Orchestrates section, volume and waterplane integration into a full set of
hydrostatic particulars at one draft for one loading condition.

Undefined quantities (zero volume, zero draft in a coefficient denominator)
are reported per field as None and listed in `undefined_fields`; the rest of
the sample stays valid. GMt/GMl are None when the loading condition has no
KG, which is not the same as undefined.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple
import logging
import time

from hydrocore.bootstrap.config import EngineConfig, get_config
from hydrocore.core.cancellation import CancellationToken, is_cancelled
from hydrocore.core.constants import CM_PER_M, KG_PER_TONNE
from hydrocore.core.enums import IntegrationMethod, FallbackReason
from hydrocore.errors import DegenerateGeometryError
from hydrocore.geometry.model import HullGeometry, LoadingCondition, PrincipalDimensions
from hydrocore.geometry.validator import require_valid
from hydrocore.physics.sections import volume_trimmed
from hydrocore.physics.waterplane import waterplane_trimmed

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class HydrostaticSample:
    """
    Hydrostatic particulars at one draft.

    Lengths in m, areas in m², volumes in m³, displacement in kg.
    """
    draft: float  # Mean draft T
    volume: float
    displacement: float  # rho * volume

    # Centres of buoyancy
    kb: Optional[float]
    lcb: Optional[float]
    tcb: float

    # Metacentric data
    bmt: Optional[float]
    bml: Optional[float]
    kmt: Optional[float]
    kml: Optional[float]
    gmt: Optional[float]
    gml: Optional[float]

    # Waterplane
    awp: float
    lcf: Optional[float]
    iwp_transverse: float
    iwp_longitudinal: float

    # Form coefficients
    cb: Optional[float]
    cp: Optional[float]
    cm: Optional[float]
    cwp: Optional[float]

    # Trim/immersion parameters
    tpc: float  # Tonnes per cm immersion
    mct: Optional[float]  # Moment to change trim 1 cm (t-m/cm)

    midship_area: float = 0.0
    trim: float = 0.0  # draft_ap - draft_fp

    # Provenance
    integration_method: IntegrationMethod = IntegrationMethod.SIMPSON
    fallback_reason: FallbackReason = FallbackReason.NONE
    undefined_fields: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    def is_defined(self, field_name: str) -> bool:
        return getattr(self, field_name) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "draft": self.draft,
            "trim": self.trim,
            "volume": self.volume,
            "displacement": self.displacement,
            "kb": self.kb,
            "lcb": self.lcb,
            "tcb": self.tcb,
            "bmt": self.bmt,
            "bml": self.bml,
            "kmt": self.kmt,
            "kml": self.kml,
            "gmt": self.gmt,
            "gml": self.gml,
            "awp": self.awp,
            "lcf": self.lcf,
            "iwp_transverse": self.iwp_transverse,
            "iwp_longitudinal": self.iwp_longitudinal,
            "cb": self.cb,
            "cp": self.cp,
            "cm": self.cm,
            "cwp": self.cwp,
            "tpc": self.tpc,
            "mct": self.mct,
            "midship_area": self.midship_area,
            "integration_method": self.integration_method.value,
            "fallback_reason": self.fallback_reason.value,
            "undefined_fields": list(self.undefined_fields),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class HydrostaticTable:
    """Samples over a list of drafts, in request order."""
    samples: Tuple[HydrostaticSample, ...]
    requested: int
    partial: bool = False  # True when cancelled before every draft was evaluated

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[HydrostaticSample]:
        return iter(self.samples)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requested": self.requested,
            "partial": self.partial,
            "samples": [s.to_dict() for s in self.samples],
        }


# =============================================================================
# HELPERS
# =============================================================================

def _ratio(field_name: str, numerator: float, denominator: float) -> float:
    if not denominator > 0.0:
        raise DegenerateGeometryError(
            field_name, f"{field_name} undefined: denominator is {denominator}"
        )
    return numerator / denominator


def _require(field_name: str, *values: Optional[float]) -> None:
    if any(v is None for v in values):
        raise DegenerateGeometryError(
            field_name, f"{field_name} undefined: depends on an undefined quantity"
        )


def station_drafts_for_trim(
    geometry: HullGeometry,
    draft_ap: float,
    draft_fp: float,
    lpp: float,
) -> List[float]:
    """
    Local draft at every station for a straight trimmed waterline.

    The aft perpendicular is at x = 0 and the forward perpendicular at
    x = lpp; stations beyond either are extrapolated along the same line.
    """
    if not lpp > 0:
        raise ValueError(f"Lpp must be positive: {lpp}")
    slope = (draft_fp - draft_ap) / lpp
    return [draft_ap + slope * x for x in geometry.xs]


def midship_position(geometry: HullGeometry, lpp: float) -> int:
    """Position of the station nearest x = Lpp/2; ties go to the lower index."""
    target = lpp / 2.0
    xs = geometry.xs
    return min(range(len(xs)), key=lambda i: abs(xs[i] - target))


# =============================================================================
# HYDROSTATIC CALCULATOR
# =============================================================================

class HydrostaticCalculator:
    """
    Hydrostatics from a discretized hull.

    Principal dimensions normalise the form coefficients; when none are
    supplied Lpp is the station extent and B twice the largest half-breadth.
    """

    def __init__(
        self,
        dimensions: Optional[PrincipalDimensions] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.dimensions = dimensions
        self.config = config or get_config().engine

    def dimensions_for(self, geometry: HullGeometry) -> PrincipalDimensions:
        if self.dimensions is not None:
            return self.dimensions
        return PrincipalDimensions(
            lpp=geometry.length,
            beam=2.0 * geometry.max_half_breadth,
        )

    # ===== PUBLIC ENTRY POINTS =====

    def evaluate(
        self,
        geometry: HullGeometry,
        loadcase: Optional[LoadingCondition],
        draft: float,
        validate: bool = True,
    ) -> HydrostaticSample:
        """
        Hydrostatics at a level draft.

        Args:
            geometry: Hull geometry
            loadcase: Density and optional KG (default density when None)
            draft: Draft above baseline (m)
            validate: Run the geometry gate first; callers that already
                validated the same geometry pass False

        Raises:
            GeometryValidationError: if the geometry is invalid
        """
        if validate:
            require_valid(geometry, source="hydrostatic_calculator")
        drafts = [draft] * len(geometry.stations)
        return self._evaluate(geometry, self._loadcase(loadcase), drafts, draft, 0.0)

    def evaluate_trimmed(
        self,
        geometry: HullGeometry,
        loadcase: Optional[LoadingCondition],
        draft_ap: float,
        draft_fp: float,
        validate: bool = True,
        lpp: Optional[float] = None,
    ) -> HydrostaticSample:
        """
        Hydrostatics of the trimmed hull; `draft` on the sample is the mean draft.

        The waterline runs from draft_ap at x = 0 to draft_fp at x = lpp
        (Lpp of the principal dimensions unless given).
        """
        if validate:
            require_valid(geometry, source="hydrostatic_calculator")
        if lpp is None:
            lpp = self.dimensions_for(geometry).lpp
        drafts = station_drafts_for_trim(geometry, draft_ap, draft_fp, lpp)
        mean_draft = (draft_ap + draft_fp) / 2.0
        return self._evaluate(
            geometry, self._loadcase(loadcase), drafts, mean_draft, draft_ap - draft_fp,
        )

    def evaluate_table(
        self,
        geometry: HullGeometry,
        loadcase: Optional[LoadingCondition],
        drafts: Sequence[float],
        cancel: Optional[CancellationToken] = None,
    ) -> HydrostaticTable:
        """
        Samples at each draft, in order.

        Cancellation is checked between drafts; a cancelled table holds the
        samples completed so far and has partial=True.
        """
        start_time = time.perf_counter()
        require_valid(geometry, source="hydrostatic_calculator")
        loadcase = self._loadcase(loadcase)

        samples: List[HydrostaticSample] = []
        partial = False
        for draft in drafts:
            if is_cancelled(cancel):
                partial = True
                logger.info(
                    f"Hydrostatic table cancelled after {len(samples)}/{len(drafts)} drafts: "
                    f"{cancel.reason}"
                )
                break
            samples.append(self.evaluate(geometry, loadcase, draft, validate=False))

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            f"Hydrostatic table for '{geometry.name}': {len(samples)} drafts in {elapsed_ms}ms"
        )
        return HydrostaticTable(samples=tuple(samples), requested=len(drafts), partial=partial)

    # ===== CORE =====

    def _loadcase(self, loadcase: Optional[LoadingCondition]) -> LoadingCondition:
        return loadcase if loadcase is not None else LoadingCondition(rho=self.config.default_rho)

    def _evaluate(
        self,
        geometry: HullGeometry,
        loadcase: LoadingCondition,
        station_drafts: Sequence[float],
        draft: float,
        trim: float,
    ) -> HydrostaticSample:
        cfg = self.config
        dims = self.dimensions_for(geometry)
        lpp, beam = dims.lpp, dims.beam
        rho = loadcase.rho

        vol = volume_trimmed(
            geometry,
            station_drafts,
            spacing_tolerance=cfg.spacing_tolerance_m,
            interpolation_tolerance=cfg.interpolation_tolerance_m,
            prefer_simpson=cfg.prefer_simpson,
        )
        wp = waterplane_trimmed(geometry, station_drafts, cfg.interpolation_tolerance_m)

        midship_area = vol.sections[midship_position(geometry, lpp)].area
        displacement = rho * vol.volume

        undefined: List[str] = []

        def recover(field_name: str, compute: Callable[[], float]) -> Optional[float]:
            try:
                return compute()
            except DegenerateGeometryError as exc:
                undefined.append(field_name)
                logger.debug(f"At T={draft:.4f}: {exc}")
                return None

        kb = recover("kb", lambda: _ratio("kb", vol.kb_moment, vol.volume))
        lcb = recover("lcb", lambda: _ratio("lcb", vol.lcb_moment, vol.volume))
        bmt = recover("bmt", lambda: _ratio("bmt", wp.i_transverse, vol.volume))
        bml = recover("bml", lambda: _ratio("bml", wp.i_longitudinal, vol.volume))

        def _km(field_name: str, bm: Optional[float]) -> float:
            _require(field_name, kb, bm)
            return kb + bm

        kmt = recover("kmt", lambda: _km("kmt", bmt))
        kml = recover("kml", lambda: _km("kml", bml))

        gmt: Optional[float] = None
        gml: Optional[float] = None
        if loadcase.kg is not None:
            def _gm(field_name: str, km: Optional[float]) -> float:
                _require(field_name, km)
                return km - loadcase.kg

            gmt = recover("gmt", lambda: _gm("gmt", kmt))
            gml = recover("gml", lambda: _gm("gml", kml))

        lcf = wp.lcf
        if lcf is None:
            undefined.append("lcf")

        cb = recover("cb", lambda: _ratio("cb", vol.volume, lpp * beam * draft))
        cm = recover("cm", lambda: _ratio("cm", midship_area, beam * draft))
        cp = recover("cp", lambda: _ratio("cp", vol.volume, midship_area * lpp))
        cwp = recover("cwp", lambda: _ratio("cwp", wp.area, lpp * beam))

        tpc = rho * wp.area / CM_PER_M / KG_PER_TONNE

        def _mct() -> float:
            _require("mct", bml)
            return _ratio("mct", displacement / KG_PER_TONNE * bml, CM_PER_M * lpp)

        mct = recover("mct", _mct)

        warnings: List[str] = []
        top = geometry.zs[-1]
        highest = max(station_drafts)
        if highest > top + cfg.interpolation_tolerance_m:
            message = (
                f"Draft {highest:.4f} m is above the highest waterline ({top:.4f} m); "
                f"offsets are not extrapolated"
            )
            warnings.append(message)
            logger.warning(message)

        if vol.fallback_reason != FallbackReason.NONE:
            logger.debug(
                f"At T={draft:.4f}: integrated with {vol.method.value} "
                f"({vol.fallback_reason.value})"
            )

        logger.debug(
            f"Evaluated '{geometry.name}' at T={draft:.4f} trim={trim:.4f}: "
            f"V={vol.volume:.4f} m³, Awp={wp.area:.4f} m²"
        )

        return HydrostaticSample(
            draft=draft,
            volume=vol.volume,
            displacement=displacement,
            kb=kb,
            lcb=lcb,
            tcb=0.0,  # Port/starboard symmetric offsets
            bmt=bmt,
            bml=bml,
            kmt=kmt,
            kml=kml,
            gmt=gmt,
            gml=gml,
            awp=wp.area,
            lcf=lcf,
            iwp_transverse=wp.i_transverse,
            iwp_longitudinal=wp.i_longitudinal,
            cb=cb,
            cp=cp,
            cm=cm,
            cwp=cwp,
            tpc=tpc,
            mct=mct,
            midship_area=midship_area,
            trim=trim,
            integration_method=vol.method,
            fallback_reason=vol.fallback_reason,
            undefined_fields=tuple(undefined),
            warnings=tuple(warnings),
        )
