"""
stability/trim.py - Free-floating draft and trim solver

Finds the aft/forward drafts at which the hull displaces a target weight
with no unbalanced trimming moment.

Each step evaluates the trimmed hull and applies Newton-style corrections:
- mean draft by -displacement_error / (rho * Awp)
- trim by moment_error / (rho * Il / Lpp)

The iteration is a pure step function over immutable solver states:
INITIAL -> ITERATING -> {CONVERGED, MAX_ITERATIONS_EXCEEDED}.
Non-convergence is returned as data (converged=False, best estimate kept).
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional
import logging
import math
import time

from hydrocore.bootstrap.config import SolverConfig, get_config
from hydrocore.core.constants import KG_PER_TONNE
from hydrocore.core.enums import TrimState
from hydrocore.errors import HydroError, create_convergence_error
from hydrocore.geometry.model import HullGeometry, LoadingCondition
from hydrocore.geometry.validator import require_valid
from hydrocore.physics.hydrostatics import HydrostaticCalculator, HydrostaticSample

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class TrimResult:
    """Equilibrium floating position (or the best estimate reached)."""
    draft_ap: float
    draft_fp: float
    mean_draft: float
    trim: float  # draft_ap - draft_fp, positive by the stern
    trim_angle: float  # degrees
    lcf: Optional[float]
    converged: bool
    iterations: int

    mct: Optional[float] = None  # t-m/cm
    displacement: float = 0.0  # kg
    target_displacement: float = 0.0  # kg
    displacement_error: float = 0.0  # kg
    moment_error: float = 0.0  # kg-m
    state: TrimState = TrimState.INITIAL
    error: Optional[HydroError] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "draft_ap": self.draft_ap,
            "draft_fp": self.draft_fp,
            "mean_draft": self.mean_draft,
            "trim": self.trim,
            "trim_angle": self.trim_angle,
            "lcf": self.lcf,
            "converged": self.converged,
            "iterations": self.iterations,
            "mct": self.mct,
            "displacement_t": self.displacement / KG_PER_TONNE,
            "target_displacement_t": self.target_displacement / KG_PER_TONNE,
            "displacement_error": self.displacement_error,
            "moment_error": self.moment_error,
            "state": self.state.value,
            "error": self.error.to_dict() if self.error else None,
        }


# =============================================================================
# SOLVER STATE
# =============================================================================

@dataclass(frozen=True)
class TrimProblem:
    """Fixed inputs of one solve."""
    geometry: HullGeometry
    loadcase: LoadingCondition
    target_displacement: float  # kg
    lpp: float
    tolerance: float  # kg; moment tolerance is tolerance * lpp
    max_iterations: int
    min_draft: float
    max_draft: float


@dataclass(frozen=True)
class TrimSolverState:
    """Immutable snapshot between steps."""
    problem: TrimProblem
    state: TrimState
    draft_ap: float
    draft_fp: float
    iteration: int = 0

    # Evaluation of (draft_ap, draft_fp) once performed
    sample: Optional[HydrostaticSample] = None
    displacement_error: Optional[float] = None
    moment_error: Optional[float] = None

    # Best evaluated position so far
    best: Optional["TrimSolverState"] = None

    @property
    def mean_draft(self) -> float:
        return (self.draft_ap + self.draft_fp) / 2.0

    @property
    def trim(self) -> float:
        return self.draft_ap - self.draft_fp

    @property
    def score(self) -> float:
        """Normalised combined error; inf before evaluation."""
        if self.displacement_error is None or self.moment_error is None:
            return math.inf
        p = self.problem
        return (
            abs(self.displacement_error) / p.tolerance
            + abs(self.moment_error) / (p.tolerance * p.lpp)
        )


# =============================================================================
# TRIM SOLVER
# =============================================================================

class TrimSolver:
    """Newton-Raphson draft/trim solver over the hydrostatic calculator."""

    def __init__(
        self,
        calculator: Optional[HydrostaticCalculator] = None,
        config: Optional[SolverConfig] = None,
    ):
        self.calculator = calculator or HydrostaticCalculator()
        self.config = config or get_config().solver

    # ===== SETUP =====

    def initial_state(
        self,
        geometry: HullGeometry,
        loadcase: LoadingCondition,
        target_displacement: float,
        lpp: Optional[float] = None,
        max_iterations: Optional[int] = None,
        tolerance: Optional[float] = None,
        initial_draft: Optional[float] = None,
    ) -> TrimSolverState:
        """
        Build the INITIAL state.

        Starts level at `initial_draft`, else the design draft of the
        calculator's principal dimensions, else mid-height of the waterlines.

        Raises:
            ValueError: non-positive target, Lpp, tolerance or iteration budget
        """
        if not target_displacement > 0:
            raise ValueError(f"Target displacement must be positive: {target_displacement}")

        dims = self.calculator.dimensions_for(geometry)
        lpp = lpp if lpp is not None else dims.lpp
        if not lpp > 0:
            raise ValueError(f"Lpp must be positive: {lpp}")

        max_iterations = max_iterations if max_iterations is not None else self.config.max_iterations
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

        if tolerance is None:
            tolerance = self.config.relative_tolerance * target_displacement
        if not tolerance > 0:
            raise ValueError(f"Tolerance must be positive: {tolerance}")

        zs = geometry.zs
        min_draft = zs[0]
        max_draft = zs[-1] * self.config.max_draft_factor

        if initial_draft is None:
            initial_draft = dims.design_draft
        if initial_draft is None:
            initial_draft = (zs[0] + zs[-1]) / 2.0
        initial_draft = min(max(initial_draft, min_draft), max_draft)

        problem = TrimProblem(
            geometry=geometry,
            loadcase=loadcase,
            target_displacement=target_displacement,
            lpp=lpp,
            tolerance=tolerance,
            max_iterations=max_iterations,
            min_draft=min_draft,
            max_draft=max_draft,
        )
        return TrimSolverState(
            problem=problem,
            state=TrimState.INITIAL,
            draft_ap=initial_draft,
            draft_fp=initial_draft,
        )

    # ===== STEP =====

    def step(self, state: TrimSolverState) -> TrimSolverState:
        """
        Evaluate the current position and move to the next state.

        Terminal states are returned unchanged.
        """
        if state.state.is_terminal:
            return state

        p = state.problem
        rho = p.loadcase.rho
        sample = self.calculator.evaluate_trimmed(
            p.geometry, p.loadcase, state.draft_ap, state.draft_fp,
            validate=False, lpp=p.lpp,
        )
        iteration = state.iteration + 1

        displacement_error = sample.displacement - p.target_displacement
        reference = p.loadcase.lcg if p.loadcase.lcg is not None else sample.lcf
        if sample.lcb is None or reference is None:
            moment_error = 0.0
        else:
            moment_error = (sample.lcb - reference) * sample.displacement

        evaluated = replace(
            state,
            iteration=iteration,
            sample=sample,
            displacement_error=displacement_error,
            moment_error=moment_error,
            best=None,
        )
        best = state.best
        if best is None or evaluated.score < best.score:
            best = evaluated

        logger.debug(
            f"Trim iteration {iteration}: T_ap={state.draft_ap:.5f} T_fp={state.draft_fp:.5f} "
            f"disp_err={displacement_error:.3f} kg moment_err={moment_error:.3f} kg·m"
        )

        if (abs(displacement_error) <= p.tolerance
                and abs(moment_error) <= p.tolerance * p.lpp):
            return replace(evaluated, state=TrimState.CONVERGED, best=best)

        if iteration >= p.max_iterations:
            return replace(evaluated, state=TrimState.MAX_ITERATIONS_EXCEEDED, best=best)

        # Mean draft correction
        mean_draft = state.mean_draft
        sensitivity = rho * sample.awp
        if sensitivity > 0:
            mean_draft -= displacement_error / sensitivity
        elif displacement_error < 0:
            mean_draft = (mean_draft + p.max_draft) / 2.0
        else:
            mean_draft = (mean_draft + p.min_draft) / 2.0

        # Trim correction
        trim = state.trim
        trim_stiffness = rho * sample.iwp_longitudinal / p.lpp
        if trim_stiffness > 0:
            trim += moment_error / trim_stiffness

        draft_ap = min(max(mean_draft + trim / 2.0, p.min_draft), p.max_draft)
        draft_fp = min(max(mean_draft - trim / 2.0, p.min_draft), p.max_draft)

        return replace(
            evaluated,
            state=TrimState.ITERATING,
            draft_ap=draft_ap,
            draft_fp=draft_fp,
            sample=None,
            displacement_error=None,
            moment_error=None,
            best=best,
        )

    # ===== SOLVE =====

    def solve(
        self,
        geometry: HullGeometry,
        loadcase: LoadingCondition,
        target_displacement: float,
        lpp: Optional[float] = None,
        max_iterations: Optional[int] = None,
        tolerance: Optional[float] = None,
        initial_draft: Optional[float] = None,
    ) -> TrimResult:
        """
        Solve for drafts at which the hull floats at `target_displacement`.

        Args:
            geometry: Hull geometry
            loadcase: Density and optional LCG (LCF is the reference without one)
            target_displacement: Target displaced weight (kg)
            lpp: Length between perpendiculars (default: principal dimensions)
            max_iterations: Iteration budget (default 20)
            tolerance: Displacement tolerance in kg (default 1e-6 * target)
            initial_draft: Level starting draft

        Returns:
            TrimResult; check `converged`

        Raises:
            GeometryValidationError: if the geometry is invalid
            ValueError: for invalid arguments
        """
        start_time = time.perf_counter()
        require_valid(geometry, source="trim_solver")

        state = self.initial_state(
            geometry, loadcase, target_displacement,
            lpp=lpp,
            max_iterations=max_iterations,
            tolerance=tolerance,
            initial_draft=initial_draft,
        )
        while not state.state.is_terminal:
            state = self.step(state)

        result = self._to_result(state)
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        if result.converged:
            logger.info(
                f"Trim converged in {result.iterations} iteration(s) ({elapsed_ms}ms): "
                f"T_ap={result.draft_ap:.4f} T_fp={result.draft_fp:.4f}"
            )
        else:
            logger.warning(f"{result.error.message} ({elapsed_ms}ms)")
        return result

    def is_displacement_achievable(
        self,
        geometry: HullGeometry,
        loadcase: LoadingCondition,
        target_displacement: float,
        draft: Optional[float] = None,
    ) -> bool:
        """
        True if the target lies between zero and the displacement at `draft`.

        `draft` defaults to the deepest draft the solver may reach.
        """
        if not target_displacement > 0:
            return False
        if draft is None:
            draft = geometry.zs[-1] * self.config.max_draft_factor
        sample = self.calculator.evaluate(geometry, loadcase, draft)
        return target_displacement <= sample.displacement

    # ===== INTERNALS =====

    def _to_result(self, state: TrimSolverState) -> TrimResult:
        p = state.problem
        converged = state.state == TrimState.CONVERGED
        final = state if converged else (state.best or state)

        sample = final.sample
        error = None
        if not converged:
            error = create_convergence_error(
                message=(
                    f"Trim solver did not converge in {state.iteration} iteration(s); "
                    f"best displacement error {final.displacement_error:.3f} kg, "
                    f"moment error {final.moment_error:.3f} kg·m"
                ),
                actual=final.displacement_error,
                expected=p.tolerance,
            )

        return TrimResult(
            draft_ap=final.draft_ap,
            draft_fp=final.draft_fp,
            mean_draft=final.mean_draft,
            trim=final.trim,
            trim_angle=math.degrees(math.atan2(final.trim, p.lpp)),
            lcf=sample.lcf,
            converged=converged,
            iterations=state.iteration,
            mct=sample.mct,
            displacement=sample.displacement,
            target_displacement=p.target_displacement,
            displacement_error=final.displacement_error,
            moment_error=final.moment_error,
            state=state.state,
            error=error,
        )
