"""
stability/ - Longitudinal equilibrium (draft and trim) solving.
"""

from .trim import (
    TrimResult,
    TrimProblem,
    TrimSolverState,
    TrimSolver,
)

__all__ = [
    "TrimResult",
    "TrimProblem",
    "TrimSolverState",
    "TrimSolver",
]
