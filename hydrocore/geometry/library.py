"""
geometry/library.py - Reference hull forms

Offset grids for hulls with known analytical hydrostatics, used as
benchmarks and test fixtures.
"""

from __future__ import annotations
from typing import Optional
import logging

import numpy as np

from hydrocore.geometry.model import HullGeometry

logger = logging.getLogger(__name__)


def rectangular_barge(
    length: float,
    beam: float,
    depth: float,
    n_stations: int = 21,
    n_waterlines: int = 11,
) -> HullGeometry:
    """
    Box-shaped barge: constant half-breadth B/2 at every station and waterline.

    Stations run 0..length, waterlines 0..depth, equally spaced.
    """
    if length <= 0 or beam <= 0 or depth <= 0:
        raise ValueError(f"Barge dimensions must be positive: L={length}, B={beam}, D={depth}")

    xs = np.linspace(0.0, length, n_stations)
    zs = np.linspace(0.0, depth, n_waterlines)
    grid = np.full((n_stations, n_waterlines), beam / 2.0)

    logger.debug(f"Generated barge {length}x{beam}x{depth} on {n_stations}x{n_waterlines} grid")
    return HullGeometry.from_grid(xs, zs, grid, name=f"barge_{length:g}x{beam:g}x{depth:g}")


def wigley_hull(
    length: float,
    beam: float,
    draft: float,
    n_stations: int = 21,
    n_waterlines: int = 13,
    depth: Optional[float] = None,
) -> HullGeometry:
    """
    Wigley parabolic hull.

    y = B/2 * (1 - xi^2) * (1 - zeta^2), xi = 2x/L - 1, zeta = (T - z)/T.
    Widest at the design waterline, zero at the keel and at both ends.
    Above the design draft the section stays wall-sided at the design
    waterline breadth.

    Args:
        length: Length between perpendiculars (m)
        beam: Maximum beam at the design waterline (m)
        draft: Design draft T (m)
        n_stations: Number of equally spaced stations over [0, length]
        n_waterlines: Number of equally spaced waterlines over [0, depth]
        depth: Top of the waterline ladder (defaults to the design draft)
    """
    if length <= 0 or beam <= 0 or draft <= 0:
        raise ValueError(f"Wigley dimensions must be positive: L={length}, B={beam}, T={draft}")
    depth = draft if depth is None else depth
    if depth < draft:
        raise ValueError(f"Depth {depth} must not be below design draft {draft}")

    xs = np.linspace(0.0, length, n_stations)
    zs = np.linspace(0.0, depth, n_waterlines)

    xi = 2.0 * xs / length - 1.0
    zeta = np.clip((draft - zs) / draft, 0.0, None)

    longitudinal = 1.0 - xi ** 2
    vertical = 1.0 - zeta ** 2
    grid = (beam / 2.0) * np.outer(longitudinal, vertical)
    # Endpoints of linspace can land a hair below zero
    grid = np.clip(grid, 0.0, None)

    logger.debug(f"Generated Wigley hull {length}x{beam}x{draft} on {n_stations}x{n_waterlines} grid")
    return HullGeometry.from_grid(xs, zs, grid, name=f"wigley_{length:g}x{beam:g}x{draft:g}")
