"""
hydrocore Test Configuration and Fixtures

Reference hulls, loading conditions and engine components shared by the
unit and integration suites.
"""

import pytest

from hydrocore.bootstrap.config import (
    CurveConfig,
    EngineConfig,
    SolverConfig,
    reset_config,
)
from hydrocore.geometry import (
    HullGeometry,
    LoadingCondition,
    PrincipalDimensions,
    rectangular_barge,
    wigley_hull,
)
from hydrocore.physics import HydrostaticCalculator


# Barge: L=100, B=20, depth 10 with a waterline every metre
BARGE_L = 100.0
BARGE_B = 20.0
BARGE_D = 10.0
BARGE_T = 5.0

# Wigley: L=100, B=10, T=6.25
WIGLEY_L = 100.0
WIGLEY_B = 10.0
WIGLEY_T = 6.25

RHO = 1025.0


@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test starts without a cached global configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def engine_config():
    return EngineConfig()


@pytest.fixture
def curve_config():
    return CurveConfig()


@pytest.fixture
def solver_config():
    return SolverConfig()


@pytest.fixture
def barge() -> HullGeometry:
    return rectangular_barge(BARGE_L, BARGE_B, BARGE_D, n_stations=21, n_waterlines=11)


@pytest.fixture
def barge_dimensions() -> PrincipalDimensions:
    return PrincipalDimensions(lpp=BARGE_L, beam=BARGE_B, design_draft=BARGE_T)


@pytest.fixture
def wigley() -> HullGeometry:
    return wigley_hull(WIGLEY_L, WIGLEY_B, WIGLEY_T, n_stations=21, n_waterlines=13)


@pytest.fixture
def deep_wigley() -> HullGeometry:
    """Wigley hull with the waterline ladder extended to 1.5T."""
    return wigley_hull(
        WIGLEY_L, WIGLEY_B, WIGLEY_T, n_stations=21, n_waterlines=19, depth=1.5 * WIGLEY_T,
    )


@pytest.fixture
def wigley_dimensions() -> PrincipalDimensions:
    return PrincipalDimensions(lpp=WIGLEY_L, beam=WIGLEY_B, design_draft=WIGLEY_T)


@pytest.fixture
def seawater() -> LoadingCondition:
    return LoadingCondition(rho=RHO, name="seawater")


@pytest.fixture
def seawater_with_kg() -> LoadingCondition:
    return LoadingCondition(rho=RHO, kg=4.0, name="seawater_kg")


@pytest.fixture
def barge_calculator(barge_dimensions, engine_config) -> HydrostaticCalculator:
    return HydrostaticCalculator(dimensions=barge_dimensions, config=engine_config)


@pytest.fixture
def wigley_calculator(wigley_dimensions, engine_config) -> HydrostaticCalculator:
    return HydrostaticCalculator(dimensions=wigley_dimensions, config=engine_config)
