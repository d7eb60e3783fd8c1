"""
hydrocore Physical Constants and Engine Defaults

Constants used throughout the hydrostatics engine.
"""

# ==================== Physical Constants ====================

# Water properties
SEAWATER_DENSITY_KG_M3 = 1025.0  # kg/m³ at 15°C, 35 ppt salinity
FRESHWATER_DENSITY_KG_M3 = 1000.0  # kg/m³ at 15°C

# Gravitational acceleration
GRAVITY_M_S2 = 9.81  # m/s²

# Unit conversions - Mass
KG_PER_TONNE = 1000.0
CM_PER_M = 100.0

# ==================== Geometry Requirements ====================

MIN_STATIONS = 3
MIN_WATERLINES = 3

# Principal dimension sanity limits
MAX_LPP_M = 500.0

# ==================== Numerical Defaults ====================

# Equal-spacing check for Simpson's rule (1mm)
SPACING_TOLERANCE_M = 0.001

# Draft considered coincident with a waterline
INTERPOLATION_TOLERANCE_M = 0.0001

# Curve generation
DEFAULT_CURVE_POINTS = 100
MIN_CURVE_POINTS = 2

# Trim solver
DEFAULT_MAX_ITERATIONS = 20
DEFAULT_RELATIVE_TOLERANCE = 1e-6

# ==================== System Configuration ====================

HYDROCORE_VERSION = "1.0.0"
