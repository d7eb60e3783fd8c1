"""
bootstrap/ - Configuration and logging setup.
"""

from .config import (
    EngineConfig,
    CurveConfig,
    SolverConfig,
    LoggingConfig,
    HydrocoreConfig,
    configure_logging,
    load_config,
    get_config,
    reset_config,
)

__all__ = [
    "EngineConfig",
    "CurveConfig",
    "SolverConfig",
    "LoggingConfig",
    "HydrocoreConfig",
    "configure_logging",
    "load_config",
    "get_config",
    "reset_config",
]
