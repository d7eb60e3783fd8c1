"""
bootstrap/config.py - Engine configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

from hydrocore.core.constants import (
    SEAWATER_DENSITY_KG_M3,
    SPACING_TOLERANCE_M,
    INTERPOLATION_TOLERANCE_M,
    DEFAULT_CURVE_POINTS,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_RELATIVE_TOLERANCE,
    HYDROCORE_VERSION,
)

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class EngineConfig:
    """Numerical settings for the hydrostatic integrators."""

    default_rho: float = SEAWATER_DENSITY_KG_M3
    spacing_tolerance_m: float = SPACING_TOLERANCE_M
    interpolation_tolerance_m: float = INTERPOLATION_TOLERANCE_M
    prefer_simpson: bool = True

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            default_rho=float(os.getenv("HYDROCORE_DEFAULT_RHO", str(SEAWATER_DENSITY_KG_M3))),
            spacing_tolerance_m=float(os.getenv("HYDROCORE_SPACING_TOL", str(SPACING_TOLERANCE_M))),
            interpolation_tolerance_m=float(
                os.getenv("HYDROCORE_INTERP_TOL", str(INTERPOLATION_TOLERANCE_M))
            ),
            prefer_simpson=_env_bool("HYDROCORE_PREFER_SIMPSON", "true"),
        )


@dataclass
class CurveConfig:
    """Curve generation settings."""

    default_points: int = DEFAULT_CURVE_POINTS
    max_workers: int = 1  # 1 = sequential

    @classmethod
    def from_env(cls) -> "CurveConfig":
        return cls(
            default_points=int(os.getenv("HYDROCORE_CURVE_POINTS", str(DEFAULT_CURVE_POINTS))),
            max_workers=int(os.getenv("HYDROCORE_CURVE_WORKERS", "1")),
        )


@dataclass
class SolverConfig:
    """Trim solver settings."""

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    relative_tolerance: float = DEFAULT_RELATIVE_TOLERANCE
    # Drafts are clamped to [lowest waterline, highest waterline * factor]
    max_draft_factor: float = 1.0

    @classmethod
    def from_env(cls) -> "SolverConfig":
        return cls(
            max_iterations=int(os.getenv("HYDROCORE_TRIM_MAX_ITER", str(DEFAULT_MAX_ITERATIONS))),
            relative_tolerance=float(
                os.getenv("HYDROCORE_TRIM_TOL", str(DEFAULT_RELATIVE_TOLERANCE))
            ),
            max_draft_factor=float(os.getenv("HYDROCORE_TRIM_MAX_DRAFT_FACTOR", "1.0")),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("HYDROCORE_LOG_LEVEL", "INFO"),
            format=os.getenv(
                "HYDROCORE_LOG_FORMAT",
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            ),
            log_file=os.getenv("HYDROCORE_LOG_FILE"),
        )


@dataclass
class HydrocoreConfig:
    """Root configuration."""

    environment: str = "development"
    version: str = HYDROCORE_VERSION

    engine: EngineConfig = field(default_factory=EngineConfig)
    curves: CurveConfig = field(default_factory=CurveConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "HydrocoreConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=os.getenv("HYDROCORE_ENVIRONMENT", "development"),
            engine=EngineConfig.from_env(),
            curves=CurveConfig.from_env(),
            solver=SolverConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "HydrocoreConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "HydrocoreConfig":
        """Create config from dictionary; file values override the environment."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]

        for section in ("engine", "curves", "solver", "logging"):
            if section in data:
                target = getattr(config, section)
                for key, value in data[section].items():
                    if hasattr(target, key):
                        setattr(target, key, value)
                    else:
                        logger.warning(f"Ignoring unknown config key: {section}.{key}")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "version": self.version,
            "engine": {
                "default_rho": self.engine.default_rho,
                "spacing_tolerance_m": self.engine.spacing_tolerance_m,
                "interpolation_tolerance_m": self.engine.interpolation_tolerance_m,
                "prefer_simpson": self.engine.prefer_simpson,
            },
            "curves": {
                "default_points": self.curves.default_points,
                "max_workers": self.curves.max_workers,
            },
            "solver": {
                "max_iterations": self.solver.max_iterations,
                "relative_tolerance": self.solver.relative_tolerance,
                "max_draft_factor": self.solver.max_draft_factor,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
        }


def configure_logging(config: LoggingConfig) -> None:
    """Apply logging configuration to the package logger."""
    package_logger = logging.getLogger("hydrocore")
    package_logger.setLevel(config.level.upper())

    handler: logging.Handler
    if config.log_file:
        handler = logging.FileHandler(config.log_file)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.format))

    package_logger.handlers = [handler]


# Global config instance
_config: Optional[HydrocoreConfig] = None


def load_config(filepath: str = None) -> HydrocoreConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        HydrocoreConfig instance
    """
    global _config

    if filepath:
        _config = HydrocoreConfig.from_file(filepath)
    else:
        default_paths = [
            "./hydrocore.json",
            "./config/hydrocore.json",
            os.path.expanduser("~/.hydrocore/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = HydrocoreConfig.from_file(path)
                return _config

        _config = HydrocoreConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> HydrocoreConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration (next get_config() reloads)."""
    global _config
    _config = None
