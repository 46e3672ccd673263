"""Configuration management for IMU orientation estimation."""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional
import os

import numpy as np
import yaml

from .units import parse_pressure_unit, parse_temp_unit

CONFIG_ENV_VAR = "ATTITUDE_FUSION_CONFIG"

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "default.yaml"

PRECISION_DTYPES = {
    "double": np.float64,
    "single": np.float32,
}


def resolve_dtype(precision: str) -> type:
    """Map a precision name to the numpy float type it selects.

    Raises:
        ValueError: If the precision name is unknown.
    """
    try:
        return PRECISION_DTYPES[precision]
    except KeyError:
        raise ValueError(
            f"Unknown precision {precision!r}, expected one of "
            f"{sorted(PRECISION_DTYPES)}"
        ) from None


@dataclass
class FilterConfig:
    """Complementary filter configuration."""
    gyro_favoring: float = 0.98
    initial_orientation: List[float] = field(
        default_factory=lambda: [1.0, 0.0, 0.0, 0.0]
    )
    precision: str = "double"


@dataclass
class ClimateConfig:
    """Units used when reporting climate data."""
    temperature_unit: str = "celsius"
    pressure_unit: str = "kpa"


@dataclass
class SensorLimits:
    """Plausible sensor ranges; samples outside are rejected."""
    accel_range_g: float = 16.0
    gravity: float = 9.81           # m/s^2
    gravity_tolerance: float = 0.5  # m/s^2, larger deviations only warn
    gyro_range_dps: float = 2000.0


@dataclass
class StepLimits:
    """Bounds on the time step and on orientation drift."""
    min_dt_s: float = 0.001
    max_dt_s: float = 0.1
    norm_tolerance: float = 0.01
    divergence_threshold: float = 0.1


@dataclass
class OutputConfig:
    """Replay output configuration."""
    emit_every: int = 1
    include_euler: bool = True


@dataclass
class Config:
    """Complete configuration for IMU orientation estimation."""
    filter: FilterConfig = field(default_factory=FilterConfig)
    climate: ClimateConfig = field(default_factory=ClimateConfig)
    limits: SensorLimits = field(default_factory=SensorLimits)
    steps: StepLimits = field(default_factory=StepLimits)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from YAML file.

    Resolution order: explicit path, the ATTITUDE_FUSION_CONFIG environment
    variable, the packaged default file, built-in defaults.

    Args:
        config_path: Path to configuration file. If None, uses default.

    Returns:
        Configuration with every section filled in.

    Raises:
        FileNotFoundError: If the named config file doesn't exist.
        ValueError: If the file is not a mapping or names an unknown
            precision or unit.
        yaml.YAMLError: If the file is not valid YAML.
        TypeError: If a section contains an unknown key.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or None
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return Config()
        config_path = str(DEFAULT_CONFIG_PATH)

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(
            f"{config_path}: expected a mapping of sections, got {type(data).__name__}"
        )

    return _build_config(data)


def _build_config(data: dict) -> Config:
    """Build a Config from parsed YAML, one section per top-level key."""
    sections = {
        f.name: f.default_factory(**(data.get(f.name) or {}))
        for f in fields(Config)
    }
    config = Config(**sections)

    resolve_dtype(config.filter.precision)
    if len(config.filter.initial_orientation) != 4:
        raise ValueError(
            "filter.initial_orientation must have 4 components [w, x, y, z]"
        )
    parse_temp_unit(config.climate.temperature_unit)
    parse_pressure_unit(config.climate.pressure_unit)
    if config.output.emit_every < 1:
        raise ValueError("output.emit_every must be at least 1")

    return config
