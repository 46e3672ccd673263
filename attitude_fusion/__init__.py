"""Quaternion complementary filter for IMU orientation estimation."""

from .core import (
    Config,
    DegenerateAxisError,
    ImuSample,
    OrientationError,
    PressureUnit,
    Quaternion,
    TempUnit,
    ZeroQuaternionError,
    load_config,
)
from .fusion import Climate, ComplementaryFilter, FilterState, ImuNano33

__version__ = "0.1.0"

__all__ = [
    "Climate",
    "ComplementaryFilter",
    "Config",
    "DegenerateAxisError",
    "FilterState",
    "ImuNano33",
    "ImuSample",
    "OrientationError",
    "PressureUnit",
    "Quaternion",
    "TempUnit",
    "ZeroQuaternionError",
    "load_config",
]
