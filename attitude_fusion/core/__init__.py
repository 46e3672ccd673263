"""Core module for IMU orientation estimation."""

from .types import (
    ImuSample,
    EulerAngles,
    ValidationResult,
)
from .exceptions import OrientationError, DegenerateAxisError, ZeroQuaternionError
from .mathutil import NEAR_ZERO, near_zero, near_equal, clamp
from .quaternion import Quaternion, QuaternionOps
from .units import TempUnit, PressureUnit
from .validation import SampleValidator, QuaternionValidator, validate_dt
from .config import Config, load_config

__all__ = [
    "ImuSample",
    "EulerAngles",
    "ValidationResult",
    "OrientationError",
    "DegenerateAxisError",
    "ZeroQuaternionError",
    "NEAR_ZERO",
    "near_zero",
    "near_equal",
    "clamp",
    "Quaternion",
    "QuaternionOps",
    "TempUnit",
    "PressureUnit",
    "SampleValidator",
    "QuaternionValidator",
    "validate_dt",
    "Config",
    "load_config",
]
