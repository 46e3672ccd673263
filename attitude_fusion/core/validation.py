"""Plausibility checks run before samples reach the filter.

Checks never raise; they collect problems in a ValidationResult. Errors mean
the sample (or step, or orientation) must not be used, warnings are logged and
the value is used anyway.
"""

from typing import Optional

import numpy as np

from .config import Config
from .quaternion import Quaternion
from .types import ImuSample, ValidationResult

_AXES = ("x", "y", "z")


class SampleValidator:
    """Rejects IMU samples that are non-finite, out of range or out of order.

    Keeps the last seen timestamp, so one validator belongs to one stream.
    """

    def __init__(self, config: Config):
        self._limits = config.limits
        self._last_timestamp: Optional[float] = None

    def validate_sample(self, sample: ImuSample) -> ValidationResult:
        """Check a sample and, if it is valid, remember its timestamp.

        Returns:
            ValidationResult; ``is_valid`` is False if any error was found.
        """
        result = ValidationResult(is_valid=True)

        accel_limit = self._limits.accel_range_g * self._limits.gravity
        gyro_limit = np.deg2rad(self._limits.gyro_range_dps)

        for prefix, vec, limit in (("a", sample.acc, accel_limit),
                                   ("g", sample.gyr, gyro_limit)):
            for axis, value in zip(_AXES, vec):
                name = prefix + axis
                if not np.isfinite(value):
                    result.add_error(f"Non-finite value for {name}: {value}")
                elif abs(value) > limit:
                    result.add_error(f"{name} out of range: {value:.2f}")

        if not np.isfinite(sample.timestamp):
            result.add_error(f"Non-finite value for timestamp: {sample.timestamp}")
        elif self._last_timestamp is not None and sample.timestamp <= self._last_timestamp:
            result.add_error(
                f"Non-monotonic timestamp: {sample.timestamp:.6f}s after "
                f"{self._last_timestamp:.6f}s"
            )

        if result.is_valid:
            self._check_gravity(sample, result)
            self._last_timestamp = sample.timestamp

        return result

    def _check_gravity(self, sample: ImuSample, result: ValidationResult) -> None:
        magnitude = sample.acc_magnitude
        if magnitude == 0.0:
            result.add_warning("No accelerometer reading, gyro integration only")
        elif abs(magnitude - self._limits.gravity) > self._limits.gravity_tolerance:
            result.add_warning(
                f"Acceleration magnitude {magnitude:.2f} deviates from gravity "
                f"{self._limits.gravity:.2f}, tilt correction will be noisy"
            )

    def reset(self) -> None:
        """Forget the last timestamp, e.g. when a new recording starts."""
        self._last_timestamp = None


class QuaternionValidator:
    """Checks that the filter orientation is still a unit quaternion."""

    def __init__(self, config: Config):
        self._steps = config.steps

    def validate(self, q: Quaternion) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        if not np.all(np.isfinite(q.to_array())):
            result.add_error(f"Orientation has non-finite components: {q}")
            return result

        drift = abs(q.norm - 1.0)
        if drift > self._steps.divergence_threshold:
            result.add_error(f"Orientation diverged: norm={q.norm:.4f}")
        elif drift > self._steps.norm_tolerance:
            result.add_warning(f"Orientation norm drift: {q.norm:.6f}")

        return result


def validate_dt(dt: float, config: Config) -> ValidationResult:
    """Check the time step between two accepted samples.

    Non-finite or non-positive steps are errors. Steps outside
    ``[steps.min_dt_s, steps.max_dt_s]`` are usable and only warned about.
    """
    result = ValidationResult(is_valid=True)
    steps = config.steps

    if not np.isfinite(dt):
        result.add_error(f"Non-finite dt: {dt}")
    elif dt <= 0:
        result.add_error(f"Non-positive dt: {dt}")
    elif not steps.min_dt_s <= dt <= steps.max_dt_s:
        result.add_warning(
            f"dt {dt * 1000:.2f}ms outside "
            f"[{steps.min_dt_s * 1000:g}, {steps.max_dt_s * 1000:g}]ms"
        )

    return result
