"""Quaternion complementary filter for gyroscope/accelerometer fusion.

Gyro rates are integrated in the body frame. The accelerometer reading,
rotated into the world frame with the gyro estimate, gives an estimated
gravity direction; the filter then rotates the estimate toward the
reference gravity (0, 0, -1) by a fraction (1 - favoring) of the error angle.
Only tilt is corrected, heading drifts with the gyro.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from ..core.config import Config, resolve_dtype
from ..core.mathutil import clamp, near_zero
from ..core.quaternion import Quaternion

logger = logging.getLogger(__name__)

DEFAULT_GYRO_FAVORING = 0.98

# World +z is up, so gravity points along -z.
GRAVITY_REFERENCE = np.array([0.0, 0.0, -1.0], dtype=np.float64)


@dataclass(frozen=True)
class FilterState:
    """Checkpoint of a filter, enough to restore it exactly."""
    orientation: Quaternion
    gyro_favoring: float

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "qw": self.orientation.w,
            "qx": self.orientation.x,
            "qy": self.orientation.y,
            "qz": self.orientation.z,
            "gyro_favoring": self.gyro_favoring,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FilterState":
        return cls(
            orientation=Quaternion(
                w=data["qw"], x=data["qx"], y=data["qy"], z=data["qz"]
            ),
            gyro_favoring=float(data["gyro_favoring"]),
        )


class ComplementaryFilter:
    """Orientation estimator blending gyro integration with accelerometer tilt.

    The orientation is the rotation from the reference pose to the body
    frame. Each ``update`` is one deterministic transition; the filter keeps
    no timing of its own, so ``dt`` must come from the caller.

    Ordinary inputs never raise. Non-finite samples raise
    ``OrientationError`` (usually ``DegenerateAxisError``) instead of
    leaving NaN in the state.
    """

    def __init__(
        self,
        gyro_favoring: float = DEFAULT_GYRO_FAVORING,
        initial_orientation: Optional[Quaternion] = None,
        precision: str = "double",
    ):
        """Initialize the filter.

        Args:
            gyro_favoring: Blend weight in [0, 1], clamped. 1 ignores the
                accelerometer, 0 applies the full correction every update.
            initial_orientation: Starting orientation, normalized on entry.
                Identity if None.
            precision: "double" or "single" floating-point width.
        """
        self._precision = precision
        self._dtype = resolve_dtype(precision)
        self._gyro_favoring = self._clamp_favoring(gyro_favoring)
        if initial_orientation is None:
            self._orientation = Quaternion.identity()
        else:
            self._orientation = self._round(initial_orientation.unit())

    @classmethod
    def from_config(cls, config: Config) -> "ComplementaryFilter":
        """Create a filter from the ``filter`` configuration section."""
        cfg = config.filter
        return cls(
            gyro_favoring=cfg.gyro_favoring,
            initial_orientation=Quaternion.from_array(cfg.initial_orientation),
            precision=cfg.precision,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(gyro_favoring={self._gyro_favoring}, "
            f"orientation={self._orientation!r}, precision={self._precision!r})"
        )

    @property
    def orientation(self) -> Quaternion:
        """Current orientation estimate (unit quaternion)."""
        return self._orientation

    @property
    def gyro_favoring(self) -> float:
        return self._gyro_favoring

    @gyro_favoring.setter
    def gyro_favoring(self, favoring: float) -> None:
        self._gyro_favoring = self._clamp_favoring(favoring)

    @property
    def precision(self) -> str:
        return self._precision

    def update(
        self,
        accel: ArrayLike,
        gyro: ArrayLike,
        dt: float,
        favoring: Optional[float] = None,
    ) -> Quaternion:
        """Advance the orientation estimate by one sample.

        Args:
            accel: Accelerometer vector, any consistent unit. A near-zero
                vector skips the gravity correction.
            gyro: Angular rate in rad/s. A near-zero vector means no motion.
            dt: Elapsed time since the previous sample in seconds.
            favoring: Blend weight for this update only; the stored
                ``gyro_favoring`` when None.

        Returns:
            The new orientation.
        """
        if favoring is None:
            favoring = self._gyro_favoring

        accel_vec = np.asarray(accel, dtype=self._dtype).reshape(3)
        gyro_vec = np.asarray(gyro, dtype=self._dtype).reshape(3)

        if near_zero(gyro_vec):
            q_gyro = self._orientation
        else:
            rate = np.linalg.norm(gyro_vec)
            q_delta = Quaternion.from_axis_angle(gyro_vec / rate, dt * rate)
            q_gyro = self._orientation * q_delta

        if near_zero(accel_vec):
            self._orientation = self._round(q_gyro)
            return self._orientation

        accel_world = q_gyro.rotate(accel_vec)
        gravity_est = accel_world / np.linalg.norm(accel_world)

        axis = np.cross(gravity_est, GRAVITY_REFERENCE)
        cos_angle = np.dot(GRAVITY_REFERENCE, gravity_est) / (
            np.linalg.norm(GRAVITY_REFERENCE) * np.linalg.norm(gravity_est)
        )
        angle = float(np.arccos(clamp(cos_angle, -1.0, 1.0)))

        if near_zero(angle) or near_zero(axis):
            logger.debug(
                "Skipping gravity correction: angle=%.3g rad, axis=%s",
                angle, axis.tolist(),
            )
            self._orientation = self._round(q_gyro)
            return self._orientation

        q_correction = Quaternion.from_axis_angle(axis, (1.0 - favoring) * angle)
        self._orientation = self._round(q_correction * q_gyro)
        return self._orientation

    def update_gyro(self, gyro: ArrayLike, dt: float) -> Quaternion:
        """Integrate a gyro sample without gravity correction."""
        return self.update(np.zeros(3), gyro, dt)

    def update_accel(self, accel: ArrayLike) -> Quaternion:
        """Apply a gravity correction without integrating any rotation."""
        return self.update(accel, np.zeros(3), 0.0)

    def reset(self) -> None:
        """Return to the identity orientation; favoring is kept."""
        self._orientation = Quaternion.identity()

    def set_orientation(self, q: Quaternion) -> None:
        """Replace the orientation, normalizing it first.

        Raises:
            ZeroQuaternionError: If q has a non-finite norm.
        """
        self._orientation = self._round(q.unit())

    def set_gyro_favoring(self, favoring: float) -> None:
        self.gyro_favoring = favoring

    def snapshot(self) -> FilterState:
        """Capture the current state for later ``restore``."""
        return FilterState(
            orientation=self._orientation, gyro_favoring=self._gyro_favoring
        )

    def restore(self, state: FilterState) -> None:
        """Roll back to a state captured by ``snapshot``."""
        self.set_orientation(state.orientation)
        self.gyro_favoring = state.gyro_favoring

    def _round(self, q: Quaternion) -> Quaternion:
        """Store the orientation at the configured width."""
        if self._dtype is np.float64:
            return q
        return Quaternion.from_array(q.to_array().astype(self._dtype))

    @staticmethod
    def _clamp_favoring(favoring: float) -> float:
        clamped = float(clamp(favoring, 0.0, 1.0))
        if clamped != favoring:
            logger.warning(
                "Gyro favoring %s outside [0, 1], clamped to %s", favoring, clamped
            )
        return clamped
