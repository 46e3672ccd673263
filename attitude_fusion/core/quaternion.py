"""Quaternion algebra for rotation estimation.

Convention: [w, x, y, z] where w is the scalar component and (x, y, z) the
vector part. A unit quaternion q rotates a vector v as

    v' = q * (0, v) * q^-1

and a product ``a * b`` applies ``b`` first, then ``a``.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import DegenerateAxisError, OrientationError, ZeroQuaternionError
from .types import EulerAngles


def _is_zero(w: float, x: float, y: float, z: float) -> bool:
    return w == 0 and x == 0 and y == 0 and z == 0


@dataclass(frozen=True)
class Quaternion:
    """Immutable quaternion value.

    Constructing the zero quaternion yields the identity instead, so a value
    that can never be inverted does not enter the system. Use ``strict`` to
    get an error rather than the silent repair.

    Equality is exact component-wise comparison; use
    ``mathutil.near_equal`` on ``to_array()`` for tolerant checks.
    """
    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        if _is_zero(self.w, self.x, self.y, self.z):
            object.__setattr__(self, "w", 1.0)
        for name in ("w", "x", "y", "z"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @classmethod
    def identity(cls) -> "Quaternion":
        """Return identity quaternion (no rotation)."""
        return cls(w=1.0, x=0.0, y=0.0, z=0.0)

    @classmethod
    def strict(cls, w: float, x: float, y: float, z: float) -> "Quaternion":
        """Create a quaternion, refusing the zero quaternion.

        Raises:
            ZeroQuaternionError: If all four components are zero.
        """
        if _is_zero(w, x, y, z):
            raise ZeroQuaternionError("Zero quaternion cannot represent a rotation")
        return cls(w=w, x=x, y=y, z=z)

    @classmethod
    def from_scalar_vector(cls, w: float, vec: ArrayLike) -> "Quaternion":
        """Create from a scalar part and a 3-element vector part."""
        v = np.asarray(vec, dtype=np.float64).reshape(3)
        return cls(w=w, x=v[0], y=v[1], z=v[2])

    @classmethod
    def from_axis_angle(cls, axis: ArrayLike, angle: float) -> "Quaternion":
        """Create a unit rotation quaternion.

        Args:
            axis: Rotation axis, any non-zero length.
            angle: Rotation angle in radians (right-hand rule).

        Returns:
            Unit quaternion [cos(angle/2), sin(angle/2) * axis/|axis|].

        Raises:
            DegenerateAxisError: If the axis is zero or not finite.
            OrientationError: If the angle is not finite.
        """
        axis_arr = np.asarray(axis, dtype=np.float64).reshape(3)
        axis_norm = np.linalg.norm(axis_arr)
        if not np.isfinite(axis_norm) or axis_norm == 0.0:
            raise DegenerateAxisError(
                f"Cannot rotate about axis {axis_arr.tolist()}"
            )
        if not np.isfinite(angle):
            raise OrientationError(f"Non-finite rotation angle: {angle}")

        half = 0.5 * angle
        return cls.from_scalar_vector(
            np.cos(half), axis_arr / axis_norm * np.sin(half)
        )

    @classmethod
    def from_array(cls, arr: ArrayLike) -> "Quaternion":
        """Create from array [w, x, y, z]."""
        a = np.asarray(arr, dtype=np.float64)
        return cls(w=a[0], x=a[1], y=a[2], z=a[3])

    def to_array(self) -> NDArray[np.float64]:
        """Convert to numpy array [w, x, y, z]."""
        return np.array([self.w, self.x, self.y, self.z], dtype=np.float64)

    @property
    def scalar(self) -> float:
        """Scalar part."""
        return self.w

    @property
    def vec(self) -> NDArray[np.float64]:
        """Vector part [x, y, z]."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @property
    def norm(self) -> float:
        """Euclidean norm of (w, x, y, z)."""
        return float(np.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2))

    def _checked_norm(self) -> float:
        n = self.norm
        if n == 0.0 or not np.isfinite(n):
            raise ZeroQuaternionError(f"Quaternion {self} has norm {n}")
        return n

    def conjugate(self) -> "Quaternion":
        """Negate the vector part."""
        return Quaternion(w=self.w, x=-self.x, y=-self.y, z=-self.z)

    def inverse(self) -> "Quaternion":
        """Multiplicative inverse, conjugate / norm^2.

        Raises:
            ZeroQuaternionError: If the norm is zero or not finite.
        """
        n2 = self._checked_norm() ** 2
        return Quaternion(
            w=self.w / n2, x=-self.x / n2, y=-self.y / n2, z=-self.z / n2
        )

    def unit(self) -> "Quaternion":
        """Return normalized copy.

        Raises:
            ZeroQuaternionError: If the norm is zero or not finite.
        """
        n = self._checked_norm()
        return Quaternion(w=self.w / n, x=self.x / n, y=self.y / n, z=self.z / n)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        """Hamilton product self * other."""
        if not isinstance(other, Quaternion):
            return NotImplemented
        v1 = self.vec
        v2 = other.vec
        w = self.w * other.w - np.dot(v1, v2)
        vec = v2 * self.w + v1 * other.w + np.cross(v1, v2)
        return Quaternion.from_scalar_vector(w, vec)

    def rotate(self, vector: ArrayLike) -> NDArray[np.float64]:
        """Rotate a 3-vector by this quaternion.

        The quaternion is inverted rather than conjugated, so a non-unit
        quaternion still rotates without scaling.
        """
        pure = Quaternion.from_scalar_vector(0.0, vector)
        return (self * pure * self.inverse()).vec

    @staticmethod
    def rotate_about(vector: ArrayLike, axis: ArrayLike, angle: float) -> NDArray[np.float64]:
        """Rotate a vector by angle (radians) about axis."""
        return Quaternion.from_axis_angle(axis, angle).rotate(vector)


class QuaternionOps:
    """Static conversions used for reporting orientation."""

    @staticmethod
    def to_euler(q: Quaternion) -> EulerAngles:
        """Convert quaternion to Euler angles (ZYX convention).

        Args:
            q: Unit quaternion.

        Returns:
            Euler angles in radians.
        """
        w, x, y, z = q.w, q.x, q.y, q.z

        roll = np.arctan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))

        sinp = 2.0 * (w * y - z * x)
        if abs(sinp) >= 1:
            pitch = np.copysign(np.pi / 2, sinp)
        else:
            pitch = np.arcsin(sinp)

        yaw = np.arctan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))

        return EulerAngles(roll=float(roll), pitch=float(pitch), yaw=float(yaw))

    @staticmethod
    def angle_between(q1: Quaternion, q2: Quaternion) -> float:
        """Rotation angle in radians taking unit quaternion q1 to q2."""
        q_diff = q2 * q1.conjugate()
        return float(2.0 * np.arccos(np.clip(abs(q_diff.w), -1.0, 1.0)))
