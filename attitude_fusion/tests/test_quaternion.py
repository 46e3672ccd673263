"""Tests for quaternion algebra."""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.spatial.transform import Rotation

from attitude_fusion.core.exceptions import (
    DegenerateAxisError,
    OrientationError,
    ZeroQuaternionError,
)
from attitude_fusion.core.quaternion import Quaternion, QuaternionOps


class TestConstruction:
    """Tests for Quaternion construction."""

    def test_default_is_identity(self):
        """Default construction gives the identity."""
        assert Quaternion() == Quaternion.identity()

    def test_identity(self):
        """Identity quaternion should have correct values."""
        q = Quaternion.identity()
        assert q.w == 1.0
        assert q.x == 0.0
        assert q.y == 0.0
        assert q.z == 0.0

    def test_zero_becomes_identity(self):
        """The zero quaternion is silently replaced by the identity."""
        assert Quaternion(w=0.0, x=0.0, y=0.0, z=0.0) == Quaternion.identity()
        assert Quaternion.from_scalar_vector(0, [0, 0, 0]) == Quaternion.identity()

    def test_pure_vector_kept(self):
        """Zero scalar with non-zero vector is a valid pure quaternion."""
        q = Quaternion.from_scalar_vector(0.0, [1.0, 2.0, 4.0])
        assert q.w == 0.0
        assert_allclose(q.vec, [1.0, 2.0, 4.0])

    def test_strict_rejects_zero(self):
        """Strict construction raises instead of repairing."""
        with pytest.raises(ZeroQuaternionError):
            Quaternion.strict(0.0, 0.0, 0.0, 0.0)

    def test_strict_accepts_non_zero(self):
        """Strict construction keeps non-zero values."""
        q = Quaternion.strict(0.0, 0.0, 0.0, 2.0)
        assert q == Quaternion(w=0.0, x=0.0, y=0.0, z=2.0)

    def test_components_are_floats(self):
        """Integer and numpy inputs are stored as Python floats."""
        q = Quaternion(w=np.float32(1.5), x=2, y=0, z=0)
        assert isinstance(q.w, float)
        assert isinstance(q.x, float)

    def test_from_array_to_array(self):
        """Array conversion keeps [w, x, y, z] order."""
        arr = np.array([0.7071, 0.0, 0.7071, 0.0])
        q = Quaternion.from_array(arr)

        assert abs(q.w - 0.7071) < 1e-4
        assert abs(q.y - 0.7071) < 1e-4
        assert_allclose(q.to_array(), arr)

    def test_scalar_and_vec(self):
        """Scalar and vector parts are exposed separately."""
        q = Quaternion(w=3.0, x=1.0, y=2.0, z=4.0)
        assert q.scalar == 3.0
        assert_allclose(q.vec, [1.0, 2.0, 4.0])

    def test_frozen(self):
        """Quaternions are immutable."""
        q = Quaternion.identity()
        with pytest.raises(AttributeError):
            q.w = 2.0


class TestAxisAngle:
    """Tests for rotation quaternions built from an axis and angle."""

    def test_unit_norm(self):
        """Rotation quaternions have unit norm."""
        q = Quaternion.from_axis_angle([1.0, 2.0, -3.0], 1.234)
        assert abs(q.norm - 1.0) < 1e-12

    def test_axis_length_ignored(self):
        """Only the axis direction matters."""
        q1 = Quaternion.from_axis_angle([2.0, 0.0, 0.0], 0.5)
        q2 = Quaternion.from_axis_angle([1.0, 0.0, 0.0], 0.5)
        assert_allclose(q1.to_array(), q2.to_array())

    def test_half_angle(self):
        """Scalar part is cos(angle/2), vector part sin(angle/2) * axis."""
        q = Quaternion.from_axis_angle([0.0, 0.0, 1.0], np.pi / 2)
        assert_allclose(
            q.to_array(), [np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4)]
        )

    def test_zero_axis_raises(self):
        """A zero axis has no direction."""
        with pytest.raises(DegenerateAxisError):
            Quaternion.from_axis_angle([0.0, 0.0, 0.0], 1.0)

    def test_nan_axis_raises(self):
        """A non-finite axis is rejected instead of producing NaN."""
        with pytest.raises(DegenerateAxisError):
            Quaternion.from_axis_angle([float("nan"), 1.0, 0.0], 1.0)

    def test_non_finite_angle_raises(self):
        """A non-finite angle is rejected."""
        with pytest.raises(OrientationError):
            Quaternion.from_axis_angle([1.0, 0.0, 0.0], float("inf"))

    def test_errors_are_value_errors(self):
        """Callers can catch degenerate input as ValueError."""
        with pytest.raises(ValueError):
            Quaternion.from_axis_angle([0.0, 0.0, 0.0], 1.0)


class TestAlgebra:
    """Tests for products, conjugates, norms and inverses."""

    def test_basis_products(self):
        """i * j = k and j * i = -k."""
        i = Quaternion(w=0.0, x=1.0, y=0.0, z=0.0)
        j = Quaternion(w=0.0, x=0.0, y=1.0, z=0.0)
        assert i * j == Quaternion(w=0.0, x=0.0, y=0.0, z=1.0)
        assert j * i == Quaternion(w=0.0, x=0.0, y=0.0, z=-1.0)

    def test_multiply_identity(self):
        """Multiplying by identity should not change quaternion."""
        q = Quaternion(w=0.7071, x=0.0, y=0.7071, z=0.0)
        assert q * Quaternion.identity() == q
        assert Quaternion.identity() * q == q

    def test_multiply_non_commutative(self, sample_quaternion):
        """Rotation order matters."""
        qx = Quaternion.from_axis_angle([1.0, 0.0, 0.0], 0.7)
        assert not np.allclose(
            (qx * sample_quaternion).to_array(),
            (sample_quaternion * qx).to_array(),
        )

    def test_composition_order(self, basis):
        """a * b applies b first, then a."""
        i, j, k = basis
        qx = Quaternion.from_axis_angle(i, np.pi / 2)
        qz = Quaternion.from_axis_angle(k, np.pi / 2)
        # j --qx--> k --qz--> k
        assert_allclose((qz * qx).rotate(j), k, atol=1e-12)
        # j --qz--> -i --qx--> -i
        assert_allclose((qx * qz).rotate(j), -i, atol=1e-12)

    def test_multiply_rejects_other_types(self):
        """Only quaternion products are defined."""
        with pytest.raises(TypeError):
            Quaternion.identity() * 2.0

    def test_in_place_multiply_rebinds(self, sample_quaternion):
        """q *= r replaces the value, leaving the original untouched."""
        original = sample_quaternion
        q = sample_quaternion
        q *= Quaternion.from_axis_angle([0.0, 0.0, 1.0], 0.1)
        assert q is not original
        assert original == sample_quaternion

    def test_conjugate(self):
        """Conjugate should negate imaginary parts."""
        q = Quaternion(w=1.0, x=2.0, y=3.0, z=4.0)
        assert q.conjugate() == Quaternion(w=1.0, x=-2.0, y=-3.0, z=-4.0)

    def test_norm(self):
        """Norm covers all four components."""
        assert Quaternion(w=2.0, x=0.0, y=0.0, z=0.0).norm == 2.0
        assert abs(Quaternion(w=1.0, x=2.0, y=2.0, z=4.0).norm - 5.0) < 1e-12

    def test_unit(self):
        """Normalized quaternion matches known values."""
        q = Quaternion(w=3.0, x=4.4, y=1.0, z=5.1).unit()
        assert abs(q.w - 0.403166) < 1e-4
        assert_allclose(q.vec, [0.59131, 0.134389, 0.685382], atol=1e-4)
        assert abs(q.norm - 1.0) < 1e-12

    def test_unit_non_finite_raises(self):
        """NaN components can't be normalized."""
        with pytest.raises(ZeroQuaternionError):
            Quaternion(w=float("nan"), x=0.0, y=0.0, z=0.0).unit()

    def test_inverse_of_scaled_identity(self):
        """Inverse divides by the squared norm."""
        assert Quaternion(w=2.0, x=0.0, y=0.0, z=0.0).inverse() == Quaternion(
            w=0.5, x=0.0, y=0.0, z=0.0
        )

    @pytest.mark.parametrize("components", [
        (1.5, 1.0, 0.0, 3.0),
        (-1.5, 3.0, 3.0, 0.0),
        (2.5, 5.0, 0.0, 1.0),
        (0.0, 0.0, 0.0, 7.0),
    ])
    def test_inverse_product_is_identity(self, components):
        """q * q^-1 is the identity for any non-zero q."""
        q = Quaternion(*components)
        assert_allclose((q * q.inverse()).to_array(), [1.0, 0.0, 0.0, 0.0], atol=1e-12)
        assert_allclose((q.inverse() * q).to_array(), [1.0, 0.0, 0.0, 0.0], atol=1e-12)

    def test_inverse_non_finite_raises(self):
        """NaN components can't be inverted."""
        with pytest.raises(ZeroQuaternionError):
            Quaternion(w=1.0, x=float("inf"), y=0.0, z=0.0).inverse()


class TestEquality:
    """Tests for exact comparison."""

    def test_equal(self):
        """Same components compare equal."""
        q1 = Quaternion(w=3.0, x=1.0, y=2.0, z=4.0)
        q2 = Quaternion(w=3.0, x=1.0, y=2.0, z=4.0)
        assert q1 == q2
        assert not q1 != q2

    def test_not_equal(self):
        """Any component difference breaks equality."""
        q1 = Quaternion(w=3.0, x=1.0, y=2.0, z=4.0)
        q2 = Quaternion(w=3.0, x=1.0, y=2.0, z=4.000001)
        assert q1 != q2
        assert not q1 == q2

    def test_hashable(self):
        """Equal quaternions hash equally."""
        assert len({Quaternion(), Quaternion.identity(), Quaternion(0, 0, 0, 0)}) == 1


class TestRotate:
    """Tests for vector rotation."""

    def test_rotate_about_axes(self):
        """Rotation about each axis follows the right-hand rule."""
        res = Quaternion.rotate_about([0.0, 1.0, 0.0], [1.0, 0.0, 0.0], np.pi / 2)
        assert_allclose(res, [0.0, 0.0, 1.0], atol=1e-4)

        res = Quaternion.rotate_about([0.0, 1.0, 0.0], [1.0, 0.0, 0.0], np.pi)
        assert_allclose(res, [0.0, -1.0, 0.0], atol=1e-4)

        res = Quaternion.rotate_about([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], -np.pi / 4)
        assert_allclose(res, [np.sqrt(2) / 2.0, 0.0, np.sqrt(2) / 2.0], atol=1e-4)

    def test_rotate_with_quaternion(self):
        """Instance rotate matches the static form."""
        q = Quaternion.from_axis_angle([1.0, 0.0, 0.0], np.pi / 2)
        assert_allclose(q.rotate([0.0, 1.0, 0.0]), [0.0, 0.0, 1.0], atol=1e-4)

    def test_rotate_non_basis_vector(self):
        """Components along the axis are preserved."""
        q = Quaternion.from_axis_angle([1.0, 0.0, 0.0], np.pi)
        assert_allclose(q.rotate([1.0, 1.0, 0.0]), [1.0, -1.0, 0.0], atol=1e-4)

    def test_rotate_zero_vector(self):
        """The zero vector stays zero."""
        q = Quaternion.from_axis_angle([1.0, 2.0, 3.0], 0.8)
        assert_allclose(q.rotate([0.0, 0.0, 0.0]), [0.0, 0.0, 0.0], atol=1e-12)

    def test_rotate_non_unit_quaternion(self):
        """Non-unit quaternions rotate without scaling."""
        q = Quaternion.from_axis_angle([0.0, 0.0, 1.0], np.pi / 2)
        scaled = Quaternion.from_array(q.to_array() * 3.0)
        assert_allclose(scaled.rotate([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)

    @pytest.mark.parametrize("angle", [0.1, np.pi / 3, np.pi / 2, 2.0, np.pi, 5.0, -1.2])
    def test_orthogonal_vector_rotates_in_plane(self, angle):
        """A vector orthogonal to the axis turns by exactly the angle."""
        axis = np.array([1.0, 1.0, 1.0]) / np.sqrt(3.0)
        u = np.array([1.0, -1.0, 0.0]) / np.sqrt(2.0)
        w = np.cross(axis, u)
        v = 2.5 * u

        res = Quaternion.rotate_about(v, axis, angle)

        assert abs(np.linalg.norm(res) - 2.5) < 1e-9
        assert abs(np.dot(res, axis)) < 1e-9
        expected = 2.5 * (np.cos(angle) * u + np.sin(angle) * w)
        assert_allclose(res, expected, atol=1e-9)

    @pytest.mark.parametrize("angle", [0.3, 1.0, np.pi, 4.0])
    def test_rotate_back(self, angle):
        """Rotating by angle and then by -angle returns the vector."""
        v = np.array([0.3, -1.7, 2.2])
        axis = np.array([-0.4, 0.9, 0.1])
        there = Quaternion.rotate_about(v, axis, angle)
        back = Quaternion.rotate_about(there, axis, -angle)
        assert_allclose(back, v, atol=1e-4)

    def test_matches_scipy(self, gyro_steps):
        """Rotation agrees with scipy for arbitrary rotation vectors."""
        v = np.array([0.5, -2.0, 1.25])
        for rotvec in gyro_steps:
            angle = np.linalg.norm(rotvec)
            q = Quaternion.from_axis_angle(rotvec, angle)
            # scipy uses [x, y, z, w]
            expected = Rotation.from_quat([q.x, q.y, q.z, q.w]).apply(v)
            assert_allclose(q.rotate(v), expected, atol=1e-9)


class TestQuaternionOps:
    """Tests for QuaternionOps conversions."""

    def test_to_euler_identity(self):
        """Identity quaternion should give zero Euler angles."""
        euler = QuaternionOps.to_euler(Quaternion.identity())

        assert abs(euler.roll) < 1e-10
        assert abs(euler.pitch) < 1e-10
        assert abs(euler.yaw) < 1e-10

    def test_to_euler_roll_90(self):
        """90 degree roll should give correct Euler angles."""
        q = Quaternion.from_axis_angle([1.0, 0.0, 0.0], np.deg2rad(90))
        euler = QuaternionOps.to_euler(q)

        assert abs(euler.roll_deg - 90) < 1e-6
        assert abs(euler.pitch) < 1e-6
        assert abs(euler.yaw) < 1e-6

    def test_to_euler_yaw_45(self):
        """45 degree yaw should give correct Euler angles."""
        q = Quaternion.from_axis_angle([0.0, 0.0, 1.0], np.deg2rad(45))
        euler = QuaternionOps.to_euler(q)

        assert abs(euler.roll) < 1e-6
        assert abs(euler.pitch) < 1e-6
        assert abs(euler.yaw_deg - 45) < 1e-6

    def test_to_euler_gimbal_lock(self):
        """Pitch saturates at +/-90 degrees."""
        q = Quaternion.from_axis_angle([0.0, 1.0, 0.0], np.pi / 2)
        euler = QuaternionOps.to_euler(q)
        assert abs(euler.pitch_deg - 90) < 1e-3

    def test_angle_between_same(self, sample_quaternion):
        """Angle between identical quaternions should be zero."""
        assert abs(QuaternionOps.angle_between(sample_quaternion, sample_quaternion)) < 1e-6

    def test_angle_between_90_deg(self):
        """Angle between quaternions should be computed correctly."""
        q2 = Quaternion.from_axis_angle([0.0, 0.0, 1.0], np.deg2rad(90))
        angle = QuaternionOps.angle_between(Quaternion.identity(), q2)
        assert abs(np.rad2deg(angle) - 90) < 1e-6
