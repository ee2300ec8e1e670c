"""Tests for quaternion operations."""

import numpy as np
import pytest
from perspecta.core.math.quaternions import (
    quat_from_axis_angle,
    quat_from_matrix,
    quat_multiply,
    quat_normalize,
    quat_to_axis_angle,
    quat_to_euler,
    quat_to_matrix,
    rotation_matrix_to_axis_angle,
    rotation_matrix_to_quaternion,
)


def euler_to_quat(roll, pitch, yaw):
    """Compose yaw (z), pitch (y) and roll (x) rotations."""
    qz = quat_from_axis_angle(np.array([0.0, 0.0, 1.0]), yaw)
    qy = quat_from_axis_angle(np.array([0.0, 1.0, 0.0]), pitch)
    qx = quat_from_axis_angle(np.array([1.0, 0.0, 0.0]), roll)
    return quat_multiply(quat_multiply(qz, qy), qx)


class TestQuaternions:
    """Test quaternion operations."""

    def test_quat_normalize(self):
        """Test quaternion normalization."""
        q = np.array([2.0, 3.0, 4.0, 5.0])
        q_norm = quat_normalize(q)

        assert abs(np.linalg.norm(q_norm) - 1.0) < 1e-10

    def test_quat_normalize_zero(self):
        """Test quaternion normalization with zero quaternion."""
        with pytest.raises(ValueError):
            quat_normalize(np.zeros(4))

    def test_quat_from_axis_angle_90deg(self):
        """Test quaternion from axis-angle for 90 degree rotation."""
        q = quat_from_axis_angle(np.array([1, 0, 0]), np.pi / 2)

        expected = np.array([np.sqrt(2) / 2, np.sqrt(2) / 2, 0.0, 0.0])
        np.testing.assert_allclose(q, expected, atol=1e-10)

    def test_quat_to_matrix_90deg_x(self):
        """Test quaternion to matrix for 90 degree rotation around X."""
        q = np.array([np.sqrt(2) / 2, np.sqrt(2) / 2, 0.0, 0.0])
        R = quat_to_matrix(q)

        expected = np.array([[1, 0, 0], [0, 0, -1], [0, 1, 0]])
        np.testing.assert_allclose(R, expected, atol=1e-10)


class TestMatrixConversion:
    """Test conversion from rotation matrices."""

    @pytest.mark.parametrize("axis,angle", [
        ([1.0, 0.0, 0.0], 0.3),
        ([0.0, 1.0, 0.0], 2.5),
        ([1.0, -2.0, 0.5], 1.2),
        ([0.3, 0.3, -1.0], 3.0),
    ])
    def test_quat_from_matrix_recovers_rotation(self, axis, angle):
        """Test that matrix -> quaternion -> matrix is the identity."""
        R = quat_to_matrix(quat_from_axis_angle(np.array(axis), angle))
        q = quat_from_matrix(R)

        assert q[0] >= 0
        np.testing.assert_allclose(quat_to_matrix(q), R, atol=1e-10)

    def test_quat_from_matrix_half_turn(self):
        """Test a 180 degree rotation, where the trace is -1."""
        R = np.diag([1.0, -1.0, -1.0])
        q = quat_from_matrix(R)

        np.testing.assert_allclose(q, [0.0, 1.0, 0.0, 0.0], atol=1e-10)

    def test_quat_from_matrix_accepts_transform(self):
        """Test that the rotation block of a 4x4 transform is used."""
        T = np.eye(4)
        T[:3, :3] = quat_to_matrix(quat_from_axis_angle(np.array([0.0, 0.0, 1.0]), 0.7))
        T[:3, 3] = [5.0, 6.0, 7.0]

        q = quat_from_matrix(T)
        np.testing.assert_allclose(q, quat_from_axis_angle(np.array([0.0, 0.0, 1.0]), 0.7), atol=1e-10)

    def test_quat_from_matrix_wrong_shape(self):
        """Test invalid matrix shape."""
        with pytest.raises(ValueError):
            quat_from_matrix(np.eye(2))

    def test_rotation_matrix_to_quaternion_is_scalar_last(self):
        """Test the (x, y, z, w) output layout."""
        assert rotation_matrix_to_quaternion(np.eye(4)) == pytest.approx((0.0, 0.0, 0.0, 1.0))

        R = quat_to_matrix(quat_from_axis_angle(np.array([0.0, 0.0, 1.0]), np.pi / 2))
        x, y, z, w = rotation_matrix_to_quaternion(R)
        assert (x, y) == pytest.approx((0.0, 0.0), abs=1e-10)
        assert z == pytest.approx(np.sqrt(2) / 2)
        assert w == pytest.approx(np.sqrt(2) / 2)


class TestAxisAngle:
    """Test quaternion to axis-angle."""

    def test_zero_rotation_defaults_to_x_axis(self):
        """Test that a zero rotation has the x axis and no NaN."""
        axis, angle = quat_to_axis_angle(np.array([1.0, 0.0, 0.0, 0.0]))

        np.testing.assert_allclose(axis, [1.0, 0.0, 0.0])
        assert angle == 0.0

    def test_identity_matrix(self):
        """Test axis-angle of the identity matrix."""
        assert rotation_matrix_to_axis_angle(np.eye(3)) == pytest.approx((1.0, 0.0, 0.0, 0.0))

    def test_quarter_turn_about_z(self):
        """Test a 90 degree rotation around Z."""
        R = quat_to_matrix(quat_from_axis_angle(np.array([0.0, 0.0, 1.0]), np.pi / 2))
        x, y, z, angle = rotation_matrix_to_axis_angle(R)

        assert (x, y, z) == pytest.approx((0.0, 0.0, 1.0), abs=1e-10)
        assert angle == pytest.approx(np.pi / 2)

    def test_negated_quaternion_same_rotation(self):
        """Test that q and -q give the same axis-angle."""
        q = quat_from_axis_angle(np.array([1.0, 2.0, 3.0]), 1.1)
        axis_1, angle_1 = quat_to_axis_angle(q)
        axis_2, angle_2 = quat_to_axis_angle(-q)

        np.testing.assert_allclose(axis_1, axis_2, atol=1e-10)
        assert angle_1 == pytest.approx(angle_2)


class TestEuler:
    """Test quaternion to roll/pitch/yaw."""

    def test_identity(self):
        """Test identity rotation."""
        assert quat_to_euler(np.array([1.0, 0.0, 0.0, 0.0])) == pytest.approx((0.0, 0.0, 0.0))

    @pytest.mark.parametrize("roll,pitch,yaw", [
        (0.3, 0.2, -0.5),
        (-1.0, 0.7, 2.0),
        (2.5, -1.2, 0.1),
    ])
    def test_round_trip(self, roll, pitch, yaw):
        """Test that composed angles are recovered."""
        q = euler_to_quat(roll, pitch, yaw)
        assert quat_to_euler(q) == pytest.approx((roll, pitch, yaw), abs=1e-9)

    def test_gimbal_lock_positive(self):
        """Test pitch of +90 degrees puts the rotation in yaw."""
        q = euler_to_quat(0.0, np.pi / 2, 0.4)
        roll, pitch, yaw = quat_to_euler(q)

        assert roll == 0.0
        assert pitch == pytest.approx(np.pi / 2)
        assert yaw == pytest.approx(0.4, abs=1e-6)

    def test_gimbal_lock_folds_roll_into_yaw(self):
        """Test that roll and yaw combine at gimbal lock."""
        q = euler_to_quat(0.1, np.pi / 2, 0.5)
        roll, pitch, yaw = quat_to_euler(q)

        assert roll == 0.0
        assert yaw == pytest.approx(0.4, abs=1e-6)

        # Same rotation either way
        np.testing.assert_allclose(
            quat_to_matrix(euler_to_quat(roll, pitch, yaw)), quat_to_matrix(q), atol=1e-6
        )

    def test_gimbal_lock_negative(self):
        """Test pitch of -90 degrees."""
        q = euler_to_quat(0.0, -np.pi / 2, -0.8)
        roll, pitch, yaw = quat_to_euler(q)

        assert not np.isnan([roll, pitch, yaw]).any()
        assert pitch == pytest.approx(-np.pi / 2)
        np.testing.assert_allclose(
            quat_to_matrix(euler_to_quat(roll, pitch, yaw)), quat_to_matrix(q), atol=1e-6
        )
