"""Quaternion operations for 3D rotations.

Quaternions are stored scalar-first, [w, x, y, z]. The two public
``rotation_matrix_to_*`` conversions return scalar-last tuples, which is the
layout front ends display.
"""

import math
from typing import Tuple

import numpy as np


def quat_normalize(q: np.ndarray) -> np.ndarray:
    """Normalize quaternion to unit length."""
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    norm = np.linalg.norm(q)
    if norm < 1e-12:
        raise ValueError("Cannot normalize zero quaternion")

    return q / norm


def quat_from_axis_angle(axis: np.ndarray, angle: float) -> np.ndarray:
    """Create quaternion from axis-angle representation.

    Args:
        axis: 3D unit vector representing rotation axis
        angle: Rotation angle in radians

    Returns:
        Unit quaternion [w, x, y, z]
    """
    if axis.shape != (3,):
        raise ValueError(f"Axis must be 3-element vector, got shape {axis.shape}")

    axis_norm = np.linalg.norm(axis)
    if axis_norm < 1e-12:
        return np.array([1.0, 0.0, 0.0, 0.0])

    axis = axis / axis_norm
    half_angle = angle / 2
    sin_half = np.sin(half_angle)
    cos_half = np.cos(half_angle)

    return np.array([cos_half, sin_half * axis[0], sin_half * axis[1], sin_half * axis[2]])


def quat_to_matrix(q: np.ndarray) -> np.ndarray:
    """Convert quaternion to rotation matrix.

    Args:
        q: Unit quaternion [w, x, y, z]

    Returns:
        3x3 rotation matrix
    """
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    q = quat_normalize(q)
    w, x, y, z = q

    return np.array([
        [1 - 2*(y**2 + z**2), 2*(x*y - w*z), 2*(x*z + w*y)],
        [2*(x*y + w*z), 1 - 2*(x**2 + z**2), 2*(y*z - w*x)],
        [2*(x*z - w*y), 2*(y*z + w*x), 1 - 2*(x**2 + y**2)]
    ])


def quat_from_matrix(R: np.ndarray) -> np.ndarray:
    """Convert a rotation matrix to a unit quaternion.

    Branches on the largest diagonal term so the square root never sees a
    small argument. The sign is chosen so that w >= 0.

    Args:
        R: 3x3 rotation matrix, or a 4x4 transform (rotation block is used)

    Returns:
        Unit quaternion [w, x, y, z]
    """
    R = np.asarray(R, dtype=float)
    if R.shape == (4, 4):
        R = R[:3, :3]
    if R.shape != (3, 3):
        raise ValueError(f"R must be 3x3 or 4x4 matrix, got shape {R.shape}")

    trace = R[0, 0] + R[1, 1] + R[2, 2]

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (R[2, 1] - R[1, 2]) * s
        y = (R[0, 2] - R[2, 0]) * s
        z = (R[1, 0] - R[0, 1]) * s
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        w = (R[2, 1] - R[1, 2]) / s
        x = 0.25 * s
        y = (R[0, 1] + R[1, 0]) / s
        z = (R[0, 2] + R[2, 0]) / s
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        w = (R[0, 2] - R[2, 0]) / s
        x = (R[0, 1] + R[1, 0]) / s
        y = 0.25 * s
        z = (R[1, 2] + R[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        w = (R[1, 0] - R[0, 1]) / s
        x = (R[0, 2] + R[2, 0]) / s
        y = (R[1, 2] + R[2, 1]) / s
        z = 0.25 * s

    q = quat_normalize(np.array([w, x, y, z]))
    if q[0] < 0:
        q = -q
    return q


def quat_to_axis_angle(q: np.ndarray, epsilon: float = 1e-9) -> Tuple[np.ndarray, float]:
    """Convert quaternion to axis-angle.

    A (near) zero rotation has no defined axis; the x axis is returned with
    a zero angle.

    Returns:
        Tuple of (unit axis, angle in radians within [0, pi])
    """
    q = quat_normalize(q)
    if q[0] < 0:
        q = -q

    w = min(1.0, float(q[0]))
    angle = 2.0 * math.acos(w)
    s = math.sqrt(max(0.0, 1.0 - w * w))

    if s < epsilon:
        return np.array([1.0, 0.0, 0.0]), 0.0

    return q[1:] / s, angle


def quat_to_euler(q: np.ndarray, epsilon: float = 1e-9) -> Tuple[float, float, float]:
    """Convert quaternion to (roll, pitch, yaw) in radians.

    Roll is about x, pitch about y, yaw about z (intrinsic z-y'-x'').
    At gimbal lock (pitch = +/-90 degrees) roll and yaw describe the same
    rotation; roll is fixed to zero and the whole rotation is put in yaw.
    """
    w, x, y, z = quat_normalize(q)

    sinp = 2.0 * (w * y - z * x)
    if abs(sinp) >= 1.0 - epsilon:
        pitch = math.copysign(math.pi / 2, sinp)
        roll = 0.0
        yaw = -math.copysign(1.0, sinp) * 2.0 * math.atan2(x, w)
        yaw = math.atan2(math.sin(yaw), math.cos(yaw))
        return roll, pitch, yaw

    pitch = math.asin(sinp)
    roll = math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
    yaw = math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))
    return roll, pitch, yaw


def quat_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Multiply two quaternions."""
    if q1.shape != (4,) or q2.shape != (4,):
        raise ValueError("Both quaternions must be 4-element vectors")

    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2

    return np.array([
        w1*w2 - x1*x2 - y1*y2 - z1*z2,
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2
    ])


def rotation_matrix_to_quaternion(transform: np.ndarray) -> Tuple[float, float, float, float]:
    """Rotation of a 3x3 or 4x4 matrix as a quaternion (x, y, z, w)."""
    w, x, y, z = quat_from_matrix(transform)
    return float(x), float(y), float(z), float(w)


def rotation_matrix_to_axis_angle(transform: np.ndarray) -> Tuple[float, float, float, float]:
    """Rotation of a 3x3 or 4x4 matrix as axis-angle (x, y, z, angle)."""
    axis, angle = quat_to_axis_angle(quat_from_matrix(transform))
    return float(axis[0]), float(axis[1]), float(axis[2]), float(angle)
