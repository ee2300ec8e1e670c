"""4x4 rigid transforms."""

import numpy as np
from typing import Tuple


def make_transform(R: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Build a 4x4 homogeneous transform from rotation and translation.

    Args:
        R: 3x3 rotation matrix
        t: 3-element translation vector

    Returns:
        4x4 matrix [[R, t], [0, 1]]
    """
    if R.shape != (3, 3):
        raise ValueError(f"R must be 3x3 matrix, got shape {R.shape}")
    if t.shape != (3,):
        raise ValueError(f"t must be 3-element vector, got shape {t.shape}")

    T = np.eye(4)
    T[:3, :3] = R
    T[:3, 3] = t
    return T


def split_transform(T: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Split a 4x4 transform into (R, t)."""
    if T.shape != (4, 4):
        raise ValueError(f"T must be 4x4 matrix, got shape {T.shape}")

    return T[:3, :3].copy(), T[:3, 3].copy()


def compose(T1: np.ndarray, T2: np.ndarray) -> np.ndarray:
    """Compose two rigid transforms: T1 * T2."""
    R1, t1 = split_transform(T1)
    R2, t2 = split_transform(T2)
    return make_transform(R1 @ R2, R1 @ t2 + t1)


def invert(T: np.ndarray) -> np.ndarray:
    """Invert a rigid transform."""
    R, t = split_transform(T)
    R_inv = R.T
    t_inv = -R_inv @ t
    return make_transform(R_inv, t_inv)


def transform_point(T: np.ndarray, X: np.ndarray) -> np.ndarray:
    """Apply a rigid transform to a 3D point."""
    if X.shape != (3,):
        raise ValueError(f"X must be 3-element vector, got shape {X.shape}")

    R, t = split_transform(T)
    return R @ X + t


def is_rotation(R: np.ndarray, tolerance: float = 1e-6) -> bool:
    """Check that R is orthonormal with determinant +1."""
    if R.shape == (4, 4):
        R = R[:3, :3]
    if R.shape != (3, 3):
        return False

    orthonormal = np.allclose(R.T @ R, np.eye(3), atol=tolerance)
    return bool(orthonormal and abs(np.linalg.det(R) - 1.0) < tolerance)
