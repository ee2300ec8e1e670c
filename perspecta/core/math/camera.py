"""Pinhole projection in the image-plane frame.

The camera looks down its local -Z axis with +Y up. Image-plane coordinates
have their origin at the image center and the long image edge spanning
[-1, 1], so a relative focal length f maps a camera-space point X to
``p + f * (X.x, X.y) / -X.z``.
"""

import math
import numpy as np
from typing import Tuple


def project(
    f: float,
    principal_point: np.ndarray,
    view_transform: np.ndarray,
    X: np.ndarray
) -> np.ndarray:
    """Project 3D world points to image-plane coordinates.

    Args:
        f: Relative focal length
        principal_point: Principal point [px, py] in image-plane coordinates
        view_transform: 4x4 world-to-camera transform
        X: Nx3 array of 3D points in world coordinates

    Returns:
        Nx2 array of image-plane coordinates
    """
    if f <= 0:
        raise ValueError(f"Focal length must be positive, got {f}")
    if view_transform.shape != (4, 4):
        raise ValueError(f"view_transform must be 4x4 matrix, got shape {view_transform.shape}")

    X = np.atleast_2d(np.asarray(X, dtype=float))
    if X.shape[1] != 3:
        raise ValueError(f"X must be Nx3 array, got shape {X.shape}")

    R = view_transform[:3, :3]
    t = view_transform[:3, 3]
    X_cam = (R @ X.T).T + t

    # Points on or behind the image plane have no projection
    depth = -X_cam[:, 2]
    depth[depth <= 1e-12] = np.nan

    px, py = principal_point
    u = px + f * X_cam[:, 0] / depth
    v = py + f * X_cam[:, 1] / depth

    return np.column_stack([u, v])


def unproject(
    f: float,
    principal_point: np.ndarray,
    uv: np.ndarray,
    depth: float = 1.0
) -> np.ndarray:
    """Unproject image-plane coordinates to camera-space points.

    Args:
        f: Relative focal length
        principal_point: Principal point [px, py] in image-plane coordinates
        uv: Nx2 array of image-plane coordinates
        depth: Distance along the viewing axis (-Z)

    Returns:
        Nx3 array of camera-space points
    """
    if f <= 0:
        raise ValueError(f"Focal length must be positive, got {f}")

    uv = np.atleast_2d(np.asarray(uv, dtype=float))
    if uv.shape[1] != 2:
        raise ValueError(f"uv must be Nx2 array, got shape {uv.shape}")

    px, py = principal_point
    x = (uv[:, 0] - px) / f
    y = (uv[:, 1] - py) / f

    return depth * np.column_stack([x, y, -np.ones(len(uv))])


def focal_length_pixels(relative_focal_length: float, image_width: float, image_height: float) -> float:
    """Focal length in pixels; the relative focal length is in half long-edge units."""
    return relative_focal_length * 0.5 * max(image_width, image_height)


def field_of_view(
    relative_focal_length: float,
    image_width: float,
    image_height: float
) -> Tuple[float, float]:
    """Horizontal and vertical field of view in radians."""
    if relative_focal_length <= 0:
        raise ValueError(f"Focal length must be positive, got {relative_focal_length}")

    f_px = focal_length_pixels(relative_focal_length, image_width, image_height)
    hfov = 2.0 * math.atan(image_width / (2.0 * f_px))
    vfov = 2.0 * math.atan(image_height / (2.0 * f_px))
    return hfov, vfov


def camera_center(view_transform: np.ndarray) -> np.ndarray:
    """Camera center in world coordinates for a world-to-camera transform."""
    R = view_transform[:3, :3]
    t = view_transform[:3, 3]
    return -R.T @ t
