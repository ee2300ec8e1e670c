"""Homogeneous 2D points and lines."""

import numpy as np


def homogeneous(p: np.ndarray) -> np.ndarray:
    """Lift a 2D point [x, y] to homogeneous coordinates [x, y, 1]."""
    p = np.asarray(p, dtype=float)
    if p.shape != (2,):
        raise ValueError(f"Point must be 2-element vector, got shape {p.shape}")

    return np.array([p[0], p[1], 1.0])


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Cross product of two 3-vectors."""
    if a.shape != (3,) or b.shape != (3,):
        raise ValueError("Both vectors must be 3-element vectors")

    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0]
    ])


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product of two vectors of equal length."""
    if a.shape != b.shape:
        raise ValueError(f"Shape mismatch: {a.shape} vs {b.shape}")

    return float(np.dot(a, b))


def line_through(p1: np.ndarray, p2: np.ndarray, epsilon: float = 1e-12) -> np.ndarray:
    """Homogeneous line through two 2D points.

    The line [a, b, c] is scaled so that its normal (a, b) has unit length,
    which makes ``line . [x, y, 1]`` the signed perpendicular distance of a
    point to the line.

    Args:
        p1: First point [x, y]
        p2: Second point [x, y]
        epsilon: Minimum segment length

    Returns:
        Normalized homogeneous line [a, b, c]
    """
    line = cross(homogeneous(p1), homogeneous(p2))

    normal_length = np.hypot(line[0], line[1])
    if normal_length < epsilon:
        raise ValueError("Cannot build a line from two coincident points")

    return line / normal_length


def intersect_lines(l1: np.ndarray, l2: np.ndarray) -> np.ndarray:
    """Intersection of two homogeneous lines as a homogeneous point [x, y, w]."""
    return cross(l1, l2)


def is_at_infinity(p: np.ndarray, tolerance: float = 1e-9) -> bool:
    """Check whether a homogeneous point lies on the line at infinity.

    The w component is compared against the norm of the whole vector, so the
    test does not depend on how the point was scaled.
    """
    if p.shape != (3,):
        raise ValueError(f"Homogeneous point must be 3-element vector, got shape {p.shape}")

    norm = np.linalg.norm(p)
    if norm < 1e-15:
        raise ValueError("Undefined homogeneous point (zero vector)")

    return abs(p[2]) / norm < tolerance


def dehomogenize(p: np.ndarray) -> np.ndarray:
    """Convert a finite homogeneous point [x, y, w] to [x/w, y/w]."""
    if p.shape != (3,):
        raise ValueError(f"Homogeneous point must be 3-element vector, got shape {p.shape}")
    if p[2] == 0:
        raise ValueError("Cannot dehomogenize a point at infinity")

    return np.array([p[0] / p[2], p[1] / p[2]])


def normalize(v: np.ndarray, epsilon: float = 1e-15) -> np.ndarray:
    """Scale a vector to unit length."""
    norm = np.linalg.norm(v)
    if norm < epsilon:
        raise ValueError("Cannot normalize zero-length vector")

    return v / norm


def triangle_orthocenter(
    k: np.ndarray,
    l: np.ndarray,
    m: np.ndarray,
    epsilon: float = 1e-12
) -> np.ndarray:
    """Orthocenter of the triangle (k, l, m).

    When the corners are the vanishing points of three mutually orthogonal
    directions, the orthocenter is the principal point.

    Raises:
        ValueError: If the triangle is degenerate (collinear corners)
    """
    a, b = k
    c, d = l
    e, f = m

    n = b * c + d * e + f * a - c * f - b * e - a * d
    if abs(n) < epsilon:
        raise ValueError("Degenerate triangle: corners are collinear")

    x = ((d - f) * b * b + (f - b) * d * d + (b - d) * f * f
         + a * b * (c - e) + c * d * (e - a) + e * f * (a - c)) / n
    y = ((e - c) * a * a + (a - e) * c * c + (c - a) * e * e
         + a * b * (f - d) + c * d * (b - f) + e * f * (d - b)) / n

    return np.array([x, y])
