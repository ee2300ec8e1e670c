"""Math primitives for Perspecta."""

from .homogeneous import (
    cross,
    dehomogenize,
    dot,
    homogeneous,
    intersect_lines,
    is_at_infinity,
    line_through,
    triangle_orthocenter,
)
from .quaternions import (
    quat_from_matrix,
    quat_to_axis_angle,
    quat_to_euler,
    quat_to_matrix,
    rotation_matrix_to_axis_angle,
    rotation_matrix_to_quaternion,
)
from .transforms import make_transform, compose, invert
from .camera import project, unproject, field_of_view
from .coordinates import ImageCoordinateFrame, convert_coordinates

__all__ = [
    "cross",
    "dehomogenize",
    "dot",
    "homogeneous",
    "intersect_lines",
    "is_at_infinity",
    "line_through",
    "triangle_orthocenter",
    "quat_from_matrix",
    "quat_to_axis_angle",
    "quat_to_euler",
    "quat_to_matrix",
    "rotation_matrix_to_axis_angle",
    "rotation_matrix_to_quaternion",
    "make_transform",
    "compose",
    "invert",
    "project",
    "unproject",
    "field_of_view",
    "ImageCoordinateFrame",
    "convert_coordinates",
]
