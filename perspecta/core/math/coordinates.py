"""Conversion of 2D points between image coordinate frames."""

from enum import Enum

import numpy as np


class ImageCoordinateFrame(str, Enum):
    """Image coordinate frames.

    - image_plane: origin at the image center, y up, long edge spans [-1, 1]
    - absolute: pixels, origin at the top-left corner, y down
    - relative: [0, 1] x [0, 1], origin at the top-left corner, y down
    """

    IMAGE_PLANE = "image_plane"
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


def _relative_to_image_plane(x: float, y: float, aspect: float) -> np.ndarray:
    if aspect <= 1.0:
        # Tall image: [0, 1] x [0, 1] -> [-aspect, aspect] x [-1, 1]
        return np.array([(-1.0 + 2.0 * x) * aspect, 1.0 - 2.0 * y])
    # Wide image: [0, 1] x [0, 1] -> [-1, 1] x [-1/aspect, 1/aspect]
    return np.array([-1.0 + 2.0 * x, (1.0 - 2.0 * y) / aspect])


def _image_plane_to_relative(x: float, y: float, aspect: float) -> np.ndarray:
    if aspect <= 1.0:
        return np.array([0.5 * (x / aspect + 1.0), 0.5 * (1.0 - y)])
    return np.array([0.5 * (x + 1.0), 0.5 * (1.0 - y * aspect)])


def convert_coordinates(
    point,
    from_frame: ImageCoordinateFrame,
    to_frame: ImageCoordinateFrame,
    image_width: float,
    image_height: float
) -> np.ndarray:
    """Convert a 2D point between image coordinate frames.

    Args:
        point: [x, y] in ``from_frame``
        from_frame: Source frame
        to_frame: Target frame
        image_width: Image width in pixels
        image_height: Image height in pixels

    Returns:
        [x, y] in ``to_frame``
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(
            f"Image dimensions must be positive, got {image_width}x{image_height}"
        )

    p = np.asarray(point, dtype=float)
    if p.shape != (2,):
        raise ValueError(f"Point must be 2-element vector, got shape {p.shape}")

    from_frame = ImageCoordinateFrame(from_frame)
    to_frame = ImageCoordinateFrame(to_frame)
    if from_frame == to_frame:
        return p.copy()

    aspect = image_width / image_height

    # Route everything through the relative frame
    if from_frame == ImageCoordinateFrame.ABSOLUTE:
        relative = np.array([p[0] / image_width, p[1] / image_height])
    elif from_frame == ImageCoordinateFrame.IMAGE_PLANE:
        relative = _image_plane_to_relative(p[0], p[1], aspect)
    else:
        relative = p

    if to_frame == ImageCoordinateFrame.ABSOLUTE:
        return np.array([relative[0] * image_width, relative[1] * image_height])
    if to_frame == ImageCoordinateFrame.IMAGE_PLANE:
        return _relative_to_image_plane(relative[0], relative[1], aspect)
    return np.array(relative, dtype=float)
