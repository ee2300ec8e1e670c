"""Synthetic calibration scenes.

Builds control points by projecting axis-aligned 3D segments through a known
camera, so a solve can be compared against ground truth.
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple

from ..math.camera import project
from ..math.coordinates import ImageCoordinateFrame, convert_coordinates
from ..math.transforms import make_transform
from ..models.entities import ControlPointPair, ControlPoints, Point2D, VanishingPointGroup
from ..models.settings import Axis

# Offsets of parallel segments in the plane perpendicular to their axis
_OFFSETS = [(-0.8, -0.6), (0.7, 0.5), (-0.4, 0.9), (0.6, -0.8), (0.1, 0.3)]


def look_at(
    position: np.ndarray,
    target: np.ndarray,
    up: np.ndarray = np.array([0.0, 0.0, 1.0])
) -> np.ndarray:
    """World-to-camera transform for a camera at ``position`` looking at ``target``.

    The camera looks down its local -Z axis with local +Y towards ``up``.
    """
    forward = target - position
    forward_norm = np.linalg.norm(forward)
    if forward_norm < 1e-12:
        raise ValueError("Camera position and target coincide")
    forward = forward / forward_norm

    right = np.cross(forward, up)
    if np.linalg.norm(right) < 1e-12:
        raise ValueError("Up vector is parallel to the viewing direction")
    right = right / np.linalg.norm(right)
    camera_up = np.cross(right, forward)

    # Rows are the camera axes expressed in world coordinates
    R = np.vstack([right, camera_up, -forward])
    return make_transform(R, -R @ position)


class SceneGenerator:
    """Generator for synthetic control points."""

    def __init__(
        self,
        view_transform: np.ndarray,
        relative_focal_length: float,
        image_size: Tuple[int, int] = (1200, 800),
        principal_point: Sequence[float] = (0.0, 0.0),
        seed: Optional[int] = None
    ):
        """Initialize scene generator.

        Args:
            view_transform: 4x4 world-to-camera transform
            relative_focal_length: Focal length in half long-edge units
            image_size: (width, height) in pixels
            principal_point: Principal point in image-plane coordinates
            seed: Random seed for reproducible noise
        """
        self.view_transform = view_transform
        self.f = relative_focal_length
        self.image_width, self.image_height = image_size
        self.principal_point = np.asarray(principal_point, dtype=float)
        self.rng = np.random.default_rng(seed)

    def project_point(self, X: np.ndarray, frame: ImageCoordinateFrame) -> Point2D:
        """Project a world point into the requested image frame."""
        uv = project(self.f, self.principal_point, self.view_transform, X)[0]
        if np.any(np.isnan(uv)):
            raise ValueError(f"Point {X} is behind the camera")

        converted = convert_coordinates(
            uv, ImageCoordinateFrame.IMAGE_PLANE, frame, self.image_width, self.image_height
        )
        return Point2D.from_numpy(converted)

    def vanishing_point(self, axis: Axis) -> np.ndarray:
        """Image-plane vanishing point of lines parallel to ``axis``."""
        d = self.view_transform[:3, :3] @ axis.to_numpy()
        if abs(d[2]) < 1e-12:
            raise ValueError(f"Axis {axis.value} is parallel to the image plane")
        return self.principal_point + self.f * d[:2] / (-d[2])

    def axis_segments(
        self,
        axis: Axis,
        count: int = 2,
        half_length: float = 1.0
    ) -> List[Tuple[np.ndarray, np.ndarray]]:
        """3D segments parallel to ``axis``, spread around the world origin."""
        if count > len(_OFFSETS):
            raise ValueError(f"At most {len(_OFFSETS)} segments per axis are supported")

        direction = axis.to_numpy()
        index = int(np.argmax(np.abs(direction)))
        others = [i for i in range(3) if i != index]

        segments = []
        for offset in _OFFSETS[:count]:
            center = np.zeros(3)
            center[others[0]], center[others[1]] = offset
            segments.append((center - half_length * direction, center + half_length * direction))
        return segments

    def group_for_axis(
        self,
        axis: Axis,
        count: int = 2,
        noise_std: float = 0.0,
        frame: ImageCoordinateFrame = ImageCoordinateFrame.RELATIVE
    ) -> VanishingPointGroup:
        """Projected segments along one axis, with optional image-plane noise."""
        lines = []
        for start, end in self.axis_segments(axis, count):
            p0 = self.project_point(start, ImageCoordinateFrame.IMAGE_PLANE).to_numpy()
            p1 = self.project_point(end, ImageCoordinateFrame.IMAGE_PLANE).to_numpy()
            if noise_std > 0:
                p0 = p0 + self.rng.normal(0.0, noise_std, 2)
                p1 = p1 + self.rng.normal(0.0, noise_std, 2)

            lines.append(ControlPointPair(
                start=self._from_image_plane(p0, frame),
                end=self._from_image_plane(p1, frame)
            ))
        return VanishingPointGroup(lines=lines)

    def control_points(
        self,
        axes: Sequence[Axis] = (Axis.POSITIVE_X, Axis.POSITIVE_Y),
        lines_per_group: int = 2,
        noise_std: float = 0.0,
        frame: ImageCoordinateFrame = ImageCoordinateFrame.RELATIVE,
        reference_axis: Optional[Axis] = None,
        reference_length: float = 1.0,
        horizon_axes: Optional[Tuple[Axis, Axis]] = None
    ) -> ControlPoints:
        """Control points for a full calibration.

        Args:
            axes: World axis of each vanishing point group, in order
            lines_per_group: Segments per group
            noise_std: Standard deviation of image-plane noise
            frame: Frame of the generated points
            reference_axis: Axis of a reference segment starting at the origin
            reference_length: Length of that segment
            horizon_axes: Two axes whose vanishing points define the horizon,
                drawn from the first towards the second

        Returns:
            ControlPoints in ``frame`` with the origin at the world origin
        """
        origin = np.zeros(3)
        groups = [self.group_for_axis(axis, lines_per_group, noise_std, frame) for axis in axes]

        horizon = None
        if horizon_axes is not None:
            horizon = ControlPointPair(
                start=self._from_image_plane(self.vanishing_point(horizon_axes[0]), frame),
                end=self._from_image_plane(self.vanishing_point(horizon_axes[1]), frame)
            )

        anchor = None
        reference_point = None
        if reference_axis is not None:
            anchor = self.project_point(origin, frame)
            reference_point = self.project_point(
                reference_length * reference_axis.to_numpy(), frame
            )

        return ControlPoints(
            frame=frame,
            vanishing_points=groups,
            origin=self.project_point(origin, frame),
            horizon=horizon,
            principal_point=self._from_image_plane(self.principal_point, frame),
            reference_distance_anchor=anchor,
            reference_distance_point=reference_point
        )

    def _from_image_plane(self, p: np.ndarray, frame: ImageCoordinateFrame) -> Point2D:
        converted = convert_coordinates(
            p, ImageCoordinateFrame.IMAGE_PLANE, frame, self.image_width, self.image_height
        )
        return Point2D.from_numpy(converted)
