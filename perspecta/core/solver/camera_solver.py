"""Camera calibration from vanishing points.

Recovers focal length, orientation and position of a camera from one or two
vanishing points of orthogonal scene directions, following Guillou et al.,
"Using Vanishing Points for Camera Calibration and Coarse 3D Reconstruction
from a Single Image".
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..math.camera import field_of_view, unproject
from ..math.homogeneous import triangle_orthocenter
from ..math.transforms import invert, is_rotation, make_transform
from ..models.entities import ControlPointPair, ControlPoints
from ..models.result import CameraParameters, SolverResult, VanishingPoint
from ..models.settings import Axis, CalibrationMode, CalibrationSettings, PrincipalPointMode
from ..sensor.presets import CAMERA_PRESETS
from ..sensor.reconciler import reconcile, relative_focal_length, resolve_sensor
from .. import messages
from ..errors import (
    CalibrationError,
    DegenerateGeometry,
    InsufficientConstraints,
    NoRealFocalLengthSolution,
)
from .vanishing_points import estimate_vanishing_point


@dataclass
class SolverOptions:
    """Numeric options for the camera solver."""

    epsilon: float = 1e-10
    infinity_tolerance: float = 1e-9  # relative |w| of a vanishing point at infinity
    convergence_tolerance: float = 0.01  # radians, RMS over redundant lines
    orthogonality_tolerance: float = 1e-6  # |cos| between the two vanishing directions
    degenerate_tolerance: float = 1e-6  # |u x v| below which the basis is rejected
    default_camera_distance: float = 10.0
    default_relative_focal_length: float = 2.0
    aspect_tolerance: float = 0.01


class CameraSolver:
    """Single-view camera calibration from vanishing points.

    The solver keeps no state between calls; ``solve`` is a pure function of
    its arguments.
    """

    def __init__(
        self,
        options: Optional[SolverOptions] = None,
        presets: Mapping[str, Tuple[float, float]] = CAMERA_PRESETS
    ):
        """Initialize solver.

        Args:
            options: Numeric solver options
            presets: Camera sensor preset table
        """
        self.options = options or SolverOptions()
        self.presets = presets
        self.logger = logging.getLogger(__name__)

    def solve(
        self,
        control_points: ControlPoints,
        settings: CalibrationSettings,
        image_width: int,
        image_height: int
    ) -> SolverResult:
        """Calibrate a camera.

        Args:
            control_points: User-placed lines and points
            settings: Calibration settings
            image_width: Image width in pixels
            image_height: Image height in pixels

        Returns:
            Solver result. ``camera_parameters`` is None and ``errors`` is
            populated when the configuration cannot be solved.
        """
        warnings: List[str] = []

        try:
            camera_parameters = self._solve(
                control_points, settings, image_width, image_height, warnings
            )
        except CalibrationError as e:
            self.logger.warning(f"Calibration failed: {e.message}")
            return SolverResult(errors=[e.message], warnings=warnings)

        errors: List[str] = []
        absolute_focal_length = None
        if settings.compute_absolute_focal_length:
            report = reconcile(
                camera_parameters.relative_focal_length,
                settings.sensor,
                image_width,
                image_height,
                self.presets,
                self.options.aspect_tolerance
            )
            absolute_focal_length = report.absolute_focal_length
            errors.extend(report.errors)
            warnings.extend(report.warnings)

        self.logger.info(
            f"Calibrated {image_width}x{image_height} image: "
            f"f={camera_parameters.relative_focal_length:.4f}, "
            f"hfov={math.degrees(camera_parameters.horizontal_field_of_view):.2f} deg"
        )

        return SolverResult(
            camera_parameters=camera_parameters,
            errors=errors,
            warnings=warnings,
            absolute_focal_length=absolute_focal_length
        )

    def _solve(
        self,
        control_points: ControlPoints,
        settings: CalibrationSettings,
        image_width: int,
        image_height: int,
        warnings: List[str]
    ) -> CameraParameters:
        """Run the calibration steps, raising CalibrationError on failure."""
        if image_width <= 0 or image_height <= 0:
            raise CalibrationError(
                messages.INVALID_IMAGE_DIMENSIONS.format(width=image_width, height=image_height)
            )

        points = control_points.to_image_plane(image_width, image_height)

        axis_1, axis_2 = settings.vanishing_point_axes
        if axis_1.value[-1] == axis_2.value[-1]:
            raise DegenerateGeometry(messages.IDENTICAL_AXES.format(axis=axis_1.value[-1]))

        required = settings.required_vanishing_points()
        groups = points.vanishing_points
        if len(groups) < required:
            raise InsufficientConstraints(
                messages.MISSING_VANISHING_POINT.format(index=len(groups) + 1)
            )

        vanishing_points = [
            self._vanishing_point(groups[i].lines, i + 1, warnings)
            for i in range(required)
        ]

        if settings.calibration_mode == CalibrationMode.TWO_VANISHING_POINTS:
            self._validate_pair(vanishing_points[0], vanishing_points[1])

        principal_point = self._principal_point(points, settings, vanishing_points)

        if settings.calibration_mode == CalibrationMode.ONE_VANISHING_POINT:
            f = self._given_focal_length(settings)
            self._check_field_of_view(f, image_width, image_height)
            directions = self._one_point_directions(
                vanishing_points[0], points.horizon, principal_point, f
            )
        else:
            f = self._two_point_focal_length(
                vanishing_points[0], vanishing_points[1], principal_point, settings, warnings
            )
            self._check_field_of_view(f, image_width, image_height)
            directions = (
                self._direction(vanishing_points[0], principal_point, f),
                self._direction(vanishing_points[1], principal_point, f),
            )

        self.logger.debug(f"Principal point {principal_point}, relative focal length {f:.6f}")

        view_rotation = self._orientation(directions, (axis_1, axis_2), warnings)
        translation = self._translation(points, settings, principal_point, f, view_rotation, warnings)

        view_transform = make_transform(view_rotation, translation)
        camera_transform = invert(view_transform)
        hfov, vfov = field_of_view(f, image_width, image_height)

        return CameraParameters(
            camera_transform=camera_transform.tolist(),
            view_transform=view_transform.tolist(),
            relative_focal_length=f,
            horizontal_field_of_view=hfov,
            vertical_field_of_view=vfov,
            principal_point=principal_point.tolist(),
            image_width=image_width,
            image_height=image_height,
            vanishing_points=vanishing_points,
            vanishing_point_axes=[axis_1, axis_2]
        )

    def _vanishing_point(
        self,
        lines: Sequence[ControlPointPair],
        index: int,
        warnings: List[str]
    ) -> VanishingPoint:
        """Estimate one vanishing point and warn when its lines do not converge."""
        vp = estimate_vanishing_point(
            lines,
            index=index,
            infinity_tolerance=self.options.infinity_tolerance,
            epsilon=self.options.epsilon
        )
        if vp.residual > self.options.convergence_tolerance:
            warnings.append(
                messages.POOR_CONVERGENCE.format(index=index, degrees=math.degrees(vp.residual))
            )
        return vp

    def _validate_pair(self, vp1: VanishingPoint, vp2: VanishingPoint) -> None:
        """Reject vanishing point pairs that cannot span two directions."""
        if not vp1.at_infinity and not vp2.at_infinity:
            if np.linalg.norm(vp1.position() - vp2.position()) < self.options.degenerate_tolerance:
                raise DegenerateGeometry(messages.COINCIDENT_VANISHING_POINTS)
        elif vp1.at_infinity and vp2.at_infinity:
            d1, d2 = vp1.direction(), vp2.direction()
            if abs(d1[0] * d2[1] - d1[1] * d2[0]) < self.options.degenerate_tolerance:
                raise DegenerateGeometry(messages.PARALLEL_VANISHING_DIRECTIONS)

    def _principal_point(
        self,
        points: ControlPoints,
        settings: CalibrationSettings,
        vanishing_points: List[VanishingPoint]
    ) -> np.ndarray:
        """Principal point in image-plane coordinates for the configured mode."""
        mode = settings.principal_point_mode

        if mode == PrincipalPointMode.MANUAL:
            if points.principal_point is None:
                raise InsufficientConstraints(messages.MISSING_PRINCIPAL_POINT)
            return points.principal_point.to_numpy()

        if settings.uses_third_vanishing_point():
            for index, vp in enumerate(vanishing_points, start=1):
                if vp.at_infinity:
                    raise DegenerateGeometry(
                        messages.THIRD_VANISHING_POINT_AT_INFINITY.format(index=index)
                    )
            try:
                return triangle_orthocenter(*(vp.position() for vp in vanishing_points))
            except ValueError:
                raise DegenerateGeometry(messages.DEGENERATE_VANISHING_TRIANGLE)

        return np.zeros(2)

    def _given_focal_length(self, settings: CalibrationSettings) -> float:
        """Focal length supplied from outside, for one vanishing point mode."""
        if settings.relative_focal_length is not None:
            f = settings.relative_focal_length
        else:
            sensor_width, sensor_height = resolve_sensor(settings.sensor, self.presets)
            f = relative_focal_length(settings.absolute_focal_length, sensor_width, sensor_height)

        if not f > 0:
            raise CalibrationError(messages.INVALID_FOCAL_LENGTH.format(focal_length=f))
        return f

    def _two_point_focal_length(
        self,
        vp1: VanishingPoint,
        vp2: VanishingPoint,
        principal_point: np.ndarray,
        settings: CalibrationSettings,
        warnings: List[str]
    ) -> float:
        """Focal length from the orthogonality of two vanishing directions.

        With both points finite, (v1 - p) . (v2 - p) = -f^2. A point at
        infinity leaves f unconstrained, so the known or default focal length
        is used instead.
        """
        if vp1.at_infinity or vp2.at_infinity:
            if settings.relative_focal_length is not None:
                f = settings.relative_focal_length
            else:
                f = self.options.default_relative_focal_length
            warnings.append(messages.FOCAL_LENGTH_NOT_OBSERVABLE.format(focal_length=f))
            if settings.relative_focal_length is None:
                warnings.append(messages.DEFAULT_FOCAL_LENGTH_USED)
            return f

        f_squared = -float(np.dot(vp1.position() - principal_point, vp2.position() - principal_point))
        if f_squared <= 0:
            raise NoRealFocalLengthSolution(messages.NO_REAL_FOCAL_LENGTH)

        return math.sqrt(f_squared)

    def _check_field_of_view(self, f: float, image_width: int, image_height: int) -> None:
        """Reject focal lengths too small or too large to describe a camera."""
        if not math.isfinite(f * f):
            raise DegenerateGeometry(messages.DEGENERATE_FIELD_OF_VIEW.format(focal_length=f))

        hfov, vfov = field_of_view(f, image_width, image_height)
        if not all(0.0 < fov < math.pi for fov in (hfov, vfov)):
            raise DegenerateGeometry(messages.DEGENERATE_FIELD_OF_VIEW.format(focal_length=f))

    @staticmethod
    def _direction(vp: VanishingPoint, principal_point: np.ndarray, f: float) -> np.ndarray:
        """Camera-space direction towards a vanishing point.

        A point at infinity corresponds to a direction parallel to the image
        plane, taken directly from its lines.
        """
        if vp.at_infinity:
            d = vp.direction()
            return np.array([d[0], d[1], 0.0])

        offset = vp.position() - principal_point
        return np.array([offset[0], offset[1], -f])

    def _one_point_directions(
        self,
        vp1: VanishingPoint,
        horizon: Optional[ControlPointPair],
        principal_point: np.ndarray,
        f: float
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Directions of vanishing point 1 and a second, synthesized one.

        The second vanishing point lies on the horizon through vanishing
        point 1, at the position satisfying (Fu - P) . (Fv - P) = -f^2.
        """
        if horizon is None:
            h = np.array([1.0, 0.0])
        else:
            h = horizon.direction()
            if np.linalg.norm(h) < self.options.epsilon:
                raise DegenerateGeometry(messages.DEGENERATE_HORIZON)
            h = h / np.linalg.norm(h)

        u = self._direction(vp1, principal_point, f)

        if vp1.at_infinity:
            horizon_dir = np.array([h[0], h[1], 0.0])
            v = horizon_dir - np.dot(horizon_dir, u) * u
            if np.linalg.norm(v) < self.options.degenerate_tolerance:
                # Horizon parallel to the lines: the second axis is the optical axis
                v = np.array([0.0, 0.0, -1.0])
            return u, v

        fu = vp1.position()
        fu_p = fu - principal_point
        denominator = float(np.dot(fu_p, h))
        if abs(denominator) < self.options.epsilon:
            # Second vanishing point at infinity along the horizon
            return u, np.array([h[0], h[1], 0.0])

        k = -(float(np.dot(fu_p, fu_p)) + f * f) / denominator
        fv = fu + k * h
        offset = fv - principal_point
        return u, np.array([offset[0], offset[1], -f])

    def _orientation(
        self,
        directions: Tuple[np.ndarray, np.ndarray],
        axes: Tuple[Axis, Axis],
        warnings: List[str]
    ) -> np.ndarray:
        """World-to-camera rotation from two vanishing directions and their axes."""
        u = directions[0] / np.linalg.norm(directions[0])
        v = directions[1] / np.linalg.norm(directions[1])

        if np.linalg.norm(np.cross(u, v)) < self.options.degenerate_tolerance:
            raise DegenerateGeometry(messages.DEGENERATE_BASIS)

        cos_angle = float(np.dot(u, v))
        if abs(cos_angle) > self.options.orthogonality_tolerance:
            deviation = abs(90.0 - math.degrees(math.acos(max(-1.0, min(1.0, cos_angle)))))
            warnings.append(messages.NON_ORTHOGONAL_DIRECTIONS.format(degrees=deviation))
            v = v - cos_angle * u
            v = v / np.linalg.norm(v)

        w = np.cross(u, v)
        camera_rotation = np.column_stack([u, v, w])

        # Rows are the world axes of vanishing points 1 and 2 and their cross product
        row_0 = axes[0].to_numpy()
        row_1 = axes[1].to_numpy()
        axis_assignment = np.vstack([row_0, row_1, np.cross(row_0, row_1)])

        view_rotation = camera_rotation @ axis_assignment
        if np.linalg.det(view_rotation) < 0:
            axis_assignment[2] = -axis_assignment[2]
            view_rotation = camera_rotation @ axis_assignment

        if not is_rotation(view_rotation):
            raise DegenerateGeometry(messages.DEGENERATE_BASIS)

        return view_rotation

    def _translation(
        self,
        points: ControlPoints,
        settings: CalibrationSettings,
        principal_point: np.ndarray,
        f: float,
        view_rotation: np.ndarray,
        warnings: List[str]
    ) -> np.ndarray:
        """World origin in camera space.

        Absolute scale is not observable in a single photograph; the origin
        is placed at the default camera distance unless a reference distance
        fixes the scale.
        """
        origin = points.origin.to_numpy() if points.origin is not None else np.zeros(2)
        translation = unproject(
            f, principal_point, origin, depth=self.options.default_camera_distance
        )[0]

        wants_scale = settings.reference_axis is not None or settings.reference_distance is not None
        if not wants_scale:
            return translation

        anchor = points.reference_distance_anchor
        other = points.reference_distance_point
        if (settings.reference_axis is None or settings.reference_distance is None
                or anchor is None or other is None):
            warnings.append(messages.INCOMPLETE_REFERENCE_DISTANCE)
            return translation

        axis = view_rotation @ settings.reference_axis.to_numpy()
        try:
            a = self._point_on_axis(translation, axis, f, principal_point, anchor.to_numpy())
            b = self._point_on_axis(translation, axis, f, principal_point, other.to_numpy())
        except ValueError:
            warnings.append(messages.DEGENERATE_REFERENCE_DISTANCE)
            return translation

        distance = float(np.linalg.norm(a - b))
        if distance < self.options.epsilon:
            warnings.append(messages.DEGENERATE_REFERENCE_DISTANCE)
            return translation

        return translation * (settings.reference_distance / distance)

    def _point_on_axis(
        self,
        origin: np.ndarray,
        axis: np.ndarray,
        f: float,
        principal_point: np.ndarray,
        image_point: np.ndarray
    ) -> np.ndarray:
        """Point on the line origin + s * axis closest to the ray through image_point."""
        ray = unproject(f, principal_point, image_point)[0]

        a = float(np.dot(axis, axis))
        b = float(np.dot(axis, ray))
        c = float(np.dot(ray, ray))
        d = float(np.dot(axis, origin))
        e = float(np.dot(ray, origin))

        denominator = a * c - b * b
        if denominator < self.options.epsilon * a * c:
            raise ValueError("Viewing ray is parallel to the reference axis")

        s = (b * e - c * d) / denominator
        return origin + s * axis


def solve(
    control_points: ControlPoints,
    settings: CalibrationSettings,
    image_width: int,
    image_height: int,
    options: Optional[SolverOptions] = None
) -> SolverResult:
    """Calibrate a camera from control points.

    Convenience wrapper around ``CameraSolver``.
    """
    return CameraSolver(options).solve(control_points, settings, image_width, image_height)
