"""Tests for control point, settings and result models."""

import math

import numpy as np
import pytest
from pydantic import ValidationError

from perspecta.core.math.coordinates import ImageCoordinateFrame
from perspecta.core.models.entities import (
    ControlPointPair,
    ControlPoints,
    Point2D,
    VanishingPointGroup,
)
from perspecta.core.models.result import CameraParameters, SolverResult, VanishingPoint
from perspecta.core.models.settings import (
    Axis,
    CalibrationMode,
    CalibrationSettings,
    PrincipalPointMode,
)


def segment(x0, y0, x1, y1):
    return ControlPointPair(start=Point2D(x=x0, y=y0), end=Point2D(x=x1, y=y1))


class TestEntities:
    """Test control point entities."""

    def test_point_numpy(self):
        """Test point conversion to and from numpy."""
        p = Point2D.from_numpy(np.array([1.5, -2.0]))

        assert p.x == 1.5 and p.y == -2.0
        np.testing.assert_allclose(p.to_numpy(), [1.5, -2.0])

    def test_point_from_wrong_shape(self):
        """Test point from a 3-element array."""
        with pytest.raises(ValueError):
            Point2D.from_numpy(np.zeros(3))

    def test_points_are_immutable(self):
        """Test that control points cannot be modified in place."""
        p = Point2D(x=0.0, y=0.0)
        with pytest.raises(ValidationError):
            p.x = 1.0

    def test_segment_geometry(self):
        """Test segment direction, midpoint and length."""
        s = segment(0.0, 0.0, 3.0, 4.0)

        np.testing.assert_allclose(s.direction(), [3.0, 4.0])
        np.testing.assert_allclose(s.midpoint(), [1.5, 2.0])
        assert s.length() == pytest.approx(5.0)

    def test_empty_group_rejected(self):
        """Test that a vanishing point group needs lines."""
        with pytest.raises(ValidationError):
            VanishingPointGroup(lines=[])

    def test_at_most_three_groups(self):
        """Test group count limit."""
        group = VanishingPointGroup(lines=[segment(0, 0, 1, 0), segment(0, 1, 1, 1)])
        with pytest.raises(ValidationError):
            ControlPoints(vanishing_points=[group] * 4)

    def test_default_frame_is_relative(self):
        """Test default coordinate frame."""
        assert ControlPoints().frame == ImageCoordinateFrame.RELATIVE

    def test_to_image_plane(self):
        """Test converting every point to the image-plane frame."""
        points = ControlPoints(
            frame=ImageCoordinateFrame.ABSOLUTE,
            vanishing_points=[VanishingPointGroup(lines=[segment(0, 0, 1200, 800)])],
            origin=Point2D(x=600, y=400),
            horizon=segment(0, 400, 1200, 400),
            principal_point=Point2D(x=600, y=0),
        )

        converted = points.to_image_plane(1200, 800)

        assert converted.frame == ImageCoordinateFrame.IMAGE_PLANE
        line = converted.vanishing_points[0].lines[0]
        np.testing.assert_allclose(line.start.to_numpy(), [-1.0, 800 / 1200], atol=1e-12)
        np.testing.assert_allclose(line.end.to_numpy(), [1.0, -800 / 1200], atol=1e-12)
        np.testing.assert_allclose(converted.origin.to_numpy(), [0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(converted.horizon.direction(), [2.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(
            converted.principal_point.to_numpy(), [0.0, 800 / 1200], atol=1e-12
        )
        assert converted.reference_distance_anchor is None

    def test_to_image_plane_noop(self):
        """Test that image-plane points are returned unchanged."""
        points = ControlPoints(frame=ImageCoordinateFrame.IMAGE_PLANE, origin=Point2D(x=0.2, y=0.1))
        assert points.to_image_plane(100, 100) is points

    def test_parse_from_json(self):
        """Test building control points from plain data."""
        points = ControlPoints.model_validate({
            "frame": "absolute",
            "vanishing_points": [
                {"lines": [
                    {"start": {"x": 0, "y": 0}, "end": {"x": 10, "y": 1}},
                    {"start": {"x": 0, "y": 5}, "end": {"x": 10, "y": 4}},
                ]},
            ],
        })

        assert points.frame == ImageCoordinateFrame.ABSOLUTE
        assert len(points.vanishing_points[0].lines) == 2


class TestSettings:
    """Test calibration settings."""

    def test_defaults(self):
        """Test default settings."""
        settings = CalibrationSettings()

        assert settings.calibration_mode == CalibrationMode.TWO_VANISHING_POINTS
        assert settings.principal_point_mode == PrincipalPointMode.DEFAULT
        assert settings.vanishing_point_axes == (Axis.POSITIVE_X, Axis.POSITIVE_Y)
        assert settings.relative_focal_length is None
        assert settings.required_vanishing_points() == 2

    def test_required_vanishing_points(self):
        """Test group count per mode."""
        assert CalibrationSettings(
            calibration_mode=CalibrationMode.ONE_VANISHING_POINT
        ).required_vanishing_points() == 1
        assert CalibrationSettings(
            principal_point_mode=PrincipalPointMode.FROM_THIRD_VANISHING_POINT
        ).required_vanishing_points() == 3

    def test_third_vanishing_point_ignored_in_one_point_mode(self):
        """Test that one vanishing point mode never uses a third group."""
        settings = CalibrationSettings(
            calibration_mode=CalibrationMode.ONE_VANISHING_POINT,
            principal_point_mode=PrincipalPointMode.FROM_THIRD_VANISHING_POINT
        )
        assert not settings.uses_third_vanishing_point()
        assert settings.required_vanishing_points() == 1

    @pytest.mark.parametrize("value", [0.0, -1.0])
    def test_invalid_relative_focal_length(self, value):
        """Test non-positive focal length."""
        with pytest.raises(ValidationError):
            CalibrationSettings(relative_focal_length=value)

    def test_invalid_reference_distance(self):
        """Test non-positive reference distance."""
        with pytest.raises(ValidationError):
            CalibrationSettings(reference_distance=-2.0)

    def test_axes_from_strings(self):
        """Test axis parsing."""
        settings = CalibrationSettings(vanishing_point_axes=("-z", "x"))
        assert settings.vanishing_point_axes == (Axis.NEGATIVE_Z, Axis.POSITIVE_X)

    @pytest.mark.parametrize("axis,expected", [
        (Axis.POSITIVE_X, [1, 0, 0]),
        (Axis.NEGATIVE_Y, [0, -1, 0]),
        (Axis.NEGATIVE_Z, [0, 0, -1]),
    ])
    def test_axis_vectors(self, axis, expected):
        """Test axis unit vectors."""
        np.testing.assert_allclose(axis.to_numpy(), expected)


class TestResults:
    """Test solver result models."""

    def test_finite_vanishing_point(self):
        """Test finite vanishing point accessors."""
        vp = VanishingPoint(x=4.0, y=2.0, w=2.0)

        np.testing.assert_allclose(vp.position(), [2.0, 1.0])
        with pytest.raises(ValueError):
            vp.direction()

    def test_vanishing_point_at_infinity(self):
        """Test vanishing point at infinity accessors."""
        vp = VanishingPoint(x=3.0, y=4.0, w=0.0, at_infinity=True)

        np.testing.assert_allclose(vp.direction(), [0.6, 0.8])
        with pytest.raises(ValueError):
            vp.position()

    def test_camera_parameters(self):
        """Test camera parameter accessors and validation."""
        transform = np.eye(4)
        transform[:3, 3] = [1.0, 2.0, 3.0]
        parameters = CameraParameters(
            camera_transform=transform.tolist(),
            view_transform=np.eye(4).tolist(),
            relative_focal_length=2.0,
            horizontal_field_of_view=0.9,
            vertical_field_of_view=0.6,
            principal_point=[0.0, 0.0],
            image_width=1200,
            image_height=800,
        )

        np.testing.assert_allclose(parameters.get_position(), [1.0, 2.0, 3.0])
        np.testing.assert_allclose(parameters.view_direction(), [0.0, 0.0, -1.0])

        with pytest.raises(ValidationError):
            CameraParameters(**{**parameters.model_dump(), "horizontal_field_of_view": math.pi})
        with pytest.raises(ValidationError):
            CameraParameters(**{**parameters.model_dump(), "camera_transform": [[1.0, 0.0]]})

    def test_solver_result_success(self):
        """Test success flag."""
        assert not SolverResult(errors=["failed"]).success
