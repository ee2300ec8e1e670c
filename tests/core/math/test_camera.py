"""Tests for pinhole projection in the image-plane frame."""

import math

import numpy as np
import pytest
from perspecta.core.math.camera import (
    camera_center,
    field_of_view,
    focal_length_pixels,
    project,
    unproject,
)
from perspecta.core.math.transforms import make_transform


class TestProjection:
    """Test projection and unprojection."""

    def setup_method(self):
        """Set up camera parameters."""
        self.f = 1.5
        self.pp = np.array([0.1, -0.05])
        self.view = np.eye(4)

    def test_project_point(self):
        """Test projecting a point in front of the camera."""
        uv = project(self.f, self.pp, self.view, np.array([0.5, 0.2, -2.0]))

        np.testing.assert_allclose(uv, [[0.475, 0.1]], atol=1e-12)

    def test_project_principal_axis(self):
        """Test that points on the optical axis land on the principal point."""
        uv = project(self.f, self.pp, self.view, np.array([[0.0, 0.0, -1.0], [0.0, 0.0, -7.0]]))

        np.testing.assert_allclose(uv, [self.pp, self.pp], atol=1e-12)

    def test_project_behind_camera(self):
        """Test that points behind the camera have no projection."""
        uv = project(self.f, self.pp, self.view, np.array([0.5, 0.2, 2.0]))

        assert np.all(np.isnan(uv))

    def test_project_with_translation(self):
        """Test projecting through a translated camera."""
        view = make_transform(np.eye(3), np.array([0.0, 0.0, -4.0]))
        uv = project(self.f, self.pp, view, np.array([1.0, 0.0, 0.0]))

        np.testing.assert_allclose(uv, [[0.1 + 1.5 / 4.0, -0.05]], atol=1e-12)

    def test_unproject_round_trip(self):
        """Test that unprojecting at the point's depth recovers it."""
        X = np.array([0.5, 0.2, -2.0])
        uv = project(self.f, self.pp, self.view, X)[0]

        np.testing.assert_allclose(unproject(self.f, self.pp, uv, depth=2.0)[0], X, atol=1e-12)

    def test_invalid_focal_length(self):
        """Test non-positive focal length."""
        with pytest.raises(ValueError):
            project(0.0, self.pp, self.view, np.zeros(3))
        with pytest.raises(ValueError):
            unproject(-1.0, self.pp, np.zeros(2))

    def test_invalid_shapes(self):
        """Test invalid input shapes."""
        with pytest.raises(ValueError):
            project(self.f, self.pp, np.eye(3), np.zeros(3))
        with pytest.raises(ValueError):
            project(self.f, self.pp, self.view, np.zeros(2))

    def test_camera_center(self):
        """Test camera center of a translated camera."""
        view = make_transform(np.eye(3), np.array([1.0, 2.0, 3.0]))
        np.testing.assert_allclose(camera_center(view), [-1.0, -2.0, -3.0])


class TestFieldOfView:
    """Test field of view from relative focal length."""

    def test_square_image_unit_focal_length(self):
        """Test that f = 1 on a square image gives 90 degrees."""
        hfov, vfov = field_of_view(1.0, 1000, 1000)

        assert hfov == pytest.approx(math.pi / 2)
        assert vfov == pytest.approx(math.pi / 2)

    def test_landscape_image(self):
        """Test horizontal and vertical field of view of a wide image."""
        hfov, vfov = field_of_view(2.0, 1920, 1080)

        assert focal_length_pixels(2.0, 1920, 1080) == pytest.approx(1920.0)
        assert hfov == pytest.approx(2 * math.atan(0.5))
        assert vfov == pytest.approx(2 * math.atan(1080 / 3840))
        assert vfov < hfov

    def test_portrait_image(self):
        """Test that the long edge is vertical on a tall image."""
        hfov, vfov = field_of_view(2.0, 1080, 1920)

        assert vfov == pytest.approx(2 * math.atan(0.5))
        assert hfov < vfov

    def test_invalid_focal_length(self):
        """Test non-positive focal length."""
        with pytest.raises(ValueError):
            field_of_view(0.0, 100, 100)
