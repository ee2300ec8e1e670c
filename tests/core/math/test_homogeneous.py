"""Tests for homogeneous points and lines."""

import numpy as np
import pytest
from perspecta.core.math.homogeneous import (
    dehomogenize,
    homogeneous,
    intersect_lines,
    is_at_infinity,
    line_through,
    normalize,
    triangle_orthocenter,
)


class TestLines:
    """Test line construction and intersection."""

    def test_homogeneous(self):
        """Test lifting a point to homogeneous coordinates."""
        np.testing.assert_allclose(homogeneous(np.array([2.0, 3.0])), [2.0, 3.0, 1.0])

    def test_homogeneous_wrong_shape(self):
        """Test lifting a 3D point."""
        with pytest.raises(ValueError):
            homogeneous(np.array([1.0, 2.0, 3.0]))

    def test_line_through_horizontal(self):
        """Test line through two points on the x axis."""
        line = line_through(np.array([0.0, 0.0]), np.array([1.0, 0.0]))
        np.testing.assert_allclose(line, [0.0, 1.0, 0.0], atol=1e-12)

    def test_line_normal_is_unit(self):
        """Test that the line normal has unit length."""
        line = line_through(np.array([0.3, -1.2]), np.array([4.0, 2.5]))
        assert abs(np.hypot(line[0], line[1]) - 1.0) < 1e-12

    def test_line_signed_distance(self):
        """Test that a normalized line gives point distances."""
        line = line_through(np.array([0.0, 2.0]), np.array([1.0, 2.0]))
        distance = np.dot(line, homogeneous(np.array([5.0, 5.0])))
        assert abs(abs(distance) - 3.0) < 1e-12

    def test_line_through_coincident_points(self):
        """Test that coincident points do not define a line."""
        with pytest.raises(ValueError):
            line_through(np.array([1.0, 1.0]), np.array([1.0, 1.0]))

    def test_intersect_lines(self):
        """Test intersection of x = 1 and y = 2."""
        l1 = line_through(np.array([1.0, 0.0]), np.array([1.0, 1.0]))
        l2 = line_through(np.array([0.0, 2.0]), np.array([1.0, 2.0]))

        p = intersect_lines(l1, l2)

        assert not is_at_infinity(p)
        np.testing.assert_allclose(dehomogenize(p), [1.0, 2.0], atol=1e-12)

    def test_parallel_lines_meet_at_infinity(self):
        """Test that parallel lines intersect at infinity."""
        l1 = line_through(np.array([0.0, 0.0]), np.array([1.0, 0.0]))
        l2 = line_through(np.array([0.0, 1.0]), np.array([2.0, 1.0]))

        p = intersect_lines(l1, l2)

        assert is_at_infinity(p)
        with pytest.raises(ValueError):
            dehomogenize(p)

    def test_is_at_infinity_scale_invariant(self):
        """Test that the infinity test ignores the overall scale."""
        p = np.array([1e-3, 2e-3, 1e-3])
        assert not is_at_infinity(p)
        assert not is_at_infinity(1e6 * p)

    def test_is_at_infinity_zero_vector(self):
        """Test that the zero vector is rejected."""
        with pytest.raises(ValueError):
            is_at_infinity(np.zeros(3))

    def test_normalize_zero(self):
        """Test normalizing a zero vector."""
        with pytest.raises(ValueError):
            normalize(np.zeros(3))


class TestOrthocenter:
    """Test triangle orthocenter."""

    def test_right_triangle(self):
        """Test that a right triangle's orthocenter is the right-angle corner."""
        h = triangle_orthocenter(np.array([0.0, 0.0]), np.array([4.0, 0.0]), np.array([0.0, 3.0]))
        np.testing.assert_allclose(h, [0.0, 0.0], atol=1e-12)

    def test_altitudes_meet(self):
        """Test that the orthocenter lies on every altitude."""
        k = np.array([-2.0, -1.0])
        l = np.array([3.0, -0.5])
        m = np.array([0.5, 4.0])

        h = triangle_orthocenter(k, l, m)

        # Each corner-to-orthocenter vector is perpendicular to the opposite side
        assert abs(np.dot(h - k, m - l)) < 1e-9
        assert abs(np.dot(h - l, m - k)) < 1e-9
        assert abs(np.dot(h - m, l - k)) < 1e-9

    def test_equilateral_triangle(self):
        """Test that an equilateral triangle's orthocenter is its centroid."""
        k = np.array([1.0, 0.0])
        l = np.array([np.cos(2 * np.pi / 3), np.sin(2 * np.pi / 3)])
        m = np.array([np.cos(4 * np.pi / 3), np.sin(4 * np.pi / 3)])

        h = triangle_orthocenter(k, l, m)
        np.testing.assert_allclose(h, [0.0, 0.0], atol=1e-12)

    def test_collinear_corners(self):
        """Test degenerate triangle."""
        with pytest.raises(ValueError):
            triangle_orthocenter(np.array([0.0, 0.0]), np.array([1.0, 1.0]), np.array([2.0, 2.0]))
