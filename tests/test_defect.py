"""Tests for triangle angles and angular defect."""

import math

import numpy as np
import pytest

from hyperiso.hyperbolic import origin
from hyperiso.isometry.defect import loc_angle, triangle_defect


class TestLocAngle:
    """Test the hyperbolic law of cosines."""

    def test_known_triangle_angle_sum(self):
        """Test the angles of a known triangle sum to about 1.94 radians."""
        a, b, c = 3.11, 4.39, 1.95
        total = loc_angle(a, b, c) + loc_angle(b, c, a) + loc_angle(c, a, b)
        assert abs(total - 1.94) < 1e-2

    def test_equilateral(self):
        """Test the equilateral angle cos(theta) = cosh(s) / (cosh(s) + 1)."""
        s = 1.3
        expected = math.acos(math.cosh(s) / (math.cosh(s) + 1))
        assert abs(loc_angle(s, s, s) - expected) < 1e-12

    def test_angle_sum_below_pi(self):
        """Test any non-degenerate triangle has angle sum below pi."""
        a, b, c = 0.9, 1.1, 1.4
        total = loc_angle(a, b, c) + loc_angle(b, c, a) + loc_angle(c, a, b)
        assert 0 < total < math.pi

    def test_clamped_to_pi(self):
        """Test an opposite side longer than the other two clamps to pi, not NaN."""
        angle = loc_angle(5.0, 1.0, 1.0)
        assert not np.isnan(angle)
        assert abs(angle - math.pi) < 1e-12

    def test_clamped_to_zero(self):
        """Test a cosine above 1 clamps to a zero angle."""
        angle = loc_angle(0.0, 1.0, 3.0)
        assert not np.isnan(angle)
        assert angle == 0.0

    def test_in_range(self):
        """Test near-degenerate inputs stay within [0, pi]."""
        angle = loc_angle(2.0, 1.0, 1.0)
        assert np.isfinite(angle)
        assert 0.0 <= angle <= math.pi

    def test_zero_adjacent_side(self):
        """Test a zero-length adjacent side gives a zero angle."""
        assert loc_angle(1.0, 0.0, 1.0) == 0.0
        assert loc_angle(1.0, 1.0, 0.0) == 0.0


class TestTriangleDefect:
    """Test angular defect of triangles given by their vertices."""

    def test_all_at_origin(self):
        """Test the fully degenerate triangle has exactly zero defect."""
        assert triangle_defect(origin(), origin(), origin()) == 0.0

    def test_two_coincident_vertices(self):
        """Test a triangle with a repeated vertex has zero defect."""
        p = np.array([0.4, 0.0, 0.0, 1.0])
        assert triangle_defect(origin(), p, p) == 0.0
        assert triangle_defect(p, origin(), origin()) == 0.0

    def test_positive_and_bounded(self):
        """Test a proper triangle has defect in (0, pi)."""
        p1 = np.array([0.6, 0.0, 0.0, 1.0])
        p2 = np.array([0.0, 0.6, 0.0, 1.0])
        defect = triangle_defect(origin(), p1, p2)
        assert 0 < defect < math.pi

    def test_small_triangle_matches_euclidean_area(self):
        """Test a tiny right triangle has defect close to its Euclidean area."""
        eps = 1e-2
        p1 = np.array([eps, 0.0, 0.0, 1.0])
        p2 = np.array([0.0, eps, 0.0, 1.0])
        defect = triangle_defect(origin(), p1, p2)
        assert defect == pytest.approx(eps * eps / 2, rel=1e-2)

    def test_vertex_order_irrelevant(self):
        """Test the defect does not depend on vertex order."""
        p0 = np.array([0.1, 0.2, 0.0, 1.0])
        p1 = np.array([-0.5, 0.1, 0.3, 1.0])
        p2 = np.array([0.2, -0.6, 0.1, 1.0])
        d1 = triangle_defect(p0, p1, p2)
        d2 = triangle_defect(p2, p0, p1)
        d3 = triangle_defect(p1, p0, p2)
        assert abs(d1 - d2) < 1e-12
        assert abs(d1 - d3) < 1e-12

    def test_scale_invariant(self):
        """Test scaling vertices leaves the defect unchanged."""
        p1 = np.array([0.6, 0.0, 0.0, 1.0])
        p2 = np.array([0.0, 0.6, 0.0, 1.0])
        d1 = triangle_defect(origin(), p1, p2)
        d2 = triangle_defect(origin() * 2.0, p1 * 0.5, p2 * 3.0)
        assert abs(d1 - d2) < 1e-10
