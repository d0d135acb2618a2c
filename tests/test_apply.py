"""Tests for batched isometry application (Numba kernels)."""

import numpy as np
import pytest

from hyperiso import Isometry, apply_isometry, distances_from
from hyperiso.hyperbolic import distance, lorentz_normalize, origin


@pytest.fixture
def isometry():
    """Translation combined with a rotation about a skew axis."""
    return Isometry.from_translation(0.3, -0.2, 0.4) * Isometry.from_axis_angle([1, 2, 3], 0.8)


@pytest.fixture
def points():
    """Random points inside the Klein ball, lifted to homogeneous form."""
    rng = np.random.default_rng(0)
    xyz = rng.uniform(-0.5, 0.5, size=(500, 3))
    return np.hstack([xyz, np.ones((500, 1))])


class TestApplyIsometry:
    """Test apply_isometry against single-point application."""

    def test_matches_single_point(self, isometry, points):
        """Test every row matches isometry * point."""
        result = apply_isometry(isometry, points)
        assert result.shape == points.shape
        for i in [0, 17, 499]:
            np.testing.assert_allclose(result[i], isometry * points[i], atol=1e-12)

    def test_matches_matrix(self, isometry, points):
        """Test the kernel agrees with the homogeneous matrix."""
        result = apply_isometry(isometry, points)
        expected = points @ isometry.to_homogeneous().T
        np.testing.assert_allclose(result, expected, atol=1e-12)

    def test_identity(self, points):
        """Test the identity leaves points unchanged."""
        np.testing.assert_allclose(apply_isometry(Isometry.identity(), points), points)

    def test_single_point(self, isometry):
        """Test a [4] input returns a [4] output."""
        result = apply_isometry(isometry, origin())
        assert result.shape == (4,)
        np.testing.assert_allclose(
            lorentz_normalize(result), lorentz_normalize(isometry.translation), atol=1e-12
        )

    def test_list_input(self, isometry):
        """Test nested lists are accepted."""
        result = apply_isometry(isometry, [[0.0, 0.0, 0.0, 1.0], [0.1, 0.0, 0.0, 1.0]])
        assert result.shape == (2, 4)

    def test_out_buffer(self, isometry, points):
        """Test writing into a pre-allocated buffer."""
        out = np.empty_like(points)
        result = apply_isometry(isometry, points, out=out)
        assert result is out
        np.testing.assert_allclose(out, apply_isometry(isometry, points))

    def test_out_buffer_single_point(self, isometry):
        """Test a [4] buffer is accepted for a single [4] point."""
        out = np.zeros(4)
        result = apply_isometry(isometry, origin(), out=out)
        assert result is out
        np.testing.assert_allclose(out, isometry * origin(), atol=1e-12)

        # A [1, 4] buffer still works and the result is squeezed
        out2 = np.zeros((1, 4))
        result2 = apply_isometry(isometry, origin(), out=out2)
        assert result2.shape == (4,)
        np.testing.assert_allclose(out2[0], out, atol=1e-12)

    def test_out_buffer_shape(self, isometry, points):
        """Test a mismatched output buffer is rejected."""
        with pytest.raises(ValueError, match="out must have shape"):
            apply_isometry(isometry, points, out=np.empty((3, 4)))

    def test_wrong_shape(self, isometry):
        """Test points without 4 components are rejected."""
        with pytest.raises(ValueError, match=r"\[N, 4\]"):
            apply_isometry(isometry, np.zeros((10, 3)))

    def test_input_not_modified(self, isometry, points):
        """Test the input array is left untouched."""
        original = points.copy()
        apply_isometry(isometry, points)
        np.testing.assert_array_equal(points, original)

    def test_float32(self, isometry, points):
        """Test float32 points stay float32."""
        points32 = points.astype(np.float32)
        result = apply_isometry(isometry, points32)
        assert result.dtype == np.float32
        np.testing.assert_allclose(result, apply_isometry(isometry, points), atol=1e-5)

    def test_operator_dispatch(self, isometry, points):
        """Test isometry * batch uses the batched path."""
        np.testing.assert_allclose(isometry * points, apply_isometry(isometry, points))


class TestDistancesFrom:
    """Test batched geodesic distances."""

    def test_matches_distance(self, points):
        """Test each entry matches hyperbolic.distance."""
        target = np.array([0.1, 0.2, -0.3, 1.0])
        result = distances_from(points, target)
        assert result.shape == (500,)
        for i in [0, 250, 499]:
            assert abs(result[i] - distance(points[i], target)) < 1e-10

    def test_self_distance_zero(self):
        """Test a point at the target is at distance zero."""
        result = distances_from(np.array([origin(), origin() * 3.0]), origin())
        np.testing.assert_allclose(result, [0.0, 0.0], atol=1e-7)

    def test_preserved_by_isometry(self, isometry, points):
        """Test moving points and target together preserves distances."""
        target = np.array([0.0, 0.4, 0.0, 1.0])
        before = distances_from(points, target)
        after = distances_from(apply_isometry(isometry, points), isometry * target)
        np.testing.assert_allclose(after, before, atol=1e-9)

    def test_wrong_shape(self):
        """Test a single point is rejected."""
        with pytest.raises(ValueError, match=r"\[N, 4\]"):
            distances_from(origin(), origin())
