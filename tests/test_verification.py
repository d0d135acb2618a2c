"""Tests for approximate equality helpers."""

import numpy as np
import pytest

from hyperiso import Isometry
from hyperiso.verification import IsometryVerifier


class TestIsometryVerifier:
    """Test IsometryVerifier."""

    def test_scaled_translation_is_close(self):
        """Test homogeneous points equal up to scale compare equal."""
        a = Isometry.from_parts([0.5, 0.0, 0.0, 1.0], [1.0, 0.0, 0.0, 0.0])
        b = Isometry.from_parts([1.5, 0.0, 0.0, 3.0], [1.0, 0.0, 0.0, 0.0])
        assert IsometryVerifier.is_close(a, b)
        IsometryVerifier.assert_close(a, b)

    def test_negated_quaternion_is_close(self):
        """Test q and -q describe the same rotation."""
        a = Isometry.from_axis_angle([0.0, 0.0, 1.0], 1.0)
        b = Isometry.from_parts(a.translation, -a.rotation)
        IsometryVerifier.assert_close(a, b)

    def test_assert_close_fails(self):
        """Test differing isometries raise with the error sizes."""
        a = Isometry.from_translation(0.5, 0.0, 0.0)
        b = Isometry.from_translation(0.0, 0.5, 0.0)
        with pytest.raises(AssertionError, match="translation error"):
            IsometryVerifier.assert_close(a, b)

    def test_epsilon(self):
        """Test a loose epsilon accepts small differences."""
        a = Isometry.from_translation(0.5, 0.0, 0.0)
        b = Isometry.from_translation(0.501, 0.0, 0.0)
        assert not IsometryVerifier.is_close(a, b)
        assert IsometryVerifier.is_close(a, b, epsilon=1e-2)

    def test_homogeneous_close(self):
        """Test matrix comparison within tolerance."""
        m = np.eye(4)
        IsometryVerifier.assert_homogeneous_close(m, m + 1e-7)
        with pytest.raises(AssertionError, match="Matrices differ"):
            IsometryVerifier.assert_homogeneous_close(m, m + 1e-3)

    def test_homogeneous_shape_mismatch(self):
        """Test differently shaped matrices fail."""
        with pytest.raises(AssertionError, match="Shape mismatch"):
            IsometryVerifier.assert_homogeneous_close(np.eye(4), np.eye(3))
