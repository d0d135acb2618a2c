"""Tests for isometry configuration."""

import dataclasses

import numpy as np
import pytest

from hyperiso.config import ISOMETRY_CONFIG, IsometryConfig


class TestIsometryConfig:
    """Test numeric settings."""

    def test_defaults(self):
        """Test the shared singleton's defaults."""
        assert ISOMETRY_CONFIG.epsilon == 1e-5
        assert ISOMETRY_CONFIG.unit_tolerance == 1e-6
        assert ISOMETRY_CONFIG.get_dtype() == np.float64

    def test_frozen(self):
        """Test the config cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            ISOMETRY_CONFIG.epsilon = 1.0

    def test_custom_dtype(self):
        """Test a float32 config."""
        assert IsometryConfig(dtype="float32").get_dtype() == np.float32

    def test_non_float_dtype(self):
        """Test integer dtypes are rejected."""
        with pytest.raises(TypeError, match="floating"):
            IsometryConfig(dtype="int32").get_dtype()

    def test_repr(self):
        """Test repr lists every field."""
        text = repr(IsometryConfig())
        assert "epsilon=1e-05" in text
        assert "dtype=float64" in text
        assert "unit_tolerance=1e-06" in text
