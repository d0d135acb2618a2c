"""Isometry configuration.

This module defines the numeric settings shared by every isometry operation:
comparison tolerances and the default floating dtype.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class IsometryConfig:
    """Numeric settings for isometry construction and comparison.

    Attributes:
        epsilon: Default absolute tolerance for approximate equality
        dtype: Default floating dtype name for new isometries
        unit_tolerance: Margin inside the unit ball for Klein coordinates, and
            shortest rotation axis accepted before falling back to +Z
    """

    epsilon: float = 1e-5
    dtype: str = "float64"
    unit_tolerance: float = 1e-6

    def get_dtype(self) -> np.dtype:
        """Get the default dtype as a numpy dtype.

        :return: numpy dtype
        :raises TypeError: If ``dtype`` is not a floating type
        """
        dtype = np.dtype(self.dtype)
        if not np.issubdtype(dtype, np.floating):
            raise TypeError(f"dtype must be a floating type, got {self.dtype}")
        return dtype

    def __repr__(self) -> str:
        return (
            f"IsometryConfig(epsilon={self.epsilon}, dtype={self.dtype}, "
            f"unit_tolerance={self.unit_tolerance})"
        )


# Singleton instance for use throughout the codebase
ISOMETRY_CONFIG = IsometryConfig()
