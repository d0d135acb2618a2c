"""Type aliases for hyperiso.

Provides unified type hints for array-like parameters across all modules.
"""

from collections.abc import Sequence

import numpy as np

# Spatial vector (axis, direction, xyz part of a point)
Vector3 = tuple[float, float, float] | Sequence[float] | np.ndarray

# Homogeneous point on the hyperboloid (x, y, z, w)
Vector4 = tuple[float, float, float, float] | Sequence[float] | np.ndarray

# Quaternion type (w, x, y, z)
Quaternion = tuple[float, float, float, float] | Sequence[float] | np.ndarray

# 4x4 homogeneous transform
Matrix4 = Sequence[Sequence[float]] | np.ndarray
