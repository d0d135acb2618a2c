"""
hyperiso - Isometries of 3D Hyperbolic Space

Rigid motions of hyperbolic 3-space in the hyperboloid model, for renderers
and physics code that work in curved space.

Features:
- Isometry value type: hyperbolic translation + rotation (unit quaternion)
- Composition with holonomy correction (angular defect of geodesic triangles)
- Conversion to and from 4x4 homogeneous matrices
- Application to single points or point batches (Numba kernels, PyTorch tensors)
- Hyperboloid helpers: origin, distance, translate
- Presets and JSON persistence
- Approximate equality helpers for tests

Example - Composition:
    >>> from hyperiso import Isometry
    >>>
    >>> a = Isometry.from_translation(0.5, 0.0, 0.0)
    >>> b = Isometry.from_translation(0.0, 0.5, 0.0)
    >>> c = a * b  # b first, then a; picks up a small rotation
    >>> M = c.to_homogeneous()

Example - Points:
    >>> import numpy as np
    >>> from hyperiso import apply_isometry, origin
    >>>
    >>> p = a * origin()
    >>> batch = apply_isometry(a, np.tile(origin(), (1000, 1)))
"""

__version__ = "0.1.0"

from hyperiso.config import ISOMETRY_CONFIG, IsometryConfig
from hyperiso.config.presets import (
    HALF_TURN_X,
    HALF_TURN_Y,
    HALF_TURN_Z,
    IDENTITY,
    get_isometry_preset,
    isometry_from_dict,
    isometry_to_dict,
    load_isometry_json,
    save_isometry_json,
)
from hyperiso.hyperbolic import distance, mip, origin, translate
from hyperiso.isometry import (
    Isometry,
    apply_isometry,
    distances_from,
    loc_angle,
    triangle_defect,
)
from hyperiso.verification import IsometryVerifier

__all__ = [
    # Core
    "Isometry",
    "apply_isometry",
    "distances_from",
    "triangle_defect",
    "loc_angle",
    # Hyperboloid helpers
    "origin",
    "mip",
    "distance",
    "translate",
    # Config
    "IsometryConfig",
    "ISOMETRY_CONFIG",
    # Presets and persistence
    "IDENTITY",
    "HALF_TURN_X",
    "HALF_TURN_Y",
    "HALF_TURN_Z",
    "get_isometry_preset",
    "isometry_from_dict",
    "isometry_to_dict",
    "load_isometry_json",
    "save_isometry_json",
    # Verification
    "IsometryVerifier",
    "__version__",
]
