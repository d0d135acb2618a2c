"""
Hyperbolic isometry module - value type, composition and batched application.

Example:
    >>> from hyperiso.isometry import Isometry, apply_isometry
    >>> iso = Isometry.from_translation(0.5, 0, 0) * Isometry.from_axis_angle([1, 0, 0], 1.0)
    >>> points = apply_isometry(iso, [[0.0, 0.0, 0.0, 1.0], [0.1, 0.2, 0.0, 1.0]])
"""

from hyperiso.isometry.api import Isometry
from hyperiso.isometry.apply import apply_isometry, distances_from
from hyperiso.isometry.defect import loc_angle, triangle_defect

__all__ = [
    "Isometry",
    "apply_isometry",
    "distances_from",
    "triangle_defect",
    "loc_angle",
]
