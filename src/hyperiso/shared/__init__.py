"""Shared utilities for hyperiso.

This module contains the quaternion algebra shared by the isometry type and
the batched CPU (NumPy/Numba) and GPU (PyTorch) application paths.
"""

from hyperiso.shared.rotation import (
    axis_angle_to_quaternion,
    inverse_rotate_vector,
    normalize_quaternion,
    quaternion_conjugate,
    quaternion_from_axis_angle,
    quaternion_identity,
    quaternion_multiply,
    quaternion_to_homogeneous,
    quaternion_to_rotation_matrix,
    rotate_vector,
    rotation_matrix_to_quaternion,
)

__all__ = [
    "quaternion_multiply",
    "quaternion_conjugate",
    "quaternion_to_rotation_matrix",
    "quaternion_to_homogeneous",
    "rotation_matrix_to_quaternion",
    "axis_angle_to_quaternion",
    "quaternion_from_axis_angle",
    "rotate_vector",
    "inverse_rotate_vector",
    "normalize_quaternion",
    "quaternion_identity",
]
