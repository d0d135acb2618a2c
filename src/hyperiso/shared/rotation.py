"""Unified quaternion utilities for CPU and GPU operations.

This module provides the rotation algebra used by isometries. Functions work
with both NumPy arrays and PyTorch tensors and auto-detect the input type to
pick the backend.

Quaternion Convention: (w, x, y, z) - scalar first
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import torch

# Type aliases
ArrayLike = np.ndarray | list | tuple


# ============================================================================
# NumPy/CPU Implementation
# ============================================================================


def _quaternion_multiply_numpy(
    q1: np.ndarray, q2: np.ndarray, out: np.ndarray | None = None
) -> np.ndarray:
    """NumPy Hamilton product.

    :param q1: Left quaternion [4] or [N, 4] (w, x, y, z)
    :param q2: Right quaternion [4] or [N, 4] (w, x, y, z)
    :param out: Optional pre-allocated output buffer
    :returns: Product quaternion q1 * q2
    """
    squeeze = q1.ndim == 1 and q2.ndim == 1
    if q1.ndim == 1:
        q1 = q1[np.newaxis, :]
    if q2.ndim == 1:
        q2 = q2[np.newaxis, :]

    w1, x1, y1, z1 = q1[:, 0], q1[:, 1], q1[:, 2], q1[:, 3]
    w2, x2, y2, z2 = q2[:, 0], q2[:, 1], q2[:, 2], q2[:, 3]

    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2

    result = np.stack([w, x, y, z], axis=1)

    if out is not None:
        out[:] = result.reshape(out.shape)
        return out
    return result[0] if squeeze else result


def _quaternion_conjugate_numpy(q: np.ndarray) -> np.ndarray:
    """NumPy quaternion conjugate (inverse for unit quaternions)."""
    conj = q.copy()
    conj[..., 1:] = -conj[..., 1:]
    return conj


def _quaternion_to_rotation_matrix_numpy(q: np.ndarray) -> np.ndarray:
    """NumPy quaternion to 3x3 rotation matrix.

    :param q: Quaternion [4] (w, x, y, z), normalized here
    :returns: 3x3 rotation matrix
    """
    q = q / np.linalg.norm(q)
    w, x, y, z = q[0], q[1], q[2], q[3]

    R = np.empty((3, 3), dtype=q.dtype)

    R[0, 0] = 1 - 2 * (y * y + z * z)
    R[0, 1] = 2 * (x * y - w * z)
    R[0, 2] = 2 * (x * z + w * y)

    R[1, 0] = 2 * (x * y + w * z)
    R[1, 1] = 1 - 2 * (x * x + z * z)
    R[1, 2] = 2 * (y * z - w * x)

    R[2, 0] = 2 * (x * z - w * y)
    R[2, 1] = 2 * (y * z + w * x)
    R[2, 2] = 1 - 2 * (x * x + y * y)

    return R


def _rotation_matrix_to_quaternion_numpy(R: np.ndarray) -> np.ndarray:
    """NumPy 3x3 rotation matrix to quaternion (Shepperd's method).

    :param R: 3x3 rotation matrix
    :returns: Unit quaternion [4] (w, x, y, z) with w >= 0
    """
    trace = R[0, 0] + R[1, 1] + R[2, 2]

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (R[2, 1] - R[1, 2]) * s
        y = (R[0, 2] - R[2, 0]) * s
        z = (R[1, 0] - R[0, 1]) * s
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        w = (R[2, 1] - R[1, 2]) / s
        x = 0.25 * s
        y = (R[0, 1] + R[1, 0]) / s
        z = (R[0, 2] + R[2, 0]) / s
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        w = (R[0, 2] - R[2, 0]) / s
        x = (R[0, 1] + R[1, 0]) / s
        y = 0.25 * s
        z = (R[1, 2] + R[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        w = (R[1, 0] - R[0, 1]) / s
        x = (R[0, 2] + R[2, 0]) / s
        y = (R[1, 2] + R[2, 1]) / s
        z = 0.25 * s

    q = np.array([w, x, y, z], dtype=R.dtype)
    if q[0] < 0:
        q = -q
    return q / np.linalg.norm(q)


def _axis_angle_to_quaternion_numpy(axis_angle: np.ndarray) -> np.ndarray:
    """NumPy rotation vector (axis * angle) to quaternion.

    :param axis_angle: Axis-angle vector [3]
    :returns: Quaternion [4] (w, x, y, z)
    """
    angle = np.linalg.norm(axis_angle)
    if angle < 1e-12:
        return np.array([1.0, 0.0, 0.0, 0.0], dtype=axis_angle.dtype)

    axis = axis_angle / angle
    half_angle = angle / 2
    sin_half = np.sin(half_angle)

    return np.array(
        [np.cos(half_angle), axis[0] * sin_half, axis[1] * sin_half, axis[2] * sin_half],
        dtype=axis_angle.dtype,
    )


def _rotate_vector_numpy(q: np.ndarray, v: np.ndarray, inverse: bool = False) -> np.ndarray:
    """Rotate vector(s) [3] or [N, 3] by quaternion q (or its inverse)."""
    R = _quaternion_to_rotation_matrix_numpy(q)
    if inverse:
        R = R.T
    return v @ R.T


# ============================================================================
# PyTorch/GPU Implementation
# ============================================================================


def _quaternion_multiply_torch(q1: torch.Tensor, q2: torch.Tensor) -> torch.Tensor:
    """PyTorch Hamilton product.

    :param q1: Left quaternion [4] or [N, 4] (w, x, y, z)
    :param q2: Right quaternion [4] or [N, 4] (w, x, y, z)
    :returns: Product quaternion q1 * q2
    """
    import torch

    squeeze_output = q1.dim() == 1 and q2.dim() == 1
    if q1.dim() == 1:
        q1 = q1.unsqueeze(0)
    if q2.dim() == 1:
        q2 = q2.unsqueeze(0)

    w1, x1, y1, z1 = q1[:, 0], q1[:, 1], q1[:, 2], q1[:, 3]
    w2, x2, y2, z2 = q2[:, 0], q2[:, 1], q2[:, 2], q2[:, 3]

    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2

    result = torch.stack([w, x, y, z], dim=1)
    return result.squeeze(0) if squeeze_output else result


def _quaternion_conjugate_torch(q: torch.Tensor) -> torch.Tensor:
    """PyTorch quaternion conjugate."""
    conj = q.clone()
    conj[..., 1:] = -conj[..., 1:]
    return conj


def _quaternion_to_rotation_matrix_torch(q: torch.Tensor) -> torch.Tensor:
    """PyTorch quaternion to 3x3 rotation matrix.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: 3x3 rotation matrix
    """
    import torch

    q = q / torch.norm(q)
    w, x, y, z = q[0], q[1], q[2], q[3]

    return torch.stack(
        [
            torch.stack([1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)]),
            torch.stack([2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)]),
            torch.stack([2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)]),
        ]
    )


def _axis_angle_to_quaternion_torch(axis_angle: torch.Tensor) -> torch.Tensor:
    """PyTorch rotation vector (axis * angle) to quaternion.

    :param axis_angle: Axis-angle vector [3]
    :returns: Quaternion [4] (w, x, y, z)
    """
    import torch

    angle = torch.norm(axis_angle)
    if angle < 1e-12:
        return torch.tensor(
            [1.0, 0.0, 0.0, 0.0], dtype=axis_angle.dtype, device=axis_angle.device
        )

    axis = axis_angle / angle
    sin_half = torch.sin(angle / 2)

    return torch.stack(
        [torch.cos(angle / 2), axis[0] * sin_half, axis[1] * sin_half, axis[2] * sin_half]
    )


def _rotate_vector_torch(
    q: torch.Tensor, v: torch.Tensor, inverse: bool = False
) -> torch.Tensor:
    """Rotate vector(s) [3] or [N, 3] by quaternion q (or its inverse)."""
    import torch

    q = torch.as_tensor(q, dtype=v.dtype, device=v.device)
    R = _quaternion_to_rotation_matrix_torch(q)
    if inverse:
        R = R.T
    return v @ R.T


# ============================================================================
# Public API - Auto-dispatching functions
# ============================================================================


def _is_torch_tensor(x) -> bool:
    """Check if input is a PyTorch tensor without importing torch."""
    return type(x).__module__.startswith("torch")


def _as_float_array(x) -> np.ndarray:
    """Convert to a floating numpy array, keeping float32/float64 inputs as-is."""
    arr = np.asarray(x)
    if not np.issubdtype(arr.dtype, np.floating):
        arr = arr.astype(np.float64)
    return arr


def quaternion_multiply(q1, q2, out=None):
    """Multiply quaternions (Hamilton product ``q1 * q2``).

    Auto-dispatches to NumPy or PyTorch based on input type. The product
    rotates by ``q2`` first, then by ``q1``.

    :param q1: Left quaternion [4] or [N, 4] (w, x, y, z)
    :param q2: Right quaternion [4] or [N, 4] (w, x, y, z)
    :param out: Optional output buffer (NumPy only)
    :returns: Product quaternion

    Example:
        >>> import numpy as np
        >>> q1 = np.array([1.0, 0, 0, 0])  # Identity
        >>> q2 = np.array([0.707, 0, 0.707, 0])  # 90 deg Y rotation
        >>> result = quaternion_multiply(q1, q2)
    """
    if _is_torch_tensor(q1):
        return _quaternion_multiply_torch(q1, q2)
    return _quaternion_multiply_numpy(_as_float_array(q1), _as_float_array(q2), out)


def quaternion_conjugate(q):
    """Conjugate quaternion, the inverse rotation of a unit quaternion.

    :param q: Quaternion [4] or [N, 4] (w, x, y, z)
    :returns: (w, -x, -y, -z)
    """
    if _is_torch_tensor(q):
        return _quaternion_conjugate_torch(q)
    return _quaternion_conjugate_numpy(_as_float_array(q))


def quaternion_to_rotation_matrix(q):
    """Convert quaternion to 3x3 rotation matrix.

    Auto-dispatches to NumPy or PyTorch based on input type.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: 3x3 rotation matrix

    Example:
        >>> import numpy as np
        >>> q = np.array([0.707, 0, 0.707, 0])  # 90 deg Y rotation
        >>> R = quaternion_to_rotation_matrix(q)
    """
    if _is_torch_tensor(q):
        return _quaternion_to_rotation_matrix_torch(q)
    return _quaternion_to_rotation_matrix_numpy(_as_float_array(q))


def quaternion_to_homogeneous(q: ArrayLike) -> np.ndarray:
    """Convert quaternion to a 4x4 homogeneous rotation matrix.

    The rotation fixes the w axis, so it is also an isometry of the
    hyperboloid fixing the origin.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: 4x4 matrix with the rotation in the upper-left block
    """
    R = _quaternion_to_rotation_matrix_numpy(_as_float_array(q))
    M = np.eye(4, dtype=R.dtype)
    M[:3, :3] = R
    return M


def rotation_matrix_to_quaternion(R: ArrayLike) -> np.ndarray:
    """Convert 3x3 rotation matrix to quaternion.

    :param R: 3x3 rotation matrix
    :returns: Unit quaternion [4] (w, x, y, z), scalar part non-negative

    Example:
        >>> import numpy as np
        >>> q = rotation_matrix_to_quaternion(np.eye(3))
    """
    return _rotation_matrix_to_quaternion_numpy(_as_float_array(R))


def axis_angle_to_quaternion(axis_angle):
    """Convert rotation vector (axis * angle, radians) to quaternion.

    Auto-dispatches to NumPy or PyTorch based on input type.

    :param axis_angle: Axis-angle vector [3] (axis * angle)
    :returns: Quaternion [4] (w, x, y, z)

    Example:
        >>> import numpy as np
        >>> q = axis_angle_to_quaternion(np.array([0, np.pi / 2, 0]))  # 90 deg Y
    """
    if _is_torch_tensor(axis_angle):
        return _axis_angle_to_quaternion_torch(axis_angle)
    return _axis_angle_to_quaternion_numpy(_as_float_array(axis_angle))


def quaternion_from_axis_angle(axis: ArrayLike, angle: float, dtype=None) -> np.ndarray:
    """Build a rotation of ``angle`` radians about ``axis``.

    The axis need not be normalized. A zero axis yields the identity.

    :param axis: Rotation axis [3]
    :param angle: Rotation angle in radians
    :param dtype: Output dtype (defaults to the axis dtype)
    :returns: Quaternion [4] (w, x, y, z)
    """
    axis = _as_float_array(axis)
    if dtype is not None:
        axis = axis.astype(dtype)
    norm = np.linalg.norm(axis)
    if norm == 0:
        return quaternion_identity(dtype=axis.dtype)
    return _axis_angle_to_quaternion_numpy(axis / norm * angle)


def rotate_vector(q, v):
    """Rotate vector(s) [3] or [N, 3] by quaternion ``q``.

    :param q: Quaternion [4] (w, x, y, z)
    :param v: Vector [3] or vectors [N, 3]
    :returns: Rotated vector(s), same shape as ``v``
    """
    if _is_torch_tensor(v):
        return _rotate_vector_torch(q, v)
    return _rotate_vector_numpy(_as_float_array(q), _as_float_array(v))


def inverse_rotate_vector(q, v):
    """Rotate vector(s) [3] or [N, 3] by the inverse of quaternion ``q``.

    :param q: Quaternion [4] (w, x, y, z)
    :param v: Vector [3] or vectors [N, 3]
    :returns: Rotated vector(s), same shape as ``v``
    """
    if _is_torch_tensor(v):
        return _rotate_vector_torch(q, v, inverse=True)
    return _rotate_vector_numpy(_as_float_array(q), _as_float_array(v), inverse=True)


# ============================================================================
# Convenience Functions
# ============================================================================


def normalize_quaternion(q):
    """Normalize quaternion to unit length.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: Normalized quaternion
    """
    if _is_torch_tensor(q):
        import torch

        return q / torch.norm(q)
    q = _as_float_array(q)
    return q / np.linalg.norm(q)


def quaternion_identity(dtype=np.float64, device=None):
    """Return identity quaternion.

    :param dtype: Data type (numpy dtype or torch dtype)
    :param device: Device (for PyTorch tensors)
    :returns: Identity quaternion [1, 0, 0, 0]
    """
    if device is not None:
        import torch

        return torch.tensor([1.0, 0.0, 0.0, 0.0], dtype=dtype, device=device)
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=dtype)
