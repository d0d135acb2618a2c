"""Apply isometries to batches of homogeneous points.

NumPy arrays go through the Numba kernel; PyTorch tensors are transformed
with a single matrix product on their own device.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from hyperiso.hyperbolic import origin, translate
from hyperiso.isometry.kernels import apply_isometry_numba, distance_from_numba
from hyperiso.shared.rotation import (
    _as_float_array,
    _is_torch_tensor,
    quaternion_to_rotation_matrix,
)

if TYPE_CHECKING:
    import torch

    from hyperiso.isometry.api import Isometry

logger = logging.getLogger(__name__)


def _apply_isometry_numpy(
    isometry: Isometry, points: np.ndarray, out: np.ndarray | None = None
) -> np.ndarray:
    """NumPy/Numba implementation of apply_isometry."""
    squeeze = points.ndim == 1
    if squeeze:
        points = points[np.newaxis, :]
    if points.ndim != 2 or points.shape[1] != 4:
        raise ValueError(f"points must have shape [N, 4] or [4], got {points.shape}")

    points = np.ascontiguousarray(points)
    rotation = quaternion_to_rotation_matrix(isometry.rotation).astype(points.dtype)
    translation = translate(origin(points.dtype), isometry.translation).astype(points.dtype)

    if out is None:
        out = np.empty_like(points)
    elif squeeze and out.shape == (4,):
        # Write through a [1, 4] view and hand back the caller's buffer
        apply_isometry_numba(points, rotation, translation, out[np.newaxis, :])
        return out
    elif out.shape != points.shape:
        raise ValueError(f"out must have shape {points.shape}, got {out.shape}")

    apply_isometry_numba(points, rotation, translation, out)
    return out[0] if squeeze else out


def _apply_isometry_torch(isometry: Isometry, points: torch.Tensor) -> torch.Tensor:
    """PyTorch implementation of apply_isometry."""
    import torch

    logger.debug("[apply_isometry] Using torch backend on %s", points.device)
    M = torch.as_tensor(isometry.to_homogeneous(), dtype=points.dtype, device=points.device)
    return points @ M.T


def apply_isometry(isometry: Isometry, points, out=None):
    """Apply ``isometry`` to homogeneous points.

    Each point is rotated about the origin, then carried along the
    isometry's translation, exactly as ``isometry * point``.

    :param isometry: Isometry to apply
    :param points: Points [N, 4] or a single point [4] (NumPy or PyTorch)
    :param out: Optional pre-allocated output buffer, same shape as ``points`` (NumPy only)
    :returns: Transformed points, same shape as ``points``

    Example:
        >>> import numpy as np
        >>> from hyperiso import Isometry
        >>> iso = Isometry.from_translation(0.5, 0.0, 0.0)
        >>> moved = apply_isometry(iso, np.array([[0.0, 0.0, 0.0, 1.0]]))
    """
    if _is_torch_tensor(points):
        return _apply_isometry_torch(isometry, points)
    return _apply_isometry_numpy(isometry, _as_float_array(points), out)


def distances_from(points, target) -> np.ndarray:
    """Geodesic distance from each point to ``target``.

    :param points: Homogeneous points [N, 4]
    :param target: Homogeneous point [4]
    :returns: Distances [N]
    """
    points = np.ascontiguousarray(_as_float_array(points))
    if points.ndim != 2 or points.shape[1] != 4:
        raise ValueError(f"points must have shape [N, 4], got {points.shape}")
    target = _as_float_array(target).astype(points.dtype)

    out = np.empty(points.shape[0], dtype=points.dtype)
    distance_from_numba(points, target, out)
    return out
