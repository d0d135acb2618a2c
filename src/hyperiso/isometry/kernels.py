"""
Numba-optimized kernels for applying isometries to point batches.

Provides JIT-compiled kernels for the per-point isometry application used by
renderers that move many homogeneous vertices at once.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def apply_isometry_numba(
    points: NDArray[np.float64],
    rotation: NDArray[np.float64],
    translation: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """
    Apply an isometry to homogeneous points with Numba optimization.

    Each point's spatial part is rotated, its w coordinate is kept, and the
    result is multiplied by the translation matrix.

    Args:
        points: Homogeneous points [N, 4]
        rotation: Rotation matrix [3, 3]
        translation: Transvection matrix [4, 4]
        out: Output points [N, 4] (modified in-place)
    """
    n = points.shape[0]

    for i in prange(n):
        x = points[i, 0]
        y = points[i, 1]
        z = points[i, 2]
        w = points[i, 3]

        rx = rotation[0, 0] * x + rotation[0, 1] * y + rotation[0, 2] * z
        ry = rotation[1, 0] * x + rotation[1, 1] * y + rotation[1, 2] * z
        rz = rotation[2, 0] * x + rotation[2, 1] * y + rotation[2, 2] * z

        for r in range(4):
            out[i, r] = (
                translation[r, 0] * rx
                + translation[r, 1] * ry
                + translation[r, 2] * rz
                + translation[r, 3] * w
            )


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def distance_from_numba(
    points: NDArray[np.float64],
    target: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """
    Compute geodesic distances from many points to one target point.

    Args:
        points: Homogeneous points [N, 4]
        target: Homogeneous point [4]
        out: Output distances [N] (modified in-place)
    """
    n = points.shape[0]
    tt = (
        target[0] * target[0]
        + target[1] * target[1]
        + target[2] * target[2]
        - target[3] * target[3]
    )

    for i in prange(n):
        pt = (
            points[i, 0] * target[0]
            + points[i, 1] * target[1]
            + points[i, 2] * target[2]
            - points[i, 3] * target[3]
        )
        pp = (
            points[i, 0] * points[i, 0]
            + points[i, 1] * points[i, 1]
            + points[i, 2] * points[i, 2]
            - points[i, 3] * points[i, 3]
        )
        ratio = pt * pt / (pp * tt)
        if ratio < 1.0:
            ratio = 1.0
        out[i] = np.arccosh(np.sqrt(ratio))
