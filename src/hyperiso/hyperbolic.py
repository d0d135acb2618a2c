"""Hyperboloid model helpers for 3D hyperbolic space.

Points are homogeneous 4-vectors (x, y, z, w) with the Minkowski form
x^2 + y^2 + z^2 - w^2. A point is any timelike vector (form < 0) with w > 0;
vectors are only meaningful up to positive scale, and every function here is
scale-invariant, so inputs need not be Lorentz-normalized.

Functions:

- ``origin()``: the point (0, 0, 0, 1).
- ``mip()``: Minkowski inner product.
- ``reflect()``, ``midpoint()``: building blocks for ``translate()``.
- ``translate(a, b)``: transvection taking ``a`` to ``b`` along their geodesic.
- ``distance(a, b)``: geodesic distance.
"""

from __future__ import annotations

import numpy as np

from hyperiso.shared.rotation import _as_float_array


def origin(dtype=np.float64) -> np.ndarray:
    """Return the hyperboloid origin (0, 0, 0, 1).

    :param dtype: Floating dtype of the result
    :returns: Homogeneous point [4]
    """
    return np.array([0.0, 0.0, 0.0, 1.0], dtype=dtype)


def i31(dtype=np.float64) -> np.ndarray:
    """Return the Minkowski metric diag(1, 1, 1, -1)."""
    return np.diag(np.array([1.0, 1.0, 1.0, -1.0], dtype=dtype))


def mip(a, b):
    """Minkowski inner product ``a.xyz . b.xyz - a.w * b.w``.

    Works on single vectors [4] or batches [N, 4].
    """
    a = np.asarray(a)
    b = np.asarray(b)
    return (
        a[..., 0] * b[..., 0]
        + a[..., 1] * b[..., 1]
        + a[..., 2] * b[..., 2]
        - a[..., 3] * b[..., 3]
    )


def lorentz_normalize(v) -> np.ndarray:
    """Scale ``v`` so that ``|mip(v, v)| == 1``.

    Null vectors (``mip(v, v) == 0``) are returned unchanged.
    """
    v = _as_float_array(v)
    sf2 = mip(v, v)
    if sf2 == 0:
        return v
    return v / np.sqrt(np.abs(sf2))


def reflect(p) -> np.ndarray:
    """Point reflection through ``p``.

    ``I - 2 p p^T J / mip(p, p)`` maps ``p`` to ``-p`` and is an involution.

    :param p: Homogeneous point [4]
    :returns: 4x4 reflection matrix
    """
    p = _as_float_array(p)
    return np.eye(4, dtype=p.dtype) - np.outer(p, p) @ i31(p.dtype) * (2 / mip(p, p))


def midpoint(a, b) -> np.ndarray:
    """Midpoint of the geodesic segment between ``a`` and ``b``.

    The weights cancel the scale of each input, so the result is the true
    midpoint for non-normalized homogeneous points.
    """
    a = _as_float_array(a)
    b = _as_float_array(b)
    ab = mip(a, b)
    return a * np.sqrt(mip(b, b) * ab) + b * np.sqrt(mip(a, a) * ab)


def translate(a, b) -> np.ndarray:
    """Transform translating ``a`` to ``b`` along the geodesic through both.

    Built as the product of the point reflections through ``a`` and through
    the midpoint of ``a`` and ``b``. ``translate(b, a)`` is the exact inverse.

    :param a: Source point [4]
    :param b: Target point [4]
    :returns: 4x4 transvection matrix

    Example:
        >>> import numpy as np
        >>> T = translate(origin(), np.array([0.5, 0.0, 0.0, 1.0]))
        >>> p = T @ origin()  # proportional to (0.5, 0, 0, 1)
    """
    return reflect(midpoint(a, b)) @ reflect(a)


def distance(a, b):
    """Geodesic distance between homogeneous points ``a`` and ``b``.

    ``acosh(sqrt(mip(a, b)^2 / (mip(a, a) mip(b, b))))``. The ratio is clipped
    to >= 1, so coincident points give exactly zero rather than NaN.

    :param a: Homogeneous point [4]
    :param b: Homogeneous point [4]
    :returns: Distance (scalar of the input dtype)
    """
    a = _as_float_array(a)
    b = _as_float_array(b)
    ratio = mip(a, b) ** 2 / (mip(a, a) * mip(b, b))
    return np.arccosh(np.sqrt(np.maximum(ratio, 1.0)))


__all__ = [
    "origin",
    "i31",
    "mip",
    "lorentz_normalize",
    "reflect",
    "midpoint",
    "translate",
    "distance",
]
