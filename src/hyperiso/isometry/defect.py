"""Angular defect of geodesic triangles.

In hyperbolic space a triangle's angles sum to less than pi. The shortfall
(the defect) equals the triangle's area, and it is the angle a frame turns
through when carried around the triangle. Composition of isometries uses it
to recover the rotation induced by chaining two translations.
"""

from __future__ import annotations

import logging

import numpy as np

from hyperiso.hyperbolic import distance

logger = logging.getLogger(__name__)


def loc_angle(a, b, c):
    """Angle at the vertex opposite side ``a`` (hyperbolic law of cosines).

    ``cosh a = cosh b cosh c - sinh b sinh c cos(theta)``, solved for theta.
    The cosine is clipped to [-1, 1] so round-off never produces NaN.

    :param a: Length of the side opposite the angle
    :param b: Length of an adjacent side
    :param c: Length of the other adjacent side
    :returns: Angle in [0, pi]; zero if an adjacent side has zero length
    """
    denom = np.sinh(b) * np.sinh(c)
    if denom == 0:
        return denom * 0
    cos_theta = (np.cosh(b) * np.cosh(c) - np.cosh(a)) / denom
    return np.arccos(np.clip(cos_theta, -1.0, 1.0))


def triangle_defect(p0, p1, p2):
    """Angular defect ``pi - (alpha + beta + gamma)`` of a geodesic triangle.

    :param p0: Homogeneous vertex [4]
    :param p1: Homogeneous vertex [4]
    :param p2: Homogeneous vertex [4]
    :returns: Defect in radians; zero when two vertices coincide

    Example:
        >>> from hyperiso.hyperbolic import origin
        >>> float(triangle_defect(origin(), origin(), origin()))
        0.0
    """
    a = distance(p0, p1)
    b = distance(p1, p2)
    c = distance(p2, p0)
    if a == 0 or b == 0 or c == 0:
        logger.debug("Degenerate triangle (sides %s, %s, %s), defect is zero", a, b, c)
        return a * 0
    angle_sum = loc_angle(a, b, c) + loc_angle(b, c, a) + loc_angle(c, a, b)
    return np.pi - angle_sum
