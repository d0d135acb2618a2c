"""Approximate equality utilities for isometry tests.

Floating round-off means two algebraically equal isometries rarely match
bit for bit, so tests compare within a tolerance instead.

Example:
    >>> from hyperiso import Isometry
    >>> from hyperiso.verification import IsometryVerifier
    >>>
    >>> a = Isometry.from_translation(0.5, 0.0, 0.0)
    >>> IsometryVerifier.assert_close(a * Isometry.identity(), a)
    >>>
    >>> # Matrix forms
    >>> IsometryVerifier.assert_homogeneous_close(a.to_homogeneous(), a.to_homogeneous())
"""

from __future__ import annotations

import logging

import numpy as np

from hyperiso.config.isometry import ISOMETRY_CONFIG
from hyperiso.hyperbolic import lorentz_normalize
from hyperiso.isometry.api import Isometry

logger = logging.getLogger(__name__)


class IsometryVerifier:
    """Utilities for asserting approximate equality of isometries."""

    @staticmethod
    def is_close(a: Isometry, b: Isometry, epsilon: float | None = None) -> bool:
        """Check whether two isometries agree within ``epsilon``.

        :param a: First isometry
        :param b: Second isometry
        :param epsilon: Absolute tolerance (defaults to ``ISOMETRY_CONFIG.epsilon``)
        :return: True if translations and rotations agree
        """
        return a.abs_diff_eq(b, epsilon)

    @staticmethod
    def assert_close(a: Isometry, b: Isometry, epsilon: float | None = None) -> None:
        """Assert two isometries agree within ``epsilon``.

        :param a: First isometry
        :param b: Second isometry
        :param epsilon: Absolute tolerance (defaults to ``ISOMETRY_CONFIG.epsilon``)
        :raises AssertionError: If they differ, naming the largest deviation
        """
        eps = ISOMETRY_CONFIG.epsilon if epsilon is None else epsilon
        if a.abs_diff_eq(b, eps):
            return

        translation_error = float(
            np.max(np.abs(lorentz_normalize(a.translation) - lorentz_normalize(b.translation)))
        )
        rotation_error = float(
            min(
                np.max(np.abs(a.rotation - b.rotation)),
                np.max(np.abs(a.rotation + b.rotation)),
            )
        )
        logger.debug(
            "[IsometryVerifier] Mismatch: translation error %.3g, rotation error %.3g",
            translation_error,
            rotation_error,
        )
        raise AssertionError(
            f"Isometries differ (epsilon={eps}): "
            f"translation error {translation_error:.3g}, rotation error {rotation_error:.3g}\n"
            f"  a = {a}\n  b = {b}"
        )

    @staticmethod
    def assert_homogeneous_close(
        m1: np.ndarray, m2: np.ndarray, epsilon: float | None = None
    ) -> None:
        """Assert two 4x4 matrices agree element-wise within ``epsilon``.

        :param m1: First matrix
        :param m2: Second matrix
        :param epsilon: Absolute tolerance (defaults to ``ISOMETRY_CONFIG.epsilon``)
        :raises AssertionError: If any element differs by more than ``epsilon``
        """
        eps = ISOMETRY_CONFIG.epsilon if epsilon is None else epsilon
        m1 = np.asarray(m1)
        m2 = np.asarray(m2)
        if m1.shape != m2.shape:
            raise AssertionError(f"Shape mismatch: {m1.shape} vs {m2.shape}")

        error = float(np.max(np.abs(m1 - m2)))
        if error > eps:
            logger.debug("[IsometryVerifier] Matrix mismatch: max error %.3g", error)
            raise AssertionError(
                f"Matrices differ by {error:.3g} (epsilon={eps})\n  m1 =\n{m1}\n  m2 =\n{m2}"
            )
