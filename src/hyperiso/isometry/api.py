"""
Isometries of 3D hyperbolic space.

An :class:`Isometry` pairs a hyperbolic translation (the image of the origin,
as a homogeneous point on the hyperboloid) with a rotation about the origin
(a unit quaternion). Applied to a point it rotates first, then translates.

Composition is where hyperbolic space differs from Euclidean space: chaining
two translations is a translation followed by a rotation. That rotation is
the holonomy of the geodesic triangle spanned by the two translations, and
its angle is the triangle's angular defect.

Example:
    >>> from hyperiso import Isometry
    >>> a = Isometry.from_translation(0.5, 0.0, 0.0)
    >>> b = Isometry.from_translation(0.0, 0.5, 0.0)
    >>> c = a * b  # apply b first, then a
    >>> M = c.to_homogeneous()
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from hyperiso.config.isometry import ISOMETRY_CONFIG
from hyperiso.hyperbolic import lorentz_normalize, mip, origin, translate
from hyperiso.isometry.apply import apply_isometry
from hyperiso.isometry.defect import triangle_defect
from hyperiso.shared.rotation import (
    _as_float_array,
    _is_torch_tensor,
    normalize_quaternion,
    quaternion_conjugate,
    quaternion_from_axis_angle,
    quaternion_identity,
    quaternion_multiply,
    quaternion_to_homogeneous,
    rotate_vector,
    rotation_matrix_to_quaternion,
)
from hyperiso.types import Matrix4, Quaternion, Vector3, Vector4


def _resolve_dtype(*values, dtype=None) -> np.dtype:
    """Pick the dtype for new arrays: explicit, else floating inputs, else config."""
    if dtype is not None:
        return np.dtype(dtype)
    floating = [
        v.dtype
        for v in values
        if isinstance(v, np.ndarray) and np.issubdtype(v.dtype, np.floating)
    ]
    if floating:
        return np.result_type(*floating)
    return ISOMETRY_CONFIG.get_dtype()


def _frozen(value, dtype: np.dtype, name: str) -> np.ndarray:
    arr = np.array(value, dtype=dtype)
    if arr.shape != (4,):
        raise ValueError(f"{name} must have 4 components, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Isometry:
    """Hyperbolic translation combined with a rotation about the origin.

    ``self = translate(origin -> translation) @ rotate(rotation)``.

    Instances are immutable: both arrays are read-only and every operation
    returns a new isometry. There is no exact equality; use
    :meth:`abs_diff_eq` in tests.

    Attributes:
        translation: Homogeneous point (x, y, z, w) the origin is carried to, w != 0
        rotation: Unit quaternion (w, x, y, z)
    """

    translation: np.ndarray
    rotation: np.ndarray

    def __post_init__(self):
        dtype = _resolve_dtype(self.translation, self.rotation)
        translation = _frozen(self.translation, dtype, "translation")
        rotation = _frozen(self.rotation, dtype, "rotation")
        assert translation[3] != 0, "translation must be a homogeneous point with w != 0"
        object.__setattr__(self, "translation", translation)
        object.__setattr__(self, "rotation", rotation)

    # Construction

    @classmethod
    def identity(cls, dtype=None) -> Isometry:
        """Isometry that leaves every point in place.

        :param dtype: Floating dtype (defaults to ``ISOMETRY_CONFIG.dtype``)
        :returns: Translation at the origin, identity rotation
        """
        dtype = _resolve_dtype(dtype=dtype)
        return cls(origin(dtype), quaternion_identity(dtype))

    @classmethod
    def from_parts(cls, translation: Vector4, rotation: Quaternion, dtype=None) -> Isometry:
        """Wrap a translation point and a rotation.

        The caller guarantees ``translation`` is a valid homogeneous point;
        ``w == 0`` fails an assertion (skipped under ``python -O``). Use
        :meth:`checked` for untrusted input.

        :param translation: Homogeneous point [4]
        :param rotation: Unit quaternion [4] (w, x, y, z)
        :param dtype: Optional dtype override
        :returns: Isometry holding copies of the inputs
        """
        dtype = _resolve_dtype(translation, rotation, dtype=dtype)
        return cls(np.asarray(translation, dtype=dtype), np.asarray(rotation, dtype=dtype))

    @classmethod
    def checked(cls, translation: Vector4, rotation: Quaternion, dtype=None) -> Isometry:
        """Validating constructor for externally derived data.

        :param translation: Homogeneous point [4] with w > 0, strictly inside the hyperboloid
        :param rotation: Non-zero quaternion [4], normalized here
        :param dtype: Optional dtype override
        :returns: Isometry
        :raises ValueError: If either part does not describe a valid isometry
        """
        dtype = _resolve_dtype(translation, rotation, dtype=dtype)
        t = np.array(translation, dtype=dtype)
        q = np.array(rotation, dtype=dtype)
        if t.shape != (4,):
            raise ValueError(f"translation must have 4 components, got shape {t.shape}")
        if q.shape != (4,):
            raise ValueError(f"rotation must have 4 components, got shape {q.shape}")
        if not np.all(np.isfinite(t)):
            raise ValueError(f"translation must be finite, got {t.tolist()}")
        if t[3] <= 0:
            raise ValueError(f"translation must have w > 0, got w={float(t[3])}")
        if mip(t, t) >= 0:
            raise ValueError(f"translation {t.tolist()} is not a point of hyperbolic space")
        norm = np.linalg.norm(q)
        if not np.isfinite(norm) or norm == 0:
            raise ValueError(f"rotation must be a non-zero finite quaternion, got {q.tolist()}")
        return cls(t, q / norm)

    @classmethod
    def from_translation(cls, x: float, y: float, z: float, dtype=None) -> Isometry:
        """Create a pure translation to the point with Klein coordinates (x, y, z).

        :param x: X coordinate
        :param y: Y coordinate
        :param z: Z coordinate
        :param dtype: Optional dtype
        :returns: Isometry with translation (x, y, z, 1) and no rotation
        :raises ValueError: If (x, y, z) is not inside the unit ball
        """
        r2 = x * x + y * y + z * z
        if r2 >= 1.0 - ISOMETRY_CONFIG.unit_tolerance:
            raise ValueError(f"Klein coordinates ({x}, {y}, {z}) must lie inside the unit ball")
        dtype = _resolve_dtype(dtype=dtype)
        return cls(np.array([x, y, z, 1.0], dtype=dtype), quaternion_identity(dtype))

    @classmethod
    def from_displacement(cls, direction: Vector3, distance: float, dtype=None) -> Isometry:
        """Create a translation by a hyperbolic distance along a direction.

        :param direction: Direction [3] (normalized here)
        :param distance: Geodesic distance to travel
        :param dtype: Optional dtype
        :returns: Isometry with translation (sinh(d) * u, cosh(d)) and no rotation
        :raises ValueError: If the direction is zero and the distance is not
        """
        dtype = _resolve_dtype(dtype=dtype)
        direction = np.asarray(direction, dtype=dtype)
        if direction.shape != (3,):
            raise ValueError(f"direction must have 3 components, got shape {direction.shape}")
        norm = np.linalg.norm(direction)
        if norm == 0:
            if distance != 0:
                raise ValueError("direction must be non-zero for a non-zero distance")
            return cls.identity(dtype)
        spatial = direction / norm * np.sinh(distance)
        translation = np.append(spatial, np.cosh(distance)).astype(dtype)
        return cls(translation, quaternion_identity(dtype))

    @classmethod
    def from_axis_angle(cls, axis: Vector3, angle: float, dtype=None) -> Isometry:
        """Create a pure rotation about the origin.

        :param axis: Rotation axis [x, y, z]; a zero axis falls back to +Z
        :param angle: Rotation angle in radians
        :param dtype: Optional dtype
        :returns: Isometry with translation at the origin
        :raises ValueError: If the axis does not have 3 components
        """
        dtype = _resolve_dtype(dtype=dtype)
        axis_arr = np.asarray(axis, dtype=dtype)
        if axis_arr.shape != (3,):
            raise ValueError(f"axis must have 3 components, got shape {axis_arr.shape}")
        if np.linalg.norm(axis_arr) <= ISOMETRY_CONFIG.unit_tolerance:
            axis_arr = np.array([0.0, 0.0, 1.0], dtype=dtype)
        return cls(origin(dtype), quaternion_from_axis_angle(axis_arr, angle))

    @classmethod
    def from_homogeneous(cls, matrix: Matrix4) -> Isometry:
        """Extract translation and rotation from a 4x4 isometry matrix.

        :param matrix: 4x4 matrix, e.g. from :meth:`to_homogeneous`
        :returns: Isometry with the same action
        """
        M = _as_float_array(matrix)
        if M.shape != (4, 4):
            raise ValueError(f"matrix must be 4x4, got shape {M.shape}")
        o = origin(M.dtype)
        translation = M @ o
        rotation_part = translate(translation, o) @ M
        return cls(translation, rotation_matrix_to_quaternion(rotation_part[:3, :3]))

    # Queries

    @property
    def dtype(self) -> np.dtype:
        """Floating dtype shared by translation and rotation."""
        return self.translation.dtype

    def to_homogeneous(self) -> np.ndarray:
        """Convert to a 4x4 homogeneous transform.

        :returns: ``translate(origin, translation) @ rotation_matrix``
        """
        return translate(origin(self.dtype), self.translation) @ quaternion_to_homogeneous(
            self.rotation
        )

    def abs_diff_eq(self, other: Isometry, epsilon: float | None = None) -> bool:
        """Approximate equality for tests.

        Translations are compared after Lorentz normalization, since homogeneous
        points are defined up to scale. Rotations are compared component-wise
        up to sign, since ``q`` and ``-q`` are the same rotation.

        :param other: Isometry to compare with
        :param epsilon: Absolute tolerance (defaults to ``ISOMETRY_CONFIG.epsilon``)
        :returns: True if all components agree within ``epsilon``
        """
        eps = ISOMETRY_CONFIG.epsilon if epsilon is None else epsilon
        ta = lorentz_normalize(self.translation)
        tb = lorentz_normalize(other.translation)
        if not np.all(np.abs(ta - tb) <= eps):
            return False
        return bool(
            np.all(np.abs(self.rotation - other.rotation) <= eps)
            or np.all(np.abs(self.rotation + other.rotation) <= eps)
        )

    def is_identity(self, epsilon: float | None = None) -> bool:
        """Check if identity isometry.

        :param epsilon: Absolute tolerance
        :returns: True if this isometry leaves points in place
        """
        return self.abs_diff_eq(Isometry.identity(self.dtype), epsilon)

    # Operations

    def apply(self, vector: Vector4) -> np.ndarray:
        """Apply to a homogeneous vector.

        Rotates ``vector.xyz``, keeps ``vector.w``, then translates.

        :param vector: Homogeneous vector [4]
        :returns: Transformed vector [4]
        """
        v = _as_float_array(vector)
        if v.shape != (4,):
            raise ValueError(f"vector must have 4 components, got shape {v.shape}")
        rotated = rotate_vector(self.rotation, v[:3])
        return translate(origin(self.dtype), self.translation) @ np.append(rotated, v[3])

    def compose(self, rhs: Isometry) -> Isometry:
        """Compose isometries: ``rhs`` applied FIRST, then self.

        Translating by ``a`` after ``b'`` (``rhs``'s translation carried into
        this isometry's rotated frame) lands on ``c = T_a b'``, but
        ``T_a T_b' = T_c H``: the frame also turns by the holonomy ``H`` of
        the triangle (origin, a, c). ``H`` rotates about the triangle's normal
        by its angular defect. Collinear translations enclose no area and
        contribute no rotation.

        :param rhs: Isometry to apply before this one
        :returns: Composed isometry
        """
        o = origin(self.dtype)
        spatial = rotate_vector(self.rotation, rhs.translation[:3])
        x = np.append(spatial, rhs.translation[3])
        translation = translate(o, self.translation) @ x

        rotation = quaternion_multiply(self.rotation, rhs.rotation)
        cross = np.cross(translation[:3], self.translation[:3])
        magnitude = np.linalg.norm(cross)
        if magnitude != 0:
            defect = triangle_defect(self.translation, translation, o)
            holonomy = quaternion_from_axis_angle(cross / magnitude, defect)
            rotation = quaternion_multiply(holonomy, rotation)

        dtype = np.result_type(self.dtype, rhs.dtype)
        return Isometry.from_parts(translation, normalize_quaternion(rotation), dtype=dtype)

    def inverse(self) -> Isometry:
        """Isometry undoing this one.

        The transvection to ``t`` is undone by the transvection to the mirror
        point ``(-t.xyz, t.w)``, carried through the inverse rotation.

        :returns: Inverse isometry
        """
        conj = quaternion_conjugate(self.rotation)
        spatial = rotate_vector(conj, -self.translation[:3])
        return Isometry(np.append(spatial, self.translation[3]), conj)

    def __mul__(self, other):
        """``iso * iso`` composes, ``iso * point`` applies.

        Accepts another Isometry, a homogeneous vector [4], or a batch of
        points [N, 4] (NumPy or PyTorch).
        """
        if isinstance(other, Isometry):
            return self.compose(other)
        if _is_torch_tensor(other):
            return apply_isometry(self, other)
        if isinstance(other, np.ndarray | list | tuple):
            arr = _as_float_array(other)
            if arr.ndim == 2:
                return apply_isometry(self, arr)
            return self.apply(arr)
        return NotImplemented
