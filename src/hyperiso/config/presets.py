"""Preset library and persistence for isometries.

Provides named isometries for common orientations, with support for loading
from dict and JSON. The persisted form is the ``(translation, rotation)``
pair as plain lists.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

from hyperiso.isometry.api import Isometry

logger = logging.getLogger(__name__)

# ============================================================================
# Presets
# ============================================================================

IDENTITY = Isometry.identity()

HALF_TURN_X = Isometry.from_axis_angle((1.0, 0.0, 0.0), math.pi)
HALF_TURN_Y = Isometry.from_axis_angle((0.0, 1.0, 0.0), math.pi)
HALF_TURN_Z = Isometry.from_axis_angle((0.0, 0.0, 1.0), math.pi)

_PRESETS: dict[str, Isometry] = {
    "identity": IDENTITY,
    "half_turn_x": HALF_TURN_X,
    "half_turn_y": HALF_TURN_Y,
    "half_turn_z": HALF_TURN_Z,
}


def get_isometry_preset(name: str) -> Isometry:
    """Get an isometry preset by name.

    :param name: Preset name (case-insensitive), e.g. "half_turn_x"
    :returns: Isometry
    :raises ValueError: If the preset is unknown
    """
    if not isinstance(name, str):
        raise ValueError(f"Preset name must be a string, got {type(name).__name__}")
    key = name.lower()
    if key not in _PRESETS:
        raise ValueError(f"Unknown isometry preset: {name}. Available: {sorted(_PRESETS)}")
    return _PRESETS[key]


# ============================================================================
# Loading Functions
# ============================================================================


def _is_number(value) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _numbers(value, count: int, key: str) -> list[float]:
    """Validate a list of exactly ``count`` numbers."""
    if (
        not isinstance(value, list | tuple)
        or len(value) != count
        or not all(_is_number(v) for v in value)
    ):
        raise ValueError(f"'{key}' must be a list of {count} numbers, got {value!r}")
    return [float(v) for v in value]


def _vector_and_scalar(value, key: str) -> tuple[tuple[float, ...], float]:
    """Validate a ``[[x, y, z], s]`` factory payload."""
    if not isinstance(value, list | tuple) or len(value) != 2 or not _is_number(value[1]):
        raise ValueError(f"'{key}' must be [[x, y, z], number], got {value!r}")
    return tuple(_numbers(value[0], 3, key)), float(value[1])


def isometry_from_dict(d: dict) -> Isometry:
    """Create Isometry from dictionary.

    Supports both direct field assignment and factory method syntax. Direct
    fields go through :meth:`Isometry.checked`, since the data comes from
    outside the program.

    Example:
        >>> # Direct
        >>> d = {"translation": [0.5, 0, 0, 1], "rotation": [1, 0, 0, 0]}
        >>> iso = isometry_from_dict(d)

        >>> # Factory method
        >>> d = {"from_axis_angle": [[0, 0, 1], 1.57]}
        >>> iso = isometry_from_dict(d)

    :param d: Dictionary representation
    :returns: Isometry instance
    :raises ValueError: If the dictionary does not describe an isometry
    """
    if "preset" in d:
        return get_isometry_preset(d["preset"])
    if "from_translation" in d:
        x, y, z = _numbers(d["from_translation"], 3, "from_translation")
        return Isometry.from_translation(x, y, z)
    if "from_axis_angle" in d:
        axis, angle = _vector_and_scalar(d["from_axis_angle"], "from_axis_angle")
        return Isometry.from_axis_angle(axis, angle)
    if "from_displacement" in d:
        direction, distance = _vector_and_scalar(d["from_displacement"], "from_displacement")
        return Isometry.from_displacement(direction, distance)

    if "translation" not in d and "rotation" not in d:
        raise ValueError(f"Cannot build an isometry from keys {sorted(d)}")

    identity = Isometry.identity()
    translation = d.get("translation", identity.translation.tolist())
    rotation = d.get("rotation", identity.rotation.tolist())
    return Isometry.checked(translation, rotation)


def load_isometry_json(path: str | Path) -> Isometry:
    """Load Isometry from JSON file.

    :param path: Path to JSON file
    :returns: Isometry instance
    """
    with open(path) as f:
        d = json.load(f)
    logger.debug("Loaded isometry from %s", path)
    return isometry_from_dict(d)


# ============================================================================
# Saving Functions
# ============================================================================


def isometry_to_dict(isometry: Isometry) -> dict:
    """Convert Isometry to dictionary.

    :param isometry: Isometry instance
    :returns: Dictionary with "translation" [x, y, z, w] and "rotation" [w, x, y, z]
    """
    return {
        "translation": isometry.translation.tolist(),
        "rotation": isometry.rotation.tolist(),
    }


def save_isometry_json(isometry: Isometry, path: str | Path) -> None:
    """Save Isometry to JSON file.

    :param isometry: Isometry instance
    :param path: Output path
    """
    with open(path, "w") as f:
        json.dump(isometry_to_dict(isometry), f, indent=2)
    logger.debug("Saved isometry to %s", path)
