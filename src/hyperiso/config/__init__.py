"""Configuration for hyperiso.

Presets and persistence live in :mod:`hyperiso.config.presets`, which is
imported by the top-level package.
"""

from hyperiso.config.isometry import ISOMETRY_CONFIG, IsometryConfig

__all__ = [
    "IsometryConfig",
    "ISOMETRY_CONFIG",
]
