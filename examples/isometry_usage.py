"""
Example: hyperbolic isometry usage.

Demonstrates how to use hyperiso for:
- Building translations and rotations
- Composing isometries (and the rotation chained translations pick up)
- Moving a batch of points
- Saving and loading isometries as JSON
"""

import logging
import math
import tempfile
from pathlib import Path

import numpy as np

from hyperiso import (
    Isometry,
    apply_isometry,
    distance,
    distances_from,
    load_isometry_json,
    origin,
    save_isometry_json,
)
from hyperiso.verification import IsometryVerifier

# Configure logging to see debug output from the library
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def example_1_construction():
    """Example 1: Translations and rotations."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Building Isometries")
    print("=" * 70)

    # Klein coordinates: anywhere inside the unit ball
    step = Isometry.from_translation(0.5, 0.0, 0.0)
    moved_by = distance(origin(), step * origin())
    print(f"Translation: {step.translation}, moves the origin {moved_by:.4f}")

    # Exact hyperbolic distance
    walk = Isometry.from_displacement([0.0, 1.0, 0.0], 2.0)
    print(f"Displacement by 2.0 along +Y: {walk.translation}")

    turn = Isometry.from_axis_angle([0.0, 0.0, 1.0], math.pi / 2)
    print(f"Quarter turn about Z: {turn.rotation}")


def example_2_holonomy():
    """Example 2: Composition picks up a rotation."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Holonomy of Chained Translations")
    print("=" * 70)

    a = Isometry.from_translation(0.5, 0.0, 0.0)
    b = Isometry.from_translation(0.0, 0.5, 0.0)

    # b first, then a
    c = a * b
    angle = 2 * math.acos(min(1.0, float(c.rotation[0])))
    print(f"Translation after a * b: {c.translation}")
    print(f"Rotation picked up:      {math.degrees(angle):.3f} degrees about {c.rotation[1:]}")

    # Same result as multiplying matrices
    IsometryVerifier.assert_homogeneous_close(
        c.to_homogeneous(), a.to_homogeneous() @ b.to_homogeneous()
    )
    print("Matches a.to_homogeneous() @ b.to_homogeneous()")

    # Walking the square back does not return to the identity frame
    loop = b.inverse() * a.inverse() * b * a
    print(f"Around the loop: identity={loop.is_identity()}")


def example_3_points():
    """Example 3: Moving many points at once."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Batched Point Application")
    print("=" * 70)

    rng = np.random.default_rng(42)
    xyz = rng.uniform(-0.4, 0.4, size=(10_000, 3))
    points = np.hstack([xyz, np.ones((10_000, 1))]).astype(np.float32)

    iso = Isometry.from_displacement([1.0, 1.0, 0.0], 1.5) * Isometry.from_axis_angle(
        [0.0, 1.0, 0.0], 0.3
    )
    moved = apply_isometry(iso, points)

    before = distances_from(points, origin(np.float32))
    after = distances_from(moved, iso * origin())
    print(f"Moved {len(points)} points")
    print(f"Max change in distance to the moved origin: {np.max(np.abs(after - before)):.2e}")


def example_4_persistence():
    """Example 4: JSON round trip."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Saving and Loading")
    print("=" * 70)

    iso = Isometry.from_translation(0.2, 0.3, 0.0) * Isometry.from_axis_angle([1, 0, 0], 0.5)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "camera.json"
        save_isometry_json(iso, path)
        print(path.read_text())
        loaded = load_isometry_json(path)

    print(f"Loaded equals saved: {loaded.abs_diff_eq(iso)}")


if __name__ == "__main__":
    example_1_construction()
    example_2_holonomy()
    example_3_points()
    example_4_persistence()
