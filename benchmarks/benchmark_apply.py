"""Benchmark batched isometry application and composition on CPU."""

import logging
import time

import numpy as np

from hyperiso import Isometry, apply_isometry, distances_from, origin

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def create_test_points(n: int, dtype=np.float32) -> np.ndarray:
    """Create random homogeneous points inside the Klein ball."""
    rng = np.random.default_rng(42)
    xyz = rng.uniform(-0.5, 0.5, size=(n, 3))
    return np.hstack([xyz, np.ones((n, 1))]).astype(dtype)


def benchmark(func, warmup=5, iterations=50):
    """Benchmark a function."""
    for _ in range(warmup):
        func()

    start = time.perf_counter()
    for _ in range(iterations):
        func()
    elapsed = time.perf_counter() - start

    return (elapsed / iterations) * 1000


def run_benchmarks():
    """Run CPU benchmarks."""
    logger.info("=" * 70)
    logger.info("ISOMETRY CPU BENCHMARKS")
    logger.info("=" * 70)
    logger.info("")

    iso = Isometry.from_translation(0.3, -0.2, 0.1) * Isometry.from_axis_angle([0, 1, 0], 0.7)

    for n in [10_000, 100_000, 1_000_000]:
        logger.info(f"\nDataset size: {n:,} points")
        logger.info("-" * 70)

        points = create_test_points(n)
        out = np.empty_like(points)

        numba_ms = benchmark(lambda: apply_isometry(iso, points, out=out))
        logger.info(f"apply_isometry (Numba): {numba_ms:.3f} ms ({n / numba_ms / 1e3:.1f}M/sec)")

        M = iso.to_homogeneous().astype(points.dtype)
        matmul_ms = benchmark(lambda: points @ M.T)
        logger.info(f"points @ M.T (NumPy):   {matmul_ms:.3f} ms ({n / matmul_ms / 1e3:.1f}M/sec)")

        target = origin(points.dtype)
        dist_ms = benchmark(lambda: distances_from(points, target))
        logger.info(f"distances_from (Numba): {dist_ms:.3f} ms ({n / dist_ms / 1e3:.1f}M/sec)")

    logger.info("")
    logger.info("Composition")
    logger.info("-" * 70)
    a = Isometry.from_translation(0.5, 0.0, 0.0)
    b = Isometry.from_translation(0.0, 0.5, 0.0) * Isometry.from_axis_angle([1, 0, 0], 0.3)

    compose_ms = benchmark(lambda: a * b, warmup=100, iterations=2000)
    logger.info(f"Isometry * Isometry:    {compose_ms * 1e3:.1f} us")

    matrix_ms = benchmark(lambda: a.to_homogeneous() @ b.to_homogeneous(), iterations=2000)
    logger.info(f"to_homogeneous product: {matrix_ms * 1e3:.1f} us")


if __name__ == "__main__":
    run_benchmarks()
