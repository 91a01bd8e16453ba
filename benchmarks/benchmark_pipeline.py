"""Benchmark pipeline performance with skip logic.

Measures per-render time across:
- Neutral recipe (every stage skipped)
- Each catalog preset
- Single stages in isolation
"""

import time

import numpy as np

from filmmod import FilterParameters, Pipeline, decode_image
from filmmod.config import PRESET_FILTERS
from filmmod.optics import apply_halation
from filmmod.texture import add_grain


def create_test_image(height: int, width: int) -> np.ndarray:
    """Create a random opaque 8-bit RGBA image."""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    return pixels


def time_call(fn, n_iterations: int) -> float:
    """Return mean milliseconds per call after a short warmup (JIT compile)."""
    for _ in range(3):
        fn()
    start = time.perf_counter()
    for _ in range(n_iterations):
        fn()
    return (time.perf_counter() - start) / n_iterations * 1000


def benchmark_presets(height: int, width: int, n_iterations: int = 10):
    """Benchmark full renders for the neutral recipe and every preset."""
    print(f"\n{'='*60}")
    print(f"Pipeline Benchmark ({width}x{height})")
    print(f"{'='*60}")

    source = create_test_image(height, width)
    pipeline = Pipeline()

    neutral = time_call(lambda: pipeline.render(source, FilterParameters(), seed=0), n_iterations)
    print(f"  {'neutral':<16} {neutral:8.2f} ms  (decode + quantize only)")

    for slug, preset in PRESET_FILTERS.items():
        ms = time_call(lambda: pipeline.render(source, preset, seed=0), n_iterations)
        stages = len(pipeline.active_stages(preset))
        print(f"  {slug:<16} {ms:8.2f} ms  ({stages} stages)")


def benchmark_stages(height: int, width: int, n_iterations: int = 10):
    """Benchmark the most expensive stages on their own."""
    print(f"\n{'='*60}")
    print(f"Stage Benchmark ({width}x{height})")
    print(f"{'='*60}")

    image = decode_image(create_test_image(height, width))
    rng = np.random.default_rng(0)

    for size in (0.0, 0.5, 1.0):
        ms = time_call(lambda: add_grain(image, 0.5, size, rng=rng), n_iterations)
        print(f"  grain size={size:<4}   {ms:8.2f} ms")

    for amount in (0.2, 0.6, 1.0):
        ms = time_call(lambda: apply_halation(image, amount), n_iterations)
        print(f"  halation={amount:<4}     {ms:8.2f} ms")


if __name__ == "__main__":
    for h, w in [(480, 640), (1080, 1440), (3024, 4032)]:
        benchmark_presets(h, w, n_iterations=5 if h > 2000 else 10)
    benchmark_stages(1080, 1440)
