"""
Example: film pipeline usage.

Demonstrates how to use filmmod for:
- Rendering with a catalog preset
- Tweaking a preset into a derived filter
- Calling single stages directly
- Rendering a batch asynchronously with cancellation

Writes PNG files next to this script.
"""

import asyncio
import datetime as dt
import logging
from pathlib import Path

import numpy as np

from filmmod import (
    CancellationToken,
    FilmProcessor,
    FilterParameters,
    Pipeline,
    RenderCancelledError,
    add_grain,
    apply_vignette,
    decode_image,
    encode_image,
    get_preset,
)

# Configure logging to see per-render timings
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

OUTPUT_DIR = Path(__file__).parent


def generate_sample_image(height: int = 480, width: int = 640) -> np.ndarray:
    """Generate a gradient test card with a bright spot for halation."""
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float32)
    image = np.empty((height, width, 3), dtype=np.float32)
    image[..., 0] = xs / width
    image[..., 1] = ys / height
    image[..., 2] = 0.5 + 0.5 * np.sin(xs / 40.0) * np.cos(ys / 40.0)
    spot = (xs - width * 0.3) ** 2 + (ys - height * 0.35) ** 2 < (height * 0.06) ** 2
    image[spot] = 1.0
    return (np.clip(image, 0.0, 1.0) * 255).astype(np.uint8)


def example_1_preset():
    """Example 1: Render with a catalog preset."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Preset Rendering")
    print("=" * 70)

    source = generate_sample_image()
    preset = get_preset("Film Dreams")
    pipeline = Pipeline()

    print(f"Active stages: {pipeline.active_stages(preset)}")
    pixels = pipeline.render(source, preset, seed=42, date=dt.date(1999, 12, 31))
    print(f"Output: {pixels.shape} {pixels.dtype}")

    (OUTPUT_DIR / "film_dreams.png").write_bytes(encode_image(pixels))


def example_2_derived_filter():
    """Example 2: Derive a filter from a preset."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Derived Filter")
    print("=" * 70)

    disposable = get_preset("disposable")
    params = disposable.parameters.with_changes(
        date_stamp_enabled=True,
        light_leak_intensity=0.4,
        color_curve="sepia",
    )
    derived = disposable.with_parameters(params)
    print(f"{derived.name}: is_neutral={params.is_neutral()}")

    pixels = Pipeline().render(generate_sample_image(), derived, seed=7)
    (OUTPUT_DIR / "disposable_sepia.png").write_bytes(encode_image(pixels))


def example_3_single_stages():
    """Example 3: Call stages directly on a working buffer."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Single Stages")
    print("=" * 70)

    image = decode_image(generate_sample_image())
    image = apply_vignette(image, 0.6)
    image = add_grain(image, 0.5, 0.8, seed=3)
    print(f"Mean after vignette + grain: {image[..., :3].mean():.4f}")

    (OUTPUT_DIR / "stages.png").write_bytes(encode_image(image))


async def example_4_async_batch():
    """Example 4: Concurrent batch and cancellation."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Async Batch")
    print("=" * 70)

    processor = FilmProcessor(max_concurrency=2)
    sources = [generate_sample_image(240, 320) for _ in range(4)]
    batch = await processor.render_many(sources, get_preset("cinematic"), seed=11)
    print(f"Rendered {len(batch)} images")

    token = CancellationToken()
    token.cancel()
    try:
        await processor.render(sources[0], FilterParameters(vignette=0.5), cancel=token)
    except RenderCancelledError as exc:
        print(f"Cancelled as requested: {exc}")


if __name__ == "__main__":
    example_1_preset()
    example_2_derived_filter()
    example_3_single_stages()
    asyncio.run(example_4_async_batch())
