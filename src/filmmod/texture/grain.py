"""Synthetic film grain and sensor noise.

Both effects draw a uniform noise tile at reduced resolution and upscale
it bilinearly with Pillow, so a larger cell size gives coarser clumps.
Grain is a single gray field blended with an overlay blend; digital noise
is an independent chromatic field added on top.

Randomness always comes from an explicit ``numpy.random.Generator``:
pass ``rng`` (the pipeline spawns one per stage) or ``seed`` for a
reproducible result.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from PIL import Image

from filmmod.config import PARAMETER_CONFIG
from filmmod.constants import (
    DIGITAL_NOISE_AMPLITUDE,
    DIGITAL_NOISE_SCALE,
    DIGITAL_NOISE_SIZE,
    GRAIN_MAX_CELL,
    GRAIN_OVERLAY_MIX,
)
from filmmod.shared.blend import mix, overlay_blend
from filmmod.types import Field, ImageRGBA

logger = logging.getLogger(__name__)


def _resolve_rng(
    rng: np.random.Generator | None, seed: int | np.random.SeedSequence | None
) -> np.random.Generator:
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def cell_size(size: float) -> int:
    """Map a grain size in [0, 1] to a noise cell edge in pixels (1..5)."""
    return max(1, round(min(max(float(size), 0.0), 1.0) * GRAIN_MAX_CELL))


def noise_field(
    rng: np.random.Generator, height: int, width: int, cell: int = 1, channels: int = 1
) -> Field:
    """Generate a uniform noise field in [0, 1] with shape ``[H, W, channels]``.

    The field is drawn at ``1/cell`` resolution and upscaled bilinearly,
    so neighbouring pixels inside one cell are correlated.

    :param rng: Random generator (consumed)
    :param height: Output height in pixels
    :param width: Output width in pixels
    :param cell: Noise cell edge in pixels (1 = per-pixel noise)
    :param channels: 1 for gray grain, 3 for chromatic noise
    :returns: float32 array [H, W, channels]
    """
    tile_h = math.ceil(height / cell) + 1
    tile_w = math.ceil(width / cell) + 1
    tile = rng.random((channels, tile_h, tile_w), dtype=np.float32)

    if cell == 1:
        planes = [tile[c, :height, :width] for c in range(channels)]
    else:
        planes = []
        for c in range(channels):
            upscaled = Image.fromarray(tile[c]).resize(
                (tile_w * cell, tile_h * cell), Image.Resampling.BILINEAR
            )
            planes.append(np.asarray(upscaled, dtype=np.float32)[:height, :width])

    return np.ascontiguousarray(np.stack(planes, axis=-1), dtype=np.float32)


def add_grain(
    image: ImageRGBA,
    intensity: float,
    size: float,
    *,
    rng: np.random.Generator | None = None,
    seed: int | np.random.SeedSequence | None = None,
) -> ImageRGBA:
    """Overlay monochrome film grain.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param intensity: Grain strength in [0, 1]; at or below 0.05 nothing happens
    :param size: Grain coarseness in [0, 1]
    :param rng: Generator to draw from (takes precedence over *seed*)
    :param seed: Seed for a fresh generator
    :returns: New RGBA buffer, or *image* itself when skipped

    Example:
        >>> a = add_grain(image, 0.4, 0.5, seed=7)
        >>> b = add_grain(image, 0.4, 0.5, seed=7)
        >>> np.array_equal(a, b)
        True
    """
    spec = PARAMETER_CONFIG.grain_intensity
    if not spec.is_active(intensity):
        logger.debug("Grain skipped (intensity=%s)", intensity)
        return image
    intensity = spec.validate(intensity)

    generator = _resolve_rng(rng, seed)
    height, width = image.shape[:2]
    field = noise_field(generator, height, width, cell_size(size), channels=1)

    rgb = image[..., :3]
    grained = overlay_blend(rgb, field)
    out = np.empty(image.shape, dtype=np.float32)
    out[..., :3] = np.clip(mix(rgb, grained, intensity * GRAIN_OVERLAY_MIX), 0.0, 1.0)
    out[..., 3] = image[..., 3]
    return out


def add_digital_noise(
    image: ImageRGBA,
    intensity: float,
    *,
    rng: np.random.Generator | None = None,
    seed: int | np.random.SeedSequence | None = None,
) -> ImageRGBA:
    """Add fine chromatic sensor noise.

    The noise is drawn per channel at a fixed fine cell size and added
    around zero, at half the strength of grain for the same intensity.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param intensity: Noise strength in [0, 1]; at or below 0.05 nothing happens
    :param rng: Generator to draw from (takes precedence over *seed*)
    :param seed: Seed for a fresh generator
    :returns: New RGBA buffer, or *image* itself when skipped
    """
    spec = PARAMETER_CONFIG.digital_noise
    if not spec.is_active(intensity):
        logger.debug("Digital noise skipped (intensity=%s)", intensity)
        return image
    amount = spec.validate(intensity) * DIGITAL_NOISE_SCALE

    generator = _resolve_rng(rng, seed)
    height, width = image.shape[:2]
    field = noise_field(generator, height, width, cell_size(DIGITAL_NOISE_SIZE), channels=3)

    amplitude = np.float32(2.0 * amount * DIGITAL_NOISE_AMPLITUDE)
    out = np.empty(image.shape, dtype=np.float32)
    out[..., :3] = np.clip(image[..., :3] + (field - 0.5) * amplitude, 0.0, 1.0)
    out[..., 3] = image[..., 3]
    return out
