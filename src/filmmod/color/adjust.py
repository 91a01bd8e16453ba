"""Global tonal adjustments: exposure, contrast/saturation, highlights/shadows, white balance.

Sub-steps run in a fixed order and each one is skipped when its parameter
is within ``ADJUST_EPSILON`` of neutral. Every sub-step is the identity at
its neutral value, so skipping never changes the result beyond float
rounding.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from filmmod.color.kernels import apply_color_matrix_numba, apply_highlight_shadow_numba
from filmmod.config import PARAMETER_CONFIG, FilterParameters
from filmmod.constants import (
    HIGHLIGHT_PIVOT,
    KELVIN_PER_TEMPERATURE,
    LUMA_B,
    LUMA_G,
    LUMA_R,
    NEUTRAL_KELVIN,
    SHADOW_LIFT_STRENGTH,
    SHADOW_PIVOT,
    TINT_STRENGTH,
)
from filmmod.types import ImageRGBA

logger = logging.getLogger(__name__)

_NO_BIAS = np.zeros(3, dtype=np.float32)


def _prepare(image: ImageRGBA) -> ImageRGBA:
    """Return *image* as a C-contiguous float32 buffer (no copy when it already is)."""
    return np.ascontiguousarray(image, dtype=np.float32)


def kelvin_to_rgb(kelvin: float) -> tuple[float, float, float]:
    """Approximate the normalized RGB of a black body at *kelvin*.

    Uses Tanner Helland's fit of the CIE 1964 blackbody data, valid from
    1000K to 40000K.

    :param kelvin: Color temperature
    :returns: (r, g, b) in [0, 1]
    """
    t = max(1000.0, min(40000.0, kelvin)) / 100.0

    if t <= 66.0:
        r = 255.0
        g = 99.4708025861 * math.log(t) - 161.1195681661
    else:
        r = 329.698727446 * math.pow(t - 60.0, -0.1332047592)
        g = 288.1221695283 * math.pow(t - 60.0, -0.0755148492)

    if t >= 66.0:
        b = 255.0
    elif t <= 19.0:
        b = 0.0
    else:
        b = 138.5177312231 * math.log(t - 10.0) - 305.0447927307

    return tuple(max(0.0, min(255.0, c)) / 255.0 for c in (r, g, b))


def white_balance_gains(temperature: float, tint: float) -> tuple[float, float, float]:
    """Return per-channel gains for a temperature/tint shift.

    The image is treated as if shot under ``6500K + temperature * 2000K``
    and corrected to a 6500K target, so positive temperature warms.
    Positive tint pulls green down (magenta), negative pushes it up.

    :param temperature: Temperature in [-1, 1]
    :param tint: Tint in [-1, 1]
    :returns: (r, g, b) gains, exactly (1, 1, 1) at temperature=tint=0
    """
    source = kelvin_to_rgb(NEUTRAL_KELVIN + temperature * KELVIN_PER_TEMPERATURE)
    target = kelvin_to_rgb(NEUTRAL_KELVIN)
    r_gain, g_gain, b_gain = (t / max(s, 1e-6) for s, t in zip(source, target))

    # Normalize so the brightest gain is 1 (white balance must not expose)
    peak = max(r_gain, g_gain, b_gain)
    r_gain, g_gain, b_gain = r_gain / peak, g_gain / peak, b_gain / peak

    g_gain *= 1.0 - tint * TINT_STRENGTH
    return (r_gain, g_gain, b_gain)


def build_contrast_saturation_matrix(
    contrast: float, saturation: float
) -> tuple[np.ndarray, np.ndarray]:
    """Build the combined contrast/saturation transform.

    Saturation mixes each pixel with its luminance; contrast then scales
    around mid-gray: ``(sat(rgb) - 0.5) * contrast + 0.5``.

    :param contrast: Contrast factor (1.0 = no change)
    :param saturation: Saturation factor (1.0 = no change, 0 = grayscale)
    :returns: (3×3 matrix, bias[3]) as float32
    """
    luma = np.array([LUMA_R, LUMA_G, LUMA_B], dtype=np.float64)
    sat = (1.0 - saturation) * np.tile(luma, (3, 1)) + saturation * np.eye(3)
    matrix = contrast * sat
    bias = np.full(3, 0.5 * (1.0 - contrast))
    return matrix.astype(np.float32), bias.astype(np.float32)


def apply_exposure(image: ImageRGBA, ev: float) -> ImageRGBA:
    """Scale RGB by ``2 ** ev`` (clamped to [0, 1])."""
    image = _prepare(image)
    out = np.empty_like(image)
    out[..., :3] = np.clip(image[..., :3] * np.float32(2.0**ev), 0.0, 1.0)
    out[..., 3] = image[..., 3]
    return out


def apply_contrast_saturation(image: ImageRGBA, contrast: float, saturation: float) -> ImageRGBA:
    """Apply contrast and saturation as one color matrix pass."""
    image = _prepare(image)
    matrix, bias = build_contrast_saturation_matrix(contrast, saturation)
    out = np.empty_like(image)
    apply_color_matrix_numba(image, matrix, bias, out)
    return out


def apply_highlights_shadows(image: ImageRGBA, highlights: float, shadows: float) -> ImageRGBA:
    """Scale highlights by ``1 + highlights`` and lift shadows by ``shadows``."""
    image = _prepare(image)
    out = np.empty_like(image)
    apply_highlight_shadow_numba(
        image,
        float(highlights),
        float(shadows),
        SHADOW_LIFT_STRENGTH,
        HIGHLIGHT_PIVOT,
        SHADOW_PIVOT,
        out,
    )
    return out


def apply_white_balance(image: ImageRGBA, temperature: float, tint: float) -> ImageRGBA:
    """Shift white balance along the temperature and green/magenta axes."""
    image = _prepare(image)
    matrix = np.diag(white_balance_gains(temperature, tint)).astype(np.float32)
    out = np.empty_like(image)
    apply_color_matrix_numba(image, matrix, _NO_BIAS, out)
    return out


def adjust(image: ImageRGBA, params: FilterParameters) -> ImageRGBA:
    """Apply the tonal adjustments of *params* to *image*.

    Order: exposure -> contrast/saturation -> highlights/shadows ->
    white balance. Parameters are clamped to their ranges first.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param params: Filter recipe
    :returns: New RGBA buffer, or *image* itself when every sub-step is skipped
    """
    spec = PARAMETER_CONFIG
    result = image

    # 1. Exposure
    if spec.exposure.is_active(params.exposure):
        result = apply_exposure(result, spec.exposure.validate(params.exposure))

    # 2. Contrast + saturation (single combined pass)
    if spec.contrast.is_active(params.contrast) or spec.saturation.is_active(params.saturation):
        result = apply_contrast_saturation(
            result,
            spec.contrast.validate(params.contrast),
            spec.saturation.validate(params.saturation),
        )

    # 3. Highlights / shadows
    if spec.highlights.is_active(params.highlights) or spec.shadows.is_active(params.shadows):
        result = apply_highlights_shadows(
            result,
            spec.highlights.validate(params.highlights),
            spec.shadows.validate(params.shadows),
        )

    # 4. White balance
    if spec.temperature.is_active(params.temperature) or spec.tint.is_active(params.tint):
        result = apply_white_balance(
            result,
            spec.temperature.validate(params.temperature),
            spec.tint.validate(params.tint),
        )

    if result is image:
        logger.debug("Color adjustment skipped: all values neutral")
    return result
