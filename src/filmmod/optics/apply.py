"""Optical effects: vignette, light leak, fade and halation.

Each effect is an independent ``image -> image`` function driven by one
intensity in [0, 1] and skipped at or below the 0.05 stage threshold.
Geometry is computed from pixel centres relative to the image size, so
results do not depend on the absolute resolution.
"""

from __future__ import annotations

import logging

import numpy as np

from filmmod.config import PARAMETER_CONFIG
from filmmod.constants import (
    FADE_BLACK_LIFT,
    FADE_DESATURATION,
    FADE_WHITE_ROLLOFF,
    HALATION_BLUR_RADIUS,
    HALATION_MAX_CONTRIBUTION,
    HALATION_THRESHOLD,
    HALATION_TINT,
    LIGHT_LEAK_ANCHOR,
    LIGHT_LEAK_INNER_RADIUS,
    LIGHT_LEAK_OUTER_RADIUS,
    VIGNETTE_MAX_DARKEN,
    VIGNETTE_RADIUS,
)
from filmmod.optics.kernels import gaussian_blur
from filmmod.shared.blend import luminance, mix, screen_blend, smoothstep
from filmmod.shared.color import FALLBACK_LIGHT_LEAK_COLOR, parse_hex_color
from filmmod.types import Field, ImageRGBA

logger = logging.getLogger(__name__)


def _pixel_grid(height: int, width: int) -> tuple[Field, Field]:
    """Return broadcastable pixel-centre coordinates ``(ys [H, 1], xs [1, W])``."""
    ys = (np.arange(height, dtype=np.float32) + 0.5)[:, None]
    xs = (np.arange(width, dtype=np.float32) + 0.5)[None, :]
    return ys, xs


def _with_rgb(image: ImageRGBA, rgb: np.ndarray) -> ImageRGBA:
    out = np.empty(image.shape, dtype=np.float32)
    out[..., :3] = np.clip(rgb, 0.0, 1.0)
    out[..., 3] = image[..., 3]
    return out


def vignette_mask(height: int, width: int, amount: float) -> Field:
    """Compute the multiplicative vignette factor [H, W].

    The radius of a pixel is measured to its corner farthest from the
    image centre, so the corner pixels of any image, even 1x1, sit at
    exactly one half-diagonal. The factor is 1 inside ``VIGNETTE_RADIUS``
    of the half-diagonal and falls smoothly to
    ``1 - amount * VIGNETTE_MAX_DARKEN`` at the corners.

    :param height: Image height
    :param width: Image width
    :param amount: Vignette strength in [0, 1]
    :returns: float32 factor field [H, W]
    """
    ys, xs = _pixel_grid(height, width)
    half_diagonal = 0.5 * np.hypot(height, width)
    dy = np.abs(ys - height / 2.0) + 0.5
    dx = np.abs(xs - width / 2.0) + 0.5
    r = np.hypot(dy, dx) / half_diagonal
    falloff = smoothstep(VIGNETTE_RADIUS, 1.0, r)
    return (1.0 - amount * VIGNETTE_MAX_DARKEN * falloff).astype(np.float32)


def apply_vignette(image: ImageRGBA, amount: float) -> ImageRGBA:
    """Darken toward the edges.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param amount: Vignette strength in [0, 1]
    :returns: New RGBA buffer, or *image* itself when skipped
    """
    spec = PARAMETER_CONFIG.vignette
    if not spec.is_active(amount):
        logger.debug("Vignette skipped (amount=%s)", amount)
        return image

    mask = vignette_mask(image.shape[0], image.shape[1], spec.validate(amount))
    return _with_rgb(image, image[..., :3] * mask[..., None])


def light_leak_alpha(height: int, width: int, intensity: float) -> Field:
    """Compute the light leak opacity [H, W].

    Opacity peaks at *intensity* within ``LIGHT_LEAK_INNER_RADIUS`` of the
    anchor and falls to zero at ``LIGHT_LEAK_OUTER_RADIUS``, both measured
    in image widths.
    """
    ys, xs = _pixel_grid(height, width)
    anchor_x = LIGHT_LEAK_ANCHOR[0] * width
    anchor_y = LIGHT_LEAK_ANCHOR[1] * height
    distance = np.hypot(xs - anchor_x, ys - anchor_y) / width
    falloff = smoothstep(LIGHT_LEAK_INNER_RADIUS, LIGHT_LEAK_OUTER_RADIUS, distance)
    return (intensity * (1.0 - falloff)).astype(np.float32)


def apply_light_leak(
    image: ImageRGBA, intensity: float, color: str = "#FFAA00"
) -> ImageRGBA:
    """Add a colored radial glow near the lower-right of the frame.

    Composited with a screen blend, so it can only brighten. A malformed
    *color* falls back to ``FALLBACK_LIGHT_LEAK_COLOR``.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param intensity: Leak opacity in [0, 1]
    :param color: ``#RRGGBB`` hex string
    :returns: New RGBA buffer, or *image* itself when skipped
    """
    spec = PARAMETER_CONFIG.light_leak_intensity
    if not spec.is_active(intensity):
        logger.debug("Light leak skipped (intensity=%s)", intensity)
        return image

    rgb = np.asarray(parse_hex_color(color, FALLBACK_LIGHT_LEAK_COLOR), dtype=np.float32)
    alpha = light_leak_alpha(image.shape[0], image.shape[1], spec.validate(intensity))
    layer = alpha[..., None] * rgb
    return _with_rgb(image, screen_blend(image[..., :3], layer))


def apply_fade(image: ImageRGBA, amount: float) -> ImageRGBA:
    """Lift the black point and desaturate slightly, like faded film.

    At ``amount=1`` black maps to ``FADE_BLACK_LIFT`` and white to
    ``1 - FADE_WHITE_ROLLOFF``, so tones compress but never invert.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param amount: Fade strength in [0, 1]
    :returns: New RGBA buffer, or *image* itself when skipped
    """
    spec = PARAMETER_CONFIG.fade_amount
    if not spec.is_active(amount):
        logger.debug("Fade skipped (amount=%s)", amount)
        return image
    amount = spec.validate(amount)

    lift = FADE_BLACK_LIFT * amount
    rolloff = FADE_WHITE_ROLLOFF * amount
    rgb = lift + image[..., :3] * (1.0 - lift - rolloff)
    gray = luminance(rgb)[..., None]
    return _with_rgb(image, mix(rgb, gray, FADE_DESATURATION * amount))


def apply_halation(image: ImageRGBA, amount: float) -> ImageRGBA:
    """Add a warm glow around bright highlights.

    A bright-pass of the luminance above ``HALATION_THRESHOLD`` is tinted,
    blurred with a gaussian of ``amount * HALATION_BLUR_RADIUS`` pixels and
    screened back at most ``amount * HALATION_MAX_CONTRIBUTION`` strong.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param amount: Halation strength in [0, 1]
    :returns: New RGBA buffer, or *image* itself when skipped
    """
    spec = PARAMETER_CONFIG.halation
    if not spec.is_active(amount):
        logger.debug("Halation skipped (amount=%s)", amount)
        return image
    amount = spec.validate(amount)

    rgb = image[..., :3]
    bright = np.clip(
        (luminance(rgb) - HALATION_THRESHOLD) / (1.0 - HALATION_THRESHOLD), 0.0, 1.0
    )
    if not bright.any():
        logger.debug("Halation has no highlights to spread")
        return image

    tint = np.asarray(HALATION_TINT, dtype=np.float32)
    glow = gaussian_blur(bright[..., None] * tint, amount * HALATION_BLUR_RADIUS)
    glow = np.clip(glow, 0.0, 1.0) * (amount * HALATION_MAX_CONTRIBUTION)
    return _with_rgb(image, screen_blend(rgb, glow))
