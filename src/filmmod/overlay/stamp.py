"""Date stamp overlay.

Renders the date as ``yyyy.mm.dd`` in a monospaced face with Pillow and
alpha-composites it into the bottom-right corner of the frame, inset by
``DATE_STAMP_INSET`` pixels. Only pixels covered by the glyph box are
touched; everything else is returned bit-identical.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from functools import lru_cache

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from filmmod.config import DateStampStyle
from filmmod.constants import (
    DATE_STAMP_FORMAT,
    DATE_STAMP_INSET,
    DATE_STAMP_LARGE_SIZE,
    DATE_STAMP_SMALL_SIZE,
    MONOSPACE_FONTS,
)
from filmmod.shared.blend import alpha_over
from filmmod.types import RGB, ImageRGBA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StampStyle:
    """How one DateStampStyle is drawn."""

    font_size: int
    color: RGB
    opacity: float


STAMP_STYLES: dict[DateStampStyle, StampStyle] = {
    DateStampStyle.VINTAGE: StampStyle(DATE_STAMP_LARGE_SIZE, (1.0, 0.5, 0.0), 1.0),
    DateStampStyle.COMPACT: StampStyle(DATE_STAMP_SMALL_SIZE, (1.0, 1.0, 1.0), 0.9),
    DateStampStyle.POLAROID: StampStyle(DATE_STAMP_SMALL_SIZE, (1.0, 1.0, 1.0), 0.85),
    DateStampStyle.MODERN: StampStyle(DATE_STAMP_SMALL_SIZE, (1.0, 1.0, 1.0), 0.75),
    DateStampStyle.CUSTOM: StampStyle(DATE_STAMP_SMALL_SIZE, (1.0, 1.0, 1.0), 0.9),
}


@lru_cache(maxsize=8)
def load_stamp_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load the first available monospaced font at *size* points.

    Falls back to Pillow's bundled default font when none of
    ``MONOSPACE_FONTS`` is installed.
    """
    for name in MONOSPACE_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue

    logger.warning(
        "No monospaced font found (tried %s); using Pillow default font",
        ", ".join(MONOSPACE_FONTS),
    )
    return ImageFont.load_default(size=size)


def format_date(date: dt.date | None = None) -> str:
    """Format *date* (default: today) as ``yyyy.mm.dd``."""
    return (date or dt.date.today()).strftime(DATE_STAMP_FORMAT)


def render_glyphs(text: str, style: StampStyle) -> np.ndarray:
    """Rasterize *text* into a tight float32 coverage mask [h, w] in [0, 1]."""
    font = load_stamp_font(style.font_size)
    left, top, right, bottom = font.getbbox(text)
    canvas = Image.new("L", (max(1, right - left), max(1, bottom - top)), 0)
    ImageDraw.Draw(canvas).text((-left, -top), text, fill=255, font=font)
    return np.asarray(canvas, dtype=np.float32) / 255.0


def stamp_region(
    height: int, width: int, glyph_h: int, glyph_w: int
) -> tuple[slice, slice, slice, slice]:
    """Place a glyph box at the bottom-right inset, clipped to the image.

    :returns: ``(image_rows, image_cols, glyph_rows, glyph_cols)`` slices;
        empty slices when the glyph falls entirely outside the image
    """
    y0 = height - DATE_STAMP_INSET - glyph_h
    x0 = width - DATE_STAMP_INSET - glyph_w
    y_start, y_end = max(0, y0), max(0, y0 + glyph_h)
    x_start, x_end = max(0, x0), max(0, x0 + glyph_w)
    return (
        slice(y_start, y_end),
        slice(x_start, x_end),
        slice(y_start - y0, y_end - y0),
        slice(x_start - x0, x_end - x0),
    )


def stamp_date(
    image: ImageRGBA,
    style: DateStampStyle | str = DateStampStyle.VINTAGE,
    *,
    date: dt.date | None = None,
    enabled: bool = True,
) -> ImageRGBA:
    """Composite a date stamp into the bottom-right corner.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param style: Stamp look (vintage: large amber, others: small translucent white)
    :param date: Date to print (default: today)
    :param enabled: When False the image is returned unchanged
    :returns: New RGBA buffer, or *image* itself when disabled or when the
        image is too small to hold any part of the stamp

    Example:
        >>> out = stamp_date(image, "vintage", date=datetime.date(1999, 12, 31))
    """
    if not enabled:
        return image

    look = STAMP_STYLES[DateStampStyle(style)]
    text = format_date(date)
    mask = render_glyphs(text, look)

    height, width = image.shape[:2]
    rows, cols, glyph_rows, glyph_cols = stamp_region(height, width, *mask.shape)
    coverage = mask[glyph_rows, glyph_cols]
    if coverage.size == 0:
        logger.debug("Image %dx%d too small for date stamp, skipped", width, height)
        return image

    layer = np.empty(coverage.shape + (4,), dtype=np.float32)
    layer[..., :3] = look.color
    layer[..., 3] = coverage * look.opacity

    out = np.array(image, dtype=np.float32, copy=True)
    out[rows, cols] = alpha_over(out[rows, cols], layer)
    logger.debug("Stamped %r at rows %s cols %s", text, rows, cols)
    return out
