"""Hex color parsing for recipe color fields.

Parse failures never raise: they resolve to one fixed fallback color so a
malformed recipe degrades visually instead of failing a render.
"""

from __future__ import annotations

import logging
import re

from filmmod.types import RGB

logger = logging.getLogger(__name__)

# Orange, the color used when a light leak color cannot be parsed
FALLBACK_LIGHT_LEAK_COLOR: RGB = (1.0, 0.5, 0.0)

_HEX_PATTERN = re.compile(r"#?([0-9a-fA-F]{6})")


def parse_hex_color(value: object, fallback: RGB = FALLBACK_LIGHT_LEAK_COLOR) -> RGB:
    """Parse a ``#RRGGBB`` / ``RRGGBB`` string into normalized RGB.

    :param value: Hex string, optionally prefixed with ``#``
    :param fallback: Color returned when *value* is not a valid hex color
    :returns: (r, g, b) in [0, 1]

    Example:
        >>> parse_hex_color("#FF8000")
        (1.0, 0.5019607843137255, 0.0)
        >>> parse_hex_color("orange")
        (1.0, 0.5, 0.0)
    """
    match = _HEX_PATTERN.fullmatch(value.strip()) if isinstance(value, str) else None
    if match is None:
        logger.warning("Invalid hex color %r, using fallback %s", value, to_hex(fallback))
        return fallback

    number = int(match.group(1), 16)
    return (
        ((number >> 16) & 0xFF) / 255.0,
        ((number >> 8) & 0xFF) / 255.0,
        (number & 0xFF) / 255.0,
    )


def to_hex(color: RGB) -> str:
    """Format normalized RGB as ``#RRGGBB``.

    Channels are clamped to [0, 1] and rounded to the nearest 8-bit value.

    :param color: (r, g, b) in [0, 1]
    :returns: Uppercase hex string with ``#`` prefix
    """
    channels = (round(max(0.0, min(1.0, float(c))) * 255) for c in color)
    return "#" + "".join(f"{c:02X}" for c in channels)
