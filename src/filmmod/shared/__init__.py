"""Shared helpers used across stages."""

from filmmod.shared.blend import (
    alpha_over,
    luminance,
    mix,
    overlay_blend,
    screen_blend,
    smoothstep,
)
from filmmod.shared.color import FALLBACK_LIGHT_LEAK_COLOR, parse_hex_color, to_hex

__all__ = [
    "FALLBACK_LIGHT_LEAK_COLOR",
    "parse_hex_color",
    "to_hex",
    "alpha_over",
    "luminance",
    "mix",
    "overlay_blend",
    "screen_blend",
    "smoothstep",
]
