"""Overlay stage - date stamp compositing."""

from filmmod.overlay.stamp import (
    STAMP_STYLES,
    StampStyle,
    format_date,
    load_stamp_font,
    stamp_date,
)

__all__ = [
    "stamp_date",
    "StampStyle",
    "STAMP_STYLES",
    "format_date",
    "load_stamp_font",
]
