"""Conversion between external images and the RGBA working buffer.

The working buffer is a C-contiguous float32 array [H, W, 4] in [0, 1].
Decoding goes through Pillow for encoded inputs, and 8-bit values survive
a decode/encode round trip bit-exactly.
"""

from __future__ import annotations

import io
import logging
import os

import numpy as np
from PIL import Image

from filmmod.errors import InvalidImageError, RenderingFailedError
from filmmod.types import ImageRGBA, ImageSource

logger = logging.getLogger(__name__)

# Formats that cannot carry an alpha channel
_OPAQUE_FORMATS = {"JPEG", "BMP"}


def _from_array(array: np.ndarray) -> ImageRGBA:
    if array.ndim != 3 or array.shape[2] not in (3, 4) or 0 in array.shape[:2]:
        raise InvalidImageError(f"Expected array of shape (H, W, 3|4), got {array.shape}")

    if array.dtype == np.uint8:
        rgba = array.astype(np.float32) / np.float32(255.0)
    elif np.issubdtype(array.dtype, np.floating):
        if not np.isfinite(array).all():
            raise InvalidImageError("Float image contains NaN or infinite values")
        rgba = np.clip(array, 0.0, 1.0).astype(np.float32)
    else:
        raise InvalidImageError(f"Unsupported pixel dtype {array.dtype}")

    if rgba.shape[2] == 3:
        rgba = np.concatenate([rgba, np.ones(rgba.shape[:2] + (1,), dtype=np.float32)], axis=-1)
    return rgba


def _open(source: bytes | str | os.PathLike) -> Image.Image:
    stream = io.BytesIO(source) if isinstance(source, bytes | bytearray) else source
    try:
        image = Image.open(stream)
        image.load()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise InvalidImageError(f"Cannot decode image: {exc}") from exc
    return image


def decode_image(source: ImageSource) -> ImageRGBA:
    """Decode *source* into a read-only RGBA working buffer.

    :param source: Encoded bytes, a file path, a PIL image, or an
        ``(H, W, 3|4)`` uint8/float array
    :returns: float32 array [H, W, 4] in [0, 1] with ``writeable=False``
    :raises InvalidImageError: If *source* cannot be turned into pixels

    Example:
        >>> pixels = decode_image("photo.jpg")
        >>> pixels.shape, pixels.dtype
        ((1080, 1440, 4), dtype('float32'))
    """
    if isinstance(source, np.ndarray):
        rgba = _from_array(source)
    elif isinstance(source, Image.Image | bytes | bytearray | str | os.PathLike):
        image = source if isinstance(source, Image.Image) else _open(source)
        if 0 in image.size:
            raise InvalidImageError(f"Image has no pixels: {image.size}")
        try:
            rgba = _from_array(np.asarray(image.convert("RGBA")))
        except (OSError, ValueError) as exc:
            raise InvalidImageError(f"Cannot convert {image.mode} image to RGBA: {exc}") from exc
    else:
        raise InvalidImageError(f"Unsupported image source {type(source).__name__}")

    rgba = np.ascontiguousarray(rgba, dtype=np.float32)
    rgba.setflags(write=False)
    logger.debug("Decoded %dx%d image", rgba.shape[1], rgba.shape[0])
    return rgba


def to_uint8(buffer: ImageRGBA) -> np.ndarray:
    """Quantize a [0, 1] buffer to uint8 with round-to-nearest."""
    return np.rint(np.clip(buffer, 0.0, 1.0) * np.float32(255.0)).astype(np.uint8)


def to_image(buffer: ImageRGBA | np.ndarray) -> Image.Image:
    """Wrap an RGBA buffer (float in [0, 1] or uint8) as a PIL ``RGBA`` image."""
    pixels = buffer if buffer.dtype == np.uint8 else to_uint8(buffer)
    return Image.fromarray(np.ascontiguousarray(pixels))


def encode_image(buffer: ImageRGBA | np.ndarray, format: str = "PNG", **save_kwargs) -> bytes:
    """Encode an RGBA buffer to image file bytes.

    Alpha is dropped for formats that cannot store it (JPEG, BMP).

    :param buffer: float [0, 1] or uint8 RGBA array [H, W, 4]
    :param format: Pillow format name
    :param save_kwargs: Extra options forwarded to ``Image.save``
    :returns: Encoded file contents
    :raises RenderingFailedError: If Pillow cannot encode the buffer
    """
    format = "JPEG" if format.upper() == "JPG" else format
    image = to_image(buffer)
    if format.upper() in _OPAQUE_FORMATS:
        image = image.convert("RGB")

    out = io.BytesIO()
    try:
        image.save(out, format=format, **save_kwargs)
    except (OSError, KeyError, ValueError) as exc:
        raise RenderingFailedError("encode", str(exc)) from exc
    return out.getvalue()
