"""Image verification utilities for render testing.

This module provides measurements and assertions over rendered RGBA
buffers (float [0, 1] or uint8), used to check the pipeline's
observable guarantees.

Example:
    >>> from filmmod.verification import ImageVerifier
    >>>
    >>> ImageVerifier.assert_identical(source, rendered)
    >>> ImageVerifier.chroma_variance(rendered)  # 0.0 for grayscale
    >>> ImageVerifier.changed_region(plain, stamped)
    (67, 121, 80, 180)
"""

from __future__ import annotations

import logging

import numpy as np

from filmmod.shared.blend import luminance

logger = logging.getLogger(__name__)


def _as_float(image: np.ndarray) -> np.ndarray:
    if image.dtype == np.uint8:
        return image.astype(np.float64) / 255.0
    return image.astype(np.float64)


class ImageVerifier:
    """Utilities for checking rendered images."""

    @staticmethod
    def assert_identical(expected: np.ndarray, actual: np.ndarray) -> None:
        """Assert two buffers have the same shape and bit-identical pixels.

        :param expected: Reference buffer
        :param actual: Buffer under test
        :raises AssertionError: With the count and bounding box of differing pixels
        """
        if expected.shape != actual.shape:
            raise AssertionError(f"Shape mismatch: expected {expected.shape}, got {actual.shape}")
        if not np.array_equal(expected, actual):
            differing = np.any(expected != actual, axis=-1)
            raise AssertionError(
                f"{int(differing.sum())} pixels differ, "
                f"region {ImageVerifier.changed_region(expected, actual)}"
            )

    @staticmethod
    def chroma_variance(image: np.ndarray) -> float:
        """Mean per-pixel variance across R, G and B.

        :param image: RGBA or RGB buffer
        :return: Exactly 0.0 when every pixel has R == G == B
        """
        rgb = _as_float(image)[..., :3]
        variance = np.var(rgb, axis=-1)
        # Rounding in the mean leaves ~1e-33 on gray pixels; those are exactly gray
        gray = np.ptp(image[..., :3], axis=-1) == 0
        return float(np.where(gray, 0.0, variance).mean())

    @staticmethod
    def mean_luminance(image: np.ndarray) -> float:
        """Mean Rec. 601 luminance in [0, 1]."""
        return float(luminance(_as_float(image).astype(np.float32)).mean())

    @staticmethod
    def min_luminance(image: np.ndarray) -> float:
        """Darkest Rec. 601 luminance in [0, 1]."""
        return float(luminance(_as_float(image).astype(np.float32)).min())

    @staticmethod
    def changed_region(
        before: np.ndarray, after: np.ndarray
    ) -> tuple[int, int, int, int] | None:
        """Bounding box of pixels that differ between two buffers.

        :param before: Reference buffer
        :param after: Buffer to compare
        :return: ``(top, bottom, left, right)`` with exclusive bottom/right,
            or None if the buffers are identical
        """
        differing = np.any(before != after, axis=-1)
        if not differing.any():
            return None
        rows = np.flatnonzero(differing.any(axis=1))
        cols = np.flatnonzero(differing.any(axis=0))
        return (int(rows[0]), int(rows[-1]) + 1, int(cols[0]), int(cols[-1]) + 1)

    @staticmethod
    def edge_darkening(image: np.ndarray, border: int = 2) -> float:
        """Centre luminance minus mean corner luminance.

        :param image: RGBA buffer
        :param border: Corner patch size in pixels
        :return: Positive when the corners are darker than the centre
        """
        lum = luminance(_as_float(image).astype(np.float32)).astype(np.float64)
        h, w = lum.shape
        cy, cx = h // 2, w // 2
        centre = lum[cy - border : cy + border, cx - border : cx + border].mean()
        corners = np.concatenate(
            [
                lum[:border, :border].ravel(),
                lum[:border, -border:].ravel(),
                lum[-border:, :border].ravel(),
                lum[-border:, -border:].ravel(),
            ]
        )
        darkening = float(centre - corners.mean())
        logger.debug("[ImageVerifier] centre=%.4f corners=%.4f", centre, corners.mean())
        return darkening
