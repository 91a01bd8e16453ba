"""Numba-optimized kernels for per-pixel color operations.

Provides JIT-compiled kernels over the RGBA working buffer. Every kernel
writes into a caller-provided output array, leaves alpha untouched and
clamps RGB to [0, 1].
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from filmmod.constants import LUMA_B, LUMA_G, LUMA_R


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def apply_color_matrix_numba(
    image: NDArray[np.float32],
    matrix: NDArray[np.float32],
    bias: NDArray[np.float32],
    out: NDArray[np.float32],
) -> None:
    """Apply ``rgb' = M @ rgb + b`` to every pixel.

    :param image: RGBA buffer [H, W, 4]
    :param matrix: 3×3 transformation matrix
    :param bias: Per-channel offset [3]
    :param out: Output RGBA buffer [H, W, 4]
    """
    H = image.shape[0]
    W = image.shape[1]

    for y in prange(H):
        for x in range(W):
            r = image[y, x, 0]
            g = image[y, x, 1]
            b = image[y, x, 2]
            for c in range(3):
                val = matrix[c, 0] * r + matrix[c, 1] * g + matrix[c, 2] * b + bias[c]
                if val < 0.0:
                    val = 0.0
                elif val > 1.0:
                    val = 1.0
                out[y, x, c] = val
            out[y, x, 3] = image[y, x, 3]


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def apply_highlight_shadow_numba(
    image: NDArray[np.float32],
    highlights: float,
    shadows: float,
    shadow_strength: float,
    highlight_pivot: float,
    shadow_pivot: float,
    out: NDArray[np.float32],
) -> None:
    """Remap highlights and shadows using luminance masks.

    Highlights: ``rgb * (1 + highlights * w_h)`` where ``w_h`` ramps from 0
    at *highlight_pivot* to 1 at white.
    Shadows: lift toward white (``shadows > 0``) or toward black
    (``shadows < 0``) weighted by ``w_s``, which is 1 at black and 0 from
    *shadow_pivot* upwards.

    :param image: RGBA buffer [H, W, 4]
    :param highlights: Highlight amount in [-1, 1]
    :param shadows: Shadow amount in [-1, 1]
    :param shadow_strength: Maximum shadow lift at shadows=+-1
    :param highlight_pivot: Luminance where the highlight mask starts
    :param shadow_pivot: Luminance where the shadow mask ends
    :param out: Output RGBA buffer [H, W, 4]
    """
    H = image.shape[0]
    W = image.shape[1]

    for y in prange(H):
        for x in range(W):
            r = image[y, x, 0]
            g = image[y, x, 1]
            b = image[y, x, 2]
            luma = LUMA_R * r + LUMA_G * g + LUMA_B * b

            # Hermite masks
            t = (luma - highlight_pivot) / (1.0 - highlight_pivot)
            t = min(max(t, 0.0), 1.0)
            w_h = t * t * (3.0 - 2.0 * t)
            t = luma / shadow_pivot
            t = min(max(t, 0.0), 1.0)
            w_s = 1.0 - t * t * (3.0 - 2.0 * t)

            gain = 1.0 + highlights * w_h
            lift = shadows * shadow_strength * w_s
            for c in range(3):
                val = image[y, x, c] * gain
                if lift >= 0.0:
                    val = val + lift * (1.0 - val)
                else:
                    val = val + lift * val
                if val < 0.0:
                    val = 0.0
                elif val > 1.0:
                    val = 1.0
                out[y, x, c] = val
            out[y, x, 3] = image[y, x, 3]
