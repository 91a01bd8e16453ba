"""Numba-optimized blur kernels for the optical effects."""

from __future__ import annotations

import math

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray


@njit(cache=True, nogil=True)
def _reflect_index(i: int, n: int) -> int:
    """Reflect index i into range [0, n-1] like NumPy 'reflect'."""
    if i < 0:
        i = -i - 1
    if i >= n:
        i = 2 * n - i - 1
    # Kernels wider than the image reflect past the far edge; clamp there
    if i < 0:
        return 0
    if i >= n:
        return n - 1
    return i


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def gaussian_blur_numba(
    field: NDArray[np.float32],
    weights: NDArray[np.float32],
    temp: NDArray[np.float32],
    out: NDArray[np.float32],
) -> None:
    """Separable convolution of a [H, W, C] field with a 1D kernel.

    :param field: Input field [H, W, C]
    :param weights: Normalized kernel of odd length ``2 * radius + 1``
    :param temp: Scratch buffer [H, W, C]
    :param out: Output field [H, W, C]
    """
    H = field.shape[0]
    W = field.shape[1]
    C = field.shape[2]
    radius = weights.shape[0] // 2

    # Horizontal pass
    for y in prange(H):
        for x in range(W):
            for c in range(C):
                s = 0.0
                for k in range(-radius, radius + 1):
                    s += weights[k + radius] * field[y, _reflect_index(x + k, W), c]
                temp[y, x, c] = s

    # Vertical pass
    for y in prange(H):
        for x in range(W):
            for c in range(C):
                s = 0.0
                for k in range(-radius, radius + 1):
                    s += weights[k + radius] * temp[_reflect_index(y + k, H), x, c]
                out[y, x, c] = s


def gaussian_weights(sigma: float) -> NDArray[np.float32]:
    """Return a normalized 1D gaussian kernel truncated at 3 sigma.

    :param sigma: Standard deviation in pixels (> 0)
    :returns: float32 weights of length ``2 * ceil(3 * sigma) + 1``
    """
    radius = max(1, math.ceil(3.0 * sigma))
    x = np.arange(-radius, radius + 1, dtype=np.float64)
    weights = np.exp(-0.5 * (x / sigma) ** 2)
    return (weights / weights.sum()).astype(np.float32)


def gaussian_blur(field: NDArray[np.float32], sigma: float) -> NDArray[np.float32]:
    """Blur a [H, W, C] float32 field with a gaussian of *sigma* pixels."""
    field = np.ascontiguousarray(field, dtype=np.float32)
    temp = np.empty_like(field)
    out = np.empty_like(field)
    gaussian_blur_numba(field, gaussian_weights(sigma), temp, out)
    return out
