"""Vectorised blend helpers shared by the stages.

All helpers take float32 arrays in [0, 1] and return new arrays; none of
them writes into its inputs.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from filmmod.constants import LUMA_B, LUMA_G, LUMA_R

_LUMA_WEIGHTS = np.array([LUMA_R, LUMA_G, LUMA_B], dtype=np.float32)


def luminance(rgb: NDArray[np.float32]) -> NDArray[np.float32]:
    """Return the Rec. 601 luminance of ``rgb[..., :3]`` with shape ``[...]``."""

    return (rgb[..., :3] @ _LUMA_WEIGHTS).astype(np.float32, copy=False)


def mix(a: NDArray[np.float32], b: NDArray[np.float32], t) -> NDArray[np.float32]:
    """Vectorised equivalent of GLSL's ``mix`` helper."""

    return a * (1.0 - t) + b * t


def smoothstep(edge0: float, edge1: float, x: NDArray[np.float32]) -> NDArray[np.float32]:
    """Hermite step between *edge0* and *edge1*, clamped to [0, 1]."""

    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return (t * t * (3.0 - 2.0 * t)).astype(np.float32, copy=False)


def screen_blend(base: NDArray[np.float32], layer: NDArray[np.float32]) -> NDArray[np.float32]:
    """Screen blend: ``1 - (1 - base) * (1 - layer)``.

    Never darkens *base* for a non-negative *layer*.
    """

    return 1.0 - (1.0 - base) * (1.0 - np.clip(layer, 0.0, 1.0))


def overlay_blend(base: NDArray[np.float32], layer: NDArray[np.float32]) -> NDArray[np.float32]:
    """Overlay blend; a layer value of 0.5 leaves *base* unchanged."""

    low = 2.0 * base * layer
    high = 1.0 - 2.0 * (1.0 - base) * (1.0 - layer)
    return np.where(base < 0.5, low, high).astype(np.float32, copy=False)


def alpha_over(base: NDArray[np.float32], layer: NDArray[np.float32]) -> NDArray[np.float32]:
    """Composite RGBA *layer* over RGBA *base* (straight alpha).

    :param base: Background [..., 4]
    :param layer: Foreground [..., 4], same shape
    :returns: Composited RGBA [..., 4]
    """

    la = layer[..., 3:4]
    ba = base[..., 3:4]
    out_a = la + ba * (1.0 - la)
    premul = layer[..., :3] * la + base[..., :3] * ba * (1.0 - la)
    safe_a = np.where(out_a > 0.0, out_a, 1.0)
    out_rgb = np.where(out_a > 0.0, premul / safe_a, 0.0)
    out = np.concatenate([out_rgb, out_a], axis=-1).astype(np.float32, copy=False)
    # Fully transparent layer pixels keep the base bit-for-bit
    return np.where(la > 0.0, out, base).astype(np.float32, copy=False)
