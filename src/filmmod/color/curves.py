"""Named color curves: a fixed lookup table of per-channel linear grades.

Each :class:`ColorCurve` maps to one :class:`CurveTransform`, a 3×3 matrix
plus per-channel bias applied as ``rgb' = M @ rgb + b``. Tinted curves use
a diagonal matrix; ``blackAndWhite`` and ``sepia`` use luminance rows so
every output channel is derived from the same gray value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from filmmod.color.kernels import apply_color_matrix_numba
from filmmod.config import ColorCurve
from filmmod.constants import LUMA_B, LUMA_G, LUMA_R
from filmmod.types import ImageRGBA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveTransform:
    """Per-channel linear transform ``rgb' = matrix @ rgb + bias``."""

    matrix: tuple[tuple[float, float, float], ...]
    bias: tuple[float, float, float] = (0.0, 0.0, 0.0)

    @classmethod
    def scale(
        cls, r: float, g: float, b: float, bias: tuple[float, float, float] = (0.0, 0.0, 0.0)
    ) -> CurveTransform:
        """Diagonal per-channel scale with optional bias."""
        return cls(((r, 0.0, 0.0), (0.0, g, 0.0), (0.0, 0.0, b)), bias)

    @classmethod
    def monochrome(cls, r: float = 1.0, g: float = 1.0, b: float = 1.0) -> CurveTransform:
        """Desaturate to luminance, then tint each channel by its factor."""
        luma = (LUMA_R, LUMA_G, LUMA_B)
        return cls(tuple(tuple(f * w for w in luma) for f in (r, g, b)))

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(matrix, bias)`` as float32 arrays for the kernel."""
        return (
            np.asarray(self.matrix, dtype=np.float32),
            np.asarray(self.bias, dtype=np.float32),
        )

    def is_identity(self) -> bool:
        return np.array_equal(np.asarray(self.matrix), np.eye(3)) and not any(self.bias)


IDENTITY = CurveTransform.scale(1.0, 1.0, 1.0)

CURVE_TRANSFORMS: dict[ColorCurve, CurveTransform] = {
    ColorCurve.NEUTRAL: IDENTITY,
    ColorCurve.WARM_VINTAGE: CurveTransform.scale(1.08, 1.0, 0.86, bias=(0.03, 0.015, 0.0)),
    ColorCurve.COOL_BLUE: CurveTransform.scale(0.92, 1.0, 1.10, bias=(0.0, 0.01, 0.03)),
    ColorCurve.FADED_PINK: CurveTransform.scale(1.04, 0.94, 0.98, bias=(0.06, 0.03, 0.05)),
    ColorCurve.GREEN_TINT: CurveTransform.scale(0.95, 1.06, 0.95, bias=(0.0, 0.02, 0.0)),
    ColorCurve.SEPIA: CurveTransform.monochrome(1.08, 0.95, 0.78),
    ColorCurve.BLACK_AND_WHITE: CurveTransform.monochrome(),
    ColorCurve.VIRAL_ORANGE: CurveTransform.scale(1.12, 1.0, 0.82, bias=(0.02, 0.0, 0.0)),
    ColorCurve.SOFT_PEACH: CurveTransform.scale(1.05, 0.98, 0.94, bias=(0.04, 0.03, 0.02)),
}


def get_curve_transform(curve: ColorCurve | str) -> CurveTransform:
    """Look up the transform for *curve*.

    :param curve: ColorCurve member or its string value
    :returns: The calibrated CurveTransform
    :raises ValueError: If *curve* is not a known curve name
    """
    return CURVE_TRANSFORMS[ColorCurve(curve)]


def grade(image: ImageRGBA, curve: ColorCurve | str) -> ImageRGBA:
    """Apply the named color curve to *image*.

    :param image: RGBA buffer [H, W, 4] in [0, 1]
    :param curve: Curve to apply
    :returns: New RGBA buffer, or *image* itself for ``ColorCurve.NEUTRAL``

    Example:
        >>> sepia = grade(image, ColorCurve.SEPIA)
        >>> grade(image, "neutral") is image
        True
    """
    curve = ColorCurve(curve)
    transform = CURVE_TRANSFORMS[curve]
    if transform.is_identity():
        logger.debug("Color curve %s is the identity, skipped", curve.value)
        return image

    image = np.ascontiguousarray(image, dtype=np.float32)
    matrix, bias = transform.as_arrays()
    out = np.empty_like(image)
    apply_color_matrix_numba(image, matrix, bias, out)
    return out
