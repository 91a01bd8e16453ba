"""
Color stages - global tonal adjustment and named color curves.

Example:
    >>> from filmmod.color import adjust, grade
    >>> from filmmod.config import ColorCurve, FilterParameters
    >>> toned = adjust(image, FilterParameters(exposure=0.5, contrast=1.2))
    >>> graded = grade(toned, ColorCurve.WARM_VINTAGE)
"""

from filmmod.color.adjust import (
    adjust,
    apply_contrast_saturation,
    apply_exposure,
    apply_highlights_shadows,
    apply_white_balance,
    kelvin_to_rgb,
    white_balance_gains,
)
from filmmod.color.curves import CURVE_TRANSFORMS, CurveTransform, get_curve_transform, grade

__all__ = [
    "adjust",
    "grade",
    # Sub-steps
    "apply_exposure",
    "apply_contrast_saturation",
    "apply_highlights_shadows",
    "apply_white_balance",
    "kelvin_to_rgb",
    "white_balance_gains",
    # Curve table
    "CURVE_TRANSFORMS",
    "CurveTransform",
    "get_curve_transform",
]
