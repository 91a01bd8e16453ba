"""
Optical effects - vignette, light leak, fade and halation.

Example:
    >>> from filmmod.optics import apply_fade, apply_vignette
    >>> out = apply_vignette(apply_fade(image, 0.3), 0.5)
"""

from filmmod.optics.apply import (
    apply_fade,
    apply_halation,
    apply_light_leak,
    apply_vignette,
    light_leak_alpha,
    vignette_mask,
)
from filmmod.optics.kernels import gaussian_blur, gaussian_weights

__all__ = [
    "apply_vignette",
    "apply_light_leak",
    "apply_fade",
    "apply_halation",
    # Masks and helpers
    "vignette_mask",
    "light_leak_alpha",
    "gaussian_blur",
    "gaussian_weights",
]
