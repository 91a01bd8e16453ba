"""Texture stages - film grain and digital sensor noise."""

from filmmod.texture.grain import add_digital_noise, add_grain, cell_size, noise_field

__all__ = [
    "add_grain",
    "add_digital_noise",
    "cell_size",
    "noise_field",
]
