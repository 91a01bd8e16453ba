"""Filter parameter configuration.

This module defines the standardized parameter specifications for every
numeric field of a filter recipe. Stages read their ranges and skip
thresholds from here at use-time.
"""

from __future__ import annotations

from dataclasses import dataclass

from filmmod.config.operations import OperationSpec
from filmmod.constants import ADJUST_EPSILON, STAGE_SKIP_THRESHOLD


def _intensity(name: str, default: float, description: str) -> OperationSpec:
    return OperationSpec(
        name=name,
        min_value=0.0,
        max_value=1.0,
        default=default,
        neutral=0.0,
        gate="threshold",
        skip_threshold=STAGE_SKIP_THRESHOLD,
        description=description,
    )


def _centred(
    name: str, lo: float, hi: float, default: float, neutral: float, description: str
) -> OperationSpec:
    return OperationSpec(
        name=name,
        min_value=lo,
        max_value=hi,
        default=default,
        neutral=neutral,
        gate="epsilon",
        skip_threshold=ADJUST_EPSILON,
        description=description,
    )


@dataclass(frozen=True)
class ParameterConfig:
    """Configuration for all numeric filter parameters."""

    # Grain
    grain_intensity: OperationSpec = _intensity(
        "grain_intensity", 0.3, "Film grain strength: 0=none, 1=heavy"
    )
    grain_size: OperationSpec = OperationSpec(
        name="grain_size",
        min_value=0.0,
        max_value=1.0,
        default=0.5,
        neutral=0.0,
        gate="none",
        description="Grain coarseness: 0=pixel-fine, 1=5px cells",
    )

    # Tone
    temperature: OperationSpec = _centred(
        "temperature", -1.0, 1.0, 0.0, 0.0, "White balance: -1=cool/blue, 1=warm/orange"
    )
    tint: OperationSpec = _centred("tint", -1.0, 1.0, 0.0, 0.0, "Tint: -1=green, 1=magenta")
    saturation: OperationSpec = _centred(
        "saturation", 0.0, 2.0, 1.0, 1.0, "Saturation: 0=grayscale, 1.0=no change"
    )
    contrast: OperationSpec = _centred(
        "contrast", 0.0, 2.0, 1.1, 1.0, "Contrast around mid-gray: 1.0=no change"
    )
    exposure: OperationSpec = _centred(
        "exposure", -2.0, 2.0, 0.0, 0.0, "Exposure in EV stops: 0=no change"
    )
    highlights: OperationSpec = _centred(
        "highlights", -1.0, 1.0, -0.1, 0.0, "Highlight gain: -1=darker, 1=brighter"
    )
    shadows: OperationSpec = _centred(
        "shadows", -1.0, 1.0, 0.1, 0.0, "Shadow lift: -1=crush, 1=lift"
    )

    # Optical
    vignette: OperationSpec = _intensity("vignette", 0.2, "Edge darkening strength")
    light_leak_intensity: OperationSpec = _intensity(
        "light_leak_intensity", 0.0, "Corner light leak opacity"
    )
    fade_amount: OperationSpec = _intensity(
        "fade_amount", 0.1, "Black point lift (faded film look)"
    )
    halation: OperationSpec = _intensity("halation", 0.2, "Glow around bright highlights")

    # Digital
    digital_noise: OperationSpec = _intensity(
        "digital_noise", 0.1, "Chromatic sensor noise strength"
    )
    sharpness: OperationSpec = OperationSpec(
        name="sharpness",
        min_value=0.0,
        max_value=2.0,
        default=1.0,
        neutral=1.0,
        gate="none",
        description="Sharpness hint carried with the recipe",
    )

    def get_spec(self, name: str) -> OperationSpec:
        """Get parameter spec by name.

        :param name: Parameter name
        :return: OperationSpec for the parameter
        :raises AttributeError: If parameter not found
        """
        return getattr(self, name)

    def get_all_specs(self) -> dict[str, OperationSpec]:
        """Get all parameter specs as a dictionary.

        :return: Dictionary mapping parameter names to specs
        """
        return {
            "grain_intensity": self.grain_intensity,
            "grain_size": self.grain_size,
            "temperature": self.temperature,
            "tint": self.tint,
            "saturation": self.saturation,
            "contrast": self.contrast,
            "exposure": self.exposure,
            "highlights": self.highlights,
            "shadows": self.shadows,
            "vignette": self.vignette,
            "light_leak_intensity": self.light_leak_intensity,
            "fade_amount": self.fade_amount,
            "halation": self.halation,
            "digital_noise": self.digital_noise,
            "sharpness": self.sharpness,
        }
