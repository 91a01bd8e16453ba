"""Preset library for filmmod.

Provides the built-in filter catalog, with support for building
parameters from plain mappings.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from filmmod.config.values import (
    PARAMETER_FIELDS,
    AestheticStyle,
    ColorCurve,
    DateStampStyle,
    Filter,
    FilterParameters,
    FilterTag,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Film Looks
# ============================================================================

FILM_DREAMS = Filter(
    name="Film Dreams",
    description="Soft vintage film with warm tones",
    thumbnail_name="filter_film_dreams",
    tags=(FilterTag.TRENDING, FilterTag.FREE, FilterTag.FILM, FilterTag.SOFT),
    aesthetic_style=AestheticStyle.FILM_VINTAGE,
    parameters=FilterParameters(
        grain_intensity=0.25,
        grain_size=0.5,
        temperature=0.15,
        tint=0.05,
        saturation=0.95,
        contrast=1.1,
        exposure=0.08,
        highlights=-0.1,
        shadows=0.1,
        vignette=0.2,
        light_leak_intensity=0.15,
        light_leak_color="#FFD700",
        fade_amount=0.15,
        digital_noise=0.0,
        sharpness=0.9,
        date_stamp_style=DateStampStyle.VINTAGE,
        color_curve=ColorCurve.WARM_VINTAGE,
        halation=0.2,
    ),
)

CINEMATIC = Filter(
    name="Cinematic",
    description="Movie-like color grading",
    thumbnail_name="filter_cinematic",
    is_premium=True,
    tags=(FilterTag.PREMIUM, FilterTag.FILM, FilterTag.CINEMATIC, FilterTag.DARK),
    aesthetic_style=AestheticStyle.CINEMATIC,
    parameters=FilterParameters(
        grain_intensity=0.28,
        grain_size=0.5,
        temperature=0.08,
        tint=-0.08,
        saturation=1.05,
        contrast=1.22,
        exposure=-0.02,
        highlights=-0.18,
        shadows=0.12,
        vignette=0.3,
        light_leak_intensity=0.08,
        light_leak_color="#4A90E2",
        fade_amount=0.08,
        digital_noise=0.04,
        sharpness=1.1,
        date_stamp_style=DateStampStyle.MODERN,
        color_curve=ColorCurve.COOL_BLUE,
        halation=0.15,
    ),
)

BW_FILM = Filter(
    name="B&W Film",
    description="Classic black and white film",
    thumbnail_name="filter_bw",
    tags=(FilterTag.FREE, FilterTag.FILM, FilterTag.VINTAGE),
    aesthetic_style=AestheticStyle.FILM_VINTAGE,
    parameters=FilterParameters(
        grain_intensity=0.3,
        grain_size=0.5,
        saturation=1.0,
        contrast=1.15,
        exposure=0.05,
        highlights=-0.1,
        shadows=0.1,
        vignette=0.25,
        light_leak_intensity=0.0,
        light_leak_color="#FFFFFF",
        fade_amount=0.1,
        sharpness=1.05,
        date_stamp_style=DateStampStyle.VINTAGE,
        color_curve=ColorCurve.BLACK_AND_WHITE,
        halation=0.15,
    ),
)

NATURAL = Filter(
    name="Natural",
    description="No filter, original look",
    thumbnail_name="filter_natural",
    tags=(FilterTag.FREE,),
    aesthetic_style=AestheticStyle.FILM_35MM,
    parameters=FilterParameters(date_stamp_style=DateStampStyle.MODERN),
)

# ============================================================================
# Camera Looks
# ============================================================================

DISPOSABLE = Filter(
    name="Disposable",
    description="Y2K disposable camera vibes",
    thumbnail_name="filter_disposable",
    tags=(FilterTag.TRENDING, FilterTag.Y2K, FilterTag.FILM, FilterTag.VIBRANT),
    aesthetic_style=AestheticStyle.DISPOSABLE_CAMERA,
    parameters=FilterParameters(
        grain_intensity=0.35,
        grain_size=0.6,
        temperature=0.05,
        saturation=1.15,
        contrast=1.2,
        exposure=0.1,
        highlights=-0.15,
        shadows=0.12,
        vignette=0.25,
        light_leak_intensity=0.2,
        light_leak_color="#FF6B35",
        fade_amount=0.1,
        digital_noise=0.15,
        sharpness=1.1,
        date_stamp_style=DateStampStyle.COMPACT,
        color_curve=ColorCurve.VIRAL_ORANGE,
        halation=0.18,
    ),
)

Y2K_DIGITAL = Filter(
    name="Y2K Digital",
    description="Early 2000s digital camera aesthetic",
    thumbnail_name="filter_y2k",
    tags=(FilterTag.POPULAR, FilterTag.DIGITAL, FilterTag.Y2K, FilterTag.VIBRANT),
    aesthetic_style=AestheticStyle.COMPACT_DIGITAL,
    parameters=FilterParameters(
        grain_intensity=0.05,
        grain_size=0.3,
        temperature=-0.08,
        saturation=1.12,
        contrast=1.15,
        exposure=0.08,
        highlights=-0.08,
        shadows=0.08,
        vignette=0.12,
        light_leak_intensity=0.0,
        light_leak_color="#FFFFFF",
        fade_amount=0.0,
        digital_noise=0.22,
        sharpness=1.3,
        date_stamp_style=DateStampStyle.COMPACT,
        color_curve=ColorCurve.NEUTRAL,
        halation=0.08,
    ),
)

# ============================================================================
# Soft Looks
# ============================================================================

KPOP_GLOW = Filter(
    name="K-Pop Glow",
    description="Soft, glowing skin like K-pop idols",
    thumbnail_name="filter_kpop_glow",
    tags=(FilterTag.TRENDING, FilterTag.POPULAR, FilterTag.KPOP, FilterTag.SOFT),
    aesthetic_style=AestheticStyle.VIRAL_KPOP,
    parameters=FilterParameters(
        grain_intensity=0.08,
        grain_size=0.3,
        temperature=0.12,
        tint=-0.03,
        saturation=1.05,
        contrast=1.03,
        exposure=0.15,
        highlights=0.08,
        shadows=0.04,
        vignette=0.08,
        light_leak_intensity=0.12,
        light_leak_color="#FFE5E5",
        fade_amount=0.03,
        sharpness=0.85,
        date_stamp_style=DateStampStyle.MODERN,
        color_curve=ColorCurve.SOFT_PEACH,
        halation=0.25,
    ),
)

SOFT_AESTHETIC = Filter(
    name="Soft Aesthetic",
    description="Instagram-ready soft dreamy look",
    thumbnail_name="filter_soft",
    tags=(FilterTag.TRENDING, FilterTag.AESTHETIC, FilterTag.SOFT, FilterTag.LIGHT),
    aesthetic_style=AestheticStyle.SOFT_AESTHETIC,
    parameters=FilterParameters(
        grain_intensity=0.12,
        grain_size=0.4,
        temperature=0.18,
        tint=0.04,
        saturation=0.9,
        contrast=0.98,
        exposure=0.18,
        highlights=0.1,
        shadows=0.15,
        vignette=0.15,
        light_leak_intensity=0.18,
        light_leak_color="#FFF0E5",
        fade_amount=0.22,
        sharpness=0.8,
        date_stamp_style=DateStampStyle.MODERN,
        color_curve=ColorCurve.FADED_PINK,
        halation=0.28,
    ),
)

# ============================================================================
# Preset Registry
# ============================================================================


def _slug(name: str) -> str:
    """'K-Pop Glow' -> 'k_pop_glow', 'B&W Film' -> 'b_w_film'."""
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


# Catalog order matches the in-app filter strip
PRESET_FILTERS: dict[str, Filter] = {
    _slug(f.name): f
    for f in (
        FILM_DREAMS,
        KPOP_GLOW,
        DISPOSABLE,
        Y2K_DIGITAL,
        SOFT_AESTHETIC,
        CINEMATIC,
        NATURAL,
        BW_FILM,
    )
}


def get_preset(name: str) -> Filter:
    """Get preset filter by slug or display name.

    :param name: Preset name, e.g. "film_dreams" or "Film Dreams" (case-insensitive)
    :returns: Filter preset
    :raises KeyError: If preset not found
    """
    key = _slug(name)
    if key not in PRESET_FILTERS:
        available = ", ".join(PRESET_FILTERS.keys())
        raise KeyError(f"Unknown preset '{name}'. Available: {available}")
    return PRESET_FILTERS[key]


# ============================================================================
# Dict Conversion
# ============================================================================


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def parameters_from_dict(d: Mapping[str, object]) -> FilterParameters:
    """Create FilterParameters from a mapping.

    Keys may be snake_case or camelCase; unknown keys are ignored.

    :param d: Mapping with parameter values
    :returns: FilterParameters instance
    :raises ValueError: If an enum value is unknown

    Example:
        >>> params = parameters_from_dict({"grainIntensity": 0.3, "colorCurve": "sepia"})
    """
    kwargs = {}
    for key, value in d.items():
        name = _snake_case(key)
        if name in PARAMETER_FIELDS:
            kwargs[name] = value
        else:
            logger.debug("Ignoring unknown parameter key %r", key)
    return FilterParameters(**kwargs)


def parameters_to_dict(params: FilterParameters) -> dict[str, object]:
    """Convert FilterParameters to a plain dictionary.

    Enum fields are emitted as their string values.

    :param params: FilterParameters instance
    :returns: Dictionary representation with snake_case keys
    """
    d: dict[str, object] = {}
    for name in PARAMETER_FIELDS:
        value = getattr(params, name)
        d[name] = value.value if isinstance(value, ColorCurve | DateStampStyle) else value
    return d
