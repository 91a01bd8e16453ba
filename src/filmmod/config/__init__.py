"""Configuration module for filmmod.

This module provides the filter value types, the parameter
specifications every stage reads its ranges and thresholds from, and the
built-in preset catalog.

Usage:
    from filmmod.config import CONFIG
    CONFIG.parameters.vignette.skip_threshold  # 0.05
    CONFIG.parameters.contrast.neutral  # 1.0

    from filmmod.config import FilterParameters, get_preset
    params = get_preset("film_dreams").parameters
"""

from filmmod.config.config import CONFIG, PARAMETER_CONFIG, FilmmodConfig
from filmmod.config.operations import OperationSpec
from filmmod.config.parameters import ParameterConfig
from filmmod.config.presets import (
    BW_FILM,
    CINEMATIC,
    DISPOSABLE,
    FILM_DREAMS,
    KPOP_GLOW,
    NATURAL,
    PRESET_FILTERS,
    SOFT_AESTHETIC,
    Y2K_DIGITAL,
    get_preset,
    parameters_from_dict,
    parameters_to_dict,
)
from filmmod.config.values import (
    AestheticStyle,
    ColorCurve,
    DateStampStyle,
    Filter,
    FilterParameters,
    FilterTag,
)

__all__ = [
    # Core types
    "OperationSpec",
    "ParameterConfig",
    "FilmmodConfig",
    # Value classes
    "FilterParameters",
    "Filter",
    "ColorCurve",
    "DateStampStyle",
    "FilterTag",
    "AestheticStyle",
    # Presets
    "FILM_DREAMS",
    "KPOP_GLOW",
    "DISPOSABLE",
    "Y2K_DIGITAL",
    "SOFT_AESTHETIC",
    "CINEMATIC",
    "NATURAL",
    "BW_FILM",
    "PRESET_FILTERS",
    "get_preset",
    "parameters_from_dict",
    "parameters_to_dict",
    # Singletons
    "CONFIG",
    "PARAMETER_CONFIG",
]
