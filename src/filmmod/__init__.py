"""
filmmod - Film Camera Emulation

Parametric image stylization emulating film and compact digital cameras.

Features:
- Tonal adjustments: exposure, contrast, saturation, highlights, shadows, white balance
- Nine calibrated color curves (warm vintage, sepia, black & white, ...)
- Seeded film grain and chromatic digital noise
- Optical effects: vignette, light leak, fade, halation
- Date stamp overlay
- Fixed-order pipeline with per-stage skip thresholds
- Async, cancellable rendering for concurrent previews

Example - Presets:
    >>> from filmmod import Pipeline, get_preset
    >>>
    >>> pixels = Pipeline().render("photo.jpg", get_preset("film_dreams"), seed=42)

Example - Custom recipe:
    >>> from filmmod import FilterParameters, render_image
    >>>
    >>> params = FilterParameters(grain_intensity=0.4, vignette=0.3, color_curve="sepia")
    >>> pixels = render_image("photo.jpg", params.with_changes(fade_amount=0.2))

Example - Async:
    >>> import asyncio
    >>> from filmmod import FilmProcessor, get_preset
    >>>
    >>> processor = FilmProcessor()
    >>> png = asyncio.run(processor.render_bytes(data, get_preset("disposable")))

Example - Single stages:
    >>> from filmmod import add_grain, apply_vignette, decode_image
    >>>
    >>> image = decode_image("photo.jpg")
    >>> image = apply_vignette(add_grain(image, 0.3, 0.5, seed=1), 0.4)
"""

__version__ = "0.1.0"

from filmmod.color import adjust, grade
from filmmod.config import (
    BW_FILM,
    CINEMATIC,
    CONFIG,
    DISPOSABLE,
    FILM_DREAMS,
    KPOP_GLOW,
    NATURAL,
    PARAMETER_CONFIG,
    PRESET_FILTERS,
    SOFT_AESTHETIC,
    Y2K_DIGITAL,
    AestheticStyle,
    ColorCurve,
    DateStampStyle,
    Filter,
    FilterParameters,
    FilterTag,
    OperationSpec,
    get_preset,
    parameters_from_dict,
    parameters_to_dict,
)
from filmmod.errors import (
    InvalidImageError,
    RenderCancelledError,
    RenderError,
    RenderingFailedError,
)
from filmmod.imaging import decode_image, encode_image, to_uint8
from filmmod.optics import apply_fade, apply_halation, apply_light_leak, apply_vignette
from filmmod.overlay import stamp_date
from filmmod.pipeline import STAGE_ORDER, CancellationToken, Pipeline, render_image
from filmmod.processing import FilmProcessor
from filmmod.protocols import PipelineStage
from filmmod.shared import FALLBACK_LIGHT_LEAK_COLOR, parse_hex_color, to_hex
from filmmod.texture import add_digital_noise, add_grain
from filmmod.verification import ImageVerifier

__all__ = [
    "__version__",
    # Parameter model
    "FilterParameters",
    "Filter",
    "ColorCurve",
    "DateStampStyle",
    "FilterTag",
    "AestheticStyle",
    # Presets
    "PRESET_FILTERS",
    "get_preset",
    "parameters_from_dict",
    "parameters_to_dict",
    "FILM_DREAMS",
    "KPOP_GLOW",
    "DISPOSABLE",
    "Y2K_DIGITAL",
    "SOFT_AESTHETIC",
    "CINEMATIC",
    "NATURAL",
    "BW_FILM",
    # Stages
    "adjust",
    "grade",
    "add_grain",
    "add_digital_noise",
    "apply_vignette",
    "apply_light_leak",
    "apply_fade",
    "apply_halation",
    "stamp_date",
    # Orchestration
    "Pipeline",
    "FilmProcessor",
    "CancellationToken",
    "STAGE_ORDER",
    "PipelineStage",
    "render_image",
    # Image boundary
    "decode_image",
    "encode_image",
    "to_uint8",
    # Color helpers
    "parse_hex_color",
    "to_hex",
    "FALLBACK_LIGHT_LEAK_COLOR",
    # Errors
    "RenderError",
    "InvalidImageError",
    "RenderingFailedError",
    "RenderCancelledError",
    # Configuration
    "CONFIG",
    "PARAMETER_CONFIG",
    "OperationSpec",
    # Verification
    "ImageVerifier",
]
