"""Filter value dataclasses.

This module provides the immutable value types describing one filter:
the FilterParameters recipe consumed by the pipeline and the Filter that
wraps it with catalog metadata. Neither is ever mutated in place; edits
produce copies.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum

from filmmod.config.config import PARAMETER_CONFIG


class ColorCurve(str, Enum):
    """Named per-channel grading presets."""

    NEUTRAL = "neutral"
    WARM_VINTAGE = "warmVintage"
    COOL_BLUE = "coolBlue"
    FADED_PINK = "fadedPink"
    GREEN_TINT = "greenTint"
    SEPIA = "sepia"
    BLACK_AND_WHITE = "blackAndWhite"
    VIRAL_ORANGE = "viralOrange"
    SOFT_PEACH = "softPeach"


class DateStampStyle(str, Enum):
    """Look of the rendered date stamp."""

    VINTAGE = "vintage"
    COMPACT = "compact"
    POLAROID = "polaroid"
    MODERN = "modern"
    CUSTOM = "custom"


class FilterTag(str, Enum):
    """Catalog tags attached to a filter."""

    TRENDING = "trending"
    POPULAR = "popular"
    NEW = "new"
    FREE = "free"
    PREMIUM = "premium"
    FILM = "film"
    DIGITAL = "digital"
    VINTAGE = "vintage"
    MODERN = "modern"
    SOFT = "soft"
    VIBRANT = "vibrant"
    DARK = "dark"
    LIGHT = "light"
    KPOP = "kpop"
    AESTHETIC = "aesthetic"
    Y2K = "y2k"
    CINEMATIC = "cinematic"


class AestheticStyle(str, Enum):
    """Camera family a filter emulates."""

    FILM_VINTAGE = "film_vintage"
    FILM_35MM = "film_35mm"
    INSTANT_POLAROID = "instant_polaroid"
    COMPACT_DIGITAL = "compact_digital"
    DISPOSABLE_CAMERA = "disposable_camera"
    CINEMATIC = "cinematic"
    DREAMY = "dreamy"
    VIRAL_KPOP = "viral_kpop"
    SOFT_AESTHETIC = "soft_aesthetic"
    Y2K = "y2k"

    @property
    def display_name(self) -> str:
        return _AESTHETIC_DISPLAY_NAMES[self]


_AESTHETIC_DISPLAY_NAMES = {
    AestheticStyle.FILM_VINTAGE: "Film Vintage",
    AestheticStyle.FILM_35MM: "35mm Film",
    AestheticStyle.INSTANT_POLAROID: "Instant Film",
    AestheticStyle.COMPACT_DIGITAL: "Digital Compact",
    AestheticStyle.DISPOSABLE_CAMERA: "Disposable",
    AestheticStyle.CINEMATIC: "Cinematic",
    AestheticStyle.DREAMY: "Dreamy",
    AestheticStyle.VIRAL_KPOP: "K-Pop Style",
    AestheticStyle.SOFT_AESTHETIC: "Soft Aesthetic",
    AestheticStyle.Y2K: "Y2K Digital",
}


@dataclass(frozen=True)
class FilterParameters:
    """Visual recipe of one filter.

    Field defaults are the neutral values: rendering with
    ``FilterParameters()`` returns the source image unchanged. Numeric
    fields are stored as given; stages clamp them at use-time.

    Example:
        >>> params = FilterParameters(grain_intensity=0.3, vignette=0.2)
        >>> warmer = params.with_changes(temperature=0.15)
        >>> params.temperature, warmer.temperature
        (0.0, 0.15)
    """

    # Film grain & texture
    grain_intensity: float = 0.0  # 0-1
    grain_size: float = 0.0  # 0-1

    # Tone
    temperature: float = 0.0  # -1 (cool) to 1 (warm)
    tint: float = 0.0  # -1 (green) to 1 (magenta)
    saturation: float = 1.0  # 0-2
    contrast: float = 1.0  # 0-2
    exposure: float = 0.0  # EV, -2 to 2
    highlights: float = 0.0  # -1 to 1
    shadows: float = 0.0  # -1 to 1

    # Optical
    vignette: float = 0.0  # 0-1
    light_leak_intensity: float = 0.0  # 0-1
    light_leak_color: str = "#FFFFFF"
    fade_amount: float = 0.0  # 0-1
    halation: float = 0.0  # 0-1

    # Compact digital camera
    digital_noise: float = 0.0  # 0-1
    sharpness: float = 1.0  # 0-2

    # Overlay
    date_stamp_enabled: bool = False
    date_stamp_style: DateStampStyle = DateStampStyle.VINTAGE

    # Grading
    color_curve: ColorCurve = ColorCurve.NEUTRAL

    def __post_init__(self) -> None:
        # Accept enum values given as strings ("warmVintage")
        object.__setattr__(self, "color_curve", ColorCurve(self.color_curve))
        object.__setattr__(self, "date_stamp_style", DateStampStyle(self.date_stamp_style))
        object.__setattr__(self, "date_stamp_enabled", bool(self.date_stamp_enabled))

    @classmethod
    def neutral(cls) -> FilterParameters:
        """Return the identity recipe."""
        return cls()

    @classmethod
    def default(cls) -> FilterParameters:
        """Return the starter recipe used when creating a new filter."""
        specs = PARAMETER_CONFIG.get_all_specs()
        return cls(
            **{name: spec.default for name, spec in specs.items()},
            light_leak_color="#FFAA00",
            date_stamp_enabled=False,
            date_stamp_style=DateStampStyle.VINTAGE,
            color_curve=ColorCurve.NEUTRAL,
        )

    def with_changes(self, **changes) -> FilterParameters:
        """Return a copy with *changes* applied.

        :raises TypeError: If a field name is unknown
        """
        return replace(self, **changes)

    def clamp(self) -> FilterParameters:
        """Clamp all numeric values to their documented ranges.

        :returns: New FilterParameters with clamped values
        """
        specs = PARAMETER_CONFIG.get_all_specs()
        return replace(
            self, **{name: spec.validate(getattr(self, name)) for name, spec in specs.items()}
        )

    def is_neutral(self) -> bool:
        """Check if rendering with these parameters is the identity.

        ``grain_size`` and ``sharpness`` drive no stage on their own and are
        ignored.

        :returns: True if applying these values would have no effect
        """
        specs = PARAMETER_CONFIG.get_all_specs()
        return (
            all(
                spec.is_neutral(getattr(self, name))
                for name, spec in specs.items()
                if spec.gate != "none"
            )
            and self.color_curve is ColorCurve.NEUTRAL
            and not self.date_stamp_enabled
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Filter:
    """A catalog entry: identity, display metadata and one recipe.

    Metadata is informational; the pipeline only reads ``parameters``.
    """

    name: str
    parameters: FilterParameters = field(default_factory=FilterParameters)
    aesthetic_style: AestheticStyle = AestheticStyle.FILM_35MM
    description: str = ""
    thumbnail_name: str = ""
    creator_id: str | None = None
    creator_name: str | None = None
    price: float = 0.0
    is_premium: bool = False
    is_user_generated: bool = False
    downloads: int = 0
    rating: float = 5.0
    tags: tuple[FilterTag, ...] = ()
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    date_created: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "aesthetic_style", AestheticStyle(self.aesthetic_style))
        object.__setattr__(self, "tags", tuple(FilterTag(tag) for tag in self.tags))

    @property
    def is_free(self) -> bool:
        return self.price == 0 and not self.is_premium

    def with_parameters(self, parameters: FilterParameters) -> Filter:
        """Return a derived filter with the same metadata and new *parameters*.

        Used for live-preview adjustments: identity (``id``) is preserved.
        """
        return replace(self, parameters=parameters)


PARAMETER_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(FilterParameters))
