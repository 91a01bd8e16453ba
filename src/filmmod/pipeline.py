"""Fixed-order film pipeline.

Composes the stages into one pass over an image:

    color_adjust -> color_curve -> fade -> halation -> vignette ->
    light_leak -> grain -> digital_noise -> overlay

The order is fixed: texture comes after every tonal and optical effect so
grain is never blurred or recolored, and the overlay is always on top.
Each stage is skipped when its driving parameter is inactive.

Example:
    >>> from filmmod import Pipeline, get_preset
    >>>
    >>> pipeline = Pipeline()
    >>> pixels = pipeline.render("photo.jpg", get_preset("film_dreams"), seed=42)
    >>> pixels.shape, pixels.dtype
    ((1080, 1440, 4), dtype('uint8'))
"""

from __future__ import annotations

import datetime as dt
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

from filmmod.color import adjust, grade
from filmmod.config import PARAMETER_CONFIG, ColorCurve, Filter, FilterParameters
from filmmod.errors import RenderCancelledError, RenderError, RenderingFailedError
from filmmod.imaging import decode_image, to_uint8
from filmmod.optics import apply_fade, apply_halation, apply_light_leak, apply_vignette
from filmmod.overlay import stamp_date
from filmmod.texture import add_digital_noise, add_grain
from filmmod.types import ImageRGBA, ImageSource

logger = logging.getLogger(__name__)

_TONAL_FIELDS = (
    "exposure",
    "contrast",
    "saturation",
    "highlights",
    "shadows",
    "temperature",
    "tint",
)


class CancellationToken:
    """Thread-safe flag a caller sets to abandon an in-flight render.

    The pipeline checks the token before every stage and before the final
    quantization; a set token raises :class:`RenderCancelledError`.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, stage: str | None = None) -> None:
        """Raise RenderCancelledError if the token has been set."""
        if self._event.is_set():
            raise RenderCancelledError(stage)


@dataclass
class RenderContext:
    """Per-render state shared by the stages of one run.

    Random generators are spawned from one SeedSequence, one child per
    stochastic stage, so grain and digital noise are independent and a
    fixed seed reproduces the render exactly.
    """

    seed: int | np.random.SeedSequence | None = None
    date: dt.date = field(default_factory=dt.date.today)
    grain_rng: np.random.Generator = field(init=False)
    noise_rng: np.random.Generator = field(init=False)

    def __post_init__(self):
        if isinstance(self.seed, np.random.SeedSequence):
            # spawn() advances the sequence; work on a copy so the caller's
            # sequence reproduces the same render every time
            sequence = np.random.SeedSequence(
                self.seed.entropy, spawn_key=self.seed.spawn_key, pool_size=self.seed.pool_size
            )
        else:
            sequence = np.random.SeedSequence(self.seed)
        grain_seq, noise_seq = sequence.spawn(2)
        self.grain_rng = np.random.default_rng(grain_seq)
        self.noise_rng = np.random.default_rng(noise_seq)


@dataclass(frozen=True)
class Stage:
    """One named pipeline stage.

    :param name: Stage identifier used in logs and errors
    :param apply: ``(image, params, context) -> image``
    :param is_active: ``params -> bool``; inactive stages are not called
    """

    name: str
    apply: Callable[[ImageRGBA, FilterParameters, RenderContext], ImageRGBA]
    is_active: Callable[[FilterParameters], bool]


def _color_adjust_active(params: FilterParameters) -> bool:
    specs = PARAMETER_CONFIG
    return any(specs.get_spec(name).is_active(getattr(params, name)) for name in _TONAL_FIELDS)


STAGES: tuple[Stage, ...] = (
    Stage(
        "color_adjust",
        lambda image, p, ctx: adjust(image, p),
        _color_adjust_active,
    ),
    Stage(
        "color_curve",
        lambda image, p, ctx: grade(image, p.color_curve),
        lambda p: p.color_curve is not ColorCurve.NEUTRAL,
    ),
    Stage(
        "fade",
        lambda image, p, ctx: apply_fade(image, p.fade_amount),
        lambda p: PARAMETER_CONFIG.fade_amount.is_active(p.fade_amount),
    ),
    Stage(
        "halation",
        lambda image, p, ctx: apply_halation(image, p.halation),
        lambda p: PARAMETER_CONFIG.halation.is_active(p.halation),
    ),
    Stage(
        "vignette",
        lambda image, p, ctx: apply_vignette(image, p.vignette),
        lambda p: PARAMETER_CONFIG.vignette.is_active(p.vignette),
    ),
    Stage(
        "light_leak",
        lambda image, p, ctx: apply_light_leak(image, p.light_leak_intensity, p.light_leak_color),
        lambda p: PARAMETER_CONFIG.light_leak_intensity.is_active(p.light_leak_intensity),
    ),
    Stage(
        "grain",
        lambda image, p, ctx: add_grain(image, p.grain_intensity, p.grain_size, rng=ctx.grain_rng),
        lambda p: PARAMETER_CONFIG.grain_intensity.is_active(p.grain_intensity),
    ),
    Stage(
        "digital_noise",
        lambda image, p, ctx: add_digital_noise(image, p.digital_noise, rng=ctx.noise_rng),
        lambda p: PARAMETER_CONFIG.digital_noise.is_active(p.digital_noise),
    ),
    Stage(
        "overlay",
        lambda image, p, ctx: stamp_date(image, p.date_stamp_style, date=ctx.date),
        lambda p: p.date_stamp_enabled,
    ),
)

STAGE_ORDER: tuple[str, ...] = tuple(stage.name for stage in STAGES)


class WorkingBuffer:
    """Scoped owner of the working buffer for one render.

    Holds a private copy of the source for the duration of the ``with``
    block and drops every reference on exit, whether the run completed,
    failed or was cancelled.
    """

    def __init__(self, source: ImageRGBA):
        self._source = source
        self.image: ImageRGBA | None = None

    def __enter__(self) -> WorkingBuffer:
        self.image = np.array(self._source, dtype=np.float32, copy=True)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            logger.debug("Releasing working buffer after %s", exc_type.__name__)
        self.image = None
        self._source = None


def resolve_parameters(filter: Filter | FilterParameters) -> FilterParameters:
    """Return the recipe of *filter* (a Filter or bare FilterParameters)."""
    if isinstance(filter, Filter):
        return filter.parameters
    if isinstance(filter, FilterParameters):
        return filter
    raise TypeError(f"Expected Filter or FilterParameters, got {type(filter).__name__}")


class Pipeline:
    """Synchronous film pipeline with a fixed stage order.

    Example:
        >>> pipeline = Pipeline()
        >>> pipeline.active_stages(FilterParameters(vignette=0.4, grain_intensity=0.2))
        ['vignette', 'grain']
    """

    stages: tuple[Stage, ...] = STAGES

    def active_stages(self, filter: Filter | FilterParameters) -> list[str]:
        """List the stages that would run for *filter*, in order."""
        params = resolve_parameters(filter)
        return [stage.name for stage in self.stages if stage.is_active(params)]

    def process(
        self,
        image: ImageRGBA,
        filter: Filter | FilterParameters,
        *,
        seed: int | np.random.SeedSequence | None = None,
        cancel: CancellationToken | None = None,
        date: dt.date | None = None,
    ) -> ImageRGBA:
        """Run every active stage over a decoded RGBA buffer.

        :param image: float32 RGBA buffer [H, W, 4]; never modified
        :param filter: Filter or FilterParameters to apply
        :param seed: Seed for grain and digital noise (None: fresh entropy)
        :param cancel: Token checked before each stage
        :param date: Date printed by the overlay (default: today)
        :returns: New float32 RGBA buffer
        :raises RenderCancelledError: If *cancel* is set before a stage
        :raises RenderingFailedError: If a stage raises unexpectedly
        """
        params = resolve_parameters(filter)
        context = RenderContext(seed=seed, date=date or dt.date.today())

        with WorkingBuffer(image) as buffer:
            for stage in self.stages:
                if cancel is not None:
                    cancel.raise_if_cancelled(stage.name)
                if not stage.is_active(params):
                    logger.debug("[%s] skipped", stage.name)
                    continue

                start = time.perf_counter()
                try:
                    buffer.image = stage.apply(buffer.image, params, context)
                except RenderError:
                    raise
                except Exception as exc:
                    raise RenderingFailedError(stage.name, str(exc)) from exc
                logger.debug(
                    "[%s] applied in %.2fms", stage.name, (time.perf_counter() - start) * 1000
                )
            result = buffer.image
        return result

    def render(
        self,
        source: ImageSource,
        filter: Filter | FilterParameters,
        *,
        seed: int | np.random.SeedSequence | None = None,
        cancel: CancellationToken | None = None,
        date: dt.date | None = None,
    ) -> np.ndarray:
        """Decode *source*, apply *filter* and return 8-bit RGBA pixels.

        :param source: Anything :func:`decode_image` accepts
        :param filter: Filter or FilterParameters to apply
        :param seed: Seed for grain and digital noise (None: fresh entropy)
        :param cancel: Token checked before each stage and before quantizing
        :param date: Date printed by the overlay (default: today)
        :returns: uint8 array [H, W, 4], same size as the source
        :raises InvalidImageError: If *source* cannot be decoded
        :raises RenderCancelledError: If *cancel* is set during the run
        :raises RenderingFailedError: If a stage fails unexpectedly
        """
        start = time.perf_counter()
        pixels = decode_image(source)
        result = self.process(pixels, filter, seed=seed, cancel=cancel, date=date)
        if cancel is not None:
            cancel.raise_if_cancelled()
        output = to_uint8(result)

        name = filter.name if isinstance(filter, Filter) else "custom"
        logger.info(
            "Rendered %dx%d with %s in %.1fms",
            output.shape[1],
            output.shape[0],
            name,
            (time.perf_counter() - start) * 1000,
        )
        return output

    def __call__(
        self, source: ImageSource, filter: Filter | FilterParameters, **kwargs
    ) -> np.ndarray:
        """Alias for :meth:`render`."""
        return self.render(source, filter, **kwargs)


def render_image(
    source: ImageSource, filter: Filter | FilterParameters, **kwargs
) -> np.ndarray:
    """Render *source* with a default :class:`Pipeline`.

    See :meth:`Pipeline.render` for the keyword arguments.
    """
    return Pipeline().render(source, filter, **kwargs)
