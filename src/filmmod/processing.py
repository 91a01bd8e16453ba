"""
Asynchronous, cancellable rendering interface.

Wraps the synchronous :class:`~filmmod.pipeline.Pipeline` for callers that
evaluate many filters concurrently (live preview, batch export). Each
render runs in a worker thread; the Numba kernels release the GIL, so
concurrent renders overlap.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from collections.abc import Sequence

import numpy as np

from filmmod.config import Filter, FilterParameters
from filmmod.imaging import encode_image
from filmmod.pipeline import CancellationToken, Pipeline
from filmmod.types import ImageSource

logger = logging.getLogger(__name__)


class FilmProcessor:
    """Async boundary around one :class:`Pipeline`.

    Cancelling the awaiting task sets the render's CancellationToken, so
    the worker thread stops at the next stage boundary and no partial
    result is ever returned.

    Example:
        >>> import asyncio
        >>> from filmmod import FilmProcessor, get_preset
        >>>
        >>> processor = FilmProcessor()
        >>> pixels = asyncio.run(processor.render("photo.jpg", get_preset("natural"), seed=1))
        >>>
        >>> # Several images at once, reproducible from one base seed
        >>> batch = asyncio.run(processor.render_many(paths, get_preset("disposable"), seed=7))
    """

    def __init__(self, pipeline: Pipeline | None = None, max_concurrency: int | None = None):
        """Initialize the processor.

        :param pipeline: Pipeline to run (default: a new Pipeline)
        :param max_concurrency: Upper bound on renders running at once
            (default: unbounded, limited by the thread pool)
        """
        self.pipeline = pipeline or Pipeline()
        self.max_concurrency = max_concurrency
        self._limit: asyncio.Semaphore | None = None
        self._limit_loop: asyncio.AbstractEventLoop | None = None

    def _limiter(self) -> asyncio.Semaphore | None:
        """Return the concurrency semaphore bound to the running loop.

        Semaphores belong to one event loop, so a processor reused across
        ``asyncio.run`` calls gets a fresh one per loop.
        """
        if not self.max_concurrency:
            return None
        loop = asyncio.get_running_loop()
        if self._limit is None or self._limit_loop is not loop:
            self._limit = asyncio.Semaphore(self.max_concurrency)
            self._limit_loop = loop
        return self._limit

    async def render(
        self,
        source: ImageSource,
        filter: Filter | FilterParameters,
        *,
        seed: int | np.random.SeedSequence | None = None,
        cancel: CancellationToken | None = None,
        date: dt.date | None = None,
    ) -> np.ndarray:
        """Render *source* in a worker thread.

        :param source: Anything :func:`~filmmod.imaging.decode_image` accepts
        :param filter: Filter or FilterParameters to apply
        :param seed: Seed for grain and digital noise
        :param cancel: Optional caller-held token; one is created if omitted
        :param date: Date printed by the overlay
        :returns: uint8 RGBA array [H, W, 4]
        :raises RenderCancelledError: If *cancel* is set by the caller
        :raises asyncio.CancelledError: If the awaiting task is cancelled
        """
        token = cancel or CancellationToken()
        limit = self._limiter()
        if limit is None:
            return await self._run(source, filter, seed, token, date)
        async with limit:
            return await self._run(source, filter, seed, token, date)

    async def _run(self, source, filter, seed, token: CancellationToken, date) -> np.ndarray:
        try:
            return await asyncio.to_thread(
                self.pipeline.render, source, filter, seed=seed, cancel=token, date=date
            )
        except asyncio.CancelledError:
            token.cancel()
            logger.debug("Render task cancelled, stopping worker at next stage")
            raise

    async def render_many(
        self,
        sources: Sequence[ImageSource],
        filter: Filter | FilterParameters,
        *,
        seed: int | None = None,
        date: dt.date | None = None,
    ) -> list[np.ndarray]:
        """Render several sources concurrently with the same filter.

        Each render gets its own child seed spawned from *seed*, so the
        batch is reproducible while the images get independent grain. If
        one render fails the others are cancelled at their next stage
        boundary and the first error is raised.

        :param sources: Images to render
        :param filter: Filter or FilterParameters to apply
        :param seed: Base seed (None: fresh entropy per image)
        :param date: Date printed by the overlay
        :returns: Rendered uint8 arrays in the order of *sources*
        """
        if seed is None:
            seeds = [None] * len(sources)
        else:
            seeds = np.random.SeedSequence(seed).spawn(len(sources))

        tokens = [CancellationToken() for _ in sources]
        tasks = [
            asyncio.create_task(self.render(source, filter, seed=child, cancel=token, date=date))
            for source, child, token in zip(sources, seeds, tokens)
        ]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            # One render failed or the batch was cancelled: stop the siblings
            for token, task in zip(tokens, tasks):
                token.cancel()
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        logger.info("Rendered batch of %d images", len(results))
        return list(results)

    async def render_bytes(
        self,
        data: bytes,
        filter: Filter | FilterParameters,
        *,
        format: str = "PNG",
        seed: int | np.random.SeedSequence | None = None,
        cancel: CancellationToken | None = None,
        date: dt.date | None = None,
    ) -> bytes:
        """Decode, render and re-encode an image file.

        :param data: Encoded source image
        :param filter: Filter or FilterParameters to apply
        :param format: Output format name understood by Pillow
        :returns: Encoded rendered image
        """
        pixels = await self.render(data, filter, seed=seed, cancel=cancel, date=date)
        if cancel is not None:
            cancel.raise_if_cancelled("encode")
        return await asyncio.to_thread(encode_image, pixels, format)
