"""Tests for the async FilmProcessor."""

import asyncio
import io
import threading

import numpy as np
import pytest
from PIL import Image

from filmmod import CancellationToken, FilmProcessor, FilterParameters, Pipeline, get_preset
from filmmod.errors import RenderCancelledError, RenderingFailedError
from filmmod.pipeline import Stage


@pytest.fixture
def sample_pixels():
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(40, 50, 4), dtype=np.uint8)


class TestRender:
    """Test single async renders."""

    def test_matches_sync_pipeline(self, sample_pixels):
        """Test the async path returns the synchronous result."""
        preset = get_preset("film_dreams")
        out = asyncio.run(FilmProcessor().render(sample_pixels, preset, seed=3))
        np.testing.assert_array_equal(out, Pipeline().render(sample_pixels, preset, seed=3))

    def test_bounded_concurrency(self, sample_pixels):
        """Test a concurrency limit still renders every request."""

        async def main():
            processor = FilmProcessor(max_concurrency=1)
            return await asyncio.gather(
                *(processor.render(sample_pixels, FilterParameters()) for _ in range(3))
            )

        for out in asyncio.run(main()):
            np.testing.assert_array_equal(out, sample_pixels)

    def test_bounded_processor_reused_across_loops(self, sample_pixels):
        """Test one limited processor serves batches from successive event loops."""
        processor = FilmProcessor(max_concurrency=1)

        async def batch():
            return await asyncio.gather(
                *(processor.render(sample_pixels, FilterParameters()) for _ in range(3))
            )

        first = asyncio.run(batch())
        second = asyncio.run(batch())

        assert len(first) == len(second) == 3
        for out in first + second:
            np.testing.assert_array_equal(out, sample_pixels)

    def test_render_bytes_png(self, sample_pixels):
        """Test encoded input round-trips to encoded output."""
        source = io.BytesIO()
        Image.fromarray(sample_pixels).save(source, format="PNG")

        data = asyncio.run(FilmProcessor().render_bytes(source.getvalue(), FilterParameters()))
        decoded = np.asarray(Image.open(io.BytesIO(data)).convert("RGBA"))
        np.testing.assert_array_equal(decoded, sample_pixels)

    def test_render_bytes_jpeg(self, sample_pixels):
        """Test other output formats are honoured."""
        source = io.BytesIO()
        Image.fromarray(sample_pixels).save(source, format="PNG")

        data = asyncio.run(
            FilmProcessor().render_bytes(
                source.getvalue(), get_preset("cinematic"), format="JPEG", seed=1
            )
        )
        assert Image.open(io.BytesIO(data)).format == "JPEG"


class TestRenderMany:
    """Test batch rendering."""

    def test_reproducible_batch(self, sample_pixels):
        """Test a base seed reproduces the whole batch."""
        preset = get_preset("disposable")
        sources = [sample_pixels] * 3
        a = asyncio.run(FilmProcessor().render_many(sources, preset, seed=7))
        b = asyncio.run(FilmProcessor().render_many(sources, preset, seed=7))

        assert len(a) == 3
        for x, y in zip(a, b):
            np.testing.assert_array_equal(x, y)

    def test_children_seeded_from_base(self, sample_pixels):
        """Test each image uses the matching child of the base seed."""
        preset = get_preset("disposable")
        batch = asyncio.run(FilmProcessor().render_many([sample_pixels] * 2, preset, seed=7))
        children = np.random.SeedSequence(7).spawn(2)

        for out, child in zip(batch, children):
            np.testing.assert_array_equal(out, Pipeline().render(sample_pixels, preset, seed=child))

    def test_independent_grain(self, sample_pixels):
        """Test the same source gets different grain per batch item."""
        batch = asyncio.run(
            FilmProcessor().render_many([sample_pixels] * 2, get_preset("disposable"), seed=7)
        )
        assert not np.array_equal(batch[0], batch[1])

    def test_order_preserved(self, sample_pixels):
        """Test results come back in source order."""
        sources = [sample_pixels, sample_pixels[:10, :20]]
        batch = asyncio.run(FilmProcessor().render_many(sources, FilterParameters()))
        assert [out.shape for out in batch] == [(40, 50, 4), (10, 20, 4)]

    def test_failure_cancels_siblings(self, sample_pixels):
        """Test one failing render stops the rest of the batch."""
        release = threading.Event()
        calls = []

        def gate(image, params, context):
            if image.shape[0] == 1:
                raise ValueError("bad frame")
            release.wait(5)
            return image

        def after(image, params, context):
            calls.append(image.shape)
            return image

        class GatedPipeline(Pipeline):
            stages = (
                Stage("gate", gate, lambda p: True),
                Stage("after", after, lambda p: True),
            )

        bad = sample_pixels[:1]
        sources = [sample_pixels, bad, sample_pixels]

        async def main():
            processor = FilmProcessor(GatedPipeline())
            try:
                with pytest.raises(RenderingFailedError) as excinfo:
                    await processor.render_many(sources, FilterParameters())
            finally:
                release.set()
            return excinfo.value

        error = asyncio.run(main())

        assert error.stage == "gate"
        assert calls == []


class TestCancellation:
    """Test cancellation through the async boundary."""

    def test_caller_token(self, sample_pixels):
        """Test a caller-set token raises RenderCancelledError."""
        token = CancellationToken()
        token.cancel()

        with pytest.raises(RenderCancelledError):
            asyncio.run(
                FilmProcessor().render(sample_pixels, get_preset("natural"), cancel=token)
            )

    def test_task_cancel_sets_token(self, sample_pixels):
        """Test cancelling the awaiting task stops the worker at the next stage."""
        started = threading.Event()
        release = threading.Event()
        calls = []

        def slow(image, params, context):
            calls.append("slow")
            started.set()
            release.wait(5)
            return image

        def after(image, params, context):
            calls.append("after")
            return image

        class SlowPipeline(Pipeline):
            stages = (
                Stage("slow", slow, lambda p: True),
                Stage("after", after, lambda p: True),
            )

        token = CancellationToken()

        async def main():
            processor = FilmProcessor(SlowPipeline())
            task = asyncio.create_task(
                processor.render(sample_pixels, FilterParameters(), cancel=token)
            )
            await asyncio.to_thread(started.wait, 5)
            task.cancel()
            try:
                with pytest.raises(asyncio.CancelledError):
                    await task
            finally:
                release.set()

        asyncio.run(main())

        assert token.cancelled
        assert calls == ["slow"]
