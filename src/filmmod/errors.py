"""Exceptions surfaced by the rendering boundary.

Stages themselves are total functions over valid buffers; only decoding,
unexpected stage failures and caller cancellation reach the caller.
"""

from __future__ import annotations


class RenderError(Exception):
    """Base class for every error raised by a render."""


class InvalidImageError(RenderError):
    """Source could not be decoded into an RGBA pixel buffer."""


class RenderingFailedError(RenderError):
    """A stage failed to produce output.

    :param stage: Name of the stage that raised
    """

    def __init__(self, stage: str, message: str = ""):
        self.stage = stage
        detail = f": {message}" if message else ""
        super().__init__(f"Stage '{stage}' failed{detail}")


class RenderCancelledError(RenderError):
    """The caller abandoned the render before it completed."""

    def __init__(self, stage: str | None = None):
        self.stage = stage
        if stage is None:
            super().__init__("Render cancelled")
        else:
            super().__init__(f"Render cancelled before stage '{stage}'")
