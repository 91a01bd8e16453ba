"""
Protocol definitions for filmmod pipeline interfaces.

Defines the interface every pipeline stage satisfies, so tooling can
type-check against it without importing the concrete Stage class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from filmmod.config import FilterParameters
    from filmmod.pipeline import RenderContext
    from filmmod.types import ImageRGBA


@runtime_checkable
class PipelineStage(Protocol):
    """
    Protocol for one stage of the film pipeline.

    Stages are pure: ``apply`` returns a new buffer (or its input
    unchanged) and never writes into the buffer it receives.
    """

    name: str

    def apply(
        self, image: ImageRGBA, params: FilterParameters, context: RenderContext
    ) -> ImageRGBA:
        """
        Apply the stage to a working buffer.

        :param image: RGBA buffer [H, W, 4] in [0, 1]
        :param params: Recipe being rendered
        :param context: Per-render seed and date
        :returns: Processed buffer
        """
        ...

    def is_active(self, params: FilterParameters) -> bool:
        """Check if the stage has any effect for *params*."""
        ...

