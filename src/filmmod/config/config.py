"""Unified filmmod configuration.

This module provides a top-level configuration dataclass that contains
the parameter specifications as a sub-attribute.
"""

from __future__ import annotations

from dataclasses import dataclass

from filmmod.config.parameters import ParameterConfig


@dataclass(frozen=True)
class FilmmodConfig:
    """Top-level configuration.

    Provides hierarchical access to all parameter specifications:
        CONFIG.parameters.vignette
        CONFIG.parameters.exposure.neutral

    Attributes:
        parameters: Filter parameter specifications
    """

    parameters: ParameterConfig = ParameterConfig()

    def get_all_specs(self) -> dict[str, dict[str, object]]:
        """Get all specs organized by section.

        :return: Nested dictionary of all specifications
        """
        return {"parameters": self.parameters.get_all_specs()}


# Main singleton instance
CONFIG = FilmmodConfig()

PARAMETER_CONFIG = CONFIG.parameters
