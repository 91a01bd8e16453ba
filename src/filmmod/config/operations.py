"""Operation specifications for filter parameters.

Each numeric field of FilterParameters has one OperationSpec: its
clamping range, the identity value and the rule that decides whether the
stage it drives runs at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Literal


@dataclass(frozen=True)
class OperationSpec:
    """Range, identity value and stage gate of one numeric parameter.

    Attributes:
        name: Parameter name (e.g., "vignette", "temperature")
        min_value: Lower clamp bound
        max_value: Upper clamp bound
        default: Value used by FilterParameters.default()
        neutral: Identity value (rendering with it changes nothing)
        gate: How the driving stage decides to run
            ("threshold": run when value > skip_threshold,
            "epsilon": run when |value - neutral| >= skip_threshold,
            "none": the parameter drives no stage)
        skip_threshold: Threshold used by the gate
        description: One-line summary shown in tooling
    """

    name: str
    min_value: float
    max_value: float
    default: float
    neutral: float
    gate: Literal["threshold", "epsilon", "none"]
    skip_threshold: float = 0.0
    description: str = ""

    def validate(self, value: float) -> float:
        """Clamp *value* into the documented range.

        :param value: Raw parameter value
        :returns: float in [min_value, max_value]; NaN maps to neutral
        :raises ValueError: For non-numeric input (bools included)
        """
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValueError(f"{self.name}: expected number, got {type(value).__name__}")

        # NaN compares false everywhere; treat it as neutral
        if value != value:
            return self.neutral
        return max(self.min_value, min(self.max_value, float(value)))

    def is_neutral(self, value: float, tolerance: float = 1e-6) -> bool:
        """Check whether the clamped *value* equals neutral within *tolerance*.

        :param value: Raw parameter value
        :param tolerance: Absolute comparison tolerance
        :returns: True when rendering with *value* is the identity
        """
        return abs(self.validate(value) - self.neutral) < tolerance

    def is_active(self, value: float) -> bool:
        """Check whether the stage driven by this parameter should run.

        The value is clamped first, so out-of-range inputs gate like their
        boundary.

        :param value: Raw parameter value
        :returns: True if the stage must be applied
        """
        clamped = self.validate(value)
        if self.gate == "threshold":
            return clamped > self.skip_threshold
        if self.gate == "epsilon":
            return abs(clamped - self.neutral) >= self.skip_threshold
        return False

    def __repr__(self) -> str:
        return (
            f"OperationSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}], "
            f"default={self.default}, neutral={self.neutral}, "
            f"{self.gate}={self.skip_threshold})"
        )
