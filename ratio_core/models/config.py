"""Engine configuration model."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, field_validator

from ratio_core.errors import InvalidConfiguration
from ratio_core.models.row import Bounds

DEFAULT_WINDOW_CAPACITY = 10
DEFAULT_THRESHOLD = 0.05  # 5% band around a ratio of 1.0


class EngineConfig(BaseModel):
    """Parameters fixed for the lifetime of one engine instance."""

    model_config = ConfigDict(frozen=True)

    # Number of ratios kept for the moving average
    window_capacity: int = DEFAULT_WINDOW_CAPACITY

    # Fractional deviation from 1.0 for the upper/lower bounds
    threshold: float = DEFAULT_THRESHOLD

    @field_validator("window_capacity")
    @classmethod
    def _check_capacity(cls, value: int) -> int:
        if value < 1:
            raise InvalidConfiguration(f"window_capacity must be >= 1, got {value}")
        return value

    @field_validator("threshold")
    @classmethod
    def _check_threshold(cls, value: float) -> float:
        if not math.isfinite(value) or not 0 < value < 1:
            raise InvalidConfiguration(
                f"threshold must be in the open interval (0, 1), got {value}"
            )
        return value

    def bounds(self) -> Bounds:
        """Get the alert bounds for this threshold."""
        return Bounds.from_threshold(self.threshold)
