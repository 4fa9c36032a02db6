"""Signal, bounds and output row models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Signal(str, Enum):
    """Trading signal for the A/B ratio."""

    BUY = "BUY"    # A cheap relative to B
    SELL = "SELL"  # A expensive relative to B
    HOLD = "HOLD"  # Breach against the trailing average
    NONE = "NONE"  # Ratio inside the bounds


class Bounds(BaseModel):
    """Symmetric alert band around a ratio of 1.0."""

    model_config = ConfigDict(frozen=True)

    upper: float
    lower: float

    @classmethod
    def from_threshold(cls, threshold: float) -> "Bounds":
        """Build bounds at 1 +/- threshold."""
        return cls(upper=1 + threshold, lower=1 - threshold)

    def is_breached(self, ratio: float) -> bool:
        """Check if ratio lies strictly outside the band."""
        return ratio > self.upper or ratio < self.lower


class Row(BaseModel):
    """One processed quote pair, ready for rendering."""

    model_config = ConfigDict(frozen=True)

    mid_a: float
    mid_b: float
    ratio: float
    timestamp: datetime
    upper_bound: float
    lower_bound: float
    trigger_alert: float | None = None  # Ratio when a bound is breached
    moving_average: float
    signal: Signal = Signal.NONE
