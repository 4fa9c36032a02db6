"""Moving average tracker for the A/B price ratio.

Maintains a fixed-capacity FIFO window of the most recent ratios and
the average over that window.  One tracker belongs to exactly one
logical quote stream; sharing it between streams would interleave
their pushes and corrupt both averages.

The average is recomputed over the window on every push.  Windows are
small (default 10 ratios), so this stays cheap and avoids the drift a
running sum accumulates over a long-lived stream.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Iterable

import numpy as np

from ratio_core.errors import InvalidConfiguration
from ratio_core.models.config import DEFAULT_WINDOW_CAPACITY

logger = logging.getLogger(__name__)


class MovingAverageTracker:
    """Bounded FIFO window of ratios and their average.

    Parameters
    ----------
    capacity : int
        Maximum number of ratios kept.  When a push makes the window
        exceed this size, the single oldest ratio is evicted.
    """

    def __init__(self, capacity: int = DEFAULT_WINDOW_CAPACITY):
        if capacity < 1:
            raise InvalidConfiguration(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._window: deque[float] = deque(maxlen=capacity)

    @staticmethod
    def _is_valid(value: float) -> bool:
        """Check that a value is a finite number."""
        return isinstance(value, (int, float)) and math.isfinite(value)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def values(self) -> tuple[float, ...]:
        """Snapshot of the window, oldest first."""
        return tuple(self._window)

    @property
    def is_full(self) -> bool:
        """Return ``True`` once the window holds ``capacity`` ratios."""
        return len(self._window) == self._capacity

    @property
    def average(self) -> float | None:
        """Average of the window, or ``None`` before the first push."""
        if not self._window:
            return None
        return float(np.mean(np.asarray(self._window, dtype=np.float64)))

    def push(self, ratio: float) -> float:
        """Append a ratio, evicting the oldest if over capacity.

        Returns the average over the updated window.

        Raises:
            ValueError: If ratio is not a finite number.  The window is
                left unchanged.
        """
        if not self._is_valid(ratio):
            raise ValueError(f"ratio must be a finite number, got {ratio!r}")
        self._window.append(float(ratio))
        return self.average

    def bulk_load(self, ratios: Iterable[float]) -> None:
        """Load a batch of historical ratios (for warmup at startup).

        Non-finite values are silently filtered out.  If the total
        exceeds ``capacity``, only the most recent values are kept.
        """
        ratios = list(ratios)
        clean = [float(r) for r in ratios if self._is_valid(r)]
        self._window.extend(clean)
        logger.info(
            "Ratio warmup: loaded %d values (filtered %d invalid, window %d/%d)",
            len(clean),
            len(ratios) - len(clean),
            len(self._window),
            self._capacity,
        )

    def __len__(self) -> int:
        return len(self._window)
