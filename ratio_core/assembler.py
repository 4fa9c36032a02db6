"""Row assembly: runs the full pipeline for one quote pair.

This module is pure business logic with no I/O dependencies.
Consumers (renderers, alerting) are attached as callbacks, so the same
assembler serves the streaming app, the CLI and the tests.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from ratio_core.classifier import classify_signal, trigger_alert
from ratio_core.errors import InvalidConfiguration
from ratio_core.models import EngineConfig, QuotePair, Row, Signal
from ratio_core.normalizer import mid_price
from ratio_core.ratio import compute_ratio
from ratio_core.tracker import MovingAverageTracker

logger = logging.getLogger(__name__)

# Type alias for row callbacks
RowCallback = Callable[[Row], None]


class RowAssembler:
    """Turns quote pairs into Rows for one logical stream.

    The assembler owns the moving-average window for its stream.  Each
    call to ``generate_row`` validates the pair first and only then
    pushes the new ratio, so a rejected pair never touches the window.
    Concurrent callers are serialized by an internal lock.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        tracker: MovingAverageTracker | None = None,
    ):
        """
        Args:
            config: Window capacity and threshold (defaults if omitted).
            tracker: Pre-built (e.g. warmed-up) tracker.  Its capacity
                must match ``config.window_capacity``.
        """
        self.config = config or EngineConfig()
        if tracker is None:
            tracker = MovingAverageTracker(self.config.window_capacity)
        elif tracker.capacity != self.config.window_capacity:
            raise InvalidConfiguration(
                f"tracker capacity {tracker.capacity} does not match "
                f"window_capacity {self.config.window_capacity}"
            )
        self.tracker = tracker
        self.bounds = self.config.bounds()

        self._lock = threading.Lock()
        self._callbacks: list[RowCallback] = []
        # Last timestamp seen per leg ("a"/"b"), for regression warnings
        self._last_seen: dict[str, datetime] = {}

    def on_row(self, callback: RowCallback) -> None:
        """Register a callback for generated rows."""
        self._callbacks.append(callback)

    def off_row(self, callback: RowCallback) -> None:
        """Unregister a callback for generated rows."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def generate_row(self, pair: QuotePair) -> Row:
        """Process one quote pair and return its Row.

        Raises:
            InvalidQuote: If either quote has a negative or non-finite price.
            DivisionByZero: If instrument B's mid-price is zero.
        """
        mid_a = mid_price(pair.a)
        mid_b = mid_price(pair.b)
        ratio = compute_ratio(mid_a, mid_b)

        with self._lock:
            self._check_timestamps(pair)
            moving_average = self.tracker.push(ratio)

        signal = classify_signal(ratio, moving_average, self.bounds)
        row = Row(
            mid_a=mid_a,
            mid_b=mid_b,
            ratio=ratio,
            timestamp=pair.latest_timestamp,
            upper_bound=self.bounds.upper,
            lower_bound=self.bounds.lower,
            trigger_alert=trigger_alert(ratio, self.bounds),
            moving_average=moving_average,
            signal=signal,
        )

        self._notify(row)
        return row

    def _check_timestamps(self, pair: QuotePair) -> None:
        """Warn when an instrument's timestamp goes backwards."""
        for leg, quote in (("a", pair.a), ("b", pair.b)):
            previous = self._last_seen.get(leg)
            if previous is not None and quote.timestamp < previous:
                logger.warning(
                    "Timestamp regression on leg %s (%s): %s < %s",
                    leg,
                    quote.symbol or "-",
                    quote.timestamp.isoformat(),
                    previous.isoformat(),
                )
            else:
                self._last_seen[leg] = quote.timestamp

    def _notify(self, row: Row) -> None:
        """Log the signal and fan the row out to callbacks.

        Callback failures are logged and never reach the caller.
        """
        logger.info(
            "Generated signal: %s (ratio=%.6f, avg=%.6f)",
            row.signal.value,
            row.ratio,
            row.moving_average,
        )
        if row.signal is not Signal.NONE:
            logger.debug(
                "Bound breached: ratio=%.6f bounds=[%.4f, %.4f]",
                row.ratio,
                row.lower_bound,
                row.upper_bound,
            )

        for callback in list(self._callbacks):
            try:
                callback(row)
            except Exception:
                logger.exception("Row callback error")
