"""Signal classification for the A/B ratio.

Bounds are exclusive: a ratio exactly on a bound is not a breach.
"""

from ratio_core.models.row import Bounds, Signal


def classify_signal(ratio: float, average: float, bounds: Bounds) -> Signal:
    """Classify a ratio against the alert bounds and its moving average.

    Rules are evaluated in order, first match wins:

    1. Above upper bound and above average -> SELL
    2. Below lower bound and below average -> BUY
    3. Outside the bounds otherwise -> HOLD
    4. Inside the bounds -> NONE
    """
    if ratio > bounds.upper and ratio > average:
        return Signal.SELL
    if ratio < bounds.lower and ratio < average:
        return Signal.BUY
    if bounds.is_breached(ratio):
        return Signal.HOLD
    return Signal.NONE


def trigger_alert(ratio: float, bounds: Bounds) -> float | None:
    """Return the ratio if it breaches the bounds, else ``None``.

    Depends only on the breach condition, not on the classified signal.
    """
    return ratio if bounds.is_breached(ratio) else None
