"""Ratio of the two instruments' mid-prices."""

import math

from ratio_core.errors import DivisionByZero


def compute_ratio(mid_a: float, mid_b: float) -> float:
    """Return mid_a / mid_b.

    Raises:
        DivisionByZero: If mid_b is zero, an input is non-finite, or the
            quotient overflows. Infinity and NaN never leave this function.
    """
    if not math.isfinite(mid_a) or not math.isfinite(mid_b) or mid_b == 0:
        raise DivisionByZero(f"cannot compute ratio {mid_a} / {mid_b}")

    ratio = mid_a / mid_b
    if not math.isfinite(ratio):
        raise DivisionByZero(f"ratio {mid_a} / {mid_b} is not finite")
    return ratio
