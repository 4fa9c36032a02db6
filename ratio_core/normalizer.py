"""Mid-price extraction for a single quote."""

import math

from ratio_core.errors import InvalidQuote
from ratio_core.models.quote import Quote


def _is_valid_price(value: float) -> bool:
    """Check that a price is a finite non-negative number."""
    return math.isfinite(value) and value >= 0


def mid_price(quote: Quote) -> float:
    """Return the mid-price (ask + bid) / 2 of a quote.

    Raises:
        InvalidQuote: If the ask or bid is negative or non-finite.
    """
    if not _is_valid_price(quote.ask_price) or not _is_valid_price(quote.bid_price):
        raise InvalidQuote(
            f"{quote.symbol or 'quote'} has invalid prices: "
            f"ask={quote.ask_price} bid={quote.bid_price}"
        )
    # Halve before adding so two finite prices near float max stay finite
    return quote.ask_price / 2 + quote.bid_price / 2
