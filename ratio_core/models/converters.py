"""Converters between feed messages and pipeline models.

The upstream feed publishes one message per instrument per update cycle:

    {
        "stock": "ABC",
        "top_ask": {"price": 100.0, "size": 12},
        "top_bid": {"price": 98.0, "size": 40},
        "timestamp": "2019-02-08T10:24:13.498219"
    }

and a list of two such messages per cycle. Malformed messages are
reported as ``InvalidQuote`` so callers only need one error type for
bad input.
"""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import ValidationError

from ratio_core.errors import InvalidQuote
from ratio_core.models.quote import Quote, QuotePair
from ratio_core.models.row import Row, Signal


# =============================================================================
# Feed -> Quote
# =============================================================================

def _top_price(message: dict[str, Any], side: str) -> Any:
    level = message.get(side)
    if not isinstance(level, dict) or "price" not in level:
        raise InvalidQuote(f"feed message has no {side} price: {message!r}")
    return level["price"]


def quote_from_feed(message: dict[str, Any]) -> Quote:
    """Convert one feed message to a Quote.

    Raises:
        InvalidQuote: If the message is not a dict or lacks a field.
    """
    if not isinstance(message, dict):
        raise InvalidQuote(f"feed message must be an object, got {type(message).__name__}")

    try:
        return Quote(
            symbol=str(message.get("stock", "")),
            ask_price=_top_price(message, "top_ask"),
            bid_price=_top_price(message, "top_bid"),
            timestamp=message.get("timestamp"),
        )
    except ValidationError as e:
        raise InvalidQuote(f"malformed feed message: {e}") from e


def quote_pair_from_feed(
    messages: Sequence[dict[str, Any]],
    instrument_a: str | None = None,
    instrument_b: str | None = None,
) -> QuotePair:
    """Convert one update cycle (two feed messages) to a QuotePair.

    When both instrument symbols are given, the quotes are matched by
    symbol; otherwise the feed order is used (first message is A).

    Raises:
        InvalidQuote: If there are not exactly two messages, or the
            symbols do not match the configured instruments.
    """
    if not isinstance(messages, (list, tuple)) or len(messages) != 2:
        raise InvalidQuote("an update cycle must contain exactly two quotes")

    first, second = (quote_from_feed(m) for m in messages)

    if instrument_a is None or instrument_b is None:
        return QuotePair(a=first, b=second)

    by_symbol = {q.symbol: q for q in (first, second)}
    if set(by_symbol) != {instrument_a, instrument_b}:
        raise InvalidQuote(
            f"expected quotes for {instrument_a} and {instrument_b}, "
            f"got {first.symbol!r} and {second.symbol!r}"
        )
    return QuotePair(a=by_symbol[instrument_a], b=by_symbol[instrument_b])


# =============================================================================
# Row -> JSON-ready dict
# =============================================================================

def row_to_dict(row: Row) -> dict[str, Any]:
    """Convert a Row to a JSON-ready dict.

    The timestamp becomes an ISO-8601 string and the NONE signal
    becomes ``None`` so renderers can test for absence directly.
    """
    data = row.model_dump(mode="json")
    data["signal"] = None if row.signal is Signal.NONE else row.signal.value
    return data
