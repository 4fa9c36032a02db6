"""Data models."""

from ratio_core.models.quote import Quote, QuotePair
from ratio_core.models.row import Bounds, Row, Signal
from ratio_core.models.config import (
    DEFAULT_THRESHOLD,
    DEFAULT_WINDOW_CAPACITY,
    EngineConfig,
)
from ratio_core.models.converters import (
    quote_from_feed,
    quote_pair_from_feed,
    row_to_dict,
)

__all__ = [
    "Quote",
    "QuotePair",
    "Bounds",
    "Row",
    "Signal",
    "DEFAULT_THRESHOLD",
    "DEFAULT_WINDOW_CAPACITY",
    "EngineConfig",
    "quote_from_feed",
    "quote_pair_from_feed",
    "row_to_dict",
]
