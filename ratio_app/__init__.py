"""Stream application around the ratio signal core."""

from ratio_app.config import Settings, load_settings
from ratio_app.stream import AsyncRowCallback, QuoteStreamProcessor

__all__ = [
    "Settings",
    "load_settings",
    "AsyncRowCallback",
    "QuoteStreamProcessor",
]
