"""Core pair-ratio signal logic.

This package contains pure business logic with no I/O dependencies
(no feed connection, no rendering, no storage). Quote pairs go in,
Rows come out:

    mid_price -> compute_ratio -> MovingAverageTracker -> classify_signal -> Row
"""

from ratio_core.assembler import RowAssembler, RowCallback
from ratio_core.classifier import classify_signal, trigger_alert
from ratio_core.errors import (
    DivisionByZero,
    InvalidConfiguration,
    InvalidQuote,
    RatioSignalError,
)
from ratio_core.models import Bounds, EngineConfig, Quote, QuotePair, Row, Signal
from ratio_core.normalizer import mid_price
from ratio_core.ratio import compute_ratio
from ratio_core.tracker import MovingAverageTracker

__all__ = [
    "RowAssembler",
    "RowCallback",
    "classify_signal",
    "trigger_alert",
    "DivisionByZero",
    "InvalidConfiguration",
    "InvalidQuote",
    "RatioSignalError",
    "Bounds",
    "EngineConfig",
    "Quote",
    "QuotePair",
    "Row",
    "Signal",
    "mid_price",
    "compute_ratio",
    "MovingAverageTracker",
]
