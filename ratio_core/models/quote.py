"""Quote data models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator


class Quote(BaseModel):
    """Top-of-book quote for one instrument.

    Prices are not range-checked here; ``mid_price`` rejects negative
    and non-finite values when the quote is normalized.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    ask_price: float
    bid_price: float
    timestamp: datetime

    @field_validator("ask_price", "bid_price", mode="before")
    @classmethod
    def _reject_bool(cls, value):
        # bool is an int subclass and would otherwise coerce to 0.0/1.0
        if isinstance(value, bool):
            raise ValueError("price must be a number, not a boolean")
        return value

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Feeds often send naive timestamps; keep them comparable with aware ones
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class QuotePair(BaseModel):
    """Quotes for instrument A and instrument B from the same update cycle."""

    model_config = ConfigDict(frozen=True)

    a: Quote
    b: Quote

    @property
    def latest_timestamp(self) -> datetime:
        """Get the later of the two quote timestamps."""
        return self.a.timestamp if self.a.timestamp > self.b.timestamp else self.b.timestamp
