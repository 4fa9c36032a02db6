"""Quote stream processing.

Consumes update cycles from a feed (already-parsed QuotePairs, lists
of two feed messages, or raw JSON text) and drives one RowAssembler.

Usage:
    assembler = RowAssembler(settings.engine_config())
    processor = QuoteStreamProcessor(assembler, on_invalid="skip")
    processor.on_row(my_async_callback)
    await processor.run(feed)
"""

import logging
from typing import Any, AsyncIterable, Awaitable, Callable

import orjson

from ratio_core import RowAssembler
from ratio_core.errors import InvalidConfiguration, InvalidQuote, RatioSignalError
from ratio_core.models import QuotePair, Row, quote_pair_from_feed

logger = logging.getLogger(__name__)

AsyncRowCallback = Callable[[Row], Awaitable[None]]

_POLICIES = ("skip", "halt")


class QuoteStreamProcessor:
    """Single consumer of one logical quote stream.

    Update cycles are processed strictly in arrival order.  Invalid
    updates are either skipped (logged and counted) or halt the stream,
    depending on ``on_invalid``.
    """

    def __init__(
        self,
        assembler: RowAssembler,
        on_invalid: str = "skip",
        instrument_a: str | None = None,
        instrument_b: str | None = None,
    ):
        if on_invalid not in _POLICIES:
            raise InvalidConfiguration(
                f"on_invalid must be one of {_POLICIES}, got '{on_invalid}'"
            )
        self.assembler = assembler
        self.on_invalid = on_invalid
        self.instrument_a = instrument_a
        self.instrument_b = instrument_b

        self.processed = 0
        self.skipped = 0

        self._callbacks: list[AsyncRowCallback] = []

    def on_row(self, callback: AsyncRowCallback) -> None:
        """Register a callback for generated rows.

        Args:
            callback: Async function called with each Row
        """
        self._callbacks.append(callback)

    def _to_pair(self, message: Any) -> QuotePair:
        if isinstance(message, QuotePair):
            return message
        if isinstance(message, (str, bytes)):
            try:
                message = orjson.loads(message)
            except orjson.JSONDecodeError as e:
                raise InvalidQuote(f"update is not valid JSON: {e}") from e
        return quote_pair_from_feed(message, self.instrument_a, self.instrument_b)

    async def process(self, message: Any) -> Row | None:
        """Process one update cycle.

        Returns:
            The generated Row, or ``None`` if the update was skipped.

        Raises:
            RatioSignalError: If the update is invalid and the policy is ``halt``.
        """
        try:
            row = self.assembler.generate_row(self._to_pair(message))
        except RatioSignalError as e:
            if self.on_invalid == "halt":
                logger.error("Halting stream on invalid update: %s", e)
                raise
            self.skipped += 1
            logger.warning("Skipping invalid update (%s): %s", type(e).__name__, e)
            return None

        self.processed += 1

        for callback in self._callbacks:
            try:
                await callback(row)
            except Exception as e:
                logger.error(f"Row callback error: {e}")

        return row

    async def run(self, source: AsyncIterable[Any]) -> int:
        """Consume ``source`` until it is exhausted.

        Returns:
            Number of rows produced by this run.
        """
        produced = 0
        async for message in source:
            if await self.process(message) is not None:
                produced += 1

        logger.info(
            "Stream finished: %d rows, %d skipped (total processed %d)",
            produced,
            self.skipped,
            self.processed,
        )
        return produced
