"""CLI entry point: replay a file of quote updates through the engine.

Each input line is one update cycle: a JSON list of two feed messages.
Each output line is the resulting Row as JSON.

Usage:
    python -m ratio_app --input quotes.jsonl
    python -m ratio_app --input quotes.jsonl --window 20 --threshold 0.03
    cat quotes.jsonl | python -m ratio_app --on-invalid halt
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import AsyncIterator, TextIO

import orjson
from pydantic import ValidationError

from ratio_app.config import load_settings
from ratio_app.stream import QuoteStreamProcessor
from ratio_core import RowAssembler
from ratio_core.errors import InvalidConfiguration, RatioSignalError
from ratio_core.models import Row, row_to_dict

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate pair-ratio signals from quote updates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ratio_app --input quotes.jsonl
  python -m ratio_app --input quotes.jsonl --window 20 --threshold 0.03
  python -m ratio_app --config ratio_signal.yaml --on-invalid halt < quotes.jsonl
        """,
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="JSON-lines file of update cycles (default: stdin)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: ratio_signal.yaml if present)",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=None,
        help="Moving average window capacity (overrides config)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Bound threshold, e.g. 0.05 for +/-5%% (overrides config)",
    )
    parser.add_argument(
        "--on-invalid",
        choices=["skip", "halt"],
        default=None,
        help="Skip malformed updates or stop at the first one (overrides config)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


async def _read_lines(stream: TextIO) -> AsyncIterator[str]:
    # Blocking reads (stdin, files) run in a worker thread
    while True:
        line = await asyncio.to_thread(stream.readline)
        if not line:
            return
        line = line.strip()
        if line:
            yield line


async def run(args: argparse.Namespace, out: TextIO) -> int:
    try:
        settings = load_settings(args.config)
    except (InvalidConfiguration, ValidationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    overrides = {
        "window_capacity": args.window,
        "threshold": args.threshold,
        "on_invalid": args.on_invalid,
    }
    settings = settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    if not args.verbose:
        logging.getLogger().setLevel(settings.log_level)

    try:
        assembler = RowAssembler(settings.engine_config())
        processor = QuoteStreamProcessor(
            assembler,
            on_invalid=settings.on_invalid,
            instrument_a=settings.instrument_a,
            instrument_b=settings.instrument_b,
        )
    except InvalidConfiguration as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    async def write_row(row: Row) -> None:
        out.write(orjson.dumps(row_to_dict(row)).decode("utf-8") + "\n")

    processor.on_row(write_row)

    source = open(args.input) if args.input else sys.stdin
    try:
        await processor.run(_read_lines(source))
    except RatioSignalError as e:
        print(f"Stopped after {processor.processed} rows: {e}", file=sys.stderr)
        return 1
    finally:
        if args.input:
            source.close()

    print(
        f"Processed {processor.processed} updates, skipped {processor.skipped}",
        file=sys.stderr,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    return asyncio.run(run(args, sys.stdout))


if __name__ == "__main__":
    sys.exit(main())
