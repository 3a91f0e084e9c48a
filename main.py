"""expweb-spans — convert expweb trace log lines into Haystack spans."""

from __future__ import annotations

import logging
import sys
from contextlib import ExitStack
from typing import BinaryIO

from src.config import Config, load_config
from src.converter import convert
from src.serializer import SerializationError, decode_span, span_to_json, write_delimited
from src.span_builder import ConversionError
from src.stats import ConversionStats, format_stats_text

logger = logging.getLogger(__name__)


def _write_span(out: BinaryIO, encoded: bytes, output_format: str) -> int:
    if output_format == "json":
        line = (span_to_json(decode_span(encoded)) + "\n").encode("utf-8")
        out.write(line)
        return len(line)
    return write_delimited(out, encoded)


def run(config: Config, source: BinaryIO, out: BinaryIO) -> ConversionStats:
    """Convert every non-blank line of *source* and write the spans to *out*.

    Raises:
        ConversionError: On the first bad record when ``skip_invalid`` is off.
    """
    stats = ConversionStats()
    for lineno, raw in enumerate(source, start=1):
        line = raw.rstrip(b"\r\n")
        if not line.strip():
            continue
        try:
            encoded = convert(line)
        except (ConversionError, SerializationError) as exc:
            stats.record_failure(exc)
            if not config.skip_invalid:
                raise
            logger.warning("Skipping line %d: %s", lineno, exc)
            continue
        stats.record_success(_write_span(out, encoded, config.output_format))
    return stats


def _open_input(stack: ExitStack, path: str) -> BinaryIO:
    if path == "-":
        return sys.stdin.buffer
    return stack.enter_context(open(path, "rb"))


def _open_output(stack: ExitStack, path: str) -> BinaryIO:
    if path == "-":
        stack.callback(sys.stdout.buffer.flush)
        return sys.stdout.buffer
    return stack.enter_context(open(path, "wb"))


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )
    try:
        config = load_config()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(1)
    logging.getLogger().setLevel(config.log_level)
    logger.info(
        "Converting %s -> %s (format=%s, skip_invalid=%s)",
        config.input_path, config.output_path, config.output_format, config.skip_invalid,
    )

    try:
        with ExitStack() as stack:
            source = _open_input(stack, config.input_path)
            out = _open_output(stack, config.output_path)
            stats = run(config, source, out)
    except BrokenPipeError:
        raise
    except OSError as exc:
        logger.error("Cannot open input or output: %s", exc)
        sys.exit(1)
    except (ConversionError, SerializationError) as exc:
        logger.error("Conversion failed: %s", exc)
        sys.exit(1)

    print(format_stats_text(stats), file=sys.stderr)
    if stats.failed:
        logger.info("%d of %d records were rejected", stats.failed, stats.total_records)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
