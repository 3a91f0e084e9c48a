"""Configuration module — frozen dataclass loaded from env vars and CLI args."""

from __future__ import annotations

import os
import sys
from argparse import ArgumentParser
from dataclasses import dataclass

OUTPUT_FORMATS = ("proto", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    input_path: str = "-"
    output_path: str = "-"
    output_format: str = "proto"
    skip_invalid: bool = True
    log_level: str = "INFO"


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="expweb-spans",
        description="Convert expweb trace log lines into Haystack spans.",
    )
    parser.add_argument(
        "input_path",
        nargs="?",
        help="Log file to read, '-' for stdin (env: INPUT_PATH)",
    )
    parser.add_argument(
        "-o", "--output",
        dest="output_path",
        help="Span file to write, '-' for stdout (env: OUTPUT_PATH)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        help="'proto' for length-prefixed protobuf, 'json' for one span per line",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first record that cannot be converted",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (env: LOG_LEVEL, default: INFO)",
    )
    return parser


def load_config(argv: list[str] | None = None) -> Config:
    """Build Config from defaults <- env vars <- CLI args (highest priority)."""
    if argv is None:
        argv = sys.argv[1:]

    kwargs: dict = {
        "input_path": os.environ.get("INPUT_PATH", Config.input_path),
        "output_path": os.environ.get("OUTPUT_PATH", Config.output_path),
        "output_format": os.environ.get("OUTPUT_FORMAT", Config.output_format).lower(),
        "skip_invalid": _parse_bool(os.environ.get("SKIP_INVALID", "true")),
        "log_level": os.environ.get("LOG_LEVEL", Config.log_level).upper(),
    }

    args = build_parser().parse_args(argv)
    if args.input_path is not None:
        kwargs["input_path"] = args.input_path
    if args.output_path is not None:
        kwargs["output_path"] = args.output_path
    if args.output_format is not None:
        kwargs["output_format"] = args.output_format
    if args.fail_fast:
        kwargs["skip_invalid"] = False
    if args.log_level is not None:
        kwargs["log_level"] = args.log_level

    if kwargs["output_format"] not in OUTPUT_FORMATS:
        raise ValueError(
            f"OUTPUT_FORMAT must be one of {list(OUTPUT_FORMATS)}, "
            f"got '{kwargs['output_format']}'"
        )
    if kwargs["log_level"] not in LOG_LEVELS:
        raise ValueError(
            f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got '{kwargs['log_level']}'"
        )

    return Config(**kwargs)
