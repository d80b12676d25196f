"""Command-line interface for charsetcheck."""

from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path

import charsetcheck
from charsetcheck._utils import DEFAULT_TINY_BUFFER_THRESHOLD
from charsetcheck.pipeline import DetectionResult, ScanConfig


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        msg = f"must be a non-negative integer: {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _report(name: str, result: DetectionResult, args: argparse.Namespace) -> None:
    if args.minimal:
        print(result.encoding)
    else:
        print(f"{name}: {result.encoding}")
    if args.verbose:
        for line in result.diagnostics:
            print(f"    {line}")


def main(argv: list[str] | None = None) -> None:
    """Run the ``charsetcheck`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = argparse.ArgumentParser(
        description="Check files for UTF-8 content and UTF-8/UTF-16 BOMs."
    )
    parser.add_argument("files", nargs="*", help="Files to check")
    parser.add_argument(
        "--minimal", action="store_true", help="Output only the encoding name"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print diagnostics"
    )
    parser.add_argument(
        "--sample-size",
        type=_non_negative,
        default=0,
        help="Bytes to sample from each file (default: 0, the whole file)",
    )
    parser.add_argument(
        "--tiny-threshold",
        type=_non_negative,
        default=DEFAULT_TINY_BUFFER_THRESHOLD,
        help="Samples shorter than this are scanned with end-of-buffer checks",
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Stop at the first invalid sequence instead of listing all",
    )
    parser.add_argument(
        "--no-subclassify",
        action="store_true",
        help="Report 0xF8-0xFD lead bytes as single stray bytes",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"charsetcheck {charsetcheck.__version__}",
    )

    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(levelname)s: %(message)s"
        )

    config = ScanConfig(
        sample_size=args.sample_size,
        tiny_buffer_threshold=args.tiny_threshold,
        detailed_errors=not args.fast,
        subclassify_overlong_leads=not args.no_subclassify,
    )

    failed = False
    if args.files:
        for filepath in args.files:
            try:
                with Path(filepath).open("rb") as f:
                    result = charsetcheck.detect_encoding(f, config)
            except OSError as e:
                print(f"charsetcheck: {filepath}: {e}", file=sys.stderr)
                failed = True
                continue
            _report(filepath, result, args)
    else:
        if args.sample_size:
            data = sys.stdin.buffer.read(args.sample_size)
        else:
            data = sys.stdin.buffer.read()
        result = charsetcheck.detect_encoding(io.BytesIO(data), config)
        _report("stdin", result, args)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
