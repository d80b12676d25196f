#!/usr/bin/env python
"""Time UTF-8 validation with and without per-step bounds checks.

Runs :func:`charsetcheck.validate_utf8` over the given files (or a generated
mixed-script sample) once with every step bounds-checked and once in the
unchecked mode, and prints per-mode timing.
"""

from __future__ import annotations

import argparse
import json
import statistics
import sys
import time
from pathlib import Path

from charsetcheck import ScanConfig, validate_utf8

_SYNTHETIC_TEXT = (
    "The quick brown fox jumps over the lazy dog. "
    "Größe, café, naïve. Быстрая лиса. 快速的棕色狐狸。 🦊🐕\n"
)

_MODES: dict[str, ScanConfig] = {
    "checked": ScanConfig(),
    "unchecked": ScanConfig(tiny_buffer_threshold=0),
    "fast": ScanConfig(tiny_buffer_threshold=0, detailed_errors=False),
}


def _time_mode(samples: list[bytes], config: ScanConfig, repeat: int) -> list[float]:
    times: list[float] = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        for data in samples:
            validate_utf8(data, config)
        times.append(time.perf_counter() - t0)
    return times


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Benchmark bounds-checked vs unchecked UTF-8 scanning.",
    )
    parser.add_argument("files", nargs="*", type=Path, help="Files to scan")
    parser.add_argument(
        "--repeat",
        type=int,
        default=5,
        help="Timing repetitions per mode (default: 5)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=1_000_000,
        help="Bytes of synthetic text when no files are given (default: 1000000)",
    )
    parser.add_argument(
        "--json-only",
        action="store_true",
        default=False,
        help="Print only JSON output",
    )
    args = parser.parse_args()

    if args.files:
        try:
            samples = [fp.read_bytes() for fp in args.files]
        except OSError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        chunk = _SYNTHETIC_TEXT.encode()
        samples = [(chunk * (args.size // len(chunk) + 1))[: args.size]]

    total_bytes = sum(len(s) for s in samples)
    results = {
        name: _time_mode(samples, config, args.repeat)
        for name, config in _MODES.items()
    }

    if args.json_only:
        print(
            json.dumps(
                {
                    "bytes": total_bytes,
                    "median": {k: statistics.median(v) for k, v in results.items()},
                }
            )
        )
        return

    print(f"Samples: {len(samples)}  Bytes: {total_bytes}")
    for name, times in results.items():
        median = statistics.median(times)
        rate = total_bytes / median / 1_000_000 if median else 0.0
        print(f"  {name:<10} median={median * 1000:.1f}ms  {rate:.1f} MB/s")


if __name__ == "__main__":
    main()
