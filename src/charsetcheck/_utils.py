"""Internal shared utilities for charsetcheck."""

from __future__ import annotations

#: Longest valid UTF-8 sequence, in bytes.
MAX_SEQUENCE_LENGTH: int = 4

#: Default sample size; 0 means the whole remaining stream.
DEFAULT_SAMPLE_SIZE: int = 0

#: Buffers shorter than this are scanned with per-step bounds checks.
DEFAULT_TINY_BUFFER_THRESHOLD: int = 1_000_000_000

#: How many bytes an "unknown error" diagnostic dumps at most.
UNKNOWN_ERROR_DUMP_SIZE: int = 16

END_OF_BUFFER_MARKER = "<end-of-buffer>"


def _validate_non_negative(name: str, value: int) -> None:
    """Raise ValueError if *value* is not a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"{name} must be a non-negative integer"
        raise ValueError(msg)


def format_octets(raw: bytes) -> str:
    """Render bytes as bracketed binary octets.

    >>> format_octets(b"\\x00\\xff")
    '[00000000 11111111]'
    """
    return "[" + " ".join(f"{byte:08b}" for byte in raw) + "]"
