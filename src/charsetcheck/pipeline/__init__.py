"""Validation pipeline stages and shared types."""

from __future__ import annotations

import dataclasses

from charsetcheck._utils import (
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_TINY_BUFFER_THRESHOLD,
    END_OF_BUFFER_MARKER,
    _validate_non_negative,
    format_octets,
)
from charsetcheck.enums import ContinuationStatus, ErrorKind


class InvariantError(RuntimeError):
    """An internal invariant was broken.

    Signals a defect in this package, never a property of the input data.
    """


@dataclasses.dataclass(frozen=True, slots=True)
class ScanConfig:
    """Options for sampling and scanning a stream.

    :param sample_size: How many bytes to read from the stream; ``0`` reads
        the whole remaining stream.
    :param tiny_buffer_threshold: Buffers shorter than this are scanned with
        a bounds check before every look-ahead.  Longer buffers scan all but
        the last four bytes without those checks, then the tail with them.
    :param detailed_errors: Keep scanning after the first invalid sequence
        and classify every error.  When ``False`` the scan stops at the first
        error.
    :param subclassify_overlong_leads: Treat ``0xF8``-``0xFB`` and
        ``0xFC``-``0xFD`` as 5- and 6-byte leads when reporting and skipping.
    """

    sample_size: int = DEFAULT_SAMPLE_SIZE
    tiny_buffer_threshold: int = DEFAULT_TINY_BUFFER_THRESHOLD
    detailed_errors: bool = True
    subclassify_overlong_leads: bool = True

    def __post_init__(self) -> None:
        _validate_non_negative("sample_size", self.sample_size)
        _validate_non_negative("tiny_buffer_threshold", self.tiny_buffer_threshold)


@dataclasses.dataclass(frozen=True, slots=True)
class SequenceDescriptor:
    """Expected sequence length announced by a leading byte.

    For invalid leading bytes *length* is only an assumption used to size
    the diagnostic and the skip.
    """

    length: int
    valid: bool


@dataclasses.dataclass(frozen=True, slots=True)
class ContinuationCheck:
    """Result of verifying continuation bytes; *resume* is where to scan next."""

    status: ContinuationStatus
    resume: int


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_LEADING_BYTE: (
        "Invalid leading byte at {offset} (assumed length={length}): {octets}"
    ),
    ErrorKind.TRUNCATED_SEQUENCE: (
        "Truncated sequence at {offset} (expected length={length}): {octets}"
    ),
    ErrorKind.CONTINUATION_MISMATCH: (
        "Unexpected non-continuation byte in sequence at {offset} "
        "(expected length={length}): {octets}"
    ),
    ErrorKind.CONTROL_CHARACTER: "Control character at {offset}: {octets}",
    ErrorKind.OVERLONG_2: "Overlong 2-byte sequence at {offset}: {octets}",
    ErrorKind.OVERLONG_3: "Overlong 3-byte sequence at {offset}: {octets}",
    ErrorKind.SURROGATE_HALF: "UTF-16 surrogate half at {offset}: {octets}",
    ErrorKind.OVERLONG_4: "Overlong 4-byte sequence at {offset}: {octets}",
    ErrorKind.OUT_OF_RANGE_F4: (
        "Code point U+{code_point:06X} above U+10FFFF (lead byte F4) "
        "at {offset}: {octets}"
    ),
    ErrorKind.OUT_OF_RANGE_F5_F7: (
        "Code point above U+10FFFF (lead byte F5-F7) at {offset}: {octets}"
    ),
    ErrorKind.UNKNOWN: (
        "Unknown UTF-8 error at {offset} (assumed length={length}): {octets}"
    ),
}


@dataclasses.dataclass(frozen=True, slots=True)
class Utf8Error:
    """One invalid byte sequence found during a scan.

    *raw* holds the bytes shown in the diagnostic.  *at_end* is set when the
    sequence ran into the end of the buffer.  *code_point* is only set for
    :attr:`ErrorKind.OUT_OF_RANGE_F4`.
    """

    kind: ErrorKind
    offset: int
    raw: bytes
    length: int
    at_end: bool = False
    code_point: int | None = None

    def __str__(self) -> str:
        try:
            template = _MESSAGES[self.kind]
        except KeyError:
            msg = f"unclassified UTF-8 error kind: {self.kind!r}"
            raise InvariantError(msg) from None
        line = template.format(
            offset=self.offset,
            length=self.length,
            octets=format_octets(self.raw),
            code_point=self.code_point or 0,
        )
        if self.at_end:
            line += END_OF_BUFFER_MARKER
        return line


@dataclasses.dataclass(frozen=True, slots=True)
class Utf8Verdict:
    """Outcome of scanning one buffer.

    Both flags start ``True`` and are only ever lowered during a scan.
    *diagnostics* is the ordered, human-readable log, including one line per
    entry in *errors*.
    """

    all_valid_utf8: bool
    all_ascii_only: bool
    errors: tuple[Utf8Error, ...] = ()
    diagnostics: tuple[str, ...] = ()

    @property
    def needs_conversion(self) -> bool:
        """Valid UTF-8 that is not plain 7-bit ASCII."""
        return self.all_valid_utf8 and not self.all_ascii_only

    def to_dict(self) -> dict[str, bool | list[str]]:
        """Convert this verdict to a plain dict.

        :returns: A dict with ``'all_valid_utf8'``, ``'all_ascii_only'``, and
            ``'diagnostics'`` keys.
        """
        return {
            "all_valid_utf8": self.all_valid_utf8,
            "all_ascii_only": self.all_ascii_only,
            "diagnostics": list(self.diagnostics),
        }


@dataclasses.dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of one of the three stream checks.

    *failed* is set when the stream could not be read at all (closed,
    empty, or an I/O error), as opposed to read but not matching.
    *little_endian* is only meaningful for a found UTF-16 BOM and stays
    ``False`` otherwise.  *verdict* is only set by the UTF-8 (no BOM) check.
    """

    found: bool
    diagnostics: tuple[str, ...] = ()
    failed: bool = False
    little_endian: bool = False
    verdict: Utf8Verdict | None = None

    def __bool__(self) -> bool:
        return self.found


@dataclasses.dataclass(frozen=True, slots=True)
class DetectionResult:
    """Encoding reported by :func:`charsetcheck.detect_encoding`."""

    encoding: str | None
    diagnostics: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, str | list[str] | None]:
        """Convert this result to a plain dict.

        :returns: A dict with ``'encoding'`` and ``'diagnostics'`` keys.
        """
        return {
            "encoding": self.encoding,
            "diagnostics": list(self.diagnostics),
        }
