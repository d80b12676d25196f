"""Classification of invalid UTF-8 sequences for diagnostics.

Only called at positions the scan driver has already rejected.  The first
three checks (leading byte, truncation, continuation mismatch) establish
that the bytes have the shape the leading byte announces, which the
range-specific rules after them rely on.
"""

from __future__ import annotations

from collections.abc import Callable

from charsetcheck._utils import UNKNOWN_ERROR_DUMP_SIZE
from charsetcheck.enums import ContinuationStatus, ErrorKind
from charsetcheck.pipeline import Utf8Error
from charsetcheck.pipeline.classify import (
    is_control_char,
    is_out_of_range_f5_f7,
    is_overlong_2,
    is_overlong_3,
    is_overlong_4,
    is_surrogate_half,
    out_of_range_f4,
)
from charsetcheck.pipeline.sequence import decode_leading_byte, verify_continuation


def _is_control(data: bytes, pos: int) -> bool:
    return is_control_char(data[pos])


def _is_out_of_range_f4(data: bytes, pos: int) -> bool:
    return out_of_range_f4(data, pos) is not None


# (kind, bytes needed, predicate), in priority order.
_RULES: tuple[tuple[ErrorKind, int, Callable[[bytes, int], bool]], ...] = (
    (ErrorKind.CONTROL_CHARACTER, 1, _is_control),
    (ErrorKind.OVERLONG_2, 2, is_overlong_2),
    (ErrorKind.OVERLONG_3, 3, is_overlong_3),
    (ErrorKind.SURROGATE_HALF, 3, is_surrogate_half),
    (ErrorKind.OVERLONG_4, 4, is_overlong_4),
    (ErrorKind.OUT_OF_RANGE_F4, 4, _is_out_of_range_f4),
    (ErrorKind.OUT_OF_RANGE_F5_F7, 4, is_out_of_range_f5_f7),
)


def classify_error(
    data: bytes,
    pos: int,
    end: int,
    *,
    subclassify_overlong_leads: bool = True,
) -> tuple[Utf8Error, int]:
    """Identify why the sequence at *pos* is invalid.

    :param data: The buffer being scanned.
    :param pos: Offset of the rejected byte; ``pos < end``.
    :param end: Offset one past the last readable byte.
    :param subclassify_overlong_leads: Passed to
        :func:`~charsetcheck.pipeline.sequence.decode_leading_byte`.
    :returns: The error record and the offset to resume scanning at, which
        is always greater than *pos*.
    """
    remaining = end - pos
    descriptor = decode_leading_byte(
        data[pos], subclassify_overlong_leads=subclassify_overlong_leads
    )
    length = descriptor.length

    if not descriptor.valid:
        shown = min(length, remaining)
        error = Utf8Error(
            kind=ErrorKind.INVALID_LEADING_BYTE,
            offset=pos,
            raw=data[pos : pos + shown],
            length=length,
            at_end=length > remaining,
        )
        return error, pos + shown

    check = verify_continuation(data, pos, length - 1, end)
    if check.status == ContinuationStatus.TRUNCATED:
        error = Utf8Error(
            kind=ErrorKind.TRUNCATED_SEQUENCE,
            offset=pos,
            raw=data[pos:end],
            length=length,
            at_end=True,
        )
        return error, check.resume
    if check.status == ContinuationStatus.MISMATCH:
        error = Utf8Error(
            kind=ErrorKind.CONTINUATION_MISMATCH,
            offset=pos,
            raw=data[pos : pos + length],
            length=length,
        )
        return error, check.resume

    for kind, width, matches in _RULES:
        if remaining < width:
            error = Utf8Error(
                kind=ErrorKind.UNKNOWN,
                offset=pos,
                raw=data[pos:end],
                length=remaining,
                at_end=True,
            )
            return error, end
        if matches(data, pos):
            code_point = (
                out_of_range_f4(data, pos)
                if kind is ErrorKind.OUT_OF_RANGE_F4
                else None
            )
            error = Utf8Error(
                kind=kind,
                offset=pos,
                raw=data[pos : pos + width],
                length=width,
                code_point=code_point,
            )
            return error, pos + width

    shown = min(UNKNOWN_ERROR_DUMP_SIZE, remaining)
    error = Utf8Error(
        kind=ErrorKind.UNKNOWN, offset=pos, raw=data[pos : pos + shown], length=1
    )
    return error, pos + 1
