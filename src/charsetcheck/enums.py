"""Enumerations for charsetcheck."""

import enum


class ErrorKind(enum.Enum):
    """Categories of invalid UTF-8 byte sequences, in classification order."""

    INVALID_LEADING_BYTE = "invalid leading byte"
    TRUNCATED_SEQUENCE = "truncated sequence"
    CONTINUATION_MISMATCH = "unexpected non-continuation byte"
    CONTROL_CHARACTER = "control character"
    OVERLONG_2 = "2-byte overlong"
    OVERLONG_3 = "3-byte overlong"
    SURROGATE_HALF = "UTF-16 surrogate half"
    OVERLONG_4 = "4-byte overlong"
    OUT_OF_RANGE_F4 = "code point above U+10FFFF (F4)"
    OUT_OF_RANGE_F5_F7 = "code point above U+10FFFF (F5-F7)"
    UNKNOWN = "unknown UTF-8 error"


class ContinuationStatus(enum.IntEnum):
    """Outcome of checking the continuation bytes after a leading byte."""

    VALID = 0
    TRUNCATED = 1
    MISMATCH = 2


class SignatureStatus(enum.IntEnum):
    """Tri-state result of matching a byte-order mark against a stream."""

    FAIL = 0
    NOT_FOUND = 1
    FOUND = 2
