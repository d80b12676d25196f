"""Byte-level predicates for UTF-8 sequence shapes.

Every function reads only the bytes it needs and assumes they exist; the
caller is responsible for making sure ``data[pos:pos + n]`` is in range.
The ``is_valid_*`` tests accept exactly the shortest-form encodings of
U+0080..U+10FFFF minus the surrogate range.  The overlong and out-of-range
tests are only meaningful once the matching ``is_valid_*`` test has failed
and the continuation bytes have been verified.
"""

from __future__ import annotations

# Tab, newline, carriage return and printable ASCII (0x20-0x7E).
_ASCII_TEXT: frozenset[int] = frozenset({0x09, 0x0A, 0x0D, *range(0x20, 0x7F)})

#: Highest Unicode code point.
MAX_CODE_POINT = 0x10FFFF


def _tail(byte: int) -> bool:
    return 0x80 <= byte <= 0xBF


def is_ascii7(byte: int) -> bool:
    """Printable 7-bit ASCII plus TAB, LF and CR."""
    return byte in _ASCII_TEXT


def is_control_char(byte: int) -> bool:
    """A 7-bit byte outside :func:`is_ascii7`, e.g. NUL, ESC or DEL."""
    return byte & 0x80 == 0 and byte not in _ASCII_TEXT


def is_continuation(byte: int) -> bool:
    """Whether *byte* has the ``10xxxxxx`` shape."""
    return byte & 0xC0 == 0x80


def is_valid_2(data: bytes, pos: int) -> bool:
    """U+0080..U+07FF: ``C2..DF 80..BF``."""
    return 0xC2 <= data[pos] <= 0xDF and _tail(data[pos + 1])


def is_overlong_2(data: bytes, pos: int) -> bool:
    """``C0`` and ``C1`` can only encode U+0000..U+007F."""
    return 0xC0 <= data[pos] <= 0xC1


def is_valid_3(data: bytes, pos: int) -> bool:
    """U+0800..U+FFFF excluding the surrogates U+D800..U+DFFF."""
    lead = data[pos]
    second = data[pos + 1]
    if not _tail(data[pos + 2]):
        return False
    if 0xE1 <= lead <= 0xEC or lead in (0xEE, 0xEF):
        return _tail(second)
    if lead == 0xE0:
        return 0xA0 <= second <= 0xBF
    if lead == 0xED:
        return 0x80 <= second <= 0x9F
    return False


def is_overlong_3(data: bytes, pos: int) -> bool:
    """``E0 80..9F`` encodes a code point below U+0800."""
    return data[pos] == 0xE0 and 0x80 <= data[pos + 1] <= 0x9F


def is_surrogate_half(data: bytes, pos: int) -> bool:
    """``ED A0..BF`` encodes U+D800..U+DFFF."""
    return data[pos] == 0xED and 0xA0 <= data[pos + 1] <= 0xBF


def is_valid_4(data: bytes, pos: int) -> bool:
    """U+10000..U+10FFFF."""
    lead = data[pos]
    second = data[pos + 1]
    if not (_tail(data[pos + 2]) and _tail(data[pos + 3])):
        return False
    if lead == 0xF0:
        return 0x90 <= second <= 0xBF
    if 0xF1 <= lead <= 0xF3:
        return _tail(second)
    if lead == 0xF4:
        return 0x80 <= second <= 0x8F
    return False


def is_overlong_4(data: bytes, pos: int) -> bool:
    """``F0 80..8F`` encodes a code point below U+10000."""
    return data[pos] == 0xF0 and 0x80 <= data[pos + 1] <= 0x8F


def out_of_range_f4(data: bytes, pos: int) -> int | None:
    """Return the code point of an ``F4 90..BF`` sequence, else ``None``.

    Such sequences decode to U+110000..U+13FFFF.
    """
    if data[pos] != 0xF4 or not 0x90 <= data[pos + 1] <= 0xBF:
        return None
    return (
        (data[pos] & 0x07) << 18
        | (data[pos + 1] & 0x3F) << 12
        | (data[pos + 2] & 0x3F) << 6
        | (data[pos + 3] & 0x3F)
    )


def is_out_of_range_f5_f7(data: bytes, pos: int) -> bool:
    """Leads ``F5``..``F7`` always exceed U+10FFFF."""
    return 0xF5 <= data[pos] <= 0xF7
