from __future__ import annotations

import pytest

from charsetcheck.enums import ErrorKind
from charsetcheck.pipeline import ScanConfig
from charsetcheck.pipeline.utf8 import validate_utf8

_UNCHECKED = ScanConfig(tiny_buffer_threshold=0)

_SAMPLES: list[bytes] = [
    b"",
    b"Hello world\r\n",
    "Héllo wörld café".encode(),
    "你好世界".encode(),
    "Hello 🌍🌎🌏".encode(),
    "🌍".encode(),
    b"abcd\xe2\x82",
    b"Hello \xc3",
    b"\xc3\x00",
    b"\xc0\x80 overlong",
    b"surrogate \xed\xa0\x80 half",
    b"\xf4\x90\x80\x80 too high",
    b"\xf8\x80\x80\x80\x80five",
    b"\x80\x80\x80",
    bytes(range(256)),
    "Grüße".encode("latin-1") * 3,
]


def _kinds(data: bytes, config: ScanConfig | None = None) -> list[ErrorKind]:
    return [error.kind for error in validate_utf8(data, config).errors]


def test_valid_utf8_with_multibyte():
    verdict = validate_utf8("Héllo wörld café".encode())
    assert verdict.all_valid_utf8
    assert not verdict.all_ascii_only
    assert verdict.errors == ()
    assert verdict.needs_conversion


def test_valid_utf8_chinese():
    verdict = validate_utf8("你好世界".encode())
    assert verdict.all_valid_utf8
    assert not verdict.all_ascii_only


def test_valid_utf8_emoji():
    verdict = validate_utf8("Hello 🌍🌎🌏".encode())
    assert verdict.all_valid_utf8


def test_pure_ascii():
    verdict = validate_utf8(bytes(range(0x20, 0x7F)) + b"\t\r\n")
    assert verdict.all_valid_utf8
    assert verdict.all_ascii_only
    assert not verdict.needs_conversion
    assert "7-bit ASCII text" in verdict.diagnostics
    assert "Sample contains only valid UTF-8 characters" in verdict.diagnostics


def test_control_character_is_neither_ascii_nor_valid():
    verdict = validate_utf8(b"Hello\x00world")
    assert not verdict.all_valid_utf8
    assert not verdict.all_ascii_only
    assert _kinds(b"Hello\x00world") == [ErrorKind.CONTROL_CHARACTER]


def test_empty_input():
    verdict = validate_utf8(b"")
    assert verdict.all_valid_utf8
    assert verdict.all_ascii_only
    assert "Empty sample" in verdict.diagnostics


def test_invalid_continuation_then_control():
    assert _kinds(b"\xc3\x00") == [
        ErrorKind.CONTINUATION_MISMATCH,
        ErrorKind.CONTROL_CHARACTER,
    ]


def test_overlong_encoding():
    verdict = validate_utf8(b"\xc0\x80")
    assert not verdict.all_valid_utf8
    assert [e.kind for e in verdict.errors] == [ErrorKind.OVERLONG_2]
    assert any("Overlong 2-byte" in line for line in verdict.diagnostics)


def test_surrogate_pair_rejected():
    verdict = validate_utf8(b"Hello " + b"\xed\xa0\x80" + b" World")
    assert not verdict.all_valid_utf8
    assert len(verdict.errors) == 1
    assert verdict.errors[0].kind is ErrorKind.SURROGATE_HALF
    assert verdict.errors[0].offset == 6


def test_out_of_range_rejected():
    verdict = validate_utf8(b"\xf4\x90\x80\x80")
    assert [e.kind for e in verdict.errors] == [ErrorKind.OUT_OF_RANGE_F4]
    assert verdict.errors[0].code_point > 0x10FFFF
    assert _kinds(b"\xf5\x80\x80\x80") == [ErrorKind.OUT_OF_RANGE_F5_F7]


def test_truncated_at_end():
    verdict = validate_utf8(b"abc\xe2")
    assert not verdict.all_valid_utf8
    assert [e.kind for e in verdict.errors] == [ErrorKind.TRUNCATED_SEQUENCE]
    assert verdict.errors[0].offset == 3
    assert verdict.errors[0].at_end


def test_truncated_multibyte():
    assert _kinds(b"Hello \xc3") == [ErrorKind.TRUNCATED_SEQUENCE]


def test_latin1_is_not_valid_utf8():
    verdict = validate_utf8("Héllo".encode("latin-1"))
    assert not verdict.all_valid_utf8
    assert _kinds("Héllo".encode("latin-1")) == [ErrorKind.CONTINUATION_MISMATCH]


def test_invalid_leading_byte_skips_assumed_length():
    assert _kinds(b"\xf8\x80\x80\x80\x80A") == [ErrorKind.INVALID_LEADING_BYTE]
    no_subclass = ScanConfig(subclassify_overlong_leads=False)
    assert _kinds(b"\xf8\x80\x80\x80\x80A", no_subclass) == (
        [ErrorKind.INVALID_LEADING_BYTE] * 5
    )


def test_ascii_flag_lowered_by_valid_multibyte():
    verdict = validate_utf8(b"abc" + "é".encode() + b"def")
    assert verdict.all_valid_utf8
    assert not verdict.all_ascii_only


def test_error_lines_are_in_diagnostics_in_order():
    verdict = validate_utf8(b"\xc0\x80 and \xed\xa0\x80")
    error_lines = [str(e) for e in verdict.errors]
    positions = [verdict.diagnostics.index(line) for line in error_lines]
    assert positions == sorted(positions)
    assert [e.offset for e in verdict.errors] == [0, 7]


def test_fast_mode_stops_at_first_error():
    config = ScanConfig(detailed_errors=False)
    verdict = validate_utf8(b"\xc0\x80abc\xff\xfe", config)
    assert not verdict.all_valid_utf8
    assert verdict.errors == ()
    stops = [line for line in verdict.diagnostics if "stopping" in line]
    assert stops == ["Invalid UTF-8 sequence at 0, stopping at first error"]


def test_fast_mode_unchecked_skips_tail():
    config = ScanConfig(detailed_errors=False, tiny_buffer_threshold=0)
    verdict = validate_utf8(b"\xff" + b"a" * 10 + b"\xff", config)
    assert not verdict.all_valid_utf8
    assert sum("stopping" in line for line in verdict.diagnostics) == 1


def test_checked_mode_is_announced():
    verdict = validate_utf8(b"abc")
    assert verdict.diagnostics[0].startswith("Sample of 3 bytes is below")


def test_unchecked_mode_is_announced():
    verdict = validate_utf8(b"abcdefgh", _UNCHECKED)
    assert verdict.diagnostics[0] == (
        "Scanning 4 bytes without end-of-buffer checks, then the trailing 4 with them"
    )


@pytest.mark.parametrize("data", _SAMPLES)
def test_unchecked_mode_matches_checked_mode(data: bytes):
    checked = validate_utf8(data)
    unchecked = validate_utf8(data, _UNCHECKED)
    assert checked.all_valid_utf8 == unchecked.all_valid_utf8
    assert checked.all_ascii_only == unchecked.all_ascii_only
    assert checked.errors == unchecked.errors


def test_unchecked_mode_examines_trailing_margin():
    verdict = validate_utf8(b"a" * 20 + b"\xc0\x80", _UNCHECKED)
    assert [e.kind for e in verdict.errors] == [ErrorKind.OVERLONG_2]


def test_sequence_straddling_unchecked_boundary():
    data = b"ab" + "🌍".encode()
    verdict = validate_utf8(data, _UNCHECKED)
    assert verdict.all_valid_utf8
    assert verdict.errors == ()


@pytest.mark.parametrize("data", _SAMPLES)
def test_validity_agrees_with_python_decoder(data: bytes):
    verdict = validate_utf8(data)
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        expected = False
    else:
        expected = all(c in "\t\n\r" or ord(c) >= 0x20 and ord(c) != 0x7F for c in text)
    assert verdict.all_valid_utf8 is expected


@pytest.mark.parametrize("data", _SAMPLES)
def test_scan_is_idempotent(data: bytes):
    assert validate_utf8(data) == validate_utf8(data)


def test_forward_progress_on_every_byte_value():
    data = bytes(range(256)) * 4
    verdict = validate_utf8(data)
    offsets = [e.offset for e in verdict.errors]
    assert offsets == sorted(set(offsets))
    assert len(offsets) <= len(data)


def test_accepts_bytearray_and_memoryview():
    raw = "café".encode()
    assert validate_utf8(bytearray(raw)).all_valid_utf8
    assert validate_utf8(memoryview(raw)).all_valid_utf8
