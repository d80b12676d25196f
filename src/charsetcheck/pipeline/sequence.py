"""Leading-byte decoding and continuation-byte verification."""

from __future__ import annotations

from charsetcheck.enums import ContinuationStatus
from charsetcheck.pipeline import ContinuationCheck, SequenceDescriptor
from charsetcheck.pipeline.classify import is_continuation

# Lead byte forms outside the UTF-8 repertoire.  The 5- and 6-byte forms come
# from the pre-2003 ISO 10646 form of UTF-8; 0xFE/0xFF never appear at all.
_FIVE_BYTE = SequenceDescriptor(length=5, valid=False)
_SIX_BYTE = SequenceDescriptor(length=6, valid=False)
_STRAY = SequenceDescriptor(length=1, valid=False)

_LENGTHS = {n: SequenceDescriptor(length=n, valid=True) for n in (1, 2, 3, 4)}


def decode_leading_byte(
    byte: int, *, subclassify_overlong_leads: bool = True
) -> SequenceDescriptor:
    """Return the sequence length announced by *byte*.

    Patterns are tested most specific first.  A continuation byte in lead
    position, and (with *subclassify_overlong_leads* off) every byte from
    ``0xF8`` up, is reported as invalid with an assumed length of 1.

    :param byte: The candidate leading byte.
    :param subclassify_overlong_leads: Report ``111110xx`` and ``1111110x``
        as 5- and 6-byte sequences instead of single stray bytes.
    :returns: A :class:`SequenceDescriptor`.
    """
    if subclassify_overlong_leads:
        if byte >> 2 == 0b111110:
            return _FIVE_BYTE
        if byte >> 1 == 0b1111110:
            return _SIX_BYTE
        if byte >> 1 == 0b1111111:
            return _STRAY
    if byte >> 3 == 0b11110:
        return _LENGTHS[4]
    if byte >> 4 == 0b1110:
        return _LENGTHS[3]
    if byte >> 5 == 0b110:
        return _LENGTHS[2]
    if byte >> 7 == 0:
        return _LENGTHS[1]
    return _STRAY


def verify_continuation(
    data: bytes, pos: int, required: int, end: int
) -> ContinuationCheck:
    """Check that *required* continuation bytes follow the lead at *pos*.

    Only ``data[pos:end]`` is read.  When the buffer ends first the result is
    :attr:`ContinuationStatus.TRUNCATED` and scanning resumes at *end*, or
    at the first non-continuation byte among the bytes that are there.
    Otherwise the first non-continuation byte gives
    :attr:`ContinuationStatus.MISMATCH` and becomes the resume position, since
    it may start the next character.

    :param data: The buffer being scanned.
    :param pos: Offset of the leading byte.
    :param required: Continuation bytes the leading byte calls for.
    :param end: Offset one past the last readable byte; must exceed *pos*.
    :returns: A :class:`ContinuationCheck`.
    """
    remaining = end - pos
    truncated = required + 1 > remaining
    check_until = remaining if truncated else required + 1

    for idx in range(1, check_until):
        if not is_continuation(data[pos + idx]):
            status = (
                ContinuationStatus.TRUNCATED
                if truncated
                else ContinuationStatus.MISMATCH
            )
            return ContinuationCheck(status=status, resume=pos + idx)

    if truncated:
        return ContinuationCheck(status=ContinuationStatus.TRUNCATED, resume=end)
    return ContinuationCheck(
        status=ContinuationStatus.VALID, resume=pos + required + 1
    )
