"""BOM (Byte Order Mark) matching at the start of a stream."""

from __future__ import annotations

import logging
from typing import BinaryIO

from charsetcheck.enums import SignatureStatus

logger = logging.getLogger(__name__)

UTF8_BOM: bytes = b"\xef\xbb\xbf"
UTF16_LE_BOM: bytes = b"\xff\xfe"
UTF16_BE_BOM: bytes = b"\xfe\xff"


def match_signature(
    stream: BinaryIO, signature: bytes, log: list[str]
) -> SignatureStatus:
    """Compare the next ``len(signature)`` bytes of *stream* to *signature*.

    On :attr:`SignatureStatus.FOUND` the stream is left just past the
    signature.  On :attr:`SignatureStatus.NOT_FOUND` it is rewound to where
    it was.  :attr:`SignatureStatus.FAIL` covers closed, unreadable and
    empty streams as well as I/O errors; a line naming the cause is appended
    to *log*.

    :param stream: A readable, seekable binary stream.
    :param signature: The byte sequence to look for.
    :param log: Diagnostic lines are appended here.
    :returns: A :class:`SignatureStatus`.
    """
    if stream.closed or not stream.readable():
        log.append("Stream is closed or not readable")
        return SignatureStatus.FAIL

    try:
        saved = stream.tell()
        head = stream.read(len(signature))
    except (OSError, ValueError) as exc:
        log.append(f"Stream read failed: {exc}")
        return SignatureStatus.FAIL

    try:
        if not head:
            log.append("Stream empty")
            stream.seek(saved)
            return SignatureStatus.FAIL

        if len(head) < len(signature) or head != signature:
            stream.seek(saved)
            return SignatureStatus.NOT_FOUND
    except (OSError, ValueError) as exc:
        log.append(f"Stream seek failed: {exc}")
        return SignatureStatus.FAIL

    logger.debug("matched signature %s at offset %d", signature.hex(" "), saved)
    return SignatureStatus.FOUND


def match_utf16_signature(
    stream: BinaryIO, log: list[str]
) -> tuple[SignatureStatus, bool]:
    """Look for a UTF-16 BOM, little-endian first.

    The big-endian BOM is only tried when the little-endian one is
    :attr:`SignatureStatus.NOT_FOUND`.

    :returns: The status and whether the match was little-endian (``False``
        when nothing matched).
    """
    status = match_signature(stream, UTF16_LE_BOM, log)
    if status != SignatureStatus.NOT_FOUND:
        return status, status == SignatureStatus.FOUND
    return match_signature(stream, UTF16_BE_BOM, log), False
