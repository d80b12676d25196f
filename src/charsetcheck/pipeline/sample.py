"""Reading a bounded sample from a stream without consuming it."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

from charsetcheck._utils import _validate_non_negative

logger = logging.getLogger(__name__)


def read_sample(stream: BinaryIO, sample_size: int = 0) -> bytes:
    """Read up to *sample_size* bytes from the current position.

    The stream position is restored afterwards, even when the read fails.

    :param stream: A readable, seekable binary stream.
    :param sample_size: Maximum bytes to read; ``0`` reads the whole
        remaining stream.
    :returns: The sampled bytes, possibly fewer than requested.
    :raises OSError: If the stream cannot be positioned or read.
    """
    _validate_non_negative("sample_size", sample_size)

    saved = stream.tell()
    try:
        remaining = max(stream.seek(0, io.SEEK_END) - saved, 0)
        stream.seek(saved)

        wanted = remaining if sample_size == 0 else min(sample_size, remaining)
        data = stream.read(wanted) if wanted else b""
        if data is None:
            msg = "non-blocking stream has no data available"
            raise BlockingIOError(msg)
        if len(data) < wanted:
            logger.debug(
                "short read: requested %d bytes, got %d", wanted, len(data)
            )
    finally:
        stream.seek(saved)
    return bytes(data)
