"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest


class _FailingReadStream(io.BytesIO):
    """A seekable stream whose reads always fail."""

    def read(self, size: int | None = -1) -> bytes:
        msg = "simulated read failure"
        raise OSError(msg)


class _ShortReadStream(io.BytesIO):
    """A stream whose reads come back two bytes short of the request."""

    def read(self, size: int | None = -1) -> bytes:
        if size is None or size < 0:
            return super().read()
        return super().read(max(size - 2, 0))


@pytest.fixture
def failing_stream() -> io.BytesIO:
    """Stream with content whose ``read()`` raises :class:`OSError`."""
    return _FailingReadStream(b"\xef\xbb\xbfHello")


@pytest.fixture
def short_read_stream() -> io.BytesIO:
    """Stream whose ``read()`` comes back two bytes short."""
    return _ShortReadStream("Grüße aus Köln\r\n".encode())


@pytest.fixture
def closed_stream() -> io.BytesIO:
    stream = io.BytesIO(b"\xef\xbb\xbfHello")
    stream.close()
    return stream
