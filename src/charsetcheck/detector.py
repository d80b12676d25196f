"""Stream checks for UTF-8 (with and without BOM) and UTF-16 BOMs."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Union

from charsetcheck.enums import SignatureStatus
from charsetcheck.pipeline import (
    CheckResult,
    DetectionResult,
    InvariantError,
    ScanConfig,
)
from charsetcheck.pipeline.bom import UTF8_BOM, match_signature, match_utf16_signature
from charsetcheck.pipeline.sample import read_sample
from charsetcheck.pipeline.utf8 import validate_utf8

logger = logging.getLogger(__name__)

Source = Union[BinaryIO, bytes, bytearray, memoryview]


def _as_stream(source: Source) -> BinaryIO:
    """Wrap in-memory bytes in a stream; pass binary streams through."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(source)
    if isinstance(source, io.TextIOBase):
        msg = "expected a binary stream, got a text stream"
        raise TypeError(msg)
    return source


def _require_start(stream: BinaryIO) -> None:
    """Raise ValueError unless *stream* is at offset 0.

    Streams whose position cannot be read are left for the signature
    matcher to report as failed.
    """
    try:
        position = stream.tell()
    except (OSError, ValueError):
        return
    if position != 0:
        msg = f"BOM checks require the stream at offset 0, not {position}"
        raise ValueError(msg)


def _log_diagnostics(check: str, lines: list[str]) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        for line in lines:
            logger.debug("%s: %s", check, line)


def check_utf8_no_bom(source: Source, config: ScanConfig | None = None) -> CheckResult:
    """Report whether a sample of *source* is UTF-8 that needs conversion.

    ``found`` is ``True`` only for valid UTF-8 containing at least one
    non-ASCII sequence.  Pure 7-bit ASCII is valid UTF-8 too, but is
    reported with ``found=False`` and the diagnostic "No conversion
    necessary"; callers that need strict validity should read
    ``result.verdict.all_valid_utf8`` instead.  The stream position is left
    unchanged.

    :param source: A readable, seekable binary stream, or bytes.
    :param config: Sampling and scan options.
    :returns: A :class:`CheckResult` whose ``verdict`` holds the scan details.
    """
    if config is None:
        config = ScanConfig()
    stream = _as_stream(source)
    log: list[str] = []

    try:
        sample = read_sample(stream, config.sample_size)
    except (OSError, ValueError) as exc:
        log.append(f"Could not read sample: {exc}")
        _log_diagnostics("utf-8", log)
        return CheckResult(found=False, diagnostics=tuple(log), failed=True)

    verdict = validate_utf8(sample, config)
    log.extend(verdict.diagnostics)
    if verdict.all_ascii_only:
        log.append("No conversion necessary")
        found = False
    else:
        found = verdict.all_valid_utf8

    _log_diagnostics("utf-8", log)
    return CheckResult(found=found, diagnostics=tuple(log), verdict=verdict)


def check_utf8_bom(source: Source) -> CheckResult:
    """Report whether *source* starts with the UTF-8 BOM ``EF BB BF``.

    The stream must be at offset 0.  A found BOM is consumed; otherwise the
    position is restored.

    :param source: A readable, seekable binary stream, or bytes.
    :returns: A :class:`CheckResult`.
    :raises ValueError: If the stream is not at offset 0.
    """
    stream = _as_stream(source)
    _require_start(stream)
    log: list[str] = []

    status = match_signature(stream, UTF8_BOM, log)
    if status == SignatureStatus.FAIL:
        result = CheckResult(found=False, diagnostics=tuple(log), failed=True)
    elif status == SignatureStatus.NOT_FOUND:
        log.append("No UTF-8 BOM found")
        result = CheckResult(found=False, diagnostics=tuple(log))
    elif status == SignatureStatus.FOUND:
        log.append("UTF-8 BOM found")
        result = CheckResult(found=True, diagnostics=tuple(log))
    else:
        msg = f"unhandled signature status: {status!r}"
        raise InvariantError(msg)

    _log_diagnostics("utf-8-sig", log)
    return result


def check_utf16_bom(source: Source) -> CheckResult:
    """Report whether *source* starts with a UTF-16 BOM.

    ``FF FE`` (little-endian) is tried before ``FE FF`` (big-endian).  The
    stream must be at offset 0.  A found BOM is consumed; otherwise the
    position is restored.  ``little_endian`` is ``False`` unless a
    little-endian BOM was found.

    :param source: A readable, seekable binary stream, or bytes.
    :returns: A :class:`CheckResult`.
    :raises ValueError: If the stream is not at offset 0.
    """
    stream = _as_stream(source)
    _require_start(stream)
    log: list[str] = []

    status, little_endian = match_utf16_signature(stream, log)
    if status == SignatureStatus.FAIL:
        result = CheckResult(found=False, diagnostics=tuple(log), failed=True)
    elif status == SignatureStatus.NOT_FOUND:
        log.append("No UTF-16 BOM found")
        result = CheckResult(found=False, diagnostics=tuple(log))
    elif status == SignatureStatus.FOUND:
        log.append(f"UTF-16 {'LE' if little_endian else 'BE'} BOM found")
        result = CheckResult(
            found=True, diagnostics=tuple(log), little_endian=little_endian
        )
    else:
        msg = f"unhandled signature status: {status!r}"
        raise InvariantError(msg)

    _log_diagnostics("utf-16", log)
    return result


def detect_encoding(
    source: Source, config: ScanConfig | None = None
) -> DetectionResult:
    """Run the BOM checks, then the UTF-8 check, and name the encoding.

    The stream must be at offset 0.  When a BOM is found it is consumed and
    the stream is left just past it; otherwise the position is restored.

    :param source: A readable, seekable binary stream, or bytes.
    :param config: Sampling and scan options for the UTF-8 check.
    :returns: A :class:`DetectionResult` naming ``"utf-8-sig"``,
        ``"utf-16-le"``, ``"utf-16-be"``, ``"utf-8"`` or ``"ascii"``, or
        ``None`` for empty, unreadable, or non-UTF-8 input.
    """
    stream = _as_stream(source)
    log: list[str] = []

    utf8_bom = check_utf8_bom(stream)
    log.extend(utf8_bom.diagnostics)
    if utf8_bom.found:
        return DetectionResult(encoding="utf-8-sig", diagnostics=tuple(log))
    if utf8_bom.failed:
        return DetectionResult(encoding=None, diagnostics=tuple(log))

    utf16_bom = check_utf16_bom(stream)
    log.extend(utf16_bom.diagnostics)
    if utf16_bom.found:
        return DetectionResult(
            encoding="utf-16-le" if utf16_bom.little_endian else "utf-16-be",
            diagnostics=tuple(log),
        )

    utf8 = check_utf8_no_bom(stream, config)
    log.extend(utf8.diagnostics)
    encoding: str | None = None
    if utf8.found:
        encoding = "utf-8"
    elif utf8.verdict is not None and utf8.verdict.all_ascii_only:
        encoding = "ascii"
    return DetectionResult(encoding=encoding, diagnostics=tuple(log))
