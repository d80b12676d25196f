"""UTF-8 structural validation of a single buffer.

Scans the buffer once, accepting ASCII text bytes and shortest-form 2-, 3-
and 4-byte sequences.  Anything else lowers ``all_valid_utf8`` and, unless
the scan is configured to stop at the first error, is handed to
:func:`~charsetcheck.pipeline.diagnose.classify_error` for a diagnostic
and a resume offset.

Long buffers are scanned in two phases.  Up to ``len - 4`` every lead byte
has three readable successors, so the look-ahead tests run without bounds
checks; the trailing margin is then scanned with them.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import field

from charsetcheck._utils import MAX_SEQUENCE_LENGTH
from charsetcheck.pipeline import InvariantError, ScanConfig, Utf8Error, Utf8Verdict
from charsetcheck.pipeline.classify import (
    is_ascii7,
    is_valid_2,
    is_valid_3,
    is_valid_4,
)
from charsetcheck.pipeline.diagnose import classify_error

logger = logging.getLogger(__name__)


@dataclasses.dataclass(slots=True)
class _ScanState:
    """Accumulators for one :func:`validate_utf8` call."""

    all_valid_utf8: bool = True
    all_ascii_only: bool = True
    stopped: bool = False
    errors: list[Utf8Error] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)


def _match_unchecked(data: bytes, pos: int) -> int:
    """Return the length of the valid multi-byte sequence at *pos*, or 0.

    Requires ``pos + 3 < len(data)``.
    """
    if is_valid_2(data, pos):
        return 2
    if is_valid_3(data, pos):
        return 3
    if is_valid_4(data, pos):
        return 4
    return 0


def _match_checked(data: bytes, pos: int, end: int, diagnostics: list[str]) -> int:
    """Like :func:`_match_unchecked`, but never reads at or past *end*."""
    remaining = end - pos
    if remaining < 2:
        diagnostics.append(
            f"Not a valid 1-byte character at {pos}, "
            "no room left for a 2-byte sequence"
        )
        return 0
    if is_valid_2(data, pos):
        return 2
    if remaining < 3:
        diagnostics.append(
            f"Not a valid 1- or 2-byte character at {pos}, "
            "no room left for a 3-byte sequence"
        )
        return 0
    if is_valid_3(data, pos):
        return 3
    if remaining < 4:
        diagnostics.append(
            f"Not a valid 1-, 2- or 3-byte character at {pos}, "
            "no room left for a 4-byte sequence"
        )
        return 0
    if is_valid_4(data, pos):
        return 4
    return 0


def _scan(
    data: bytes,
    pos: int,
    stop: int,
    state: _ScanState,
    config: ScanConfig,
    *,
    checked: bool,
) -> int:
    """Scan lead positions in ``[pos, stop)`` and return where the cursor ended.

    The cursor may end past *stop* when the last sequence straddles it.
    """
    end = len(data)
    while pos < stop:
        if is_ascii7(data[pos]):
            pos += 1
            continue

        state.all_ascii_only = False
        if checked:
            width = _match_checked(data, pos, stop, state.diagnostics)
        else:
            width = _match_unchecked(data, pos)
        if width:
            pos += width
            continue

        state.all_valid_utf8 = False
        if not config.detailed_errors:
            state.diagnostics.append(
                f"Invalid UTF-8 sequence at {pos}, stopping at first error"
            )
            state.stopped = True
            break

        error, resume = classify_error(
            data,
            pos,
            end,
            subclassify_overlong_leads=config.subclassify_overlong_leads,
        )
        if resume <= pos:
            msg = f"scan cursor did not advance at offset {pos} ({error.kind.name})"
            raise InvariantError(msg)
        state.errors.append(error)
        state.diagnostics.append(str(error))
        pos = resume
    return pos


def validate_utf8(
    data: bytes | bytearray | memoryview, config: ScanConfig | None = None
) -> Utf8Verdict:
    """Validate *data* as UTF-8 and check whether it is plain 7-bit ASCII.

    Malformed input never raises; it is reported through the verdict.

    :param data: The raw byte data to examine.
    :param config: Scan options; defaults to :class:`ScanConfig`.
    :returns: A :class:`Utf8Verdict`.
    """
    if config is None:
        config = ScanConfig()
    if not isinstance(data, bytes):
        data = bytes(data)

    length = len(data)
    state = _ScanState()

    if length < config.tiny_buffer_threshold:
        state.diagnostics.append(
            f"Sample of {length} bytes is below the "
            f"{config.tiny_buffer_threshold}-byte limit, checking entire buffer "
            "with end-of-buffer checks"
        )
        _scan(data, 0, length, state, config, checked=True)
    else:
        stop = max(length - MAX_SEQUENCE_LENGTH, 0)
        state.diagnostics.append(
            f"Scanning {stop} bytes without end-of-buffer checks, "
            f"then the trailing {length - stop} with them"
        )
        pos = _scan(data, 0, stop, state, config, checked=False)
        if not state.stopped:
            _scan(data, pos, length, state, config, checked=True)

    if length == 0:
        state.diagnostics.append("Empty sample")
    if state.all_ascii_only:
        state.diagnostics.append("7-bit ASCII text")
    if state.all_valid_utf8:
        state.diagnostics.append("Sample contains only valid UTF-8 characters")

    logger.debug(
        "scanned %d bytes: valid_utf8=%s ascii_only=%s errors=%d",
        length,
        state.all_valid_utf8,
        state.all_ascii_only,
        len(state.errors),
    )
    return Utf8Verdict(
        all_valid_utf8=state.all_valid_utf8,
        all_ascii_only=state.all_ascii_only,
        errors=tuple(state.errors),
        diagnostics=tuple(state.diagnostics),
    )
