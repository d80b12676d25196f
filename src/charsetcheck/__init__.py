"""UTF-8 validation and UTF-8/UTF-16 BOM detection for text streams."""

from __future__ import annotations

from charsetcheck.detector import (
    check_utf8_bom,
    check_utf8_no_bom,
    check_utf16_bom,
    detect_encoding,
)
from charsetcheck.enums import ErrorKind, SignatureStatus
from charsetcheck.pipeline import (
    CheckResult,
    DetectionResult,
    InvariantError,
    ScanConfig,
    Utf8Error,
    Utf8Verdict,
)
from charsetcheck.pipeline.utf8 import validate_utf8

__version__ = "1.0.0"
__all__ = [
    "CheckResult",
    "DetectionResult",
    "ErrorKind",
    "InvariantError",
    "ScanConfig",
    "SignatureStatus",
    "Utf8Error",
    "Utf8Verdict",
    "check_utf16_bom",
    "check_utf8_bom",
    "check_utf8_no_bom",
    "detect_encoding",
    "validate_utf8",
]
