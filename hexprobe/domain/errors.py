# hexprobe/domain/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from hexprobe.domain.enums.error_kind import ErrorKind


class MediaError(Exception):
    """
    Base for every failure the engine reports. ``kind`` lets callers branch
    (recoverable parse failure vs. fatal I/O, conflict, ...) without matching
    on message text.
    """
    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, message: str, *, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class NotFoundError(MediaError):
    kind = ErrorKind.NOT_FOUND


class ParseError(MediaError):
    """Raised by format parsers when the bytes do not hold a usable header."""
    kind = ErrorKind.MALFORMED_INPUT


class TruncatedDataError(ParseError):
    kind = ErrorKind.TRUNCATED_DATA


class MalformedInputError(ParseError):
    kind = ErrorKind.MALFORMED_INPUT


class UnsupportedFormatError(MediaError):
    """Recognized container, unsupported variant (e.g. an Ogg stream that is not Vorbis)."""
    kind = ErrorKind.UNSUPPORTED_FORMAT


class UnsupportedConversionRouteError(MediaError):
    kind = ErrorKind.UNSUPPORTED_CONVERSION_ROUTE


class OutputConflictError(MediaError):
    kind = ErrorKind.OUTPUT_CONFLICT


class IOFailureError(MediaError):
    kind = ErrorKind.IO_FAILURE


# What the probe orchestrator downgrades to a minimal result instead of raising.
RECOVERABLE_PARSE_ERRORS = (TruncatedDataError, MalformedInputError, UnsupportedFormatError)
