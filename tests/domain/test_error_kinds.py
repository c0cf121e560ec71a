from pathlib import Path

from hexprobe.domain.enums import ErrorKind
from hexprobe.domain.errors import (
    RECOVERABLE_PARSE_ERRORS,
    IOFailureError,
    MalformedInputError,
    NotFoundError,
    OutputConflictError,
    ParseError,
    TruncatedDataError,
    UnsupportedConversionRouteError,
    UnsupportedFormatError,
)


def test_each_error_carries_its_kind():
    assert NotFoundError("x").kind == ErrorKind.NOT_FOUND
    assert TruncatedDataError("x").kind == ErrorKind.TRUNCATED_DATA
    assert MalformedInputError("x").kind == ErrorKind.MALFORMED_INPUT
    assert UnsupportedFormatError("x").kind == ErrorKind.UNSUPPORTED_FORMAT
    assert UnsupportedConversionRouteError("x").kind == ErrorKind.UNSUPPORTED_CONVERSION_ROUTE
    assert OutputConflictError("x").kind == ErrorKind.OUTPUT_CONFLICT
    assert IOFailureError("x").kind == ErrorKind.IO_FAILURE


def test_parse_errors_share_a_base():
    assert issubclass(TruncatedDataError, ParseError)
    assert issubclass(MalformedInputError, ParseError)
    assert UnsupportedFormatError in RECOVERABLE_PARSE_ERRORS
    assert NotFoundError not in RECOVERABLE_PARSE_ERRORS


def test_message_and_path():
    e = NotFoundError("File does not exist", path=Path("/nope.mp3"))
    assert e.message == "File does not exist"
    assert str(e) == "File does not exist (/nope.mp3)"
    assert str(IOFailureError("disk full")) == "disk full"
