from __future__ import annotations
from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    TRUNCATED_DATA = "TRUNCATED_DATA"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    UNSUPPORTED_CONVERSION_ROUTE = "UNSUPPORTED_CONVERSION_ROUTE"
    OUTPUT_CONFLICT = "OUTPUT_CONFLICT"
    IO_FAILURE = "IO_FAILURE"
