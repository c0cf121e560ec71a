# hexprobe/services/api/errors.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hexprobe.common.logging import get_logger
from hexprobe.domain.enums.error_kind import ErrorKind
from hexprobe.domain.errors import MediaError

logger = get_logger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.TRUNCATED_DATA: 422,
    ErrorKind.MALFORMED_INPUT: 422,
    ErrorKind.UNSUPPORTED_FORMAT: 415,
    ErrorKind.UNSUPPORTED_CONVERSION_ROUTE: 422,
    ErrorKind.OUTPUT_CONFLICT: 409,
    ErrorKind.IO_FAILURE: 500,
}


def _media_error(_: Request, exc: MediaError) -> JSONResponse:
    code = STATUS_BY_KIND.get(exc.kind, 500)
    if code >= 500:
        logger.error("request failed: %s", exc)
    return JSONResponse(
        status_code=code,
        content={"kind": str(exc.kind), "detail": exc.message, "path": str(exc.path) if exc.path else None},
    )


def _value_error(_: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MediaError, _media_error)
    app.add_exception_handler(ValueError, _value_error)
