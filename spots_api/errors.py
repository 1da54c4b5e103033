"""
API errors and their HTTP mapping.

Every error response has the same body::

    {"ok": false, "error": "<message>"}
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SpotsAPIError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(SpotsAPIError):
    status_code = 400


class NotAuthorized(SpotsAPIError):
    status_code = 401

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(message)


class UpstreamError(SpotsAPIError):
    """The Supabase store or one of its procedures failed."""

    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": message},
    )


def describe_validation_errors(errors) -> str:
    """Render the first pydantic error as ``"<field>: <msg>"``."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    # FastAPI prefixes locations with "body" / "query"; drop the source.
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query")]
    msg = first.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def spots_error_handler(request: Request, exc: SpotsAPIError) -> JSONResponse:
    if exc.status_code < 500:
        logger.debug("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(400, describe_validation_errors(exc.errors()))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all so unexpected failures keep the JSON error body."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(500, "Internal Server Error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SpotsAPIError, spots_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
