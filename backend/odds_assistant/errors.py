"""
backend/odds_assistant/errors.py

Purpose:
    Application-wide exception handlers that keep every failure in the
    assistant's ``{"error": ...}`` envelope: 400 for invalid tool arguments,
    the status and detail of any HTTPException, and an opaque 500 otherwise.

Dependencies:
    - fastapi
    - starlette.exceptions
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("odds_assistant")


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report bad tool arguments as 400 ``{error}`` without leaking field paths."""
    fields = []
    for err in exc.errors():
        loc = err.get("loc", ())
        # Strip the "query" / "header" prefix for cleaner messages
        fields.append(str(loc[-1]) if loc else "unknown")
    logger.info("Validation error on %s %s: %s", request.method, request.url.path, fields)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid query parameters.", "fields": sorted(set(fields))},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) and exc.detail else "HTTP error"
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all: log the real error, return a safe generic message."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "An internal error occurred."})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
