"""
backend/odds_assistant/middleware/logging.py

Purpose:
    Per-request JSON access log for the tool endpoints. Each request gets a
    short id, exposed as ``X-Request-ID`` and on ``request.state`` so tool
    handlers can tag their own failure logs with it.

Dependencies:
    - starlette
"""

import hashlib
import json
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("odds_assistant")

REQUEST_ID_HEADER = "X-Request-ID"


def request_id_of(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


def _operation_id(request: Request) -> str | None:
    # Set by the router once a route matched; absent for 404s.
    return getattr(request.scope.get("route"), "operation_id", None)


def _client_ip_hash(request: Request) -> str | None:
    if not request.client:
        return None
    return hashlib.sha256((request.client.host or "").encode()).hexdigest()[:12]


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """One JSON line per tool call, keyed by request id and operationId."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        started = time.perf_counter()

        response: Response = await call_next(request)

        entry = {
            "request_id": request_id,
            "operation_id": _operation_id(request),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            "client_ip_hash": _client_ip_hash(request),
        }
        logger.log(logging.WARNING if response.status_code >= 400 else logging.INFO, json.dumps(entry))

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
