"""
Private Notes Backend — Request Logging Middleware
===================================================

What:  One access-log line per HTTP request on `private_notes.access`.
How:   Times the downstream call, then logs method, path, status, duration,
       request id and, once the auth gate has run, the caller's user id.

Never logged: request bodies (note text is private) and the Authorization
header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from private_notes.middleware.request_id import request_id_var

logger = logging.getLogger("private_notes.access")

UNLOGGED_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _caller(request: Request) -> str:
    identity = getattr(request.state, "identity", None)
    return identity.id if identity is not None else "-"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log for the notes API.

    5xx → ERROR, 4xx → WARNING, otherwise INFO. Health probes are not logged.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s raised after %.1fms [%s]",
                request.method,
                request.url.path,
                (time.perf_counter() - started) * 1000,
                request_id_var.get(""),
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        status = response.status_code
        user_id = _caller(request)
        rid = request_id_var.get("")

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] user=%s",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            rid,
            user_id,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
                "user_id": user_id,
            },
        )
        return response
