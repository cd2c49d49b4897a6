"""
HTTP middleware for request tracing.

CorrelationMiddleware binds X-Correlation-ID for the duration of a request;
RequestLoggingMiddleware writes one line when a request arrives and one
when it finishes.

Dependencies: starlette, dsa_assistant.observability.correlation
System role: Per-request log context
"""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from dsa_assistant.observability.correlation import (
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
USER_HEADER = "X-User-Id"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, caller, status and latency."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        user_id = request.headers.get(USER_HEADER, "-")

        logger.info(f"{__name__}:dispatch - {route} user={user_id}")
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{__name__}:dispatch - {route} raised {type(e).__name__} "
                f"after {_elapsed_ms(started)} ms"
            )
            raise

        logger.info(
            f"{__name__}:dispatch - {route} -> {response.status_code} "
            f"({_elapsed_ms(started)} ms)"
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind the request's correlation id and echo it on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
