"""
HTTP middleware for observability.

CorrelationMiddleware binds the X-Correlation-ID for the request and echoes
it back. RequestLoggingMiddleware writes one line when a request arrives and
one when its response headers are ready.

Dependencies: starlette
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from craftsman_rag.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the API. SSE responses are timed to their first byte."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        logger.info(
            f"{__name__}:dispatch - {route}",
            extra={"client_host": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{__name__}:dispatch - {route} raised {type(e).__name__}",
                extra={"process_time_ms": _elapsed_ms(started)},
            )
            raise

        logger.info(
            f"{__name__}:dispatch - {route} -> {response.status_code}",
            extra={
                "status_code": response.status_code,
                "media_type": response.headers.get("content-type"),
                "process_time_ms": _elapsed_ms(started),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind the caller's correlation id (or a new one) and return it in the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
