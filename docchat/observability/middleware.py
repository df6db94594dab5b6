"""
Request observability middleware.

CorrelationMiddleware binds one correlation ID per request and echoes it
back in the response header. RequestLoggingMiddleware writes one access
line per request with its status and elapsed time.

Dependencies: fastapi, starlette, docchat.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from docchat.observability.correlation import clear_correlation_id, set_correlation_id
from docchat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind an inbound (or fresh) correlation ID for the request's duration."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access logging with timing.

    Streaming bodies are still being produced when call_next returns, so
    for `/chat` the elapsed time covers the response headers only.
    """

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{route} - unhandled",
                e,
                method=request.method,
                path=request.url.path,
                process_time_ms=_elapsed_ms(started),
            )
            raise

        log_with_context(
            logger,
            logging.INFO,
            f"{route} - {response.status_code}",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=_elapsed_ms(started),
        )
        return response
