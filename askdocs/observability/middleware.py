"""
Request observability middleware.

CorrelationMiddleware binds X-Correlation-ID (or a fresh UUID) to the
request context and echoes it on the response. The binding ends when the
response starts; streamed bodies re-bind it with bind_to_stream. RequestLoggingMiddleware
logs one line when a request arrives and one when its response starts.

Dependencies: starlette, askdocs.observability
System role: Request/response observability injection
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from askdocs.observability.correlation import (
    CORRELATION_HEADER,
    clear_correlation_id,
    set_correlation_id,
)
from askdocs.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log; for streamed answers the timing is time to first byte."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        log_with_context(
            logger,
            logging.INFO,
            route,
            client_host=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{route} - unhandled exception",
                e,
                process_time_ms=_elapsed_ms(started),
            )
            raise

        log_with_context(
            logger,
            logging.INFO,
            f"{route} - {response.status_code}",
            status_code=response.status_code,
            process_time_ms=_elapsed_ms(started),
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Correlation ID propagation."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
