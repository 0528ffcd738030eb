"""
Request logging middleware for the Transcriptorator web service.

Logs all incoming requests and responses with structured JSON format,
including latency and status codes, and records Prometheus request
metrics labelled by route template.
"""

from __future__ import annotations

import time

import structlog
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger(__name__)

http_requests_total = Counter(
    "archive_http_requests_total",
    "Total HTTP requests received",
    ["method", "endpoint", "status"],
)
http_request_duration_seconds = Histogram(
    "archive_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
)


def _endpoint_label(request: Request) -> str:
    # Route templates keep slugs out of metric labels.
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status, and latency."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration = time.monotonic() - start
        endpoint = _endpoint_label(request)
        http_requests_total.labels(
            method=request.method, endpoint=endpoint, status=str(response.status_code),
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method, endpoint=endpoint,
        ).observe(duration)
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return response
