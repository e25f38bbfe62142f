"""
graphmapper/api/middleware.py

Custom ASGI middleware for GraphMapper.

RequestLoggingMiddleware
    Every request carries a whole dataset in its body, so the log line
    records request and response sizes next to method, path, status and
    duration.  The duration is also returned to the caller in the
    ``X-Process-Time-Ms`` header.  Client errors log at warning, server
    errors at error.  Health checks and the OpenAPI assets are not logged.
"""
from __future__ import annotations

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger(__name__)

PROCESS_TIME_HEADER = "X-Process-Time-Ms"

_SILENT_PATHS: frozenset[str] = frozenset(
    {"/health", "/docs", "/redoc", "/openapi.json"}
)


def _size(value: str | None) -> int | None:
    return int(value) if value and value.isdigit() else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Time each request and log its payload sizes."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers[PROCESS_TIME_HEADER] = str(duration_ms)

        if request.url.path in _SILENT_PATHS:
            return response

        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info

        log(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            request_bytes=_size(request.headers.get("content-length")),
            response_bytes=_size(response.headers.get("content-length")),
            duration_ms=duration_ms,
        )
        return response
