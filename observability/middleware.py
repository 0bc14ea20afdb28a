"""
FastAPI middleware for observability.

Provides:
- Request correlation ID injection
- Automatic metrics collection, labelled by route family
- Request/response logging
"""

import re
import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import get_logger, correlation_id_context
from .metrics import (
    http_requests_total,
    http_request_duration_seconds,
    http_requests_in_progress,
)

logger = get_logger(__name__)

SLOW_REQUEST_SECONDS = 2.0

# Fixed endpoints keep their own label; everything else is folded below.
KNOWN_ENDPOINTS = frozenset(
    {
        "/api/machine/search",
        "/api/machine/nearby",
        "/api/equipment/buynow",
        "/sitemap.xml",
        "/health",
        "/metrics",
    }
)

_PAGE_PATH = re.compile(r"^/api/pages/[^/]+/equipment-rental(/(type|make)/)?(.*)$")


def endpoint_label(path: str) -> str:
    """
    Route family for a request path, so metric label cardinality stays bounded.

    /api/pages/es/equipment-rental/type/excavator/scott-la
        -> /api/pages/{locale}/equipment-rental/type/{params}
    /api/pages/en/equipment-rental/brand/bobcat-rental-lafayette-la
        -> /api/pages/{locale}/equipment-rental/{slug}
    """
    if path in KNOWN_ENDPOINTS:
        return path

    match = _PAGE_PATH.match(path)
    if match:
        base = "/api/pages/{locale}/equipment-rental"
        if match.group(2):
            return f"{base}/{match.group(2)}/{{params}}"
        return f"{base}/{{slug}}" if match.group(3).strip("/") else base

    # Scanners and typos all share one series
    return "/{unmatched}"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """
    Middleware for automatic observability instrumentation.

    Adds:
    - Correlation ID to all requests (echoed as X-Request-ID)
    - RED metrics per route family
    - Request/response logging, health and metrics endpoints excluded
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get("X-Request-ID") or request.headers.get("X-Correlation-ID")

        with correlation_id_context(correlation_id) as req_id:
            request.state.correlation_id = req_id

            endpoint = endpoint_label(request.url.path)
            method = request.method
            quiet = self._is_health_check(request)

            http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
            start_time = time.time()

            try:
                if not quiet:
                    logger.info(
                        "Request started",
                        extra={
                            "method": method,
                            "path": request.url.path,
                            "client_host": request.client.host if request.client else None,
                        },
                    )

                response = await call_next(request)
                duration = time.time() - start_time

                http_requests_total.labels(
                    method=method,
                    endpoint=endpoint,
                    status=response.status_code,
                ).inc()
                http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

                response.headers["X-Request-ID"] = req_id

                if not quiet:
                    logger.info(
                        "Request completed",
                        extra={
                            "method": method,
                            "path": request.url.path,
                            "status_code": response.status_code,
                            "duration_seconds": round(duration, 3),
                        },
                    )

                # Page payloads fan out to several index queries
                if duration > SLOW_REQUEST_SECONDS and not quiet:
                    logger.warning(
                        "Slow request detected",
                        extra={
                            "method": method,
                            "endpoint": endpoint,
                            "duration_seconds": round(duration, 3),
                        },
                    )

                return response

            except Exception as exc:
                duration = time.time() - start_time

                http_requests_total.labels(method=method, endpoint=endpoint, status=500).inc()
                http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

                logger.error(
                    "Request failed",
                    extra={
                        "method": method,
                        "path": request.url.path,
                        "error_type": type(exc).__name__,
                        "error_message": str(exc),
                    },
                    exc_info=True,
                )
                # FastAPI's exception handlers take it from here
                raise

            finally:
                http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

    def _is_health_check(self, request: Request) -> bool:
        """Check if request is a health check endpoint."""
        return request.url.path in ("/health", "/metrics")
