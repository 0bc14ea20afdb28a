"""
Observability infrastructure for the storefront backend.

Provides:
- Structured logging with correlation IDs
- Sentry error tracking
- Prometheus metrics
"""

from .logging import get_logger, correlation_id_context, get_correlation_id
from .metrics import (
    metrics_registry,
    http_requests_total,
    http_request_duration_seconds,
    http_requests_in_progress,
    inventory_query_duration_seconds,
    inventory_query_errors_total,
    inventory_results_count,
    cache_hits_total,
    cache_misses_total,
    sitemap_urls_total,
)

__all__ = [
    "get_logger",
    "correlation_id_context",
    "get_correlation_id",
    "metrics_registry",
    "http_requests_total",
    "http_request_duration_seconds",
    "http_requests_in_progress",
    "inventory_query_duration_seconds",
    "inventory_query_errors_total",
    "inventory_results_count",
    "cache_hits_total",
    "cache_misses_total",
    "sitemap_urls_total",
]
