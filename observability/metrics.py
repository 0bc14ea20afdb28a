"""
Prometheus metrics for the storefront backend.

RED metrics (Rate, Errors, Duration) for HTTP and the inventory index,
plus cache and sitemap counters.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    REGISTRY,
)

metrics_registry = REGISTRY

# HTTP Metrics (RED - Rate, Errors, Duration)
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=metrics_registry,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=metrics_registry,
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests in progress",
    ["method", "endpoint"],
    registry=metrics_registry,
)

# Inventory index metrics
inventory_query_duration_seconds = Histogram(
    "inventory_query_duration_seconds",
    "Inventory search index query duration in seconds",
    ["query_kind"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
    registry=metrics_registry,
)

inventory_query_errors_total = Counter(
    "inventory_query_errors_total",
    "Total inventory search index errors",
    ["error_type"],  # http_status, network, not_configured
    registry=metrics_registry,
)

inventory_results_count = Histogram(
    "inventory_results_count",
    "Number of items returned per inventory query",
    ["query_kind"],
    buckets=[0, 1, 5, 10, 25, 50, 100, 500, 1000],
    registry=metrics_registry,
)

cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_type"],
    registry=metrics_registry,
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_type"],
    registry=metrics_registry,
)

sitemap_urls_total = Gauge(
    "sitemap_urls_total",
    "Number of URLs in the most recently generated sitemap",
    registry=metrics_registry,
)
