"""
Centralized FastAPI dependencies.

Shared components (settings, inventory client with its cache and rate
limiter, aggregator, URL resolver) are built lazily once per process so the
cache and rate limiter are shared across requests. Tests swap them out via
``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends

from config import Settings
from inventory.aggregator import InventoryAggregator
from inventory.cache import QueryCache
from inventory.client import InventoryClient
from inventory.rate_limit import RateLimiter
from seo.resolver import UrlPatternResolver

_settings: Optional[Settings] = None
_client: Optional[InventoryClient] = None
_resolver: Optional[UrlPatternResolver] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_inventory_client(settings: Settings = Depends(get_settings)) -> InventoryClient:
    """Process-wide client; holds the query cache and the outbound rate limiter."""
    global _client
    if _client is None:
        _client = InventoryClient(
            settings.inventory_api_key,
            settings.inventory_api_url,
            cache=QueryCache(
                ttl_seconds=settings.inventory_cache_ttl_seconds,
                max_entries=settings.inventory_cache_max_entries,
            ),
            limiter=RateLimiter(max_per_second=settings.inventory_max_requests_per_second),
            timeout_seconds=settings.inventory_timeout_seconds,
        )
    return _client


def get_aggregator(
    client: InventoryClient = Depends(get_inventory_client),
    settings: Settings = Depends(get_settings),
) -> InventoryAggregator:
    return InventoryAggregator(client, settings.service_area)


def get_resolver(settings: Settings = Depends(get_settings)) -> UrlPatternResolver:
    global _resolver
    if _resolver is None:
        _resolver = UrlPatternResolver(seo_suffix=settings.service_area.seo_suffix)
    return _resolver


def reset_dependencies() -> None:
    """Drop the cached singletons (used when settings change, e.g. in tests)."""
    global _settings, _client, _resolver
    _settings = None
    _client = None
    _resolver = None
