"""
Runtime configuration loaded from environment variables.

Values are read once into an immutable Settings object at process start
(see main.py) and handed to the components that need them.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple

from inventory.geo import DEFAULT_SERVICE_AREA, ServiceArea

DEFAULT_INVENTORY_API_URL = (
    "https://kimber-rubbl-search.search.windows.net/indexes/machines/docs/search"
    "?api-version=2020-06-30"
)
DEFAULT_IMAGE_BASE_URL = "https://kimberrubblstg.blob.core.windows.net"
DEFAULT_SITE_BASE_URL = "https://www.lafayetteequipmentrental.com"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _locales_env(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    locales = tuple(part.strip() for part in raw.split(",") if part.strip())
    return locales or default


def load_service_area() -> ServiceArea:
    """Build the service area, letting SERVICE_AREA_* variables override the defaults."""
    base = DEFAULT_SERVICE_AREA
    return ServiceArea(
        lat=_float_env("SERVICE_AREA_LAT", base.lat),
        lon=_float_env("SERVICE_AREA_LON", base.lon),
        radius_miles=_float_env("SERVICE_AREA_RADIUS_MILES", base.radius_miles),
        city=os.getenv("SERVICE_AREA_CITY", base.city),
        state=os.getenv("SERVICE_AREA_STATE", base.state),
        state_full_name=os.getenv("SERVICE_AREA_STATE_NAME", base.state_full_name),
        business_name=os.getenv("BUSINESS_NAME", base.business_name),
        address=base.address,
        zip_code=base.zip_code,
        phone=os.getenv("BUSINESS_PHONE", base.phone),
    )


@dataclass(frozen=True)
class Settings:
    inventory_api_key: str = ""
    inventory_api_url: str = DEFAULT_INVENTORY_API_URL
    inventory_timeout_seconds: float = 10.0
    inventory_cache_ttl_seconds: float = 300.0
    inventory_cache_max_entries: int = 1000
    inventory_max_requests_per_second: float = 2.0
    image_base_url: str = DEFAULT_IMAGE_BASE_URL
    site_base_url: str = DEFAULT_SITE_BASE_URL
    locales: Tuple[str, ...] = ("en", "es")
    default_locale: str = "en"
    service_area: ServiceArea = field(default=DEFAULT_SERVICE_AREA)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read settings from the environment.

        Environment variables:
        - INVENTORY_API_KEY: search index key (empty -> "Service not configured")
        - INVENTORY_API_URL: search index endpoint
        - INVENTORY_TIMEOUT_SECONDS, INVENTORY_CACHE_TTL_SECONDS,
          INVENTORY_CACHE_MAX_ENTRIES,
          INVENTORY_MAX_REQUESTS_PER_SECOND: client tuning
        - IMAGE_BASE_URL, SITE_BASE_URL: URL prefixes
        - SUPPORTED_LOCALES: comma separated, first entry is the default
        - SERVICE_AREA_*: service area overrides
        """
        locales = _locales_env("SUPPORTED_LOCALES", ("en", "es"))
        return cls(
            inventory_api_key=os.getenv("INVENTORY_API_KEY", "").strip(),
            inventory_api_url=os.getenv("INVENTORY_API_URL", DEFAULT_INVENTORY_API_URL),
            inventory_timeout_seconds=_float_env("INVENTORY_TIMEOUT_SECONDS", 10.0),
            inventory_cache_ttl_seconds=_float_env("INVENTORY_CACHE_TTL_SECONDS", 300.0),
            inventory_cache_max_entries=int(_float_env("INVENTORY_CACHE_MAX_ENTRIES", 1000)),
            inventory_max_requests_per_second=_float_env("INVENTORY_MAX_REQUESTS_PER_SECOND", 2.0),
            image_base_url=os.getenv("IMAGE_BASE_URL", DEFAULT_IMAGE_BASE_URL).rstrip("/"),
            site_base_url=os.getenv("SITE_BASE_URL", DEFAULT_SITE_BASE_URL).rstrip("/"),
            locales=locales,
            default_locale=locales[0],
            service_area=load_service_area(),
        )
