"""Great-circle distance, service-area radius checks and coordinate extraction."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

EARTH_RADIUS_MILES = 3959.0

Coordinates = Tuple[float, float]  # (lat, lon)


@dataclass(frozen=True)
class ServiceArea:
    """The business's home location and delivery radius."""

    lat: float
    lon: float
    radius_miles: float
    city: str
    state: str
    state_full_name: str = ""
    business_name: str = ""
    address: str = ""
    zip_code: str = ""
    phone: str = ""

    @property
    def city_slug(self) -> str:
        return f"{self.city}-{self.state}".lower().replace(" ", "-")

    @property
    def seo_suffix(self) -> str:
        return f"-{self.city_slug}"

    @property
    def display_location(self) -> str:
        return f"{self.city}, {self.state}"


DEFAULT_SERVICE_AREA = ServiceArea(
    lat=30.2241,
    lon=-92.0198,
    radius_miles=50.0,
    city="Lafayette",
    state="LA",
    state_full_name="Louisiana",
    business_name="Lafayette Equipment Rentals",
    address="2865 Ambassador Caffery Pkwy, Ste 135",
    zip_code="70506",
    phone="(337) 234-5678",
)


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in miles."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def is_within_service_radius(
    lat: float,
    lon: float,
    area: ServiceArea = DEFAULT_SERVICE_AREA,
    radius_miles: Optional[float] = None,
) -> bool:
    """True when (lat, lon) is inside the radius; the boundary counts as inside."""
    radius = area.radius_miles if radius_miles is None else radius_miles
    return haversine_miles(area.lat, area.lon, lat, lon) <= radius


def _to_finite_float(value: Any) -> Optional[float]:
    # bool is an int subclass; a True latitude is never meaningful
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _pair(lat: Any, lon: Any) -> Optional[Coordinates]:
    lat_f = _to_finite_float(lat)
    lon_f = _to_finite_float(lon)
    if lat_f is None or lon_f is None:
        return None
    return lat_f, lon_f


def _from_point(point: Any) -> Optional[Coordinates]:
    # GeoJSON order: [lon, lat]
    if not isinstance(point, Mapping):
        return None
    coords = point.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None
    return _pair(coords[1], coords[0])


def extract_coordinates(raw: Any) -> Optional[Coordinates]:
    """
    Find (lat, lon) in an upstream record.

    Shapes are tried in order and the first one that parses wins:
      1. top-level ``latitude`` / ``longitude``
      2. ``point.coordinates`` or ``location.point.coordinates`` ([lon, lat])
      3. ``location.latitude`` / ``location.longitude``
    """
    if not isinstance(raw, Mapping):
        return None

    coords = _pair(raw.get("latitude"), raw.get("longitude"))
    if coords:
        return coords

    location = raw.get("location")
    if not isinstance(location, Mapping):
        location = {}

    coords = _from_point(raw.get("point")) or _from_point(location.get("point"))
    if coords:
        return coords

    return _pair(location.get("latitude"), location.get("longitude"))
