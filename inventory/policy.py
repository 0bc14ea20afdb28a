"""
Location masking policy for listing pages.

Out-of-area buy-it-now items are presented as if they sat in the city the
page is about. Two contexts exist:

- service_area: the business's own area (home, Lafayette type/model pages).
  In-radius items show as-is; out-of-radius buy-it-now items are masked to
  the service area city.
- named_city: a page for some other city. Only buy-it-now items are shown,
  all masked to that city.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from inventory.geo import DEFAULT_SERVICE_AREA, ServiceArea
from inventory.models import EquipmentItem, ListingScope
from seo.slugs import parse_city_slug


@dataclass(frozen=True)
class ListingContext:
    scope: ListingScope
    city: str
    state: str

    @classmethod
    def service_area(cls, area: ServiceArea = DEFAULT_SERVICE_AREA) -> "ListingContext":
        return cls(scope="service_area", city=area.city, state=area.state)

    @classmethod
    def for_city(cls, city_slug: str, area: ServiceArea = DEFAULT_SERVICE_AREA) -> "ListingContext":
        """
        Build a context from a ``city-st`` slug such as ``baton-rouge-la``.

        A slug naming the service area city and state maps to the service-area
        scope; the same city name in another state is a named city.
        A slug with no state suffix keeps the service area's state.
        """
        city, state = parse_city_slug(city_slug)
        state = state or area.state
        same_city = city.lower() == area.city.lower() and state.upper() == area.state.upper()
        if not city or same_city:
            return cls.service_area(area)
        return cls(scope="named_city", city=city, state=state)


def mask_to_service_area(item: EquipmentItem, area: ServiceArea = DEFAULT_SERVICE_AREA) -> EquipmentItem:
    return item.with_masked_location(area.city, area.state)


def apply_location_masking_policy(
    item: EquipmentItem,
    in_radius: bool,
    context: ListingContext,
    area: ServiceArea = DEFAULT_SERVICE_AREA,
) -> Optional[EquipmentItem]:
    """Return the item as it should be displayed in ``context``, or None to drop it."""
    if context.scope == "service_area":
        if in_radius:
            return item
        if item.buy_it_now_enabled:
            return mask_to_service_area(item, area)
        return None

    if item.buy_it_now_enabled:
        return item.with_masked_location(context.city, context.state)
    return None
