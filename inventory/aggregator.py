"""
Listing resolution: merges local and buy-it-now inventory per page context.

The pure functions here encode the radius/buy-it-now merge rules; the
InventoryAggregator class wires them to InventoryClient queries for the
concrete page types (home, type+city, make/model, topic pages, buy-now).
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from inventory.client import InventoryClient
from inventory.geo import DEFAULT_SERVICE_AREA, ServiceArea, haversine_miles, is_within_service_radius
from inventory.models import EquipmentItem, InventoryResult, LocationFilter, SearchCriteria
from inventory.policy import ListingContext, apply_location_masking_policy, mask_to_service_area
from seo.slugs import unslug
from seo.vocabulary import (
    ATTACHMENTS,
    EQUIPMENT_SPECS,
    GUIDE_TOPICS,
    INDUSTRIES,
    PRICING_TERMS,
    RECOMMENDED_BY_INDUSTRY,
    RECOMMENDED_BY_PROJECT,
    SERVICE_TYPES,
    brand_names,
    longest_prefix,
)

logger = logging.getLogger(__name__)

SECONDARY_SECTION_CAP = 6
BUY_NOW_GLOBAL_CAP = 25
CATALOG_CLASS_RESULTS = 5


# ---------------------------------------------------------------------------
# Pure merge rules
# ---------------------------------------------------------------------------

def dedupe_by_id(items: Iterable[EquipmentItem]) -> List[EquipmentItem]:
    seen = set()
    unique = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def filter_within_radius(items: Iterable[EquipmentItem], location: LocationFilter) -> List[EquipmentItem]:
    """Items whose coordinates lie within ``location``; coordinate-less items are dropped."""
    kept = []
    for item in items:
        if item.coordinates is None:
            continue
        lat, lon = item.coordinates
        if haversine_miles(location.lat, location.lon, lat, lon) <= location.radius_miles:
            kept.append(item)
    return kept


def resolve_listing(
    candidates: Iterable[EquipmentItem],
    context: ListingContext,
    area: ServiceArea = DEFAULT_SERVICE_AREA,
) -> List[EquipmentItem]:
    """Apply the radius test and masking policy to every candidate, in order."""
    listing = []
    for item in candidates:
        if item.coordinates is None:
            continue
        lat, lon = item.coordinates
        in_radius = is_within_service_radius(lat, lon, area)
        shown = apply_location_masking_policy(item, in_radius, context, area)
        if shown is not None:
            listing.append(shown)
    return listing


def build_buy_it_now_pool(
    candidates: Iterable[EquipmentItem],
    area: ServiceArea = DEFAULT_SERVICE_AREA,
) -> List[EquipmentItem]:
    """Buy-it-now items outside the radius, masked to the service area (topic pages)."""
    pool = []
    for item in candidates:
        if not item.buy_it_now_enabled or item.coordinates is None:
            continue
        lat, lon = item.coordinates
        if is_within_service_radius(lat, lon, area):
            continue
        pool.append(mask_to_service_area(item, area))
    return pool


def _normalize(text: Optional[str]) -> str:
    return (text or "").replace("-", " ").lower()


def filter_by_keywords(items: Iterable[EquipmentItem], keywords: Sequence[str]) -> List[EquipmentItem]:
    """
    Keep items whose type, make or display name contains any keyword.

    Matching is case-insensitive and treats hyphens as spaces. An empty keyword
    list keeps everything.
    """
    needles = [_normalize(k).strip() for k in keywords if k and k.strip()]
    if not needles:
        return list(items)

    matched = []
    for item in items:
        haystacks = (_normalize(item.primary_type), _normalize(item.make), _normalize(item.name))
        if any(needle in hay for needle in needles for hay in haystacks):
            matched.append(item)
    return matched


def exclude_shown(
    primary: Sequence[EquipmentItem],
    extra: Iterable[EquipmentItem],
    cap: int = SECONDARY_SECTION_CAP,
) -> List[EquipmentItem]:
    """Secondary section: items not already in ``primary``, at most ``cap``."""
    shown = {item.id for item in primary}
    section = []
    for item in extra:
        if item.id in shown:
            continue
        shown.add(item.id)
        section.append(item)
        if len(section) >= cap:
            break
    return section


def _strip_rental(slug: str) -> str:
    return slug[: -len("-rental")] if slug.endswith("-rental") else slug


def _remainder(slug: str, prefix: str) -> str:
    if not prefix:
        return slug
    return slug[len(prefix):].lstrip("-")


def topic_keywords(kind: str, category: Optional[str]) -> List[str]:
    """
    Recommended-equipment keywords used to narrow a topic page's pool.

    ``category`` is the resolver's category for the page (the SEO slug minus
    the location suffix). An empty result means no narrowing.
    """
    slug = (category or "").lower()
    if not slug:
        return []

    if kind == "equipment":
        return [slug]

    if kind == "service":
        equipment = _strip_rental(_remainder(slug, longest_prefix(slug, SERVICE_TYPES)))
        return [equipment] if equipment else []

    if kind == "industry":
        industry = longest_prefix(slug, INDUSTRIES) or slug.split("-equipment")[0]
        equipment = _strip_rental(_remainder(slug, industry)) if industry != slug else ""
        if equipment and equipment != "equipment":
            return [equipment]
        return list(RECOMMENDED_BY_INDUSTRY.get(industry, []))

    if kind == "project":
        project = slug.split("-equipment")[0]
        return list(RECOMMENDED_BY_PROJECT.get(project, []))

    if kind == "specification":
        specs = sorted({s for values in EQUIPMENT_SPECS.values() for s in values}, key=len, reverse=True)
        equipment = _strip_rental(_remainder(slug, longest_prefix(slug, specs)))
        return [equipment] if equipment else []

    if kind == "brand":
        brand = longest_prefix(slug, brand_names()) or slug.split("-")[0]
        return [brand]

    if kind == "attachment":
        attachment = _strip_rental(slug)
        if attachment.startswith("excavator-"):
            return ["excavator"]
        return [attachment] if attachment in ATTACHMENTS else []

    if kind == "compare":
        pair = _strip_rental(slug)
        if "-vs-" in pair:
            first, second = pair.split("-vs-", 1)
            return [first, second]
        return []

    if kind in ("pricing", "guide"):
        topics = PRICING_TERMS if kind == "pricing" else GUIDE_TOPICS
        for topic in topics:
            if slug.endswith("-" + topic):
                return [slug[: -len(topic) - 1]]
        return []

    return []


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

class InventoryAggregator:
    """Runs inventory queries for each page type and applies the merge rules."""

    def __init__(
        self,
        client: InventoryClient,
        area: ServiceArea = DEFAULT_SERVICE_AREA,
        listing_size: int = 50,
    ):
        self.client = client
        self.area = area
        self.listing_size = listing_size

    def service_area_filter(self) -> LocationFilter:
        return LocationFilter(lat=self.area.lat, lon=self.area.lon, radius_miles=self.area.radius_miles)

    async def search(self, criteria: SearchCriteria) -> InventoryResult:
        """Query the index and enforce the location radius locally."""
        result = await self.client.query(criteria)
        if result.error or criteria.location is None:
            return result

        items = filter_within_radius(result.items, criteria.location)[: criteria.max_results]
        return InventoryResult(items=items, total_count=len(items))

    async def search_single(self, criteria: SearchCriteria) -> InventoryResult:
        return await self.search(criteria.model_copy(update={"max_results": 1}))

    async def search_by_catalog_class(self, cat_class: str) -> InventoryResult:
        """Best match for a catalog class code inside the service area."""
        criteria = SearchCriteria(
            keywords=[cat_class],
            cat_class=cat_class,
            location=self.service_area_filter(),
            max_results=CATALOG_CLASS_RESULTS,
        )
        result = await self.search(criteria)
        if result.error or not result.items:
            return result

        needle = cat_class.lower()
        exact = next(
            (
                item
                for item in result.items
                if needle in item.model.lower() or needle in (item.display_name or "").lower()
            ),
            result.items[0],
        )
        return InventoryResult(items=[exact], total_count=1)

    async def nearby(
        self,
        lat: float,
        lon: float,
        radius_miles: float = 50.0,
        *,
        keywords: Optional[List[str]] = None,
        primary_type: Optional[str] = None,
        make: Optional[str] = None,
        model: Optional[str] = None,
        limit: int = 50,
        rentals_only: bool = False,
    ) -> InventoryResult:
        criteria = SearchCriteria(
            keywords=keywords or [],
            primary_type=primary_type,
            make=make,
            model=model,
            location=LocationFilter(lat=lat, lon=lon, radius_miles=radius_miles),
            max_results=limit,
        )
        result = await self.search(criteria)
        if result.error or not rentals_only:
            return result

        items = [item for item in result.items if item.has_rental_rate()]
        return InventoryResult(items=items, total_count=len(items))

    async def buy_it_now_pool(self) -> Tuple[List[EquipmentItem], Optional[str]]:
        catalog = await self.client.fetch_buy_it_now_catalog()
        return build_buy_it_now_pool(catalog.items, self.area), catalog.error

    async def _merged_listing(self, criteria: SearchCriteria, context: ListingContext) -> InventoryResult:
        """
        Listing for a context: local stock plus buy-it-now stock for the same criteria.

        Named-city pages skip the local query since they only show buy-it-now items.
        """
        candidates: List[EquipmentItem] = []
        errors: List[str] = []

        if context.scope == "service_area":
            local = await self.search(criteria.model_copy(update={"location": self.service_area_filter()}))
            candidates.extend(local.items)
            if local.error:
                errors.append(local.error)

        remote = await self.client.query(criteria.model_copy(update={"buy_it_now_only": True}))
        candidates.extend(remote.items)
        if remote.error:
            errors.append(remote.error)

        items = resolve_listing(dedupe_by_id(candidates), context, self.area)
        error = errors[0] if errors and not items else None
        return InventoryResult(items=items, total_count=len(items), error=error)

    async def home_listing(self) -> InventoryResult:
        criteria = SearchCriteria(max_results=self.listing_size)
        return await self._merged_listing(criteria, ListingContext.service_area(self.area))

    async def type_city_listing(self, type_slug: str, city_slug: str) -> InventoryResult:
        criteria = SearchCriteria(primary_type=unslug(type_slug), max_results=self.listing_size)
        context = ListingContext.for_city(city_slug, self.area)
        logger.info(f"[Aggregator] type={type_slug!r} city={city_slug!r} scope={context.scope}")
        return await self._merged_listing(criteria, context)

    async def make_model_listing(self, make: str, model: str, city_slug: Optional[str] = None) -> InventoryResult:
        criteria = SearchCriteria(make=unslug(make), model=unslug(model), max_results=self.listing_size)
        context = ListingContext.for_city(city_slug, self.area) if city_slug else ListingContext.service_area(self.area)
        return await self._merged_listing(criteria, context)

    async def topic_listing(
        self, kind: str, category: Optional[str]
    ) -> Tuple[InventoryResult, List[EquipmentItem]]:
        """
        Topic pages draw only from the masked global buy-it-now pool.

        Returns the narrowed primary section and a capped "more equipment in
        stock" section of pool items not already shown.
        """
        pool, error = await self.buy_it_now_pool()
        primary = filter_by_keywords(pool, topic_keywords(kind, category))
        more = exclude_shown(primary, pool)
        result = InventoryResult(items=primary, total_count=len(primary), error=error if not pool else None)
        return result, more

    async def buy_now_listing(self) -> InventoryResult:
        """Local buy-it-now stock, then up to 25 masked out-of-area items."""
        local = await self.search(
            SearchCriteria(
                buy_it_now_only=True,
                location=self.service_area_filter(),
                max_results=BUY_NOW_GLOBAL_CAP,
                order_by="buyItNowPrice asc",
            )
        )
        pool, error = await self.buy_it_now_pool()
        items = dedupe_by_id(list(local.items) + pool[:BUY_NOW_GLOBAL_CAP])
        return InventoryResult(items=items, total_count=len(items), error=(local.error or error) if not items else None)
