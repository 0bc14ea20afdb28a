"""
Page payload endpoints consumed by the storefront renderer.

Each endpoint returns the resolved intent, its page metadata and the
machines to list. Structured routes (type / make / city) are declared before
the slug catch-all so they win matching.

Legacy slug shapes answer 308 with the canonical storefront path (for
example `/en/equipment-rental/make/caterpillar/320`) in both the Location
header and the `redirect_path` field. That path belongs to the renderer,
which maps it back onto these endpoints; it is not served here.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import Settings
from dependencies import get_aggregator, get_resolver, get_settings
from exceptions import ConfigurationError, ResourceNotFoundError
from inventory.aggregator import InventoryAggregator
from inventory.models import EquipmentItem, InventoryResult
from inventory.normalizers import item_to_public
from seo.metadata import build_metadata, page_path, structured_page_descriptor
from seo.resolver import IntentDescriptor, UrlPatternResolver

logger = logging.getLogger(__name__)
router = APIRouter(tags=["pages"])


def _page_payload(
    descriptor: IntentDescriptor,
    result: InventoryResult,
    settings: Settings,
    more: Optional[List[EquipmentItem]] = None,
) -> Dict[str, Any]:
    metadata = build_metadata(
        descriptor,
        descriptor.locale,
        area=settings.service_area,
        base_url=settings.site_base_url,
        locales=settings.locales,
    )
    if result.error:
        # Pages still render; the listing is simply empty
        logger.warning(f"[Pages] Inventory unavailable for {descriptor.slug_path!r}: {result.error}")
    return {
        "intent": descriptor.model_dump(),
        "metadata": metadata.model_dump(),
        "machines": [item_to_public(item, settings.image_base_url) for item in result.items],
        "totalCount": result.total_count,
        "moreInStock": [item_to_public(item, settings.image_base_url) for item in more or []],
    }


async def _listing_or_empty(coro) -> InventoryResult:
    """Await a listing; a missing API key degrades to an empty page."""
    try:
        return await coro
    except ConfigurationError as e:
        logger.warning(f"[Pages] {e.message}; rendering without inventory")
        return InventoryResult(items=[], total_count=0, error=e.message)


@router.get("/api/pages/{locale}/equipment-rental")
async def listing_page(
    locale: str,
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    descriptor = structured_page_descriptor("listing", locale)
    result = await _listing_or_empty(aggregator.home_listing())
    return _page_payload(descriptor, result, settings)


@router.get("/api/pages/{locale}/equipment-rental/type/{primary_type}")
async def type_page(
    locale: str,
    primary_type: str,
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    descriptor = structured_page_descriptor("typeCity", locale, primary_type=primary_type)
    result = await _listing_or_empty(
        aggregator.type_city_listing(primary_type, settings.service_area.city_slug)
    )
    return _page_payload(descriptor, result, settings)


@router.get("/api/pages/{locale}/equipment-rental/type/{primary_type}/{city}")
async def type_city_page(
    locale: str,
    primary_type: str,
    city: str,
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    descriptor = structured_page_descriptor("typeCity", locale, primary_type=primary_type, city=city)
    result = await _listing_or_empty(aggregator.type_city_listing(primary_type, city))
    return _page_payload(descriptor, result, settings)


@router.get("/api/pages/{locale}/equipment-rental/make/{make}/{model}")
async def make_model_page(
    locale: str,
    make: str,
    model: str,
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    descriptor = structured_page_descriptor("makeModel", locale, make=make, model=model)
    result = await _listing_or_empty(aggregator.make_model_listing(make, model))
    return _page_payload(descriptor, result, settings)


@router.get("/api/pages/{locale}/equipment-rental/make/{make}/{model}/{city}")
async def make_model_city_page(
    locale: str,
    make: str,
    model: str,
    city: str,
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    descriptor = structured_page_descriptor("makeModelCity", locale, make=make, model=model, city=city)
    result = await _listing_or_empty(aggregator.make_model_listing(make, model, city))
    return _page_payload(descriptor, result, settings)


@router.get("/api/pages/{locale}/equipment-rental/{slug:path}")
async def slug_page(
    locale: str,
    slug: str,
    aggregator: InventoryAggregator = Depends(get_aggregator),
    resolver: UrlPatternResolver = Depends(get_resolver),
    settings: Settings = Depends(get_settings),
):
    """Resolve an SEO or legacy slug path; legacy shapes redirect permanently."""
    descriptor = resolver.resolve(slug.split("/"), locale)

    if descriptor.is_unknown:
        raise ResourceNotFoundError("Page not found", detail={"path": page_path(descriptor, locale)})

    if descriptor.is_redirect:
        logger.info(f"[Pages] Redirecting legacy path {slug!r} -> {descriptor.redirect_path}")
        return JSONResponse(
            {"intent": descriptor.model_dump(mode="json"), "redirect_path": descriptor.redirect_path},
            status_code=308,
            headers={"Location": descriptor.redirect_path},
        )

    try:
        result, more = await aggregator.topic_listing(descriptor.kind, descriptor.category)
    except ConfigurationError as e:
        logger.warning(f"[Pages] {e.message}; rendering without inventory")
        result, more = InventoryResult(items=[], total_count=0, error=e.message), []
    return _page_payload(descriptor, result, settings, more)
