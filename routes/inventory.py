"""
Machine search endpoints backed by the inventory index.

Upstream failures never raise past the aggregator; they arrive as an
``InventoryResult`` carrying ``error`` and are answered with a 500 here.
A missing API key raises ConfigurationError, which main.py turns into
``{"error": "Service not configured"}``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from config import Settings
from dependencies import get_aggregator, get_settings
from exceptions import ResourceNotFoundError, StorefrontError, ValidationError
from inventory.aggregator import InventoryAggregator
from inventory.client import tokenize_keywords
from inventory.models import InventoryResult, LocationFilter, SearchCriteria
from inventory.normalizers import item_to_public

logger = logging.getLogger(__name__)
router = APIRouter(tags=["inventory"])


class SearchRequest(BaseModel):
    criteria: Optional[Dict[str, Any]] = None
    single: bool = False


def _machines_payload(result: InventoryResult, settings: Settings) -> Dict[str, Any]:
    return {
        "machines": [item_to_public(item, settings.image_base_url) for item in result.items],
        "totalCount": result.total_count,
    }


def _raise_for_error(result: InventoryResult) -> None:
    if result.error:
        raise StorefrontError(result.error, status_code=500)


async def _run_search(
    aggregator: InventoryAggregator,
    criteria: SearchCriteria,
    single: bool,
    settings: Settings,
) -> Dict[str, Any]:
    if single:
        result = await aggregator.search_single(criteria)
        _raise_for_error(result)
        if not result.items:
            raise ResourceNotFoundError("No machine found matching criteria")
        return item_to_public(result.items[0], settings.image_base_url)

    result = await aggregator.search(criteria)
    _raise_for_error(result)
    return _machines_payload(result, settings)


@router.get("/api/machine/search")
async def search_machines(
    primary_type: Optional[str] = Query(None, alias="type"),
    make: Optional[str] = None,
    model: Optional[str] = None,
    keywords: Optional[str] = None,
    cat_class: Optional[str] = Query(None, alias="catClass"),
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    radius: Optional[float] = Query(None, gt=0),
    min_capacity: Optional[float] = Query(None, alias="minCapacity"),
    max_capacity: Optional[float] = Query(None, alias="maxCapacity"),
    limit: int = Query(10, ge=1, le=1000),
    single: bool = False,
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    """Search machines; location defaults to the service area."""
    only_catalog_class = cat_class and not any([primary_type, make, model, keywords])
    if only_catalog_class:
        result = await aggregator.search_by_catalog_class(cat_class)
        _raise_for_error(result)
        if not result.items:
            raise ResourceNotFoundError(
                f"No machine found with catalog class {cat_class}",
                detail={"catClass": cat_class},
            )
        return item_to_public(result.items[0], settings.image_base_url)

    area = settings.service_area
    criteria = SearchCriteria(
        primary_type=primary_type,
        make=make,
        model=model,
        keywords=keywords,
        cat_class=cat_class,
        min_capacity=min_capacity,
        max_capacity=max_capacity,
        location=LocationFilter(
            lat=lat if lat is not None else area.lat,
            lon=lon if lon is not None else area.lon,
            radius_miles=radius or area.radius_miles,
        ),
        max_results=limit,
    )
    return await _run_search(aggregator, criteria, single, settings)


@router.post("/api/machine/search")
async def search_machines_post(
    request: SearchRequest,
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    """Search with a JSON body; a missing location defaults to the service area."""
    if not request.criteria:
        raise ValidationError("Search criteria is required in request body")

    try:
        criteria = SearchCriteria.model_validate(request.criteria)
    except ValueError as e:
        raise ValidationError("Invalid search criteria", detail={"reason": str(e)[:200]})
    if criteria.location is None:
        criteria = criteria.model_copy(update={"location": aggregator.service_area_filter()})
    return await _run_search(aggregator, criteria, request.single, settings)


@router.get("/api/machine/nearby")
async def nearby_machines(
    lat: float,
    lon: float,
    radius: float = Query(50.0, gt=0),
    q: Optional[str] = None,
    primary_type: Optional[str] = Query(None, alias="type"),
    make: Optional[str] = None,
    model: Optional[str] = None,
    limit: int = Query(50, ge=1, le=1000),
    rentals_only: bool = Query(False, alias="rentalsOnly"),
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    result = await aggregator.nearby(
        lat,
        lon,
        radius,
        keywords=tokenize_keywords(q or ""),
        primary_type=primary_type,
        make=make,
        model=model,
        limit=limit,
        rentals_only=rentals_only,
    )
    _raise_for_error(result)
    return _machines_payload(result, settings)


@router.get("/api/equipment/buynow")
async def buy_now_equipment(
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    """Local buy-it-now stock followed by masked out-of-area listings."""
    result = await aggregator.buy_now_listing()
    _raise_for_error(result)
    logger.info(f"[BuyNow] Returning {result.total_count} items")
    return _machines_payload(result, settings)
