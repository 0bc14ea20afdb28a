"""Normalize raw search-index documents into EquipmentItem models."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from inventory.geo import extract_coordinates
from inventory.models import EquipmentItem, ItemLocation, RateSchedule, RentalRates

logger = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    return int(number) if number is not None else None


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if isinstance(v, str) and v]


def _rental_rate(value: Any):
    if isinstance(value, Mapping):
        return RentalRates(
            daily=_as_float(value.get("daily")),
            weekly=_as_float(value.get("weekly")),
            monthly=_as_float(value.get("monthly")),
        )
    return _as_float(value)


def _rate_schedules(value: Any) -> List[RateSchedule]:
    if not isinstance(value, list):
        return []
    schedules = []
    for entry in value:
        if not isinstance(entry, Mapping):
            continue
        schedules.append(
            RateSchedule(
                label=str(entry.get("label") or ""),
                num_days=_as_int(entry.get("numDays")) or 0,
                cost=_as_float(entry.get("cost")) or 0.0,
            )
        )
    return schedules


def _location(raw: Mapping[str, Any]) -> ItemLocation:
    location = raw.get("location")
    if not isinstance(location, Mapping):
        location = {}
    address = location.get("address")
    if not isinstance(address, Mapping):
        address = {}
    return ItemLocation(
        city=location.get("city") or address.get("city"),
        state=location.get("state") or address.get("stateProvince"),
        name=location.get("name"),
        latitude=_as_float(location.get("latitude")),
        longitude=_as_float(location.get("longitude")),
    )


def normalize_item(raw: Mapping[str, Any]) -> Optional[EquipmentItem]:
    """Convert one index document; documents without an id are skipped."""
    item_id = raw.get("id") or raw.get("machineId")
    if not item_id:
        logger.debug("[Inventory] Skipping document without id")
        return None

    return EquipmentItem(
        id=str(item_id),
        primary_type=str(raw.get("primaryType") or ""),
        make=str(raw.get("make") or ""),
        model=str(raw.get("model") or ""),
        year=_as_int(raw.get("year")),
        display_name=raw.get("displayName") or None,
        capacity=_as_float(raw.get("capacity")),
        rental_rate=_rental_rate(raw.get("rentalRate")),
        rate_schedules=_rate_schedules(raw.get("rateSchedules")),
        buy_it_now_enabled=bool(raw.get("buyItNowEnabled")),
        buy_it_now_price=_as_float(raw.get("buyItNowPrice")),
        location=_location(raw),
        coordinates=extract_coordinates(raw),
        thumbnails=_string_list(raw.get("thumbnails")),
        images=_string_list(raw.get("images")),
        raw=dict(raw),
    )


def normalize_items(documents: Any) -> List[EquipmentItem]:
    if not isinstance(documents, list):
        return []
    items = []
    for doc in documents:
        if not isinstance(doc, Mapping):
            continue
        item = normalize_item(doc)
        if item is not None:
            items.append(item)
    return items


def item_to_public(item: EquipmentItem, image_base_url: str) -> Dict[str, Any]:
    """Serialize an item for API consumers, with derived rates and image URLs."""
    payload = item.model_dump(exclude={"coordinates"})
    payload["display_name"] = item.name
    payload["rates"] = item.rental_rates().model_dump()
    payload["image_urls"] = item.image_urls(image_base_url)
    payload["has_coordinates"] = item.coordinates is not None
    return payload
