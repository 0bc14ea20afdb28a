"""Typed models for inventory items, search criteria and results."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field, field_validator

PLACEHOLDER_IMAGE = "/placeholder.svg?width=400&height=300&query={query}"

ListingScope = Literal["service_area", "named_city"]


class RateSchedule(BaseModel):
    label: str = ""
    num_days: int = 0
    cost: float = 0.0


class RentalRates(BaseModel):
    daily: Optional[float] = None
    weekly: Optional[float] = None
    monthly: Optional[float] = None


class ItemLocation(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class EquipmentItem(BaseModel):
    """A normalized inventory record ready for listing pages."""

    id: str
    primary_type: str = ""
    make: str = ""
    model: str = ""
    year: Optional[int] = None
    display_name: Optional[str] = None
    capacity: Optional[float] = None
    rental_rate: Union[float, RentalRates, None] = None
    rate_schedules: List[RateSchedule] = Field(default_factory=list)
    buy_it_now_enabled: bool = False
    buy_it_now_price: Optional[float] = None
    location: ItemLocation = Field(default_factory=ItemLocation)
    coordinates: Optional[Tuple[float, float]] = None
    buy_it_now_only: bool = False
    thumbnails: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    raw: Dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)

    model_config = {"frozen": True, "protected_namespaces": ()}

    @property
    def name(self) -> str:
        if self.display_name:
            return self.display_name
        return f"{self.make} {self.model}".strip()

    def rental_rates(self) -> RentalRates:
        """
        Resolve daily/weekly/monthly rates.

        A bare numeric rental_rate is a monthly rate. Rate schedules are applied
        on top: DAY/1 sets daily, WEEK/7 sets weekly, and a "MOS" label or a span
        of 28+ days sets monthly unless a monthly rate is already known and the
        span exceeds 31 days. Non-positive values become None.
        """
        daily = weekly = monthly = None
        if isinstance(self.rental_rate, RentalRates):
            daily = self.rental_rate.daily
            weekly = self.rental_rate.weekly
            monthly = self.rental_rate.monthly
        elif self.rental_rate is not None:
            monthly = self.rental_rate

        for schedule in self.rate_schedules:
            if schedule.label == "DAY" and schedule.num_days == 1:
                daily = schedule.cost
            elif schedule.label == "WEEK" and schedule.num_days == 7:
                weekly = schedule.cost
            elif "MOS" in schedule.label or schedule.num_days >= 28:
                if not monthly or schedule.num_days <= 31:
                    monthly = schedule.cost

        def positive(value: Optional[float]) -> Optional[float]:
            return value if value and value > 0 else None

        return RentalRates(daily=positive(daily), weekly=positive(weekly), monthly=positive(monthly))

    def has_rental_rate(self) -> bool:
        rates = self.rental_rates()
        return any(value is not None for value in (rates.daily, rates.weekly, rates.monthly))

    def image_urls(self, base_url: str) -> List[str]:
        """Absolute image URLs, thumbnails first, or a placeholder when none exist."""
        sources = self.thumbnails or self.images
        urls = []
        for src in sources:
            if not src:
                continue
            if src.startswith("http://") or src.startswith("https://"):
                urls.append(src)
            else:
                urls.append(f"{base_url.rstrip('/')}/{src.lstrip('/')}")
        if urls:
            return urls
        query = (self.primary_type or "equipment").replace(" ", "+")
        return [PLACEHOLDER_IMAGE.format(query=query)]

    def with_masked_location(self, city: str, state: str) -> "EquipmentItem":
        """Copy flagged buy-it-now-only, showing only the given city/state."""
        location = ItemLocation(city=city, state=state)
        return self.model_copy(update={"location": location, "buy_it_now_only": True})


class LocationFilter(BaseModel):
    lat: float
    lon: float
    radius_miles: float = Field(50.0, gt=0)


class SearchCriteria(BaseModel):
    """Query against the hosted inventory index."""

    primary_type: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    cat_class: Optional[str] = None
    min_capacity: Optional[float] = None
    max_capacity: Optional[float] = None
    location: Optional[LocationFilter] = None
    max_results: int = Field(50, ge=1, le=1000)
    buy_it_now_only: bool = False
    order_by: Optional[str] = None

    model_config = {"protected_namespaces": ()}

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value: Sequence[str] | str | None) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            candidates = value.split(",")
        else:
            candidates = [str(item) for item in value]
        return [item.strip() for item in candidates if item and item.strip()]

    def cache_key(self) -> str:
        return self.model_dump_json()


class InventoryResult(BaseModel):
    items: List[EquipmentItem] = Field(default_factory=list)
    total_count: int = 0
    error: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def failed(cls, error: str) -> "InventoryResult":
        return cls(items=[], total_count=0, error=error)
