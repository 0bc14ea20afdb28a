import os
import sys
from typing import List, Optional

import pytest

# Add parent directory to path to allow importing the app modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from inventory.aggregator import InventoryAggregator
from inventory.geo import DEFAULT_SERVICE_AREA
from inventory.models import EquipmentItem, InventoryResult, ItemLocation, SearchCriteria

# Roughly 8 miles from the Lafayette service area center
NEAR = (30.30, -92.10)
# Houston, well outside the 50 mile radius
FAR = (29.76, -95.37)


def make_item(
    item_id: str,
    coords=NEAR,
    *,
    buy_it_now: bool = False,
    primary_type: str = "Excavator",
    make: str = "Caterpillar",
    model: str = "320",
    city: str = "Scott",
    state: str = "LA",
    **kwargs,
) -> EquipmentItem:
    return EquipmentItem(
        id=item_id,
        primary_type=primary_type,
        make=make,
        model=model,
        coordinates=coords,
        buy_it_now_enabled=buy_it_now,
        buy_it_now_price=25000.0 if buy_it_now else None,
        location=ItemLocation(city=city, state=state, name=f"Yard {item_id}"),
        **kwargs,
    )


class FakeInventoryClient:
    """Stands in for InventoryClient; answers by criteria shape and records calls."""

    def __init__(
        self,
        items: Optional[List[EquipmentItem]] = None,
        *,
        error: Optional[str] = None,
    ):
        self.items = list(items or [])
        self.error = error
        self.calls: List[SearchCriteria] = []

    async def query(self, criteria: SearchCriteria, query_kind: str = "search") -> InventoryResult:
        self.calls.append(criteria)
        if self.error:
            return InventoryResult.failed(self.error)
        items = self.items
        if criteria.buy_it_now_only:
            items = [i for i in items if i.buy_it_now_enabled]
        if criteria.primary_type:
            items = [i for i in items if i.primary_type.lower() == criteria.primary_type.lower()]
        if criteria.make:
            items = [i for i in items if i.make.lower() == criteria.make.lower()]
        return InventoryResult(items=items, total_count=len(items))

    async def fetch_buy_it_now_catalog(self, limit: int = 1000) -> InventoryResult:
        return await self.query(SearchCriteria(buy_it_now_only=True, max_results=limit), "buy_it_now_catalog")


@pytest.fixture
def area():
    return DEFAULT_SERVICE_AREA


@pytest.fixture
def scenario_items():
    """One of each: local rental, local buy-now, remote buy-now, remote rental."""
    return [
        make_item("A", NEAR),
        make_item("B", NEAR, buy_it_now=True),
        make_item("C", FAR, buy_it_now=True, city="Houston", state="TX"),
        make_item("D", FAR, city="Houston", state="TX"),
    ]


@pytest.fixture
def fake_client(scenario_items):
    return FakeInventoryClient(scenario_items)


@pytest.fixture
def aggregator(fake_client):
    return InventoryAggregator(fake_client)
