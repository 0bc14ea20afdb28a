"""
Client for the hosted inventory search index.

Builds OData filter expressions and Lucene keyword queries from
SearchCriteria, issues a single POST per query (no retries) and normalizes the
returned documents. Results are cached and outbound calls are rate limited
through collaborators injected at construction time.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Dict, List, Optional

import httpx

from exceptions import ConfigurationError, InventoryIndexError
from inventory.cache import QueryCache
from inventory.models import InventoryResult, SearchCriteria
from inventory.normalizers import normalize_items
from inventory.rate_limit import RateLimiter
from observability.metrics import (
    inventory_query_duration_seconds,
    inventory_query_errors_total,
    inventory_results_count,
)

logger = logging.getLogger(__name__)

BASE_FILTERS = (
    "(status eq 'Available' or status eq 'Onboarding')",
    "(requiresAdminApproval eq false)",
    "(approvalStatus eq 'Approved' or approvalStatus eq null)",
)
BUY_IT_NOW_FILTERS = (
    "(buyItNowEnabled eq true)",
    "(buyItNowPrice gt 0)",
)
MAX_TOP = 1000
CANDIDATE_WINDOW_FACTOR = 4


def odata_literal(value: str) -> str:
    """Quote a string for an OData filter; single quotes are doubled."""
    return "'" + str(value).replace("'", "''") + "'"


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_filter_clauses(criteria: SearchCriteria) -> List[str]:
    clauses = list(BASE_FILTERS)

    if criteria.primary_type:
        clauses.append(f"(primaryType eq {odata_literal(criteria.primary_type)})")
    if criteria.make:
        clauses.append(f"(make eq {odata_literal(criteria.make)})")
    if criteria.model:
        clauses.append(f"(model eq {odata_literal(criteria.model)})")
    if criteria.min_capacity is not None:
        clauses.append(f"(capacity ge {_format_number(criteria.min_capacity)})")
    if criteria.max_capacity is not None:
        clauses.append(f"(capacity le {_format_number(criteria.max_capacity)})")
    if criteria.buy_it_now_only:
        clauses.extend(BUY_IT_NOW_FILTERS)

    return clauses


def build_search_query(keywords: List[str]) -> str:
    """
    Expand keywords into a Lucene query with prefix and fuzzy variants.

    ``["contain*", "ex"]`` becomes ``(contain* OR contain~1) OR ex*``.
    """
    expanded = []
    for raw in keywords:
        token = str(raw).strip()
        base = token[:-1] if token.endswith("*") else token
        if not base:
            continue
        if len(base) >= 3:
            expanded.append(f"({base}* OR {base}~1)")
        else:
            expanded.append(f"{base}*")
    return " OR ".join(expanded)


def tokenize_keywords(text: str, max_tokens: int = 6) -> List[str]:
    """Split free text into prefix-search tokens (letters, digits and hyphens only)."""
    tokens = []
    for part in (text or "").split():
        token = re.sub(r"[^\w-]|_", "", part)
        if not token:
            continue
        tokens.append(f"{token}*" if len(token) >= 2 else token)
    return tokens[:max_tokens]


def geo_distance_order(lat: float, lon: float) -> str:
    return f"geo.distance(location/point, geography'POINT({lon} {lat})') asc"


def build_request_body(criteria: SearchCriteria) -> Dict[str, Any]:
    search = build_search_query(criteria.keywords)
    top = criteria.max_results
    order_by = criteria.order_by

    if criteria.location is not None:
        # Radius is enforced locally; ask for extra candidates ordered by distance.
        top = min(criteria.max_results * CANDIDATE_WINDOW_FACTOR, MAX_TOP)
        order_by = order_by or geo_distance_order(criteria.location.lat, criteria.location.lon)

    body: Dict[str, Any] = {
        "count": True,
        "filter": " and ".join(build_filter_clauses(criteria)),
        "search": search,
        "searchMode": "any" if search else "all",
        "top": top,
        "facets": [],
    }
    if search:
        body["queryType"] = "full"
    if order_by:
        body["orderby"] = order_by
    return body


class InventoryClient:
    """Queries the inventory index; one instance is shared per process."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        *,
        cache: Optional[QueryCache] = None,
        limiter: Optional[RateLimiter] = None,
        timeout_seconds: float = 10.0,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.cache = cache
        self.limiter = limiter
        self.timeout_seconds = timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def query(self, criteria: SearchCriteria, query_kind: str = "search") -> InventoryResult:
        if not self.configured:
            inventory_query_errors_total.labels(error_type="not_configured").inc()
            raise ConfigurationError(detail={"setting": "INVENTORY_API_KEY"})

        cache_key = criteria.cache_key()
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"[Inventory] cache hit kind={query_kind}")
                return cached

        body = build_request_body(criteria)
        logger.info(
            f"[Inventory] req kind={query_kind} type={criteria.primary_type or 'multi'} "
            f"top={body['top']} keywords={len(criteria.keywords)}"
        )

        if self.limiter is not None:
            await self.limiter.acquire()

        start = time.time()
        try:
            result = await self._post(body)
        except InventoryIndexError as e:
            error_type = "http_status" if e.status is not None else "invalid_response"
            inventory_query_errors_total.labels(error_type=error_type).inc()
            logger.error(f"[Inventory] {e.message}", extra={"detail": e.detail})
            return InventoryResult.failed(e.message)
        except httpx.HTTPError as e:
            inventory_query_errors_total.labels(error_type="network").inc()
            logger.error(f"[Inventory] request error: {type(e).__name__}: {e}")
            return InventoryResult.failed(str(e) or type(e).__name__)
        finally:
            inventory_query_duration_seconds.labels(query_kind=query_kind).observe(time.time() - start)

        inventory_results_count.labels(query_kind=query_kind).observe(len(result.items))
        if self.cache is not None:
            self.cache.set(cache_key, result)
        return result

    async def _post(self, body: Dict[str, Any]) -> InventoryResult:
        headers = {"api-key": self.api_key, "Content-Type": "application/json"}
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            response = await client.post(self.api_url, json=body, headers=headers)

        if not 200 <= response.status_code < 300:
            raise InventoryIndexError(
                f"Search failed with status {response.status_code}",
                detail={"body": (response.text or "")[:200]},
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            raise InventoryIndexError(
                "Invalid response from search index",
                detail={"body": (response.text or "")[:200]},
            )
        if not isinstance(data, dict):
            raise InventoryIndexError(
                "Invalid response from search index",
                detail={"payload_type": type(data).__name__},
            )

        items = normalize_items(data.get("value"))
        total = data.get("@odata.count")
        return InventoryResult(items=items, total_count=int(total) if total else len(items))

    async def fetch_buy_it_now_catalog(self, limit: int = MAX_TOP) -> InventoryResult:
        """Every buy-it-now item in the index, cheapest first."""
        criteria = SearchCriteria(
            buy_it_now_only=True,
            max_results=min(limit, MAX_TOP),
            order_by="buyItNowPrice asc",
        )
        return await self.query(criteria, query_kind="buy_it_now_catalog")
