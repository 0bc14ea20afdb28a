"""Tests for the inventory index client."""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
import httpx

from exceptions import ConfigurationError
from inventory.cache import QueryCache
from inventory.client import (
    InventoryClient,
    build_filter_clauses,
    build_request_body,
    build_search_query,
    odata_literal,
    tokenize_keywords,
)
from inventory.models import LocationFilter, SearchCriteria

API_URL = "https://search.example.com/indexes/machines/docs/search"


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {"value": [], "@odata.count": 0}
    response.text = text
    return response


class TestQueryBuilding:
    """Filter, search and body construction."""

    def test_odata_literal_escapes_quotes(self):
        assert odata_literal("O'Brien") == "'O''Brien'"

    def test_base_filters_always_present(self):
        clauses = build_filter_clauses(SearchCriteria())
        assert "(status eq 'Available' or status eq 'Onboarding')" in clauses
        assert "(requiresAdminApproval eq false)" in clauses
        assert "(approvalStatus eq 'Approved' or approvalStatus eq null)" in clauses

    def test_criteria_filters(self):
        clauses = build_filter_clauses(
            SearchCriteria(primary_type="Excavator", make="Caterpillar", min_capacity=5, max_capacity=7.5)
        )
        assert "(primaryType eq 'Excavator')" in clauses
        assert "(make eq 'Caterpillar')" in clauses
        assert "(capacity ge 5)" in clauses
        assert "(capacity le 7.5)" in clauses

    def test_buy_it_now_filters(self):
        clauses = build_filter_clauses(SearchCriteria(buy_it_now_only=True))
        assert "(buyItNowEnabled eq true)" in clauses
        assert "(buyItNowPrice gt 0)" in clauses

    def test_search_query_expansion(self):
        assert build_search_query(["contain*", "ex"]) == "(contain* OR contain~1) OR ex*"

    def test_empty_search_query(self):
        assert build_search_query([]) == ""

    def test_tokenize_keywords(self):
        assert tokenize_keywords("mini ex@cavator, a") == ["mini*", "excavator*", "a"]

    def test_tokenize_caps_tokens(self):
        assert len(tokenize_keywords("a b c d e f g h")) == 6

    def test_body_without_location(self):
        body = build_request_body(SearchCriteria(max_results=10))
        assert body["top"] == 10
        assert body["count"] is True
        assert body["searchMode"] == "all"
        assert "orderby" not in body
        assert "queryType" not in body

    def test_body_with_keywords_uses_full_query(self):
        body = build_request_body(SearchCriteria(keywords=["excavator"]))
        assert body["queryType"] == "full"
        assert body["searchMode"] == "any"

    def test_body_with_location_widens_window_and_orders_by_distance(self):
        criteria = SearchCriteria(location=LocationFilter(lat=30.2, lon=-92.0), max_results=300)
        body = build_request_body(criteria)
        assert body["top"] == 1000
        assert body["orderby"].startswith("geo.distance(location/point, geography'POINT(-92.0 30.2)')")

    def test_explicit_order_wins(self):
        criteria = SearchCriteria(location=LocationFilter(lat=30.2, lon=-92.0), order_by="buyItNowPrice asc")
        assert build_request_body(criteria)["orderby"] == "buyItNowPrice asc"


class TestInventoryClient:
    """Network behavior of InventoryClient."""

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_network(self):
        client = InventoryClient("", API_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            with pytest.raises(ConfigurationError) as exc_info:
                await client.query(SearchCriteria())

            mock_client_class.assert_not_called()
        assert exc_info.value.message == "Service not configured"

    @pytest.mark.asyncio
    async def test_query_posts_body_with_api_key(self):
        client = InventoryClient("secret", API_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.post.return_value = _response(
                payload={
                    "value": [
                        {"id": "m-1", "primaryType": "Excavator", "latitude": 30.3, "longitude": -92.1},
                        {"make": "no id"},
                    ],
                    "@odata.count": 7,
                }
            )

            result = await client.query(SearchCriteria(primary_type="Excavator"))

            call_args = mock_client.post.call_args
            assert call_args.args[0] == API_URL
            assert call_args.kwargs["headers"]["api-key"] == "secret"
            assert "(primaryType eq 'Excavator')" in call_args.kwargs["json"]["filter"]

        assert result.error is None
        assert [item.id for item in result.items] == ["m-1"]
        assert result.total_count == 7

    @pytest.mark.asyncio
    async def test_non_2xx_returns_empty_result_with_error(self):
        client = InventoryClient("secret", API_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.post.return_value = _response(status_code=503, text="unavailable")

            result = await client.query(SearchCriteria())

        assert result.items == []
        assert result.total_count == 0
        assert result.error == "Search failed with status 503"

    @pytest.mark.asyncio
    async def test_non_json_body_returns_empty_result_with_error(self):
        client = InventoryClient("secret", API_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            response = _response(text="<html>Bad Gateway</html>")
            response.json.side_effect = ValueError("Expecting value")
            mock_client.post.return_value = response

            result = await client.query(SearchCriteria())

        assert result.items == []
        assert result.error == "Invalid response from search index"

    @pytest.mark.asyncio
    async def test_non_object_payload_returns_empty_result_with_error(self):
        client = InventoryClient("secret", API_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.post.return_value = _response(payload=[{"id": "m-1"}])

            result = await client.query(SearchCriteria())

        assert result.items == []
        assert result.error == "Invalid response from search index"

    @pytest.mark.asyncio
    async def test_network_error_returns_empty_result(self):
        client = InventoryClient("secret", API_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.post.side_effect = httpx.ConnectError("connection refused")

            result = await client.query(SearchCriteria())

        assert result.items == []
        assert result.error == "connection refused"

    @pytest.mark.asyncio
    async def test_successful_results_are_cached(self):
        cache = QueryCache(ttl_seconds=300)
        client = InventoryClient("secret", API_URL, cache=cache)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.post.return_value = _response(payload={"value": [{"id": "m-1"}]})

            first = await client.query(SearchCriteria(make="Bobcat"))
            second = await client.query(SearchCriteria(make="Bobcat"))

            assert mock_client.post.call_count == 1
        assert first == second
        assert cache.hits == 1

    @pytest.mark.asyncio
    async def test_errors_are_not_cached(self):
        cache = QueryCache(ttl_seconds=300)
        client = InventoryClient("secret", API_URL, cache=cache)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.post.return_value = _response(status_code=500)

            await client.query(SearchCriteria())
            await client.query(SearchCriteria())

            assert mock_client.post.call_count == 2

    @pytest.mark.asyncio
    async def test_limiter_is_awaited_per_network_call(self):
        limiter = MagicMock()
        limiter.acquire = AsyncMock()
        client = InventoryClient("secret", API_URL, limiter=limiter)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.post.return_value = _response()

            await client.query(SearchCriteria())

        limiter.acquire.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_buy_it_now_catalog_query(self):
        client = InventoryClient("secret", API_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client_class.return_value.__aenter__.return_value = mock_client
            mock_client.post.return_value = _response()

            await client.fetch_buy_it_now_catalog()

            body = mock_client.post.call_args.kwargs["json"]
        assert body["top"] == 1000
        assert body["orderby"] == "buyItNowPrice asc"
        assert "(buyItNowEnabled eq true)" in body["filter"]
