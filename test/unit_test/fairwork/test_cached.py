"""
Unit tests for the caching FairWork facade.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gto_workforce.core.cache import AsyncTTLCache
from gto_workforce.fairwork import CachedFairWorkClient, FairWorkAward, create_fairwork_client
from gto_workforce.fairwork.cached import build_cache_key
from gto_workforce.fairwork.models import RateValidationResult
from gto_workforce.server.core.config import FairWorkConfig

pytestmark = pytest.mark.asyncio


@pytest.fixture
def inner():
    client = MagicMock()
    client.list_awards = AsyncMock(return_value=[FairWorkAward(id="1", code="MA000003", name="Fast Food")])
    client.get_penalties = AsyncMock(return_value=[])
    client.validate_rate = AsyncMock(return_value=RateValidationResult(is_valid=True, minimum_rate=23.23))
    client.get_wage_allowances = AsyncMock(return_value=[{"name": "tool"}])
    client.get_expense_allowances = AsyncMock(return_value=[])
    client.aclose = AsyncMock()
    return client


class TestCachedFairWorkClient:
    async def test_second_call_served_from_cache(self, inner):
        cached = CachedFairWorkClient(inner, AsyncTTLCache())
        first = await cached.list_awards(search="food")
        second = await cached.list_awards(search="food")
        assert first == second
        inner.list_awards.assert_awaited_once_with(page=None, limit=None, search="food")

    async def test_different_arguments_use_different_keys(self, inner):
        cached = CachedFairWorkClient(inner, AsyncTTLCache())
        await cached.list_awards(search="food")
        await cached.list_awards(search="build")
        assert inner.list_awards.await_count == 2

    async def test_empty_results_not_cached(self, inner):
        cached = CachedFairWorkClient(inner, AsyncTTLCache())
        await cached.get_penalties("MA000003")
        await cached.get_penalties("MA000003")
        assert inner.get_penalties.await_count == 2

    async def test_validate_rate_never_cached(self, inner):
        cached = CachedFairWorkClient(inner, AsyncTTLCache())
        await cached.validate_rate("MA000003", 25.0)
        await cached.validate_rate("MA000003", 25.0)
        assert inner.validate_rate.await_count == 2

    async def test_allowances_combined(self, inner):
        cached = CachedFairWorkClient(inner, AsyncTTLCache())
        allowances = await cached.get_allowances("MA000003")
        assert allowances == {"wage_allowances": [{"name": "tool"}], "expense_allowances": []}

    async def test_clear_and_close(self, inner):
        cached = CachedFairWorkClient(inner, AsyncTTLCache())
        await cached.list_awards()
        assert cached.cache.size() == 1
        await cached.clear()
        assert cached.cache.size() == 0
        await cached.aclose()
        inner.aclose.assert_awaited_once()

    async def test_clear_reports_expired_entries(self, inner, caplog):
        cache = AsyncTTLCache()
        cached = CachedFairWorkClient(inner, cache)
        with patch("gto_workforce.core.cache.time.monotonic", return_value=0.0):
            await cached.list_awards()
        with patch("gto_workforce.core.cache.time.monotonic", return_value=10_000.0):
            with caplog.at_level("INFO", logger="gto_workforce.fairwork.cached"):
                await cached.clear()
        assert "0 live entries, 1 expired" in caplog.text

    async def test_cache_hit_is_logged_as_cached(self, inner):
        cached = CachedFairWorkClient(inner, AsyncTTLCache())
        with patch("gto_workforce.fairwork.cached.log_fairwork_call") as log_call:
            await cached.list_awards()
            log_call.assert_not_called()
            await cached.list_awards()
        log_call.assert_called_once_with("awards", True, 0.0, cached=True)


class TestCacheKey:
    def test_key_is_sorted_and_json_encoded(self):
        key = build_cache_key("pay_rates", {"award_code": "MA000003", "apprentice_year": 2})
        assert key == 'pay_rates:apprentice_year:2|award_code:"MA000003"'


class TestCreateFairWorkClient:
    def test_disabled_without_api_key(self):
        assert create_fairwork_client(FairWorkConfig(api_key=None)) is None

    async def test_enabled_with_api_key(self):
        client = create_fairwork_client(FairWorkConfig(api_key="secret", cache_max_size=10))
        assert isinstance(client, CachedFairWorkClient)
        assert client.cache.max_size == 10
        await client.aclose()
