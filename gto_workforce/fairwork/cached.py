"""Caching facade over `FairWorkClient`.

Award data changes a few times a year, so responses are kept in an in-process
TTL cache. Keys are built from the endpoint name and the sorted call
arguments, e.g. ``pay_rates:apprentice_year:2|award_code:"MA000003"``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from gto_workforce.core.cache import AsyncTTLCache
from gto_workforce.core.monitoring import log_fairwork_call

from .client import FairWorkClient
from .models import FairWorkAward, FairWorkClassification, FairWorkPayRate, RateValidationResult

TTL_BASE_RATE = 3600
TTL_CLASSIFICATIONS = 7200
TTL_ALLOWANCES = 3600
TTL_PENALTIES = 3600
TTL_PAY_RATES = 3600
TTL_AWARDS = 7200

logger = logging.getLogger(__name__)


def build_cache_key(endpoint: str, params: Dict[str, Any]) -> str:
    parts = [f"{k}:{json.dumps(v, sort_keys=True, default=str)}" for k, v in sorted(params.items())]
    return f"{endpoint}:" + "|".join(parts)


def _worth_caching(value: Any) -> bool:
    return value is not None and value != []


class CachedFairWorkClient:
    """Same read API as `FairWorkClient`, memoised per endpoint and arguments.

    Empty list results are not cached so a transient upstream failure is
    retried on the next call.
    """

    def __init__(self, client: FairWorkClient, cache: Optional[AsyncTTLCache] = None) -> None:
        self.client = client
        self.cache = cache or AsyncTTLCache(default_ttl=TTL_PAY_RATES)

    async def _cached(self, endpoint: str, params: Dict[str, Any], ttl: float, fetch: Callable[[], Awaitable[Any]]):
        fetched = False

        async def load() -> Any:
            nonlocal fetched
            fetched = True
            return await fetch()

        value = await self.cache.get_or_set(build_cache_key(endpoint, params), load, ttl=ttl, cache_if=_worth_caching)
        if not fetched:
            log_fairwork_call(endpoint, True, 0.0, cached=True)
        return value

    async def list_awards(
        self, *, page: Optional[int] = None, limit: Optional[int] = None, search: Optional[str] = None
    ) -> List[FairWorkAward]:
        return await self._cached(
            "awards",
            {"page": page, "limit": limit, "search": search},
            TTL_AWARDS,
            lambda: self.client.list_awards(page=page, limit=limit, search=search),
        )

    async def get_award(self, code: str) -> Optional[FairWorkAward]:
        return await self._cached("award", {"code": code}, TTL_AWARDS, lambda: self.client.get_award(code))

    async def get_classifications(self, award_code: str) -> List[FairWorkClassification]:
        return await self._cached(
            "classifications",
            {"award_code": award_code},
            TTL_CLASSIFICATIONS,
            lambda: self.client.get_classifications(award_code),
        )

    async def get_pay_rates(self, award_code: str, **filters: Any) -> List[FairWorkPayRate]:
        return await self._cached(
            "pay_rates",
            {"award_code": award_code, **filters},
            TTL_PAY_RATES,
            lambda: self.client.get_pay_rates(award_code, **filters),
        )

    async def get_apprentice_rates(
        self,
        award_code: str,
        year: Optional[int] = None,
        *,
        is_adult: bool = False,
        has_completed_year12: bool = False,
    ) -> List[FairWorkPayRate]:
        return await self._cached(
            "apprentice_rates",
            {
                "award_code": award_code,
                "year": year,
                "is_adult": is_adult,
                "has_completed_year12": has_completed_year12,
            },
            TTL_PAY_RATES,
            lambda: self.client.get_apprentice_rates(
                award_code, year, is_adult=is_adult, has_completed_year12=has_completed_year12
            ),
        )

    async def get_allowances(self, award_code: str) -> Dict[str, List[Dict[str, Any]]]:
        async def fetch() -> Dict[str, List[Dict[str, Any]]]:
            return {
                "wage_allowances": await self.client.get_wage_allowances(award_code),
                "expense_allowances": await self.client.get_expense_allowances(award_code),
            }

        return await self._cached("allowances", {"award_code": award_code}, TTL_ALLOWANCES, fetch)

    async def get_penalties(self, award_code: str) -> List[Dict[str, Any]]:
        return await self._cached(
            "penalties", {"award_code": award_code}, TTL_PENALTIES, lambda: self.client.get_penalties(award_code)
        )

    async def get_base_rate(
        self, code: str, *, classification_code: Optional[str] = None, on: Optional[str] = None
    ) -> float:
        return await self._cached(
            "base_rate",
            {"code": code, "classification_code": classification_code, "date": on},
            TTL_BASE_RATE,
            lambda: self.client.get_base_rate(code, classification_code=classification_code, on=on),
        )

    async def validate_rate(
        self,
        award_code: str,
        rate: float,
        *,
        classification_code: Optional[str] = None,
        on: Optional[str] = None,
    ) -> RateValidationResult:
        # Validation results depend on the submitted rate; not cached.
        return await self.client.validate_rate(award_code, rate, classification_code=classification_code, on=on)

    async def clear(self) -> None:
        expired = await self.cache.evict_expired()
        logger.info("Clearing FairWork cache (%d live entries, %d expired)", self.cache.size(), expired)
        await self.cache.clear()

    async def aclose(self) -> None:
        await self.client.aclose()
