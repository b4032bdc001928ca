from __future__ import annotations

import logging
import time
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from gto_workforce.core.monitoring import log_fairwork_call

from .errors import FairWorkApiError, FairWorkNotFoundError
from .models import (
    FairWorkAward,
    FairWorkClassification,
    FairWorkPayRate,
    RateValidationResult,
    ResultsPayloadDTO,
)

APPRENTICE_RATE_TYPE = "AP"
STANDARD_RATE_TYPE = "ST"

# Name fragments identifying the classification apprentice percentages are
# based on, per award.
REFERENCE_CLASSIFICATIONS: Dict[str, tuple[str, ...]] = {
    "MA000025": ("electrical worker grade 5",),
    "MA000036": ("plumbing and mechanical services tradesperson", "level 1"),
    "MA000003": ("cw/ecw 3", "level 3"),
}

ELECTRICAL_ADULT_PERCENTAGES = {1: 0.80, 2: 0.885, 3: 0.885, 4: 0.885}
ELECTRICAL_JUNIOR_YEAR12_PERCENTAGES = {1: 0.55, 2: 0.65, 3: 0.70, 4: 0.82}
ELECTRICAL_JUNIOR_PERCENTAGES = {1: 0.50, 2: 0.60, 3: 0.70, 4: 0.82}
GENERIC_PERCENTAGES = {1: 0.50, 2: 0.60, 3: 0.70, 4: 0.90}


def apprentice_percentage(award_code: str, year: int, *, is_adult: bool, has_completed_year12: bool) -> float:
    """Fraction of the reference rate paid to an apprentice in ``year``."""
    if award_code == "MA000025":
        if is_adult:
            return ELECTRICAL_ADULT_PERCENTAGES.get(year, 0.80)
        if has_completed_year12:
            return ELECTRICAL_JUNIOR_YEAR12_PERCENTAGES.get(year, 0.55)
        return ELECTRICAL_JUNIOR_PERCENTAGES.get(year, 0.50)
    return GENERIC_PERCENTAGES.get(year, 0.50)


def ordinal(num: int) -> str:
    if num % 10 == 1 and num % 100 != 11:
        return f"{num}st"
    if num % 10 == 2 and num % 100 != 12:
        return f"{num}nd"
    if num % 10 == 3 and num % 100 != 13:
        return f"{num}rd"
    return f"{num}th"


class FairWorkClient:
    """
    Async HTTP client for the FairWork modern award API.

    Responsibilities:
    - awards, classifications and pay rates lookups
    - allowances and penalties lookups
    - rate validation and base rate queries
    - apprentice rates, calculated from the reference classification when
      the API has no apprentice-specific rows

    List lookups log failures and return an empty list so that callers can
    fall back to local data. Single-object lookups raise `FairWorkApiError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        environment: str = "sandbox",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.environment = environment
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._owns_client = client is None
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json", "X-Environment": self.environment}
        if self.api_key:
            headers["Ocp-Apim-Subscription-Key"] = self.api_key
        return headers

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        clean_params = {k: str(v) for k, v in (params or {}).items() if v is not None}
        self._logger.debug("FairWorkClient: %s %s params=%s", method, url, clean_params)
        started = time.time()
        try:
            r = await self._client.request(
                method, url, headers=self._headers(), params=clean_params or None, json=json
            )
            if r.status_code == 404:
                raise FairWorkNotFoundError(path)
            r.raise_for_status()
        except FairWorkNotFoundError:
            log_fairwork_call(path, False, (time.time() - started) * 1000)
            raise
        except httpx.HTTPStatusError as e:
            log_fairwork_call(path, False, (time.time() - started) * 1000)
            raise FairWorkApiError(
                f"FairWork {method} {path} failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            log_fairwork_call(path, False, (time.time() - started) * 1000)
            raise FairWorkApiError(f"FairWork {method} {path} failed: {e}") from e
        log_fairwork_call(path, True, (time.time() - started) * 1000)
        return r.json()

    async def _get_results(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        data = await self._request("GET", path, params=params)
        return ResultsPayloadDTO.model_validate(data).results

    # ------------------------------------------------------------------
    # Awards and classifications
    # ------------------------------------------------------------------

    async def list_awards(
        self, *, page: Optional[int] = None, limit: Optional[int] = None, search: Optional[str] = None
    ) -> List[FairWorkAward]:
        try:
            items = await self._get_results("/awards", {"page": page, "limit": limit, "search": search})
        except FairWorkApiError as e:
            self._logger.error("Failed to fetch awards: %s", e)
            return []
        awards = [FairWorkAward.from_api(item) for item in items]
        self._logger.debug("FairWorkClient.list_awards: got %d awards", len(awards))
        return awards

    async def get_award(self, code: str) -> Optional[FairWorkAward]:
        try:
            data = await self._request("GET", f"/awards/{code}")
        except FairWorkNotFoundError:
            return None
        if isinstance(data, dict) and "results" not in data and data.get("code"):
            return FairWorkAward.from_api(data)
        items = ResultsPayloadDTO.model_validate(data).results
        return FairWorkAward.from_api(items[0]) if items else None

    async def get_classifications(self, award_code: str) -> List[FairWorkClassification]:
        try:
            items = await self._get_results(f"/awards/{award_code}/classifications")
        except FairWorkApiError as e:
            self._logger.error("Failed to fetch classifications for %s: %s", award_code, e)
            return []
        return [FairWorkClassification.from_api(award_code, item) for item in items]

    # ------------------------------------------------------------------
    # Pay rates
    # ------------------------------------------------------------------

    async def get_pay_rates(
        self,
        award_code: str,
        *,
        classification_level: Optional[int] = None,
        classification_fixed_id: Optional[int] = None,
        employee_rate_type_code: Optional[str] = None,
        operative_from: Optional[str] = None,
        operative_to: Optional[str] = None,
        apprentice_year: Optional[int] = None,
    ) -> List[FairWorkPayRate]:
        params = {
            "classification_level": classification_level,
            "classification_fixed_id": classification_fixed_id,
            "employee_rate_type_code": employee_rate_type_code,
            "operative_from": operative_from,
            "operative_to": operative_to,
            "apprentice_year": apprentice_year,
        }
        try:
            items = await self._get_results(f"/awards/{award_code}/pay-rates", params)
        except FairWorkApiError as e:
            self._logger.error("Failed to fetch pay rates for %s: %s", award_code, e)
            return []
        return [FairWorkPayRate.from_api(item) for item in items]

    async def get_apprentice_rates(
        self,
        award_code: str,
        year: Optional[int] = None,
        *,
        is_adult: bool = False,
        has_completed_year12: bool = False,
    ) -> List[FairWorkPayRate]:
        """Apprentice pay rates for an award, newest first.

        Falls back to percentages of the reference classification rate when
        the API has no apprentice rows for the award.
        """
        rates = await self.get_pay_rates(
            award_code, employee_rate_type_code=APPRENTICE_RATE_TYPE, apprentice_year=year
        )
        if year is not None:
            rates = [r for r in rates if r.apprentice_year in (None, year)]
        if rates:
            return sorted(rates, key=lambda r: r.effective_from or "", reverse=True)

        self._logger.info("No apprentice rates for %s year=%s, calculating from reference rate", award_code, year)
        return await self._calculate_apprentice_rates(
            award_code, year, is_adult=is_adult, has_completed_year12=has_completed_year12
        )

    async def _calculate_apprentice_rates(
        self, award_code: str, year: Optional[int], *, is_adult: bool, has_completed_year12: bool
    ) -> List[FairWorkPayRate]:
        fragments = REFERENCE_CLASSIFICATIONS.get(award_code)
        if not fragments:
            self._logger.warning("No reference classification known for award %s", award_code)
            return []

        classifications = await self.get_classifications(award_code)
        reference = next(
            (c for c in classifications if any(f in c.name.lower() for f in fragments) and c.fair_work_level_code),
            None,
        )
        if reference is None:
            self._logger.warning("Reference classification not found for award %s", award_code)
            return []

        reference_rates = await self.get_pay_rates(
            award_code,
            employee_rate_type_code=STANDARD_RATE_TYPE,
            classification_level=int(reference.fair_work_level_code),
        )
        if not reference_rates:
            self._logger.warning("Reference classification rates not found for award %s", award_code)
            return []
        base = sorted(reference_rates, key=lambda r: r.effective_from or "", reverse=True)[0]

        calculated: List[FairWorkPayRate] = []
        for y in [year] if year else [1, 2, 3, 4]:
            pct = apprentice_percentage(award_code, y, is_adult=is_adult, has_completed_year12=has_completed_year12)
            calculated.append(
                FairWorkPayRate(
                    id=f"calculated-apprentice-{award_code}-year{y}",
                    classification_id=base.classification_id,
                    classification=f"{ordinal(y)} Year Apprentice",
                    hourly_rate=round(base.hourly_rate * pct, 2),
                    effective_from=base.effective_from,
                    effective_to=base.effective_to,
                    is_apprentice_rate=True,
                    apprentice_year=y,
                    base_classification=f"Based on {base.classification or 'Reference Classification'}",
                    base_percentage=round(pct * 100, 2),
                )
            )
        return calculated

    # ------------------------------------------------------------------
    # Allowances and penalties
    # ------------------------------------------------------------------

    async def _get_raw_list(self, award_code: str, resource: str) -> List[Dict[str, Any]]:
        try:
            return await self._get_results(f"/awards/{award_code}/{resource}")
        except FairWorkApiError as e:
            self._logger.error("Failed to fetch %s for %s: %s", resource, award_code, e)
            return []

    async def get_wage_allowances(self, award_code: str) -> List[Dict[str, Any]]:
        return await self._get_raw_list(award_code, "wage-allowances")

    async def get_expense_allowances(self, award_code: str) -> List[Dict[str, Any]]:
        return await self._get_raw_list(award_code, "expense-allowances")

    async def get_penalties(self, award_code: str) -> List[Dict[str, Any]]:
        return await self._get_raw_list(award_code, "penalties")

    # ------------------------------------------------------------------
    # Rates
    # ------------------------------------------------------------------

    async def validate_rate(
        self,
        award_code: str,
        rate: float,
        *,
        classification_code: Optional[str] = None,
        on: Optional[str] = None,
    ) -> RateValidationResult:
        payload = {
            "award_code": award_code,
            "classification_code": classification_code,
            "rate": rate,
            "date": on or date.today().isoformat(),
        }
        try:
            data = await self._request("POST", "/rates/validate", json=payload)
        except FairWorkApiError as e:
            self._logger.error("Failed to validate rate for %s: %s", award_code, e)
            return RateValidationResult(
                is_valid=False, minimum_rate=0, message="Failed to validate rate due to API error"
            )
        return RateValidationResult.model_validate(data)

    async def get_base_rate(
        self, code: str, *, classification_code: Optional[str] = None, on: Optional[str] = None
    ) -> float:
        data = await self._request(
            "GET", f"/rates/{code}/base", params={"classification_code": classification_code, "date": on}
        )
        if not isinstance(data, dict) or "rate" not in data:
            raise FairWorkApiError("Unexpected response shape from base rate", details=data)
        return float(data["rate"])
