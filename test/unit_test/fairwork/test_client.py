"""
Unit tests for the FairWork API client.

Tests cover field mapping from upstream records, error handling for list
and single-object lookups, and the apprentice rate fallback calculation.
"""

import httpx
import pytest

from gto_workforce.fairwork import FairWorkApiError
from gto_workforce.fairwork.client import apprentice_percentage, ordinal

from .conftest import make_client

pytestmark = pytest.mark.asyncio

BASE = "/api/v1"


class TestRequestHeaders:
    async def test_subscription_key_and_environment_sent(self, fairwork_client, routes, requests_seen):
        routes[f"{BASE}/awards"] = httpx.Response(200, json={"results": []})
        await fairwork_client.list_awards()
        request = requests_seen[0]
        assert request.headers["Ocp-Apim-Subscription-Key"] == "test-key"
        assert request.headers["X-Environment"] == "sandbox"

    async def test_none_params_are_dropped(self, fairwork_client, routes, requests_seen):
        routes[f"{BASE}/awards"] = httpx.Response(200, json={"results": []})
        await fairwork_client.list_awards(page=2)
        assert dict(requests_seen[0].url.params) == {"page": "2"}


class TestAwards:
    """Test award lookups."""

    async def test_list_awards_maps_fields(self, fairwork_client, routes):
        routes[f"{BASE}/awards"] = httpx.Response(
            200,
            json={
                "results": [
                    {
                        "award_fixed_id": 1,
                        "code": "MA000003",
                        "name": "Fast Food Industry Award 2020",
                        "published_year": 2020,
                        "award_operative_from": "2020-07-01",
                    }
                ]
            },
        )
        awards = await fairwork_client.list_awards()
        assert len(awards) == 1
        assert awards[0].id == "1"
        assert awards[0].code == "MA000003"
        assert awards[0].effective_date == "2020-07-01"

    async def test_list_awards_accepts_bare_list(self, fairwork_client, routes):
        routes[f"{BASE}/awards"] = httpx.Response(200, json=[{"award_fixed_id": 2, "code": "MA000010", "name": "M"}])
        awards = await fairwork_client.list_awards()
        assert [a.code for a in awards] == ["MA000010"]

    async def test_list_awards_returns_empty_on_server_error(self, fairwork_client, routes):
        routes[f"{BASE}/awards"] = httpx.Response(500, text="boom")
        assert await fairwork_client.list_awards() == []

    async def test_get_award_returns_none_on_404(self, fairwork_client):
        assert await fairwork_client.get_award("MA999999") is None

    async def test_get_award_single_object(self, fairwork_client, routes):
        routes[f"{BASE}/awards/MA000020"] = httpx.Response(
            200, json={"award_fixed_id": 20, "code": "MA000020", "name": "Building"}
        )
        award = await fairwork_client.get_award("MA000020")
        assert award is not None
        assert award.name == "Building"

    async def test_get_award_raises_on_server_error(self, fairwork_client, routes):
        routes[f"{BASE}/awards/MA000020"] = httpx.Response(503, text="down")
        with pytest.raises(FairWorkApiError) as exc_info:
            await fairwork_client.get_award("MA000020")
        assert exc_info.value.status_code == 503

    async def test_classifications_map_fields(self, fairwork_client, routes):
        routes[f"{BASE}/awards/MA000003/classifications"] = httpx.Response(
            200,
            json={
                "results": [
                    {
                        "classification_fixed_id": 11,
                        "classification": "Level 3",
                        "classification_level": "3",
                        "clause_fixed_id": 303,
                    }
                ]
            },
        )
        classifications = await fairwork_client.get_classifications("MA000003")
        assert classifications[0].award_code == "MA000003"
        assert classifications[0].level == 3
        assert classifications[0].fair_work_level_code == "303"


class TestPayRates:
    async def test_pay_rates_map_fields(self, fairwork_client, routes):
        routes[f"{BASE}/awards/MA000003/pay-rates"] = httpx.Response(
            200,
            json={
                "results": [
                    {
                        "calculated_pay_rate_id": 5,
                        "classification": "1st Year Apprentice",
                        "hourly_rate": "14.50",
                        "employee_rate_type_code": "AP",
                        "apprentice_year": 1,
                        "operative_from": "2025-07-01",
                    }
                ]
            },
        )
        rates = await fairwork_client.get_pay_rates("MA000003")
        assert rates[0].hourly_rate == 14.5
        assert rates[0].is_apprentice_rate is True
        assert rates[0].apprentice_year == 1

    async def test_apprentice_rates_from_api_newest_first(self, fairwork_client, routes):
        routes[f"{BASE}/awards/MA000003/pay-rates"] = httpx.Response(
            200,
            json=[
                {"calculated_pay_rate_id": 1, "hourly_rate": 14, "apprentice_year": 1, "operative_from": "2024-07-01"},
                {"calculated_pay_rate_id": 2, "hourly_rate": 15, "apprentice_year": 1, "operative_from": "2025-07-01"},
                {"calculated_pay_rate_id": 3, "hourly_rate": 18, "apprentice_year": 2, "operative_from": "2025-07-01"},
            ],
        )
        rates = await fairwork_client.get_apprentice_rates("MA000003", 1)
        assert [r.id for r in rates] == ["2", "1"]

    async def test_apprentice_rates_calculated_from_reference(self):
        """Test the fallback when the API has no apprentice rows."""

        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path.endswith("/classifications"):
                return httpx.Response(
                    200,
                    json=[{"classification_fixed_id": 9, "classification": "Level 3", "clause_fixed_id": 3}],
                )
            if path.endswith("/pay-rates"):
                if request.url.params.get("employee_rate_type_code") == "ST":
                    return httpx.Response(
                        200,
                        json=[
                            {
                                "calculated_pay_rate_id": 1,
                                "classification_fixed_id": 9,
                                "classification": "Level 3",
                                "hourly_rate": 30.0,
                                "operative_from": "2025-07-01",
                            }
                        ],
                    )
                return httpx.Response(200, json=[])
            return httpx.Response(404)

        client = make_client(handler)
        rates = await client.get_apprentice_rates("MA000003")
        assert [r.apprentice_year for r in rates] == [1, 2, 3, 4]
        assert [r.hourly_rate for r in rates] == [15.0, 18.0, 21.0, 27.0]
        assert rates[0].classification == "1st Year Apprentice"
        assert rates[0].base_percentage == 50.0
        assert rates[0].is_apprentice_rate is True

    async def test_apprentice_rates_unknown_award_without_rows(self, fairwork_client, routes):
        routes[f"{BASE}/awards/MA999999/pay-rates"] = httpx.Response(200, json=[])
        assert await fairwork_client.get_apprentice_rates("MA999999") == []


class TestRateValidation:
    async def test_validate_rate(self, fairwork_client, routes, requests_seen):
        routes[f"{BASE}/rates/validate"] = httpx.Response(
            200, json={"is_valid": True, "minimum_rate": 23.23, "difference": 1.77}
        )
        result = await fairwork_client.validate_rate("MA000003", 25.0, on="2026-01-01")
        assert result.is_valid is True
        assert result.minimum_rate == 23.23
        assert requests_seen[0].method == "POST"

    async def test_validate_rate_api_error(self, fairwork_client, routes):
        routes[f"{BASE}/rates/validate"] = httpx.Response(500)
        result = await fairwork_client.validate_rate("MA000003", 25.0)
        assert result.is_valid is False
        assert result.minimum_rate == 0

    async def test_base_rate(self, fairwork_client, routes):
        routes[f"{BASE}/rates/MA000003/base"] = httpx.Response(200, json={"rate": "23.23"})
        assert await fairwork_client.get_base_rate("MA000003") == 23.23

    async def test_base_rate_unexpected_shape(self, fairwork_client, routes):
        routes[f"{BASE}/rates/MA000003/base"] = httpx.Response(200, json={"value": 1})
        with pytest.raises(FairWorkApiError):
            await fairwork_client.get_base_rate("MA000003")

    async def test_connection_error_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler)
        with pytest.raises(FairWorkApiError):
            await client.get_base_rate("MA000003")


class TestApprenticePercentages:
    def test_electrical_adult(self):
        assert apprentice_percentage("MA000025", 1, is_adult=True, has_completed_year12=False) == 0.80

    def test_electrical_junior_with_year12(self):
        assert apprentice_percentage("MA000025", 2, is_adult=False, has_completed_year12=True) == 0.65

    def test_electrical_junior(self):
        assert apprentice_percentage("MA000025", 1, is_adult=False, has_completed_year12=False) == 0.50

    def test_generic(self):
        assert apprentice_percentage("MA000003", 4, is_adult=False, has_completed_year12=False) == 0.90

    @pytest.mark.parametrize("num,expected", [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th")])
    def test_ordinal(self, num, expected):
        assert ordinal(num) == expected
