import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient

from gto_workforce.fairwork import CachedFairWorkClient, FairWorkClient

pytestmark = pytest.mark.asyncio


async def test_unconfigured_returns_503(client: AsyncClient):
    response = await client.get("/api/v1/fairwork/awards")
    assert response.status_code == 503
    assert response.json()["detail"] == "FairWork API integration is not configured"


@pytest_asyncio.fixture
async def upstream(client: AsyncClient):
    """Install a FairWork client backed by canned responses keyed on path."""
    from gto_workforce.server.main import app

    routes = {}
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return routes.get(request.url.path, httpx.Response(404, json={}))

    fairwork = CachedFairWorkClient(
        FairWorkClient(
            "http://mock/api/v1", api_key="test-key", client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        )
    )
    app.state.fairwork = fairwork
    yield routes, seen
    await fairwork.aclose()


async def test_list_awards_is_cached(client: AsyncClient, upstream):
    routes, seen = upstream
    routes["/api/v1/awards"] = httpx.Response(
        200, json={"results": [{"award_fixed_id": 1, "code": "MA000003", "name": "Fast Food Industry Award 2020"}]}
    )

    first = await client.get("/api/v1/fairwork/awards")
    second = await client.get("/api/v1/fairwork/awards")

    assert first.status_code == 200
    assert first.json()[0]["code"] == "MA000003"
    assert second.json() == first.json()
    assert len(seen) == 1


async def test_unknown_award_is_404(client: AsyncClient, upstream):
    response = await client.get("/api/v1/fairwork/awards/MA000999")
    assert response.status_code == 404


async def test_apprentice_rates_filtered_by_year(client: AsyncClient, upstream):
    routes, _ = upstream
    routes["/api/v1/awards/MA000003/pay-rates"] = httpx.Response(
        200,
        json=[
            {"calculated_pay_rate_id": 1, "hourly_rate": 14, "apprentice_year": 1, "operative_from": "2024-07-01"},
            {"calculated_pay_rate_id": 2, "hourly_rate": 15, "apprentice_year": 1, "operative_from": "2025-07-01"},
            {"calculated_pay_rate_id": 3, "hourly_rate": 18, "apprentice_year": 2, "operative_from": "2025-07-01"},
        ],
    )

    response = await client.get("/api/v1/fairwork/awards/MA000003/apprentice-rates", params={"year": 1})
    assert response.status_code == 200
    assert [r["hourly_rate"] for r in response.json()] == [15.0, 14.0]


async def test_validate_rate_passthrough(client: AsyncClient, upstream):
    routes, seen = upstream
    routes["/api/v1/rates/validate"] = httpx.Response(
        200, json={"is_valid": True, "minimum_rate": 25.41, "difference": 4.59, "message": "OK"}
    )

    response = await client.post("/api/v1/fairwork/rates/validate", json={"award_code": "MA000020", "rate": 30.0})
    assert response.status_code == 200
    assert response.json()["difference"] == 4.59
    assert seen[-1].method == "POST"
