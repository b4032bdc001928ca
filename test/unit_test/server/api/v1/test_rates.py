import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient

from gto_workforce.fairwork import CachedFairWorkClient, FairWorkClient

pytestmark = pytest.mark.asyncio


async def test_calculate_with_defaults(client: AsyncClient):
    response = await client.post("/api/v1/rates/calculate", json={"pay_rate": 25.0})
    assert response.status_code == 200
    data = response.json()
    assert data["pay_rate"] == 25.0
    assert data["total_hours"] == 1976.0
    assert data["margin"] == 0.15
    assert data["charge_rate"] > data["cost_per_hour"] > 25.0


async def test_calculate_custom_margin(client: AsyncClient):
    base = (await client.post("/api/v1/rates/calculate", json={"pay_rate": 25.0})).json()
    richer = (await client.post("/api/v1/rates/calculate", json={"pay_rate": 25.0, "custom_margin": 0.3})).json()
    assert richer["margin"] == 0.3
    assert richer["charge_rate"] > base["charge_rate"]


async def test_calculate_rejects_non_positive_pay_rate(client: AsyncClient):
    response = await client.post("/api/v1/rates/calculate", json={"pay_rate": 0})
    assert response.status_code == 400


async def test_validate_below_local_minimum(client: AsyncClient):
    response = await client.post("/api/v1/rates/validate", json={"award_code": "MA000020", "rate": 20.0})
    assert response.status_code == 200
    assert response.json() == {
        "is_valid": False,
        "minimum_rate": 25.41,
        "message": "Rate 20.00 is below the MA000020 minimum of 25.41",
        "source": "local",
    }


async def test_validate_unknown_award_uses_national_minimum(client: AsyncClient):
    response = await client.post("/api/v1/rates/validate", json={"award_code": "MA999999", "rate": 22.0})
    data = response.json()
    assert data["is_valid"] is True
    assert data["minimum_rate"] == 21.38
    assert data["source"] == "local"


class TestValidateWithFairWork:
    @pytest_asyncio.fixture
    async def answers(self, client: AsyncClient):
        from gto_workforce.server.main import app

        answers = {}

        def handler(request: httpx.Request) -> httpx.Response:
            return answers.get(request.url.path, httpx.Response(404, json={}))

        fairwork = CachedFairWorkClient(
            FairWorkClient(
                "http://mock/api/v1", api_key="test-key", client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
            )
        )
        app.state.fairwork = fairwork
        yield answers
        await fairwork.aclose()

    async def test_fairwork_answer_wins(self, client: AsyncClient, answers):
        answers["/api/v1/rates/validate"] = httpx.Response(
            200, json={"is_valid": False, "minimum_rate": 27.1, "difference": -0.9, "message": "Below minimum"}
        )
        response = await client.post("/api/v1/rates/validate", json={"award_code": "MA000020", "rate": 26.2})
        assert response.json() == {
            "is_valid": False,
            "minimum_rate": 27.1,
            "message": "Below minimum",
            "source": "fairwork",
        }

    async def test_fairwork_failure_keeps_local_result(self, client: AsyncClient, answers):
        answers["/api/v1/rates/validate"] = httpx.Response(500, json={})
        response = await client.post("/api/v1/rates/validate", json={"award_code": "MA000020", "rate": 26.2})
        data = response.json()
        assert data["is_valid"] is True
        assert data["source"] == "local"

    async def test_local_failure_skips_fairwork(self, client: AsyncClient, answers):
        response = await client.post("/api/v1/rates/validate", json={"award_code": "MA000020", "rate": 10.0})
        assert response.json()["source"] == "local"
        assert response.json()["is_valid"] is False
