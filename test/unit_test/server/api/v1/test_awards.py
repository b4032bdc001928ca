import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

AWARD = {"code": "MA000020", "name": "Building and Construction General On-site Award 2020", "published_year": 2020}


async def _setup_award(client: AsyncClient) -> dict:
    assert (await client.post("/api/v1/awards", json=AWARD)).status_code == 201
    response = await client.post(
        "/api/v1/awards/MA000020/classifications",
        json={"code": "MA000020-APP", "name": "Apprentice", "level": 1, "is_apprentice": True},
    )
    assert response.status_code == 201
    return response.json()


async def test_award_crud(client: AsyncClient):
    response = await client.post("/api/v1/awards", json=AWARD)
    assert response.status_code == 201
    assert response.json()["is_active"] is True

    assert (await client.post("/api/v1/awards", json=AWARD)).status_code == 409

    response = await client.put("/api/v1/awards/MA000020", json={"is_active": False})
    assert response.json()["is_active"] is False

    assert (await client.delete("/api/v1/awards/MA000020")).status_code == 204
    assert (await client.get("/api/v1/awards/MA000020")).status_code == 404


async def test_award_code_format(client: AsyncClient):
    response = await client.post("/api/v1/awards", json={**AWARD, "code": "BUILDING"})
    assert response.status_code == 422


async def test_classification_rates(client: AsyncClient):
    classification = await _setup_award(client)
    url = f"/api/v1/awards/classifications/{classification['id']}/rates"

    response = await client.post(
        url, json={"hourly_rate": 19.8, "apprentice_year": 2, "is_adult": False, "effective_from": "2020-07-01"}
    )
    assert response.status_code == 201

    rates = (await client.get(url)).json()
    assert [r["hourly_rate"] for r in rates] == [19.8]

    response = await client.post(
        "/api/v1/awards/classifications/999/rates", json={"hourly_rate": 10, "effective_from": "2020-07-01"}
    )
    assert response.status_code == 404


async def test_apprentice_rate_prefers_local(client: AsyncClient):
    classification = await _setup_award(client)
    await client.post(
        f"/api/v1/awards/classifications/{classification['id']}/rates",
        json={"hourly_rate": 19.8, "apprentice_year": 2, "is_adult": False, "effective_from": "2020-07-01"},
    )

    local = (await client.get("/api/v1/awards/MA000020/apprentice-rate", params={"year": 2})).json()
    assert local == {
        "award_code": "MA000020",
        "rate": 19.8,
        "source": "local",
        "apprentice_year": 2,
        "classification_level": None,
    }

    calculated = (await client.get("/api/v1/awards/MA000020/apprentice-rate", params={"year": 3})).json()
    assert calculated["source"] == "calculated"
    assert calculated["rate"] > 0


async def test_classification_rate_falls_back_to_calculation(client: AsyncClient):
    response = await client.get("/api/v1/awards/MA000010/classifications/2/rate")
    assert response.status_code == 200
    assert response.json()["source"] == "calculated"
    assert response.json()["classification_level"] == 2


async def test_update_cannot_clear_name(client: AsyncClient):
    await client.post("/api/v1/awards", json=AWARD)
    response = await client.put("/api/v1/awards/MA000020", json={"name": None})
    assert response.status_code == 400
    assert response.json()["errors"] == ["name cannot be null"]
    assert (await client.get("/api/v1/awards/MA000020")).json()["name"] == AWARD["name"]
