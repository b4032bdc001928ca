import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

APPRENTICE = {
    "first_name": "Liam",
    "last_name": "Nguyen",
    "email": "Liam.Nguyen@Example.com",
    "phone": "0412 345 678",
    "trade": "Electrical",
}


async def test_create_and_get_apprentice(client: AsyncClient):
    response = await client.post("/api/v1/apprentices", json=APPRENTICE)
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "liam.nguyen@example.com"
    assert data["status"] == "applicant"
    assert data["apprenticeship_year"] == 1

    response = await client.get(f"/api/v1/apprentices/{data['id']}")
    assert response.status_code == 200
    assert response.json()["trade"] == "Electrical"


async def test_create_duplicate_email_conflicts(client: AsyncClient):
    assert (await client.post("/api/v1/apprentices", json=APPRENTICE)).status_code == 201
    response = await client.post("/api/v1/apprentices", json=APPRENTICE)
    assert response.status_code == 409


async def test_create_rejects_invalid_fields(client: AsyncClient):
    bad_phone = {**APPRENTICE, "phone": "12345"}
    assert (await client.post("/api/v1/apprentices", json=bad_phone)).status_code == 422

    bad_dates = {**APPRENTICE, "start_date": "2026-02-01", "end_date": "2026-01-01"}
    assert (await client.post("/api/v1/apprentices", json=bad_dates)).status_code == 422

    short_name = {**APPRENTICE, "first_name": "L"}
    assert (await client.post("/api/v1/apprentices", json=short_name)).status_code == 422


async def test_get_missing_apprentice(client: AsyncClient):
    response = await client.get("/api/v1/apprentices/999")
    assert response.status_code == 404


async def test_list_filters_by_status(client: AsyncClient):
    await client.post("/api/v1/apprentices", json=APPRENTICE)
    await client.post("/api/v1/apprentices", json={**APPRENTICE, "email": "other@example.com", "status": "active"})

    response = await client.get("/api/v1/apprentices", params={"status": "active"})
    assert response.status_code == 200
    assert [a["email"] for a in response.json()] == ["other@example.com"]


async def test_update_apprentice(client: AsyncClient):
    created = (await client.post("/api/v1/apprentices", json=APPRENTICE)).json()
    response = await client.put(f"/api/v1/apprentices/{created['id']}", json={"progress": 40})
    assert response.status_code == 200
    assert response.json()["progress"] == 40


async def test_status_transition_follows_lifecycle(client: AsyncClient):
    created = (await client.post("/api/v1/apprentices", json=APPRENTICE)).json()
    url = f"/api/v1/apprentices/{created['id']}/status"

    response = await client.patch(url, json={"status": "recruitment", "notes": "Interview booked"})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "recruitment"
    assert "applicant -> recruitment: Interview booked" in data["notes"]

    response = await client.patch(url, json={"status": "completed"})
    assert response.status_code == 400
    body = response.json()
    assert body["current_status"] == "recruitment"
    assert body["requested_status"] == "completed"


async def test_delete_apprentice(client: AsyncClient):
    created = (await client.post("/api/v1/apprentices", json=APPRENTICE)).json()
    assert (await client.delete(f"/api/v1/apprentices/{created['id']}")).status_code == 204
    assert (await client.delete(f"/api/v1/apprentices/{created['id']}")).status_code == 404


async def test_update_cannot_clear_required_field(client: AsyncClient):
    created = (await client.post("/api/v1/apprentices", json=APPRENTICE)).json()
    url = f"/api/v1/apprentices/{created['id']}"

    response = await client.put(url, json={"first_name": None, "trade": None})
    assert response.status_code == 400
    assert response.json()["errors"] == ["first_name cannot be null", "trade cannot be null"]

    # nullable columns can still be cleared
    response = await client.put(url, json={"phone": None})
    assert response.status_code == 200
    assert response.json()["phone"] is None
    assert (await client.get(url)).json()["first_name"] == "Liam"
