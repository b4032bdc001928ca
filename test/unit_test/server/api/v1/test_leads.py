import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

LEAD = {
    "id": "web-101",
    "first_name": "Priya",
    "last_name": "Patel",
    "email": "Priya@Example.com",
    "company": "Patel Plumbing",
    "service_interest": ["apprentice-hire"],
}


async def test_lead_created_adds_follow_up_task(client: AsyncClient):
    response = await client.post("/api/v1/leads/webhook", json={"event_type": "lead_created", "lead_data": LEAD})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Lead created"
    assert body["lead"]["email"] == "priya@example.com"
    assert body["lead"]["status"] == "new"
    assert body["lead"]["source"] == "website"

    tasks = (await client.get("/api/v1/tasks")).json()
    assert [t["title"] for t in tasks] == ["Follow up with Priya Patel"]
    assert tasks[0]["related_to"] == "lead"
    assert tasks[0]["related_id"] == body["lead"]["id"]


async def test_repeated_create_is_idempotent(client: AsyncClient):
    await client.post("/api/v1/leads/webhook", json={"event_type": "lead_created", "lead_data": LEAD})
    response = await client.post("/api/v1/leads/webhook", json={"event_type": "lead_created", "lead_data": LEAD})
    assert response.status_code == 200
    assert response.json()["message"] == "Lead already exists"


async def test_lead_updated_and_deleted(client: AsyncClient):
    await client.post("/api/v1/leads/webhook", json={"event_type": "lead_created", "lead_data": LEAD})

    response = await client.post(
        "/api/v1/leads/webhook",
        json={"event_type": "lead_updated", "lead_data": {"id": "web-101", "status": "contacted"}},
    )
    assert response.status_code == 200
    assert response.json()["lead"]["status"] == "contacted"

    response = await client.post(
        "/api/v1/leads/webhook",
        json={"event_type": "lead_deleted", "lead_data": {"email": "priya@example.com"}},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Lead archived"
    assert response.json()["lead"]["status"] == "archived"


async def test_missing_fields(client: AsyncClient):
    response = await client.post("/api/v1/leads/webhook", json={"lead_data": LEAD})
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields: event_type, lead_data"


async def test_incomplete_new_lead(client: AsyncClient):
    response = await client.post(
        "/api/v1/leads/webhook", json={"event_type": "lead_created", "lead_data": {"first_name": "Priya"}}
    )
    assert response.status_code == 400
    assert response.json()["errors"] == ["last_name is required", "email is required"]


async def test_unsupported_event(client: AsyncClient):
    response = await client.post("/api/v1/leads/webhook", json={"event_type": "lead_merged", "lead_data": LEAD})
    assert response.status_code == 400
    assert "lead_created" in response.json()["supported_events"]


async def test_update_unknown_lead(client: AsyncClient):
    response = await client.post(
        "/api/v1/leads/webhook", json={"event_type": "lead_updated", "lead_data": {"id": "nope"}}
    )
    assert response.status_code == 404
