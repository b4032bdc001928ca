import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_task_lifecycle(client: AsyncClient):
    response = await client.post(
        "/api/v1/tasks", json={"title": "Call host about site induction", "priority": "high"}
    )
    assert response.status_code == 201
    task = response.json()
    assert task["status"] == "pending"
    assert task["completed_at"] is None

    response = await client.post(f"/api/v1/tasks/{task['id']}/complete")
    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["completed_at"] is not None

    assert (await client.delete(f"/api/v1/tasks/{task['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/tasks/{task['id']}")).status_code == 404


async def test_update_to_completed_stamps_completion(client: AsyncClient):
    task = (await client.post("/api/v1/tasks", json={"title": "Review logbook"})).json()
    response = await client.put(f"/api/v1/tasks/{task['id']}", json={"status": "completed"})
    assert response.status_code == 200
    assert response.json()["completed_at"] is not None


async def test_rejects_unknown_priority(client: AsyncClient):
    response = await client.post("/api/v1/tasks", json={"title": "Something", "priority": "whenever"})
    assert response.status_code == 422


async def test_update_cannot_clear_title(client: AsyncClient):
    task = (await client.post("/api/v1/tasks", json={"title": "Book site visit"})).json()
    response = await client.put(f"/api/v1/tasks/{task['id']}", json={"title": None, "priority": None})
    assert response.status_code == 400
    assert response.json()["errors"] == ["title cannot be null", "priority cannot be null"]
