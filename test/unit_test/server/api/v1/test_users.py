import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

USER = {
    "username": "fofficer",
    "email": "f.officer@gto.example",
    "first_name": "Fiona",
    "last_name": "Officer",
}


async def test_create_and_get_user(client: AsyncClient):
    response = await client.post("/api/v1/users", json=USER)
    assert response.status_code == 201
    user = response.json()
    assert user["role"] == "field_officer"

    response = await client.get(f"/api/v1/users/{user['id']}")
    assert response.status_code == 200
    assert response.json()["username"] == "fofficer"


async def test_duplicate_username(client: AsyncClient):
    await client.post("/api/v1/users", json=USER)
    response = await client.post("/api/v1/users", json={**USER, "email": "another@gto.example"})
    assert response.status_code == 409


async def test_unknown_role_rejected(client: AsyncClient):
    response = await client.post("/api/v1/users", json={**USER, "role": "superuser"})
    assert response.status_code == 422
