import pytest
from httpx import AsyncClient

from ....factories import make_apprentice, make_host_employer

pytestmark = pytest.mark.asyncio


async def test_create_placement(client: AsyncClient, session):
    apprentice = await make_apprentice(session)
    host = await make_host_employer(session)

    response = await client.post(
        "/api/v1/placements",
        json={
            "apprentice_id": apprentice.id,
            "host_employer_id": host.id,
            "start_date": "2026-02-02",
            "negotiated_rate": 32.5,
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "active"
    assert data["apprentice_id"] == apprentice.id


async def test_create_placement_lists_every_broken_rule(client: AsyncClient, session):
    apprentice = await make_apprentice(session, status="applicant")
    host = await make_host_employer(session, status="inactive", compliance_status="pending")

    response = await client.post(
        "/api/v1/placements",
        json={"apprentice_id": apprentice.id, "host_employer_id": host.id, "start_date": "2026-02-02"},
    )
    assert response.status_code == 400
    assert response.json()["errors"] == [
        "Apprentice must be active to create placement",
        "Host employer must be active",
        "Host employer must be compliant",
    ]


async def test_create_placement_missing_apprentice(client: AsyncClient, session):
    host = await make_host_employer(session)
    response = await client.post(
        "/api/v1/placements",
        json={"apprentice_id": 42, "host_employer_id": host.id, "start_date": "2026-02-02"},
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Apprentice with ID 42 not found"


async def test_update_rejects_end_before_start(client: AsyncClient, session):
    apprentice = await make_apprentice(session)
    host = await make_host_employer(session)
    created = (
        await client.post(
            "/api/v1/placements",
            json={"apprentice_id": apprentice.id, "host_employer_id": host.id, "start_date": "2026-02-02"},
        )
    ).json()

    response = await client.put(f"/api/v1/placements/{created['id']}", json={"end_date": "2026-01-01"})
    assert response.status_code == 400

    response = await client.put(
        f"/api/v1/placements/{created['id']}", json={"end_date": "2026-12-18", "status": "completed"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "completed"


async def test_update_cannot_clear_status(client: AsyncClient, session):
    apprentice = await make_apprentice(session)
    host = await make_host_employer(session)
    placement = (
        await client.post(
            "/api/v1/placements",
            json={"apprentice_id": apprentice.id, "host_employer_id": host.id, "start_date": "2026-02-02"},
        )
    ).json()

    response = await client.put(f"/api/v1/placements/{placement['id']}", json={"status": None, "end_date": None})
    assert response.status_code == 400
    assert response.json()["errors"] == ["status cannot be null"]
