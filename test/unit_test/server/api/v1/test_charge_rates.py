import pytest
from httpx import AsyncClient

from ....factories import make_apprentice, make_host_employer, make_placement

pytestmark = pytest.mark.asyncio


async def test_calculate_approve_and_apply(client: AsyncClient, session):
    apprentice = await make_apprentice(session)
    host = await make_host_employer(session)
    placement = await make_placement(session, apprentice.id, host.id, negotiated_rate=26.0)

    response = await client.post(
        "/api/v1/charge-rates", json={"apprentice_id": apprentice.id, "host_employer_id": host.id}
    )
    assert response.status_code == 201
    calculation = response.json()
    assert calculation["pay_rate"] == 26.0
    assert calculation["approved"] is False
    assert set(calculation["on_costs"]) >= {"superannuation", "workers_comp", "payroll_tax"}

    response = await client.post(f"/api/v1/charge-rates/{calculation['id']}/approve")
    assert response.status_code == 200
    assert response.json()["approved"] is True

    updated = (await client.get(f"/api/v1/placements/{placement.id}")).json()
    assert updated["charge_rate"] == calculation["charge_rate"]

    listed = (await client.get("/api/v1/charge-rates", params={"approved": True})).json()
    assert [c["id"] for c in listed] == [calculation["id"]]


async def test_calculate_for_unknown_host(client: AsyncClient, session):
    apprentice = await make_apprentice(session)
    response = await client.post("/api/v1/charge-rates", json={"apprentice_id": apprentice.id, "host_employer_id": 3})
    assert response.status_code == 404


async def test_generate_quote(client: AsyncClient, session):
    host = await make_host_employer(session)
    first = await make_apprentice(session)
    second = await make_apprentice(session, email="second@example.com", first_name="Tom", apprenticeship_year=1)

    response = await client.post(
        "/api/v1/charge-rates/quotes", json={"host_employer_id": host.id, "apprentice_ids": [first.id, second.id]}
    )
    assert response.status_code == 201
    quote = response.json()
    assert quote["status"] == "draft"
    assert quote["quote_number"].startswith("Q-")
    assert [item["description"] for item in quote["line_items"]] == [
        "Jane Smith - Year 2",
        "Tom Smith - Year 1",
    ]
    assert quote["total_amount"] == pytest.approx(sum(item["total"] for item in quote["line_items"]), abs=0.01)

    fetched = (await client.get(f"/api/v1/charge-rates/quotes/{quote['id']}")).json()
    assert len(fetched["line_items"]) == 2


async def test_quote_needs_apprentices(client: AsyncClient, session):
    host = await make_host_employer(session)
    response = await client.post("/api/v1/charge-rates/quotes", json={"host_employer_id": host.id})
    assert response.status_code == 400


async def test_quote_stores_unapproved_calculations(client: AsyncClient, session):
    host = await make_host_employer(session)
    apprentice = await make_apprentice(session)

    payload = {"host_employer_id": host.id, "apprentice_ids": [apprentice.id]}
    quote = (await client.post("/api/v1/charge-rates/quotes", json=payload)).json()

    calculations = (await client.get("/api/v1/charge-rates", params={"apprentice_id": apprentice.id})).json()
    assert len(calculations) == 1
    assert calculations[0]["approved"] is False
    assert calculations[0]["host_employer_id"] == host.id
    assert calculations[0]["charge_rate"] == pytest.approx(quote["line_items"][0]["rate"])
