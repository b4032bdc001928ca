from datetime import datetime

import pytest
from httpx import AsyncClient

from ....factories import make_host_employer

pytestmark = pytest.mark.asyncio

TODAY = datetime.utcnow().date()


async def _invoice(client: AsyncClient, host_id: int, **overrides) -> dict:
    payload = {
        "host_employer_id": host_id,
        "issue_date": TODAY.isoformat(),
        "due_date": TODAY.isoformat(),
        "subtotal": 1000.0,
        "status": "sent",
    }
    payload.update(overrides)
    response = await client.post("/api/v1/financial/invoices", json=payload)
    assert response.status_code == 201
    return response.json()


async def test_create_invoice_adds_gst_and_number(client: AsyncClient, session):
    host = await make_host_employer(session)
    invoice = await _invoice(client, host.id)

    assert invoice["tax"] == 100.0
    assert invoice["total"] == 1100.0
    assert invoice["balance"] == 1100.0
    assert invoice["invoice_number"] == f"INV-{TODAY:%Y%m}-0001"


async def test_duplicate_invoice_number(client: AsyncClient, session):
    host = await make_host_employer(session)
    await _invoice(client, host.id, invoice_number="INV-CUSTOM-1")
    response = await client.post(
        "/api/v1/financial/invoices",
        json={
            "host_employer_id": host.id,
            "invoice_number": "INV-CUSTOM-1",
            "issue_date": TODAY.isoformat(),
            "due_date": TODAY.isoformat(),
            "subtotal": 10,
        },
    )
    assert response.status_code == 409


async def test_invoice_for_unknown_host(client: AsyncClient):
    response = await client.post(
        "/api/v1/financial/invoices",
        json={"host_employer_id": 5, "issue_date": "2026-03-01", "due_date": "2026-03-31", "subtotal": 10},
    )
    assert response.status_code == 404


async def test_due_date_before_issue_date(client: AsyncClient, session):
    host = await make_host_employer(session)
    response = await client.post(
        "/api/v1/financial/invoices",
        json={"host_employer_id": host.id, "issue_date": "2026-03-31", "due_date": "2026-03-01", "subtotal": 10},
    )
    assert response.status_code == 422


async def test_payments_settle_invoice(client: AsyncClient, session):
    host = await make_host_employer(session)
    invoice = await _invoice(client, host.id)
    url = f"/api/v1/financial/invoices/{invoice['id']}/payments"

    partial = (await client.post(url, json={"amount": 600})).json()
    assert partial["status"] == "sent"
    assert partial["balance"] == 500.0

    settled = (await client.post(url, json={"amount": 500})).json()
    assert settled["status"] == "paid"
    assert settled["balance"] == 0.0


async def test_payment_on_draft_invoice(client: AsyncClient, session):
    host = await make_host_employer(session)
    invoice = await _invoice(client, host.id, status="draft")
    response = await client.post(f"/api/v1/financial/invoices/{invoice['id']}/payments", json={"amount": 10})
    assert response.status_code == 400
    assert response.json()["current_status"] == "draft"


async def test_summary(client: AsyncClient, session):
    host = await make_host_employer(session)
    invoice = await _invoice(client, host.id)
    await client.post(f"/api/v1/financial/invoices/{invoice['id']}/payments", json={"amount": 1100})
    await _invoice(client, host.id, subtotal=200.0)
    response = await client.post(
        "/api/v1/financial/expenses",
        json={"description": "Site PPE", "category": "equipment", "amount": 275.0, "expense_date": TODAY.isoformat()},
    )
    assert response.status_code == 201

    response = await client.get("/api/v1/financial/summary", params={"timeframe": "month"})
    assert response.status_code == 200
    summary = response.json()
    assert summary["timeframe"] == "month"
    assert summary["totalRevenue"] == 1100.0
    assert summary["totalExpenses"] == 275.0
    assert summary["netProfit"] == 825.0
    assert summary["profitMargin"] == 75.0
    assert summary["outstanding"] == 220.0
    assert len(summary["recentInvoices"]) == 2
    assert len(summary["recentExpenses"]) == 1


async def test_update_cannot_clear_due_date(client: AsyncClient, session):
    host = await make_host_employer(session)
    invoice = await _invoice(client, host.id)
    response = await client.put(f"/api/v1/financial/invoices/{invoice['id']}", json={"due_date": None})
    assert response.status_code == 400
    assert response.json()["errors"] == ["due_date cannot be null"]


async def test_invoice_numbers_restart_each_month(client: AsyncClient, session):
    host = await make_host_employer(session)
    january = [
        await _invoice(client, host.id, issue_date=f"2026-01-0{day}", due_date="2026-02-28") for day in (5, 6, 7)
    ]
    february = await _invoice(client, host.id, issue_date="2026-02-02", due_date="2026-03-02")
    next_february = await _invoice(client, host.id, issue_date="2026-02-20", due_date="2026-03-20")

    assert [i["invoice_number"] for i in january] == ["INV-202601-0001", "INV-202601-0002", "INV-202601-0003"]
    assert february["invoice_number"] == "INV-202602-0001"
    assert next_february["invoice_number"] == "INV-202602-0002"
