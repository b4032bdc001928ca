from datetime import datetime

import pytest
from httpx import AsyncClient

from ....factories import make_apprentice

pytestmark = pytest.mark.asyncio

YEAR = datetime.utcnow().year


async def _create(client: AsyncClient, **overrides) -> dict:
    payload = {"claim_type": "commencement", "amount_requested": 1500, "apprentice_name": "Jane Smith"}
    payload.update(overrides)
    response = await client.post("/api/v1/claims", json=payload)
    assert response.status_code == 201
    return response.json()


async def test_claim_numbers_are_sequential_per_type(client: AsyncClient):
    first = await _create(client)
    second = await _create(client)
    other = await _create(client, claim_type="retention")

    assert first["claim_number"] == f"COM-{YEAR}-0001"
    assert second["claim_number"] == f"COM-{YEAR}-0002"
    assert other["claim_number"] == f"RET-{YEAR}-0001"
    assert first["status"] == "draft"


async def test_create_takes_apprentice_name(client: AsyncClient, session):
    apprentice = await make_apprentice(session)
    claim = await _create(client, apprentice_id=apprentice.id, apprentice_name=None)
    assert claim["apprentice_name"] == "Jane Smith"


async def test_create_for_unknown_apprentice(client: AsyncClient):
    response = await client.post(
        "/api/v1/claims", json={"claim_type": "completion", "amount_requested": 100, "apprentice_id": 9}
    )
    assert response.status_code == 404


async def test_full_lifecycle_records_history(client: AsyncClient):
    claim = await _create(client)
    url = f"/api/v1/claims/{claim['id']}/status"

    submitted = (await client.patch(url, json={"status": "submitted", "performed_by": "payroll"})).json()
    assert submitted["submission_date"] is not None

    await client.patch(url, json={"status": "in-review"})
    approved = (
        await client.patch(url, json={"status": "approved", "reviewer": "Dept", "amount_approved": 1200})
    ).json()
    assert approved["reviewer"] == "Dept"
    assert approved["amount_approved"] == 1200
    assert approved["review_date"] is not None

    paid = (await client.patch(url, json={"status": "paid", "payment_reference": "EFT-778"})).json()
    assert paid["payment_reference"] == "EFT-778"
    assert paid["payment_date"] is not None

    response = await client.get(f"/api/v1/claims/{claim['id']}")
    assert response.status_code == 200
    history = response.json()["history"]
    assert [h["action"] for h in history] == [
        "created",
        "status_changed",
        "status_changed",
        "status_changed",
        "status_changed",
    ]
    assert history[-1]["changes"] == {"status": {"from": "approved", "to": "paid"}}


async def test_rejection_reason_kept(client: AsyncClient):
    claim = await _create(client, status="pending")
    url = f"/api/v1/claims/{claim['id']}/status"
    await client.patch(url, json={"status": "submitted"})
    await client.patch(url, json={"status": "in-review"})
    rejected = (await client.patch(url, json={"status": "rejected", "notes": "Missing evidence"})).json()
    assert rejected["status"] == "rejected"
    assert rejected["rejection_reason"] == "Missing evidence"


async def test_invalid_transition(client: AsyncClient):
    claim = await _create(client)
    response = await client.patch(f"/api/v1/claims/{claim['id']}/status", json={"status": "paid"})
    assert response.status_code == 400
    assert response.json()["current_status"] == "draft"
    assert response.json()["requested_status"] == "paid"


async def test_update_records_field_changes(client: AsyncClient):
    claim = await _create(client)
    response = await client.put(
        f"/api/v1/claims/{claim['id']}", json={"amount_requested": 2000, "updated_by": "officer"}
    )
    assert response.status_code == 200
    assert response.json()["amount_requested"] == 2000

    history = (await client.get(f"/api/v1/claims/{claim['id']}")).json()["history"]
    assert history[-1]["action"] == "updated"
    assert history[-1]["changes"] == {"amount_requested": {"from": 1500, "to": 2000}}
    assert history[-1]["performed_by"] == "officer"


async def test_delete_only_draft_or_cancelled(client: AsyncClient):
    claim = await _create(client)
    await client.patch(f"/api/v1/claims/{claim['id']}/status", json={"status": "submitted"})
    response = await client.delete(f"/api/v1/claims/{claim['id']}")
    assert response.status_code == 400

    draft = await _create(client)
    assert (await client.delete(f"/api/v1/claims/{draft['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/claims/{draft['id']}")).status_code == 404


async def test_list_is_paginated(client: AsyncClient):
    for _ in range(3):
        await _create(client)
    response = await client.get("/api/v1/claims", params={"page": 2, "limit": 2})
    assert response.status_code == 200
    data = response.json()
    assert len(data["claims"]) == 1
    assert data["pagination"] == {"total": 3, "page": 2, "limit": 2, "totalPages": 2}


async def test_dashboard_metrics(client: AsyncClient):
    draft = await _create(client, amount_requested=1000)
    claim = await _create(client, amount_requested=3000)
    url = f"/api/v1/claims/{claim['id']}/status"
    await client.patch(url, json={"status": "submitted"})
    await client.patch(url, json={"status": "in-review"})
    await client.patch(url, json={"status": "approved", "amount_approved": 2500})

    response = await client.get("/api/v1/claims/dashboard", params={"timeframe": "7days"})
    assert response.status_code == 200
    data = response.json()
    assert data["timeframe"] == "7days"
    metrics = data["metrics"]
    assert metrics["totalClaims"] == 2
    assert metrics["pendingClaims"] == 1
    assert metrics["approvedClaims"] == 1
    assert metrics["totalRequested"] == 4000
    assert metrics["totalApproved"] == 2500
    assert metrics["approvalRate"] == 50
    statuses = sorted(data["chartData"]["statusDistribution"], key=lambda item: item["status"])
    assert statuses == [{"status": "approved", "count": 1}, {"status": "draft", "count": 1}]
    assert data["chartData"]["typeDistribution"] == [{"type": "commencement", "count": 2}]
    assert draft["id"] in [c["id"] for c in data["recentActivity"]]


async def test_dashboard_unknown_timeframe_falls_back(client: AsyncClient):
    response = await client.get("/api/v1/claims/dashboard", params={"timeframe": "forever"})
    assert response.status_code == 200
    assert response.json()["timeframe"] == "30days"


async def test_update_cannot_clear_amount(client: AsyncClient):
    claim = await _create(client)
    response = await client.put(f"/api/v1/claims/{claim['id']}", json={"amount_requested": None})
    assert response.status_code == 400
    assert response.json()["errors"] == ["amount_requested cannot be null"]

    detail = (await client.get(f"/api/v1/claims/{claim['id']}")).json()
    assert detail["claim"]["amount_requested"] == 1500
    assert [h["action"] for h in detail["history"]] == ["created"]


async def _advance(client: AsyncClient, claim: dict, *steps: dict) -> None:
    url = f"/api/v1/claims/{claim['id']}/status"
    for step in steps:
        response = await client.patch(url, json=step)
        assert response.status_code == 200


async def test_dashboard_approval_rate_counts_only_approved(client: AsyncClient):
    review = ({"status": "submitted"}, {"status": "in-review"})
    approved = await _create(client, amount_requested=1000)
    await _advance(client, approved, *review, {"status": "approved", "amount_approved": 0})
    paid = await _create(client, claim_type="completion", amount_requested=2000)
    await _advance(
        client, paid, *review, {"status": "approved", "amount_approved": 1800}, {"status": "paid"}
    )
    await _create(client, amount_requested=500)
    await _create(client, claim_type="retention", amount_requested=700)

    data = (await client.get("/api/v1/claims/dashboard")).json()
    metrics = data["metrics"]
    assert metrics["totalClaims"] == 4
    assert metrics["approvedClaims"] == 1
    assert metrics["paidClaims"] == 1
    # paid claims do not count towards the approval rate
    assert metrics["approvalRate"] == 25
    # a zero approved amount falls back to the requested amount
    assert metrics["totalApproved"] == 1000 + 1800

    types = {item["type"]: item["count"] for item in data["chartData"]["typeDistribution"]}
    assert types == {"commencement": 2, "completion": 1, "retention": 1}
    statuses = {item["status"]: item["count"] for item in data["chartData"]["statusDistribution"]}
    assert statuses == {"approved": 1, "paid": 1, "draft": 2}


async def test_submit_and_approve_open_follow_up_tasks(client: AsyncClient):
    claim = await _create(client)
    url = f"/api/v1/claims/{claim['id']}/status"
    before = datetime.utcnow()

    await client.patch(url, json={"status": "submitted"})
    tasks = (await client.get("/api/v1/tasks")).json()
    assert [t["title"] for t in tasks] == ["Claim Review Required"]
    review = tasks[0]
    assert review["description"] == f"Claim {claim['claim_number']} requires review"
    assert review["related_to"] == "claim"
    assert review["related_id"] == claim["id"]
    assert (datetime.fromisoformat(review["due_date"]) - before).days == 7

    await client.patch(url, json={"status": "in-review"})
    await client.patch(url, json={"status": "approved"})
    tasks = (await client.get("/api/v1/tasks")).json()
    assert [t["title"] for t in tasks] == ["Payment Processing Required", "Claim Review Required"]
    payment = tasks[0]
    assert payment["description"] == f"Approved claim {claim['claim_number']} requires payment processing"
    assert payment["priority"] == "high"
    assert (datetime.fromisoformat(payment["due_date"]) - before).days == 3


async def test_other_transitions_open_no_tasks(client: AsyncClient):
    claim = await _create(client)
    await client.patch(f"/api/v1/claims/{claim['id']}/status", json={"status": "pending"})
    await client.patch(f"/api/v1/claims/{claim['id']}/status", json={"status": "cancelled"})
    assert (await client.get("/api/v1/tasks")).json() == []


CRITERIA = {
    "claim_type": "commencement",
    "title": "NSW commencement incentive",
    "description": "Paid when an apprentice completes the first three months",
    "jurisdiction": "NSW",
    "funding_body": "Training Services NSW",
    "documentation_required": ["Training contract", "Payslips"],
    "eligibility_rules": {"checks": ["Three months continuous employment"]},
    "expiry_date": "2027-06-30T00:00:00",
}


async def test_list_eligibility_criteria_filters(client: AsyncClient):
    await client.post("/api/v1/claims/eligibility-criteria", json=CRITERIA)
    await client.post("/api/v1/claims/eligibility-criteria", json={**CRITERIA, "jurisdiction": "VIC"})
    await client.post("/api/v1/claims/eligibility-criteria", json={**CRITERIA, "active": False})

    response = await client.get("/api/v1/claims/eligibility-criteria", params={"jurisdiction": "NSW"})
    assert response.status_code == 200
    criteria = response.json()["criteria"]
    assert [c["jurisdiction"] for c in criteria] == ["NSW"]

    inactive = (await client.get("/api/v1/claims/eligibility-criteria", params={"active": "false"})).json()
    assert len(inactive["criteria"]) == 1


async def test_eligibility_check_records_outcome_once(client: AsyncClient, session):
    apprentice = await make_apprentice(session)
    criteria = (await client.post("/api/v1/claims/eligibility-criteria", json=CRITERIA)).json()
    payload = {"apprentice_id": apprentice.id, "criteria_id": criteria["id"]}

    response = await client.post("/api/v1/claims/eligibility/check", json=payload)
    assert response.status_code == 200
    first = response.json()
    assert first["isEligible"] is True
    assert first["message"] == "Apprentice meets eligibility criteria"
    assert first["eligibility"]["status"] == "eligible"
    assert first["eligibility"]["apprentice_name"] == "Jane Smith"
    assert first["eligibility"]["eligible_to_date"] == "2027-06-30T00:00:00"
    assert first["requirements"] == {
        "documentsRequired": ["Training contract", "Payslips"],
        "additionalChecks": ["Three months continuous employment"],
    }

    again = (await client.post("/api/v1/claims/eligibility/check", json=payload)).json()
    assert again["eligibility"]["id"] == first["eligibility"]["id"]
    assert again["message"] == "Existing eligibility record found with status: eligible"
    assert again["requirements"] is None


async def test_eligibility_check_requires_both_ids(client: AsyncClient):
    response = await client.post("/api/v1/claims/eligibility/check", json={"apprentice_id": 1})
    assert response.status_code == 400
    assert response.json()["detail"] == "Apprentice ID and criteria ID are required"


async def test_eligibility_check_unknown_criteria(client: AsyncClient, session):
    apprentice = await make_apprentice(session)
    response = await client.post(
        "/api/v1/claims/eligibility/check", json={"apprentice_id": apprentice.id, "criteria_id": 99}
    )
    assert response.status_code == 404
