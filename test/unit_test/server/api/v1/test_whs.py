import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

INCIDENT = {
    "title": "Slip on wet floor",
    "description": "Apprentice slipped near the wash bay",
    "type": "incident",
    "severity": "medium",
    "location": "Workshop B",
    "date_occurred": "2026-03-03T10:30:00",
    "witnesses": [{"name": "Sam Lee", "statement": "Saw the fall"}],
}


async def test_report_incident(client: AsyncClient):
    response = await client.post("/api/v1/whs/incidents", json=INCIDENT)
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "reported"
    assert data["date_reported"] is not None
    assert [w["name"] for w in data["witnesses"]] == ["Sam Lee"]


async def test_closing_stamps_resolution_date(client: AsyncClient):
    incident = (await client.post("/api/v1/whs/incidents", json=INCIDENT)).json()
    url = f"/api/v1/whs/incidents/{incident['id']}"

    investigating = (await client.patch(url, json={"status": "investigating"})).json()
    assert investigating["resolution_date"] is None

    resolved = (await client.patch(url, json={"status": "resolved", "resolution_details": "Mat installed"})).json()
    assert resolved["status"] == "resolved"
    assert resolved["resolution_date"] is not None


async def test_add_witness(client: AsyncClient):
    incident = (await client.post("/api/v1/whs/incidents", json={**INCIDENT, "witnesses": []})).json()
    response = await client.post(f"/api/v1/whs/incidents/{incident['id']}/witnesses", json={"name": "Kim Park"})
    assert response.status_code == 201

    detail = (await client.get(f"/api/v1/whs/incidents/{incident['id']}")).json()
    assert [w["name"] for w in detail["witnesses"]] == ["Kim Park"]


async def test_metrics(client: AsyncClient):
    await client.post("/api/v1/whs/incidents", json=INCIDENT)
    await client.post(
        "/api/v1/whs/incidents",
        json={**INCIDENT, "type": "hazard", "severity": "high", "notifiable_incident": True, "witnesses": []},
    )
    closed = (await client.post("/api/v1/whs/incidents", json={**INCIDENT, "type": "near_miss"})).json()
    await client.patch(f"/api/v1/whs/incidents/{closed['id']}", json={"status": "closed"})

    response = await client.get("/api/v1/whs/metrics")
    assert response.status_code == 200
    metrics = response.json()
    assert metrics["total"] == 3
    assert metrics["open"] == 2
    assert metrics["resolved"] == 1
    assert metrics["notifiable"] == 1
    assert metrics["byType"] == {"incident": 1, "hazard": 1, "near_miss": 1}
    assert metrics["bySeverity"] == {"medium": 2, "high": 1}


async def test_list_and_delete(client: AsyncClient):
    incident = (await client.post("/api/v1/whs/incidents", json=INCIDENT)).json()
    response = await client.get("/api/v1/whs/incidents", params={"severity": "medium"})
    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 1

    assert (await client.delete(f"/api/v1/whs/incidents/{incident['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/whs/incidents/{incident['id']}")).status_code == 404


async def test_rejects_unknown_type(client: AsyncClient):
    response = await client.post("/api/v1/whs/incidents", json={**INCIDENT, "type": "explosion"})
    assert response.status_code == 422


async def test_update_cannot_clear_title(client: AsyncClient):
    incident = (await client.post("/api/v1/whs/incidents", json=INCIDENT)).json()
    response = await client.patch(f"/api/v1/whs/incidents/{incident['id']}", json={"title": None})
    assert response.status_code == 400
    assert response.json()["errors"] == ["title cannot be null"]


ASSESSMENT = {
    "title": "Roof truss installation",
    "description": "Working at heights on residential frames",
    "location": "Lot 12 Penrith",
    "assessor_name": "Fiona Officer",
    "assessment_date": "2026-03-10T08:00:00",
    "hazards": [{"hazard": "Fall from height", "risk_level": "high", "controls": "Edge protection"}],
}


async def test_risk_assessment_lifecycle(client: AsyncClient):
    response = await client.post("/api/v1/whs/risk-assessments", json=ASSESSMENT)
    assert response.status_code == 201
    assessment = response.json()
    assert assessment["status"] == "draft"
    assert assessment["hazards"][0]["risk_level"] == "high"
    url = f"/api/v1/whs/risk-assessments/{assessment['id']}"

    updated = (await client.patch(url, json={"status": "in-progress", "findings": "No edge rails on east side"})).json()
    assert updated["status"] == "in-progress"

    approved = await client.post(f"{url}/approve", json={"approverName": "Sam Lee", "approvalNotes": "Rails fitted"})
    assert approved.status_code == 200
    body = approved.json()
    assert body["status"] == "completed"
    assert body["approver_name"] == "Sam Lee"
    assert body["approval_notes"] == "Rails fitted"
    assert body["approval_date"] is not None

    assert (await client.delete(url)).status_code == 204
    assert (await client.get(url)).status_code == 404


async def test_approve_requires_approver_name(client: AsyncClient):
    assessment = (await client.post("/api/v1/whs/risk-assessments", json=ASSESSMENT)).json()
    response = await client.post(f"/api/v1/whs/risk-assessments/{assessment['id']}/approve", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "Approver name is required"


async def test_risk_assessment_search_and_paging(client: AsyncClient):
    await client.post("/api/v1/whs/risk-assessments", json=ASSESSMENT)
    await client.post(
        "/api/v1/whs/risk-assessments",
        json={
            **ASSESSMENT,
            "title": "Concrete pour",
            "location": "Parramatta depot",
            "hazards": [],
            "assessment_date": "2026-03-12T08:00:00",
        },
    )
    await client.post(
        "/api/v1/whs/risk-assessments",
        json={
            **ASSESSMENT,
            "title": "Scaffold inspection",
            "assessor_name": "Kim Park",
            "status": "completed",
            "assessment_date": "2026-03-11T08:00:00",
        },
    )

    page = (await client.get("/api/v1/whs/risk-assessments", params={"limit": 2})).json()
    assert [a["title"] for a in page["assessments"]] == ["Concrete pour", "Scaffold inspection"]
    assert page["pagination"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}

    found = (await client.get("/api/v1/whs/risk-assessments", params={"search": "parramatta"})).json()
    assert [a["title"] for a in found["assessments"]] == ["Concrete pour"]

    by_assessor = (await client.get("/api/v1/whs/risk-assessments", params={"search": "kim"})).json()
    assert [a["title"] for a in by_assessor["assessments"]] == ["Scaffold inspection"]

    completed = (await client.get("/api/v1/whs/risk-assessments", params={"status": "completed"})).json()
    assert completed["pagination"]["total"] == 1


async def test_risk_assessment_field_lengths(client: AsyncClient):
    response = await client.post("/api/v1/whs/risk-assessments", json={**ASSESSMENT, "title": "Roof"})
    assert response.status_code == 422


POLICY = {
    "title": "Working at heights policy",
    "description": "Controls for any work above two metres",
    "content": "Apprentices must not work above two metres without a harness and supervision.",
    "document_type": "policy",
}


async def test_policy_crud(client: AsyncClient):
    response = await client.post("/api/v1/whs/policies", json=POLICY)
    assert response.status_code == 201
    policy = response.json()
    assert policy["status"] == "draft"
    assert policy["version"] == "1.0"
    url = f"/api/v1/whs/policies/{policy['id']}"

    active = (await client.patch(url, json={"status": "active", "effective_date": "2026-04-01"})).json()
    assert active["status"] == "active"
    assert active["effective_date"] == "2026-04-01"

    listing = (await client.get("/api/v1/whs/policies")).json()
    assert [p["id"] for p in listing["policies"]] == [policy["id"]]
    assert listing["pagination"]["total"] == 1

    assert (await client.delete(url)).status_code == 204
    assert (await client.get(url)).status_code == 404


async def test_policy_cannot_clear_content(client: AsyncClient):
    policy = (await client.post("/api/v1/whs/policies", json=POLICY)).json()
    response = await client.patch(f"/api/v1/whs/policies/{policy['id']}", json={"content": None})
    assert response.status_code == 400
    assert response.json()["errors"] == ["content cannot be null"]
