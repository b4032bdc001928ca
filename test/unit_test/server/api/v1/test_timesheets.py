import pytest
import pytest_asyncio
from httpx import AsyncClient

from ....factories import make_apprentice, make_host_employer, make_placement, make_timesheet, make_user

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def placement(session):
    apprentice = await make_apprentice(session)
    host = await make_host_employer(session)
    return await make_placement(session, apprentice.id, host.id)


async def test_submit_timesheet_sums_details(client: AsyncClient, placement):
    payload = {
        "apprentice_id": placement.apprentice_id,
        "placement_id": placement.id,
        "week_starting": "2026-03-02",
        "details": [
            {
                "work_date": "2026-03-02",
                "hours_worked": 7.6,
                "start_time": "07:00",
                "end_time": "15:06",
                "break_hours": 0.5,
                "description": "Framing on level two",
            },
            {"work_date": "2026-03-03", "hours_worked": 8.0, "break_hours": 0.5, "description": "Roof trusses"},
        ],
    }
    response = await client.post("/api/v1/timesheets", json=payload)
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["total_hours"] == pytest.approx(15.6)
    assert data["week_ending"] == "2026-03-08"
    assert data["apprentice_name"] == "Jane Smith"
    assert len(data["details"]) == 2


async def test_submit_rejects_long_shift_without_break(client: AsyncClient, placement):
    payload = {
        "apprentice_id": placement.apprentice_id,
        "placement_id": placement.id,
        "week_starting": "2026-03-02",
        "details": [{"work_date": "2026-03-02", "hours_worked": 9.0, "description": "Long day on site"}],
    }
    response = await client.post("/api/v1/timesheets", json=payload)
    assert response.status_code == 422


async def test_submit_for_other_apprentices_placement(client: AsyncClient, session, placement):
    other = await make_apprentice(session, email="other@example.com")
    payload = {"apprentice_id": other.id, "placement_id": placement.id, "week_starting": "2026-03-02"}
    response = await client.post("/api/v1/timesheets", json=payload)
    assert response.status_code == 400


async def test_approve_timesheet(client: AsyncClient, session, placement):
    officer = await make_user(session)
    timesheet = await make_timesheet(session, placement.apprentice_id, placement.id)

    response = await client.post(f"/api/v1/timesheets/{timesheet.id}/approve", json={"approved_by": officer.id})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "approved"
    assert data["approved_by"] == officer.id
    assert data["approved_by_name"] == "Fiona Officer"
    assert data["approval_date"] is not None


async def test_approve_reports_every_failed_rule(client: AsyncClient, session, placement):
    payroll = await make_user(session, username="payroll", email="pay@gto.example", role="payroll")
    timesheet = await make_timesheet(session, placement.apprentice_id, placement.id, hours=0, status="approved")

    response = await client.post(f"/api/v1/timesheets/{timesheet.id}/approve", json={"approved_by": payroll.id})
    assert response.status_code == 400
    body = response.json()
    assert body["current_status"] == "approved"
    assert body["errors"] == [
        "Only pending timesheets can be approved",
        "Timesheet must have hours recorded",
        "Insufficient permissions to approve timesheets",
    ]


async def test_approve_with_unknown_user(client: AsyncClient, session, placement):
    timesheet = await make_timesheet(session, placement.apprentice_id, placement.id)
    response = await client.post(f"/api/v1/timesheets/{timesheet.id}/approve", json={"approved_by": 77})
    assert response.status_code == 404


async def test_reject_requires_reason(client: AsyncClient, session, placement):
    officer = await make_user(session)
    timesheet = await make_timesheet(session, placement.apprentice_id, placement.id)
    url = f"/api/v1/timesheets/{timesheet.id}/reject"

    response = await client.post(url, json={"rejected_by": officer.id, "rejection_reason": "  "})
    assert response.status_code == 400

    response = await client.post(url, json={"rejected_by": officer.id, "rejection_reason": "Hours do not match"})
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["notes"] == "Rejected: Hours do not match"

    response = await client.post(url, json={"rejected_by": officer.id, "rejection_reason": "Again"})
    assert response.status_code == 400


async def test_list_filters_by_status(client: AsyncClient, session, placement):
    await make_timesheet(session, placement.apprentice_id, placement.id)
    await make_timesheet(session, placement.apprentice_id, placement.id, status="approved")

    response = await client.get("/api/v1/timesheets", params={"status": "pending"})
    assert response.status_code == 200
    assert [t["status"] for t in response.json()] == ["pending"]
