"""
API endpoints for weekly timesheets.

Submission creates a ``pending`` timesheet with its daily detail rows; staff
with the ``timesheet.approve`` permission approve or reject it.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.models.io.timesheets import (
    TimesheetApprove,
    TimesheetCreate,
    TimesheetDetailCreate,
    TimesheetDetailRead,
    TimesheetRead,
    TimesheetReject,
)
from gto_workforce.server.services.timesheets import TimesheetService

router = APIRouter(tags=["timesheets"])


@router.post(
    "",
    response_model=TimesheetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Timesheet",
    description="Submit a weekly timesheet. Total hours are summed from the detail rows.",
    responses={
        201: {"description": "Timesheet submitted"},
        404: {"description": "Apprentice or placement not found"},
        422: {"description": "A detail row failed validation"},
    },
)
async def create_timesheet(
    timesheet: TimesheetCreate,
    session: AsyncSession = Depends(get_session),
) -> TimesheetRead:
    """
    Submit a timesheet.

    Each detail row is checked for:

    - a work date that is not in the future
    - 0.1 to 12 hours worked, with breaks of up to 4 hours
    - ``HH:MM`` start and end times, end after start
    - a description of at least 5 characters
    """
    service = TimesheetService(session)
    created = await service.create(timesheet)
    return await service.read(created.id)


@router.get(
    "",
    response_model=List[TimesheetRead],
    summary="List Timesheets",
    description="List timesheets, newest week first, with apprentice and approver names.",
)
async def list_timesheets(
    apprentice_id: Optional[int] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    placement_id: Optional[int] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[TimesheetRead]:
    return await TimesheetService(session).list(
        apprentice_id=apprentice_id, status=status_filter, placement_id=placement_id, limit=limit, offset=offset
    )


@router.get(
    "/{timesheet_id}",
    response_model=TimesheetRead,
    summary="Get Timesheet",
    responses={404: {"description": "Timesheet not found"}},
)
async def get_timesheet(timesheet_id: int, session: AsyncSession = Depends(get_session)) -> TimesheetRead:
    return await TimesheetService(session).read(timesheet_id)


@router.post(
    "/{timesheet_id}/details",
    response_model=TimesheetDetailRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Timesheet Detail",
    description="Add a worked day to a pending timesheet and recompute its total hours.",
    responses={400: {"description": "Timesheet is no longer pending"}},
)
async def add_timesheet_detail(
    timesheet_id: int,
    detail: TimesheetDetailCreate,
    session: AsyncSession = Depends(get_session),
) -> TimesheetDetailRead:
    return TimesheetDetailRead.model_validate(await TimesheetService(session).add_detail(timesheet_id, detail))


@router.post(
    "/{timesheet_id}/approve",
    response_model=TimesheetRead,
    summary="Approve Timesheet",
    responses={
        400: {"description": "Approval rules not met; the body lists every error and the current status"},
        404: {"description": "Timesheet or approver not found"},
    },
)
async def approve_timesheet(
    timesheet_id: int,
    approval: TimesheetApprove,
    session: AsyncSession = Depends(get_session),
) -> TimesheetRead:
    service = TimesheetService(session)
    await service.approve(timesheet_id, approval.approved_by)
    return await service.read(timesheet_id)


@router.post(
    "/{timesheet_id}/reject",
    response_model=TimesheetRead,
    summary="Reject Timesheet",
    description="Reject a pending timesheet. The reason is stored in the notes.",
    responses={400: {"description": "Missing reason or timesheet not pending"}},
)
async def reject_timesheet(
    timesheet_id: int,
    rejection: TimesheetReject,
    session: AsyncSession = Depends(get_session),
) -> TimesheetRead:
    service = TimesheetService(session)
    await service.reject(timesheet_id, rejection.rejected_by, rejection.rejection_reason)
    return await service.read(timesheet_id)


@router.delete("/{timesheet_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Timesheet")
async def delete_timesheet(timesheet_id: int, session: AsyncSession = Depends(get_session)) -> None:
    await TimesheetService(session).delete(timesheet_id)
