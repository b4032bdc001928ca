"""
Timesheet service: submission, detail rows and the approval workflow.

Only ``pending`` timesheets accept new detail rows, approval or rejection.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gto_workforce.core.database.entities.timesheets import Timesheet, TimesheetDetail
from gto_workforce.core.database.entities.users import User
from gto_workforce.core.database.repositories import (
    ApprenticeRepository,
    PlacementRepository,
    TimesheetRepository,
    UserRepository,
)
from gto_workforce.core.errors import NotFoundError, ValidationError
from gto_workforce.core.models.io.timesheets import (
    TimesheetCreate,
    TimesheetDetailCreate,
    TimesheetDetailRead,
    TimesheetRead,
)
from gto_workforce.core.validation.business_rules import BusinessRuleValidator, permissions_for_role

logger = logging.getLogger(__name__)


class TimesheetService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = TimesheetRepository(session)
        self.apprentices = ApprenticeRepository(session)
        self.users = UserRepository(session)

    async def get(self, timesheet_id: int) -> Timesheet:
        timesheet = await self.repo.get_by_id(timesheet_id)
        if timesheet is None:
            raise NotFoundError("Timesheet", timesheet_id)
        return timesheet

    async def create(self, data: TimesheetCreate) -> Timesheet:
        if await self.apprentices.get_by_id(data.apprentice_id) is None:
            raise NotFoundError("Apprentice", data.apprentice_id)
        placement = await PlacementRepository(self.session).get_by_id(data.placement_id)
        if placement is None:
            raise NotFoundError("Placement", data.placement_id)
        if placement.apprentice_id != data.apprentice_id:
            raise ValidationError("Placement does not belong to this apprentice")

        timesheet = Timesheet(
            apprentice_id=data.apprentice_id,
            placement_id=data.placement_id,
            week_starting=data.week_starting,
            notes=data.notes,
            status="pending",
            submitted_date=datetime.utcnow(),
        )
        details = [TimesheetDetail(**d.model_dump()) for d in data.details]
        timesheet = await self.repo.create_with_details(timesheet, details)
        logger.info(f"Timesheet {timesheet.id} submitted: {timesheet.total_hours}h for apprentice {data.apprentice_id}")
        return timesheet

    async def add_detail(self, timesheet_id: int, data: TimesheetDetailCreate) -> TimesheetDetail:
        timesheet = await self.get(timesheet_id)
        if timesheet.status != "pending":
            raise ValidationError(
                "Only pending timesheets can be changed", details={"current_status": timesheet.status}
            )
        return await self.repo.add_detail(timesheet, TimesheetDetail(**data.model_dump()))

    async def list(
        self,
        apprentice_id: Optional[int] = None,
        status: Optional[str] = None,
        placement_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[TimesheetRead]:
        timesheets = await self.repo.list(
            limit=limit,
            offset=offset,
            filters={"apprentice_id": apprentice_id, "status": status, "placement_id": placement_id},
        )
        return await self._to_read(timesheets)

    async def read(self, timesheet_id: int) -> TimesheetRead:
        timesheet = await self.get(timesheet_id)
        (result,) = await self._to_read([timesheet])
        result.details = [TimesheetDetailRead.model_validate(d) for d in await self.repo.get_details(timesheet_id)]
        return result

    async def _to_read(self, timesheets: List[Timesheet]) -> List[TimesheetRead]:
        apprentice_names = await self.apprentices.get_names(t.apprentice_id for t in timesheets)
        approver_ids = {t.approved_by for t in timesheets if t.approved_by is not None}
        approver_names = {}
        if approver_ids:
            result = await self.session.execute(select(User).where(User.id.in_(approver_ids)))  # type: ignore[union-attr]
            approver_names = {u.id: u.full_name for u in result.scalars().all()}

        reads = []
        for timesheet in timesheets:
            read = TimesheetRead.model_validate(timesheet)
            read.apprentice_name = apprentice_names.get(timesheet.apprentice_id)
            read.approved_by_name = approver_names.get(timesheet.approved_by)
            reads.append(read)
        return reads

    async def approve(self, timesheet_id: int, approved_by: int) -> Timesheet:
        """Approve a pending timesheet.

        Raises:
            NotFoundError: If the timesheet or approver does not exist
            ValidationError: With every violated approval rule
        """
        timesheet = await self.get(timesheet_id)
        approver = await self.users.get_by_id(approved_by)
        if approver is None:
            raise NotFoundError("User", approved_by)

        result = BusinessRuleValidator.validate_timesheet_approval(timesheet, permissions_for_role(approver.role))
        if not result.valid:
            logger.warning(f"Timesheet {timesheet_id} approval by user {approved_by} rejected: {result.errors}")
            raise ValidationError(
                "Timesheet cannot be approved", result.errors, details={"current_status": timesheet.status}
            )

        timesheet = await self.repo.update_fields(
            timesheet, {"status": "approved", "approved_by": approved_by, "approval_date": datetime.utcnow()}
        )
        logger.info(f"Timesheet {timesheet_id} approved by user {approved_by}")
        return timesheet

    async def reject(self, timesheet_id: int, rejected_by: int, reason: Optional[str]) -> Timesheet:
        if not reason or not reason.strip():
            raise ValidationError("Rejection reason is required")
        timesheet = await self.get(timesheet_id)
        if timesheet.status != "pending":
            raise ValidationError(
                "Only pending timesheets can be rejected", details={"current_status": timesheet.status}
            )
        timesheet = await self.repo.update_fields(
            timesheet, {"status": "rejected", "notes": f"Rejected: {reason.strip()}"}
        )
        logger.info(f"Timesheet {timesheet_id} rejected by user {rejected_by}")
        return timesheet

    async def delete(self, timesheet_id: int) -> None:
        if not await self.repo.delete(timesheet_id):
            raise NotFoundError("Timesheet", timesheet_id)
