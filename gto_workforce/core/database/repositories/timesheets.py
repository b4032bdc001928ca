"""
Timesheet repository interface and implementation.

This module provides data access operations for timesheets and their detail
rows. ``Timesheet.total_hours`` is recomputed whenever details change.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.timesheets import Timesheet, TimesheetDetail
from .base import SQLModelRepository


class TimesheetRepository(SQLModelRepository[Timesheet]):
    """Repository for timesheet data access operations using SQLModel."""

    default_order = ("-week_starting", "-id")

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async session for database operations
        """
        super().__init__(session, Timesheet)

    async def create_with_details(self, timesheet: Timesheet, details: List[TimesheetDetail]) -> Timesheet:
        """Create a timesheet together with its detail rows.

        Args:
            timesheet: Timesheet header
            details: Detail rows without ``timesheet_id``

        Returns:
            Persisted Timesheet with ``total_hours`` summed from details
        """
        timesheet.total_hours = round(sum(d.hours_worked for d in details), 2)
        self.session.add(timesheet)
        await self.session.flush()
        for detail in details:
            detail.timesheet_id = timesheet.id
            self.session.add(detail)
        await self.session.commit()
        await self.session.refresh(timesheet)
        return timesheet

    async def get_details(self, timesheet_id: int) -> List[TimesheetDetail]:
        """Get the detail rows of a timesheet ordered by date.

        Args:
            timesheet_id: Timesheet ID

        Returns:
            List of TimesheetDetail instances
        """
        stmt = (
            select(TimesheetDetail)
            .where(TimesheetDetail.timesheet_id == timesheet_id)
            .order_by(TimesheetDetail.work_date.asc(), TimesheetDetail.id.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_detail(self, timesheet: Timesheet, detail: TimesheetDetail) -> TimesheetDetail:
        """Attach a detail row and recompute the timesheet total.

        Args:
            timesheet: Parent timesheet
            detail: Detail row to add

        Returns:
            Persisted TimesheetDetail
        """
        detail.timesheet_id = timesheet.id
        self.session.add(detail)
        await self.session.flush()
        details = await self.get_details(timesheet.id)
        timesheet.total_hours = round(sum(d.hours_worked for d in details), 2)
        self.session.add(timesheet)
        await self.session.commit()
        await self.session.refresh(detail)
        await self.session.refresh(timesheet)
        return detail

    async def delete(self, entity_id: int) -> bool:
        """Delete a timesheet and its detail rows."""
        timesheet = await self.get_by_id(entity_id)
        if timesheet is None:
            return False
        await self.session.execute(sa_delete(TimesheetDetail).where(TimesheetDetail.timesheet_id == entity_id))
        await self.session.delete(timesheet)
        await self.session.commit()
        return True
