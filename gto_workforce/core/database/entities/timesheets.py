"""
Timesheet entity models.

This module contains the weekly timesheet header and its per-day detail rows.
``Timesheet.total_hours`` is kept in sync with the sum of its details by the
timesheet repository.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, Text

from ..base import Base


class Timesheet(Base, table=True):
    """Weekly timesheet for an apprentice on a placement.

    Table: timesheets
    """

    __tablename__ = "timesheets"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    apprentice_id: int = Field(foreign_key="apprentices.id", index=True)
    placement_id: int = Field(foreign_key="placements.id", index=True)
    week_starting: date = Field(index=True)
    status: str = Field(default="pending", max_length=16, index=True)
    total_hours: float = Field(default=0.0)

    submitted_date: Optional[NaiveDatetime] = Field(default=None)
    approved_by: Optional[int] = Field(default=None, foreign_key="users.id")
    approval_date: Optional[NaiveDatetime] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_type=Text)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    def __repr__(self) -> str:
        return f"Timesheet(id={self.id}, apprentice_id={self.apprentice_id}, status={self.status})"


class TimesheetDetail(Base, table=True):
    """A single day's work on a timesheet.

    Table: timesheet_details
    """

    __tablename__ = "timesheet_details"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    timesheet_id: int = Field(foreign_key="timesheets.id", index=True)
    work_date: date = Field(index=True)
    hours_worked: float
    start_time: Optional[str] = Field(default=None, max_length=5)
    end_time: Optional[str] = Field(default=None, max_length=5)
    break_hours: float = Field(default=0.0)
    description: Optional[str] = Field(default=None, sa_type=Text)

    def __repr__(self) -> str:
        return f"TimesheetDetail(id={self.id}, work_date={self.work_date}, hours={self.hours_worked})"
