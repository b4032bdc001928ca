"""
Timesheet I/O models for API requests and responses.

Detail rows are validated one by one: no future dates, 0.1 to 12 hours,
``HH:MM`` times within business hours and break rules for long shifts.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from gto_workforce.core.validation import rules


class TimesheetDetailCreate(BaseModel):
    """One worked day on a timesheet."""

    work_date: date = Field(description="Day worked, cannot be in the future")
    hours_worked: float = Field(ge=rules.MIN_DETAIL_HOURS, le=rules.MAX_DAILY_HOURS)
    start_time: Optional[str] = Field(default=None, description="Start time as HH:MM")
    end_time: Optional[str] = Field(default=None, description="End time as HH:MM")
    break_hours: float = Field(default=0.0, ge=0, le=rules.MAX_BREAK_HOURS)
    description: Optional[str] = None

    @field_validator("work_date")
    @classmethod
    def validate_not_in_future(cls, value: date) -> date:
        if value > datetime.utcnow().date():
            raise ValueError("Work date cannot be in the future")
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            rules.parse_time(value)
        return value

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = rules.sanitize_string(value)
        if len(value) < rules.MIN_DESCRIPTION_LENGTH:
            raise ValueError(f"Description must be at least {rules.MIN_DESCRIPTION_LENGTH} characters")
        return value

    @model_validator(mode="after")
    def check_shift(self) -> "TimesheetDetailCreate":
        if self.start_time and self.end_time and not rules.validate_business_hours(self.start_time, self.end_time):
            raise ValueError("End time must be after start time")
        ok, message = rules.validate_working_hours(self.hours_worked, self.break_hours)
        if not ok:
            raise ValueError(message)
        return self


class TimesheetCreate(BaseModel):
    """Schema for submitting a weekly timesheet."""

    apprentice_id: int = Field(gt=0)
    placement_id: int = Field(gt=0)
    week_starting: date
    notes: Optional[str] = None
    details: List[TimesheetDetailCreate] = Field(default_factory=list)


class TimesheetApprove(BaseModel):
    approved_by: int = Field(gt=0, description="ID of the approving user")


class TimesheetReject(BaseModel):
    rejected_by: int = Field(gt=0)
    rejection_reason: Optional[str] = None


class TimesheetDetailRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    timesheet_id: int
    work_date: date
    hours_worked: float
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    break_hours: float
    description: Optional[str] = None


class TimesheetRead(BaseModel):
    """Schema for reading a timesheet, with display names resolved."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    apprentice_id: int
    placement_id: int
    week_starting: date
    status: str
    total_hours: float
    submitted_date: Optional[datetime] = None
    approved_by: Optional[int] = None
    approval_date: Optional[datetime] = None
    notes: Optional[str] = None
    apprentice_name: Optional[str] = None
    approved_by_name: Optional[str] = None
    details: List[TimesheetDetailRead] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def week_ending(self) -> date:
        return self.week_starting + timedelta(days=6)
