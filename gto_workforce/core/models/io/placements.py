"""
Placement I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

PlacementStatus = Literal["active", "completed", "terminated"]


class PlacementCreate(BaseModel):
    """Schema for creating a placement via API."""

    apprentice_id: int = Field(gt=0)
    host_employer_id: int = Field(gt=0)
    start_date: date
    end_date: Optional[date] = None
    position: Optional[str] = None
    supervisor: Optional[str] = None
    supervisor_contact: Optional[str] = None
    negotiated_rate: Optional[float] = Field(default=None, ge=0.01, le=1000)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self) -> "PlacementCreate":
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class PlacementUpdate(BaseModel):
    """Schema for updating a placement via API."""

    end_date: Optional[date] = None
    status: Optional[PlacementStatus] = None
    position: Optional[str] = None
    supervisor: Optional[str] = None
    supervisor_contact: Optional[str] = None
    negotiated_rate: Optional[float] = Field(default=None, ge=0.01, le=1000)
    notes: Optional[str] = None


class PlacementRead(BaseModel):
    """Schema for reading a placement from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    apprentice_id: int
    host_employer_id: int
    start_date: date
    end_date: Optional[date] = None
    status: str
    position: Optional[str] = None
    supervisor: Optional[str] = None
    supervisor_contact: Optional[str] = None
    negotiated_rate: Optional[float] = None
    charge_rate: Optional[float] = None
    last_charge_rate_update: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
