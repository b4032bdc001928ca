"""
Compliance record I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ComplianceStatus = Literal["compliant", "non-compliant", "pending"]


class ComplianceRecordCreate(BaseModel):
    type: str = Field(min_length=2, max_length=64, description="Kind of check, e.g. 'police_check'")
    related_to: Literal["apprentice", "host_employer"]
    related_id: int = Field(gt=0)
    status: ComplianceStatus = "pending"
    due_date: Optional[date] = None
    completion_date: Optional[date] = None
    notes: Optional[str] = None


class ComplianceRecordUpdate(BaseModel):
    type: Optional[str] = Field(default=None, min_length=2, max_length=64)
    status: Optional[ComplianceStatus] = None
    due_date: Optional[date] = None
    completion_date: Optional[date] = None
    notes: Optional[str] = None


class ComplianceRecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    related_to: str
    related_id: int
    status: str
    due_date: Optional[date] = None
    completion_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
