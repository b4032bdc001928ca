"""
Compliance record entity models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, Text

from ..base import Base


class ComplianceRecordBase(Base):
    """Base fields for compliance records."""

    type: str = Field(max_length=64, index=True, description="e.g. police_check, white_card, training_plan")
    related_to: str = Field(max_length=32, index=True, description="apprentice or host_employer")
    related_id: int = Field(index=True)
    status: str = Field(default="pending", max_length=16, index=True)
    due_date: Optional[date] = Field(default=None)
    completion_date: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_type=Text)


class ComplianceRecord(ComplianceRecordBase, table=True):
    """Table: compliance_records"""

    __tablename__ = "compliance_records"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})
