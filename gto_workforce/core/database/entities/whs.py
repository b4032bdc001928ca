"""
Workplace Health and Safety (WHS) entity models.

This module contains WHS incident reports with their witness statements,
risk assessments and safety policies. Witnesses are removed together with
their incident.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import NaiveDatetime
from sqlmodel import JSON, Field, Text

from ..base import Base


class WhsIncidentBase(Base):
    """Base fields for WHS incidents."""

    title: str = Field(max_length=255)
    description: str = Field(sa_type=Text)
    type: str = Field(max_length=16, index=True, description="incident, hazard or near_miss")
    severity: str = Field(max_length=16, index=True, description="low, medium or high")
    location: Optional[str] = Field(default=None, max_length=255)
    date_occurred: NaiveDatetime
    reporter_name: Optional[str] = Field(default=None, max_length=128)
    reporter_id: Optional[int] = Field(default=None, foreign_key="users.id")
    apprentice_id: Optional[int] = Field(default=None, foreign_key="apprentices.id", index=True)
    host_employer_id: Optional[int] = Field(default=None, foreign_key="host_employers.id", index=True)
    immediate_actions: Optional[str] = Field(default=None, sa_type=Text)
    notifiable_incident: bool = Field(default=False)
    authority_notified: bool = Field(default=False)
    followup_required: bool = Field(default=False)


class WhsIncident(WhsIncidentBase, table=True):
    """Table: whs_incidents"""

    __tablename__ = "whs_incidents"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    status: str = Field(default="reported", max_length=32, index=True)
    date_reported: NaiveDatetime = Field(default_factory=datetime.utcnow)
    investigation_notes: Optional[str] = Field(default=None, sa_type=Text)
    resolution_details: Optional[str] = Field(default=None, sa_type=Text)
    resolution_date: Optional[NaiveDatetime] = Field(default=None)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    def __repr__(self) -> str:
        return f"WhsIncident(id={self.id}, type={self.type}, severity={self.severity}, status={self.status})"


class WhsWitness(Base, table=True):
    """Table: whs_witnesses"""

    __tablename__ = "whs_witnesses"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    incident_id: int = Field(foreign_key="whs_incidents.id", index=True)
    name: str = Field(max_length=128)
    contact: Optional[str] = Field(default=None, max_length=128)
    statement: Optional[str] = Field(default=None, sa_type=Text)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)


class WhsRiskAssessment(Base, table=True):
    """Table: whs_risk_assessments"""

    __tablename__ = "whs_risk_assessments"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: str = Field(sa_type=Text)
    location: str = Field(max_length=255)
    work_area: Optional[str] = Field(default=None, max_length=128)
    department: Optional[str] = Field(default=None, max_length=128)
    host_employer_id: Optional[int] = Field(default=None, foreign_key="host_employers.id", index=True)
    host_employer_name: Optional[str] = Field(default=None, max_length=255)
    assessor_name: str = Field(max_length=128)
    assessment_date: NaiveDatetime = Field(index=True)
    review_date: Optional[NaiveDatetime] = Field(default=None)
    status: str = Field(default="draft", max_length=32, index=True)
    hazards: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    findings: Optional[str] = Field(default=None, sa_type=Text)
    recommendations: Optional[str] = Field(default=None, sa_type=Text)
    action_plan: Optional[str] = Field(default=None, sa_type=Text)
    approver_name: Optional[str] = Field(default=None, max_length=128)
    approval_date: Optional[NaiveDatetime] = Field(default=None)
    approval_notes: Optional[str] = Field(default=None, sa_type=Text)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})


class WhsPolicy(Base, table=True):
    """Table: whs_policies"""

    __tablename__ = "whs_policies"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: str = Field(sa_type=Text)
    content: str = Field(sa_type=Text)
    document_type: Optional[str] = Field(default=None, max_length=64)
    file_path: Optional[str] = Field(default=None, max_length=512)
    status: str = Field(default="draft", max_length=32, index=True)
    version: str = Field(default="1.0", max_length=16)
    effective_date: Optional[date] = Field(default=None)
    review_date: Optional[date] = Field(default=None)
    approved_by_name: Optional[str] = Field(default=None, max_length=128)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})
