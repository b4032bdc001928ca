"""
WHS incident, risk assessment and policy I/O models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination

IncidentType = Literal["incident", "hazard", "near_miss"]
IncidentSeverity = Literal["low", "medium", "high"]
IncidentStatus = Literal[
    "reported",
    "investigating",
    "action-required",
    "remediation-in-progress",
    "pending-review",
    "resolved",
    "closed",
    "escalated",
    "requires-followup",
]
CLOSED_STATUSES = ("resolved", "closed")


class WitnessCreate(BaseModel):
    name: str = Field(min_length=2, max_length=128)
    contact: Optional[str] = None
    statement: Optional[str] = None


class WitnessRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    incident_id: int
    name: str
    contact: Optional[str] = None
    statement: Optional[str] = None


class IncidentCreate(BaseModel):
    """Schema for reporting a WHS incident, hazard or near miss."""

    title: str = Field(min_length=3, max_length=255)
    description: str = Field(min_length=5)
    type: IncidentType
    severity: IncidentSeverity
    location: Optional[str] = None
    date_occurred: datetime
    reporter_name: Optional[str] = None
    reporter_id: Optional[int] = None
    apprentice_id: Optional[int] = None
    host_employer_id: Optional[int] = None
    immediate_actions: Optional[str] = None
    notifiable_incident: bool = False
    authority_notified: bool = False
    followup_required: bool = False
    witnesses: List[WitnessCreate] = Field(default_factory=list)


class IncidentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=3, max_length=255)
    description: Optional[str] = None
    type: Optional[IncidentType] = None
    severity: Optional[IncidentSeverity] = None
    status: Optional[IncidentStatus] = None
    location: Optional[str] = None
    immediate_actions: Optional[str] = None
    investigation_notes: Optional[str] = None
    resolution_details: Optional[str] = None
    resolution_date: Optional[datetime] = None
    notifiable_incident: Optional[bool] = None
    authority_notified: Optional[bool] = None
    followup_required: Optional[bool] = None


class IncidentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    type: str
    severity: str
    status: str
    location: Optional[str] = None
    date_occurred: datetime
    date_reported: datetime
    reporter_name: Optional[str] = None
    reporter_id: Optional[int] = None
    apprentice_id: Optional[int] = None
    host_employer_id: Optional[int] = None
    immediate_actions: Optional[str] = None
    investigation_notes: Optional[str] = None
    resolution_details: Optional[str] = None
    resolution_date: Optional[datetime] = None
    notifiable_incident: bool
    authority_notified: bool
    followup_required: bool
    created_at: datetime
    updated_at: datetime


class IncidentDetail(IncidentRead):
    witnesses: List[WitnessRead] = Field(default_factory=list)


class IncidentPage(BaseModel):
    incidents: List[IncidentRead]
    pagination: Pagination


class WhsMetrics(BaseModel):
    total: int
    byType: Dict[str, int]
    bySeverity: Dict[str, int]
    byStatus: Dict[str, int]
    open: int
    resolved: int
    notifiable: int
    followupRequired: int


AssessmentStatus = Literal["draft", "in-progress", "completed", "review-required", "expired"]
PolicyStatus = Literal["draft", "active", "review-needed", "archived"]


class Hazard(BaseModel):
    hazard: str = Field(min_length=2)
    risk_level: Literal["low", "medium", "high", "extreme"] = "medium"
    controls: Optional[str] = None


class RiskAssessmentCreate(BaseModel):
    title: str = Field(min_length=5, max_length=255)
    description: str = Field(min_length=10)
    location: str = Field(min_length=3, max_length=255)
    work_area: Optional[str] = None
    department: Optional[str] = None
    host_employer_id: Optional[int] = None
    host_employer_name: Optional[str] = None
    assessor_name: str = Field(min_length=2, max_length=128)
    assessment_date: datetime
    review_date: Optional[datetime] = None
    status: AssessmentStatus = "draft"
    hazards: List[Hazard] = Field(default_factory=list)
    findings: Optional[str] = None
    recommendations: Optional[str] = None
    action_plan: Optional[str] = None


class RiskAssessmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=5, max_length=255)
    description: Optional[str] = Field(default=None, min_length=10)
    location: Optional[str] = Field(default=None, min_length=3, max_length=255)
    work_area: Optional[str] = None
    department: Optional[str] = None
    assessor_name: Optional[str] = None
    assessment_date: Optional[datetime] = None
    review_date: Optional[datetime] = None
    status: Optional[AssessmentStatus] = None
    hazards: Optional[List[Hazard]] = None
    findings: Optional[str] = None
    recommendations: Optional[str] = None
    action_plan: Optional[str] = None


class RiskAssessmentApproval(BaseModel):
    approverName: Optional[str] = None
    approvalNotes: Optional[str] = None


class RiskAssessmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    location: str
    work_area: Optional[str] = None
    department: Optional[str] = None
    host_employer_id: Optional[int] = None
    host_employer_name: Optional[str] = None
    assessor_name: str
    assessment_date: datetime
    review_date: Optional[datetime] = None
    status: str
    hazards: List[Dict[str, Any]]
    findings: Optional[str] = None
    recommendations: Optional[str] = None
    action_plan: Optional[str] = None
    approver_name: Optional[str] = None
    approval_date: Optional[datetime] = None
    approval_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RiskAssessmentPage(BaseModel):
    assessments: List[RiskAssessmentRead]
    pagination: Pagination


class PolicyCreate(BaseModel):
    title: str = Field(min_length=5, max_length=255)
    description: str = Field(min_length=10)
    content: str = Field(min_length=20)
    document_type: Optional[str] = None
    file_path: Optional[str] = None
    status: PolicyStatus = "draft"
    version: str = "1.0"
    effective_date: Optional[date] = None
    review_date: Optional[date] = None
    approved_by_name: Optional[str] = None


class PolicyUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=5, max_length=255)
    description: Optional[str] = Field(default=None, min_length=10)
    content: Optional[str] = Field(default=None, min_length=20)
    document_type: Optional[str] = None
    file_path: Optional[str] = None
    status: Optional[PolicyStatus] = None
    version: Optional[str] = None
    effective_date: Optional[date] = None
    review_date: Optional[date] = None
    approved_by_name: Optional[str] = None


class PolicyRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    content: str
    document_type: Optional[str] = None
    file_path: Optional[str] = None
    status: str
    version: str
    effective_date: Optional[date] = None
    review_date: Optional[date] = None
    approved_by_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PolicyPage(BaseModel):
    policies: List[PolicyRead]
    pagination: Pagination
