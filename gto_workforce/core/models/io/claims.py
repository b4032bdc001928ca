"""
Funding claim I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination

ClaimStatus = Literal[
    "draft", "pending", "submitted", "in-review", "approved", "rejected", "paid", "reconciled", "cancelled"
]
ClaimType = Literal[
    "commencement",
    "completion",
    "retention",
    "restart",
    "mid-point",
    "rural-regional",
    "disability",
    "mature-age",
    "other",
]
Timeframe = Literal["7days", "30days", "90days"]


class ClaimCreate(BaseModel):
    apprentice_id: Optional[int] = None
    apprentice_name: Optional[str] = None
    claim_type: ClaimType
    status: Literal["draft", "pending"] = "draft"
    amount_requested: int = Field(gt=0, description="Whole dollars requested")
    funding_body: Optional[str] = None
    jurisdiction: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None


class ClaimUpdate(BaseModel):
    """Editable claim fields; status changes go through the status endpoint."""

    apprentice_name: Optional[str] = None
    amount_requested: Optional[int] = Field(default=None, gt=0)
    funding_body: Optional[str] = None
    jurisdiction: Optional[str] = None
    notes: Optional[str] = None
    updated_by: Optional[str] = None


class ClaimStatusUpdate(BaseModel):
    status: ClaimStatus
    notes: Optional[str] = None
    reviewer: Optional[str] = None
    amount_approved: Optional[int] = Field(default=None, ge=0)
    payment_reference: Optional[str] = None
    performed_by: Optional[str] = None


class ClaimRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    claim_number: str
    apprentice_id: Optional[int] = None
    apprentice_name: Optional[str] = None
    claim_type: str
    status: str
    amount_requested: int
    amount_approved: Optional[int] = None
    funding_body: Optional[str] = None
    jurisdiction: Optional[str] = None
    submission_date: Optional[datetime] = None
    reviewer: Optional[str] = None
    review_date: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    payment_date: Optional[datetime] = None
    payment_reference: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ClaimHistoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    claim_id: int
    action: str
    changes: Dict[str, Any]
    performed_by: Optional[str] = None
    created_at: datetime


class ClaimDetail(BaseModel):
    claim: ClaimRead
    history: List[ClaimHistoryRead]


class ClaimPage(BaseModel):
    claims: List[ClaimRead]
    pagination: Pagination


class ClaimMetrics(BaseModel):
    totalClaims: int
    pendingClaims: int
    approvedClaims: int
    paidClaims: int
    totalRequested: int
    totalApproved: int
    approvalRate: int


class StatusCount(BaseModel):
    status: str
    count: int


class TypeCount(BaseModel):
    type: str
    count: int


class ClaimChartData(BaseModel):
    statusDistribution: List[StatusCount]
    typeDistribution: List[TypeCount]


class ClaimDashboard(BaseModel):
    timeframe: Timeframe
    metrics: ClaimMetrics
    chartData: ClaimChartData
    recentActivity: List[ClaimRead]


class EligibilityCriteriaCreate(BaseModel):
    claim_type: ClaimType
    title: str = Field(min_length=5, max_length=200)
    description: str = Field(min_length=10)
    jurisdiction: str = Field(min_length=2, max_length=50)
    funding_body: str = Field(min_length=2, max_length=100)
    eligibility_rules: Dict[str, Any] = Field(default_factory=dict, description="Rule set; ``checks`` lists extra checks")
    documentation_required: List[str] = Field(default_factory=list)
    maximum_amount: Optional[int] = Field(default=None, gt=0)
    active: bool = True
    expiry_date: Optional[datetime] = None


class EligibilityCriteriaRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    claim_type: str
    title: str
    description: str
    jurisdiction: str
    funding_body: str
    eligibility_rules: Dict[str, Any]
    documentation_required: List[str]
    maximum_amount: Optional[int] = None
    active: bool
    expiry_date: Optional[datetime] = None
    created_at: datetime


class EligibilityCriteriaList(BaseModel):
    criteria: List[EligibilityCriteriaRead]


class EligibilityCheckRequest(BaseModel):
    """Both ids are optional here so a missing one is reported as a 400."""

    apprentice_id: Optional[int] = None
    criteria_id: Optional[int] = None


class ApprenticeEligibilityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    apprentice_id: int
    apprentice_name: Optional[str] = None
    criteria_id: int
    status: str
    eligible_from_date: Optional[datetime] = None
    eligible_to_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime


class EligibilityRequirements(BaseModel):
    documentsRequired: List[str]
    additionalChecks: List[Any]


class EligibilityCheckResult(BaseModel):
    isEligible: bool
    eligibility: ApprenticeEligibilityRead
    requirements: Optional[EligibilityRequirements] = None
    message: str
