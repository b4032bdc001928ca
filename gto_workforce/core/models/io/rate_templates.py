"""
Rate template I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TemplateType = Literal["hourly", "daily", "fixed"]
TemplateStatus = Literal["draft", "active", "archived", "deleted"]

RATE_FIELDS = (
    "base_rate",
    "base_margin",
    "super_rate",
    "leave_loading",
    "workers_comp_rate",
    "payroll_tax_rate",
    "training_cost_rate",
    "other_costs_rate",
    "funding_offset",
    "casual_loading",
)


class RateTemplateCreate(BaseModel):
    org_id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=2, max_length=255)
    template_type: TemplateType = "hourly"
    description: Optional[str] = None
    award_code: Optional[str] = None
    base_rate: float
    base_margin: float = 0.15
    super_rate: float = 0.115
    leave_loading: float = 0.0
    workers_comp_rate: float = 0.0
    payroll_tax_rate: float = 0.0
    training_cost_rate: float = 0.0
    other_costs_rate: float = 0.0
    funding_offset: float = Field(default=0.0, ge=0)
    casual_loading: float = 0.0
    effective_from: date
    effective_to: Optional[date] = None
    status: TemplateStatus = "draft"
    created_by: Optional[str] = None


class RateTemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    template_type: Optional[TemplateType] = None
    description: Optional[str] = None
    award_code: Optional[str] = None
    base_rate: Optional[float] = None
    base_margin: Optional[float] = None
    super_rate: Optional[float] = None
    leave_loading: Optional[float] = None
    workers_comp_rate: Optional[float] = None
    payroll_tax_rate: Optional[float] = None
    training_cost_rate: Optional[float] = None
    other_costs_rate: Optional[float] = None
    funding_offset: Optional[float] = Field(default=None, ge=0)
    casual_loading: Optional[float] = None
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    status: Optional[TemplateStatus] = None
    updated_by: Optional[str] = None


class RateTemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    org_id: str
    name: str
    template_type: str
    description: Optional[str] = None
    award_code: Optional[str] = None
    base_rate: float
    base_margin: float
    super_rate: float
    leave_loading: float
    workers_comp_rate: float
    payroll_tax_rate: float
    training_cost_rate: float
    other_costs_rate: float
    funding_offset: float
    casual_loading: float
    effective_from: date
    effective_to: Optional[date] = None
    status: str
    version: int
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RateTemplateHistoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    template_id: int
    action: str
    changes: Dict[str, Any]
    performed_by: Optional[str] = None
    created_at: datetime


class RateAdjustments(BaseModel):
    """Hourly adjustments added to the base rate before on-costs."""

    location: float = 0.0
    skill: float = 0.0


class RateBreakdown(BaseModel):
    base_rate: float
    super_amount: float
    leave_loading_amount: float
    workers_comp_amount: float
    payroll_tax_amount: float
    training_cost_amount: float
    other_costs_amount: float
    casual_loading_amount: float
    funding_offset: float
    total_rate: float
    margin_amount: float
    final_rate: float


class TemplateValidation(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class TemplateCompareRequest(BaseModel):
    base_template_id: int
    compare_template_id: int


class FieldDifference(BaseModel):
    field: str
    base_value: float
    compare_value: float
    difference: float


class TemplateComparison(BaseModel):
    base_template_id: int
    compare_template_id: int
    differences: List[FieldDifference]
    base_final_rate: float
    compare_final_rate: float
    final_rate_difference: float


class TemplateAnalytics(BaseModel):
    totalTemplates: int
    activeTemplates: int
    averageRate: float
    recentChanges: List[RateTemplateHistoryRead]
