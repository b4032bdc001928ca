"""
Charge rate I/O models.

``WorkConfig``, ``CostConfig`` and ``BillableOptions`` carry the calculator
inputs; their defaults are the standard GTO assumptions (38 hour week, 11.5%
super, 15% margin and so on).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkConfig(BaseModel):
    """Working pattern used to derive annual and billable hours."""

    hours_per_day: float = Field(default=7.6, gt=0, le=24)
    days_per_week: float = Field(default=5, gt=0, le=7)
    weeks_per_year: float = Field(default=52, gt=0, le=52)
    annual_leave_days: float = Field(default=20, ge=0)
    public_holidays: float = Field(default=10, ge=0)
    sick_leave_days: float = Field(default=10, ge=0)
    training_weeks: float = Field(default=5, ge=0)


class CostConfig(BaseModel):
    """On-cost rates (fractions of base wage) and fixed annual costs."""

    super_rate: float = Field(default=0.115, ge=0, le=1)
    wc_rate: float = Field(default=0.047, ge=0, le=1)
    payroll_tax_rate: float = Field(default=0.0485, ge=0, le=1)
    leave_loading: float = Field(default=0.175, ge=0, le=1)
    study_cost: float = Field(default=850, ge=0)
    ppe_cost: float = Field(default=300, ge=0)
    admin_rate: float = Field(default=0.17, ge=0, le=1)
    default_margin: float = Field(default=0.15, ge=0, le=1)
    adverse_weather_days: float = Field(default=5, ge=0)


class BillableOptions(BaseModel):
    """Which non-working time is still billed to the host employer."""

    include_annual_leave: bool = False
    include_public_holidays: bool = False
    include_sick_leave: bool = False
    include_training_time: bool = False
    include_adverse_weather: bool = False


class OnCosts(BaseModel):
    superannuation: float
    workers_comp: float
    payroll_tax: float
    leave_loading: float
    study_cost: float
    ppe_cost: float
    admin_cost: float

    @property
    def total(self) -> float:
        return sum(self.model_dump().values())


class ChargeRateResult(BaseModel):
    """Output of a charge rate calculation."""

    pay_rate: float
    total_hours: float
    billable_hours: float
    base_wage: float
    on_costs: OnCosts
    total_cost: float
    cost_per_hour: float
    margin: float
    charge_rate: float


class ChargeRateCalculateRequest(BaseModel):
    pay_rate: float = Field(description="Hourly pay rate; must be positive")
    work_config: Optional[WorkConfig] = None
    cost_config: Optional[CostConfig] = None
    billable_options: Optional[BillableOptions] = None
    custom_margin: Optional[float] = Field(default=None, ge=0, le=1)


class RateValidateRequest(BaseModel):
    award_code: str
    rate: float = Field(gt=0)
    classification_code: Optional[str] = None
    date: Optional[str] = Field(default=None, description="Validation date as YYYY-MM-DD, defaults to today")


class RateValidateResponse(BaseModel):
    is_valid: bool
    minimum_rate: float
    message: str
    source: Literal["local", "fairwork"]


class ChargeRateCreate(BaseModel):
    apprentice_id: int = Field(gt=0)
    host_employer_id: int = Field(gt=0)


class ChargeRateCalculationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    apprentice_id: int
    host_employer_id: int
    pay_rate: float
    total_hours: float
    billable_hours: float
    base_wage: float
    on_costs: Dict[str, float]
    total_cost: float
    cost_per_hour: float
    margin: float
    charge_rate: float
    approved: bool
    approved_date: Optional[datetime] = None
    calculation_date: datetime


class QuoteCreate(BaseModel):
    host_employer_id: int = Field(gt=0)
    apprentice_ids: List[int] = Field(default_factory=list)


class QuoteLineItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    apprentice_id: int
    description: str
    quantity: int
    weekly_hours: float
    rate: float
    total: float


class QuoteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quote_number: str
    host_employer_id: int
    title: str
    status: str
    valid_until: date
    total_amount: float
    created_at: datetime
    line_items: List[QuoteLineItemRead] = Field(default_factory=list)
