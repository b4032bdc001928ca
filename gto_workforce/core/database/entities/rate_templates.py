"""
Rate template entity models.

Rate templates capture a reusable set of on-cost rates and margin for an
organisation. Every change is appended to ``rate_template_history``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import NaiveDatetime
from sqlmodel import JSON, Field, Text

from ..base import Base


class RateTemplateBase(Base):
    """Base fields for rate templates. Rates are fractions (0.115 = 11.5%)."""

    org_id: str = Field(max_length=64, index=True)
    name: str = Field(max_length=255)
    template_type: str = Field(default="hourly", max_length=16, description="hourly, daily or fixed")
    description: Optional[str] = Field(default=None, sa_type=Text)
    award_code: Optional[str] = Field(default=None, max_length=16)
    base_rate: float
    base_margin: float = Field(default=0.15)
    super_rate: float = Field(default=0.115)
    leave_loading: float = Field(default=0.0)
    workers_comp_rate: float = Field(default=0.0)
    payroll_tax_rate: float = Field(default=0.0)
    training_cost_rate: float = Field(default=0.0)
    other_costs_rate: float = Field(default=0.0)
    funding_offset: float = Field(default=0.0, description="Fixed hourly amount deducted from the rate")
    casual_loading: float = Field(default=0.0)
    effective_from: date
    effective_to: Optional[date] = Field(default=None)


class RateTemplate(RateTemplateBase, table=True):
    """Table: rate_templates"""

    __tablename__ = "rate_templates"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    status: str = Field(default="draft", max_length=16, index=True)
    version: int = Field(default=1)
    created_by: Optional[str] = Field(default=None, max_length=128)
    updated_by: Optional[str] = Field(default=None, max_length=128)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    def __repr__(self) -> str:
        return f"RateTemplate(id={self.id}, name={self.name}, status={self.status}, version={self.version})"


class RateTemplateHistory(Base, table=True):
    """Table: rate_template_history"""

    __tablename__ = "rate_template_history"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    template_id: int = Field(foreign_key="rate_templates.id", index=True)
    org_id: str = Field(max_length=64)
    action: str = Field(max_length=32, description="created, updated, status_changed")
    changes: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    performed_by: Optional[str] = Field(default=None, max_length=128)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow, index=True)
