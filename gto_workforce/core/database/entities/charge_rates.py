"""
Charge rate and quote entity models.

A ``ChargeRateCalculation`` snapshots the inputs and outputs of a charge-rate
run for an apprentice at a host employer. Approving it copies the rate onto
the active placement. ``Quote``/``QuoteLineItem`` hold annual quotes built
from those rates.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import NaiveDatetime
from sqlmodel import JSON, Field

from ..base import Base


class ChargeRateCalculation(Base, table=True):
    """Table: charge_rate_calculations"""

    __tablename__ = "charge_rate_calculations"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    apprentice_id: int = Field(foreign_key="apprentices.id", index=True)
    host_employer_id: int = Field(foreign_key="host_employers.id", index=True)

    pay_rate: float
    total_hours: float
    billable_hours: float
    base_wage: float
    on_costs: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    total_cost: float
    cost_per_hour: float
    margin: float
    charge_rate: float

    approved: bool = Field(default=False, index=True)
    approved_date: Optional[NaiveDatetime] = Field(default=None)
    calculation_date: NaiveDatetime = Field(default_factory=datetime.utcnow)

    def __repr__(self) -> str:
        return f"ChargeRateCalculation(id={self.id}, charge_rate={self.charge_rate:.2f}, approved={self.approved})"


class Quote(Base, table=True):
    """Table: quotes"""

    __tablename__ = "quotes"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    quote_number: str = Field(max_length=32, unique=True, index=True)
    host_employer_id: int = Field(foreign_key="host_employers.id", index=True)
    title: str = Field(max_length=255)
    status: str = Field(default="draft", max_length=16)
    valid_until: date
    total_amount: float = Field(default=0.0)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)


class QuoteLineItem(Base, table=True):
    """Table: quote_line_items"""

    __tablename__ = "quote_line_items"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    quote_id: int = Field(foreign_key="quotes.id", index=True)
    apprentice_id: int = Field(foreign_key="apprentices.id")
    description: str = Field(max_length=255)
    quantity: int = Field(description="Number of weeks")
    weekly_hours: float
    rate: float
    total: float
