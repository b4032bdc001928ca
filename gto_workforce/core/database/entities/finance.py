"""
Financial entity models: invoices issued to host employers and GTO expenses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, Text

from ..base import Base


class Invoice(Base, table=True):
    """Table: invoices"""

    __tablename__ = "invoices"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    invoice_number: str = Field(max_length=32, unique=True, index=True)
    host_employer_id: int = Field(foreign_key="host_employers.id", index=True)
    status: str = Field(default="draft", max_length=16, index=True)
    issue_date: date = Field(index=True)
    due_date: date
    subtotal: float
    tax: float
    total: float
    amount_paid: float = Field(default=0.0)
    notes: Optional[str] = Field(default=None, sa_type=Text)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    @property
    def balance(self) -> float:
        return round(self.total - self.amount_paid, 2)


class Expense(Base, table=True):
    """Table: expenses"""

    __tablename__ = "expenses"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    description: str = Field(max_length=255)
    category: str = Field(max_length=64, index=True)
    amount: float
    expense_date: date = Field(index=True)
    vendor: Optional[str] = Field(default=None, max_length=128)
    notes: Optional[str] = Field(default=None, sa_type=Text)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
