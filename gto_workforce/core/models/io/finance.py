"""
Financial I/O models: invoices, expenses and the summary report.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

InvoiceStatus = Literal["draft", "sent", "paid", "overdue", "cancelled"]
FinancialTimeframe = Literal["month", "quarter", "year", "ytd"]


class InvoiceCreate(BaseModel):
    """Schema for raising an invoice. ``tax`` defaults to 10% GST."""

    host_employer_id: int = Field(gt=0)
    invoice_number: Optional[str] = Field(default=None, description="Generated when omitted")
    status: InvoiceStatus = "draft"
    issue_date: date
    due_date: date
    subtotal: float = Field(ge=0)
    tax: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self) -> "InvoiceCreate":
        if self.due_date < self.issue_date:
            raise ValueError("Due date must be on or after issue date")
        return self


class InvoiceUpdate(BaseModel):
    status: Optional[InvoiceStatus] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None


class PaymentCreate(BaseModel):
    amount: float = Field(gt=0)


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    host_employer_id: int
    status: str
    issue_date: date
    due_date: date
    subtotal: float
    tax: float
    total: float
    amount_paid: float
    balance: float
    notes: Optional[str] = None
    created_at: datetime


class ExpenseCreate(BaseModel):
    description: str = Field(min_length=2, max_length=255)
    category: str = Field(min_length=2, max_length=64)
    amount: float = Field(gt=0)
    expense_date: date
    vendor: Optional[str] = None
    notes: Optional[str] = None


class ExpenseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    category: str
    amount: float
    expense_date: date
    vendor: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime


class FinancialSummary(BaseModel):
    timeframe: FinancialTimeframe
    totalRevenue: float
    totalExpenses: float
    netProfit: float
    profitMargin: float
    revenueYTD: float
    expensesYTD: float
    outstanding: float
    recentInvoices: List[InvoiceRead]
    recentExpenses: List[ExpenseRead]
