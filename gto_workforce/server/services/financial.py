"""
Financial service: invoices, payments, expenses and the summary report.

Reporting periods:

- ``month``: from the first of the current month
- ``quarter``: from the first day of the current calendar quarter
- ``year``: the last 365 days
- ``ytd``: from 1 July, the start of the Australian financial year
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.entities.finance import Expense, Invoice
from gto_workforce.core.database.repositories import (
    ExpenseRepository,
    HostEmployerRepository,
    InvoiceRepository,
)
from gto_workforce.core.errors import ConflictError, NotFoundError, ValidationError
from gto_workforce.core.models.io.finance import (
    ExpenseCreate,
    ExpenseRead,
    FinancialSummary,
    InvoiceCreate,
    InvoiceRead,
)

logger = logging.getLogger(__name__)

GST_RATE = 0.10
RECENT_LIMIT = 5


def financial_year_start(today: date) -> date:
    year = today.year if today.month >= 7 else today.year - 1
    return date(year, 7, 1)


def period_start(timeframe: str, today: date) -> date:
    if timeframe == "month":
        return today.replace(day=1)
    if timeframe == "quarter":
        return date(today.year, 3 * ((today.month - 1) // 3) + 1, 1)
    if timeframe == "ytd":
        return financial_year_start(today)
    return today - timedelta(days=365)


class FinancialService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.invoices = InvoiceRepository(session)
        self.expenses = ExpenseRepository(session)
        self.hosts = HostEmployerRepository(session)

    async def get_invoice(self, invoice_id: int) -> Invoice:
        invoice = await self.invoices.get_by_id(invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice", invoice_id)
        return invoice

    async def create_invoice(self, data: InvoiceCreate) -> Invoice:
        if await self.hosts.get_by_id(data.host_employer_id) is None:
            raise NotFoundError("Host employer", data.host_employer_id)
        number = data.invoice_number or await self._next_invoice_number(data.issue_date)
        if await self.invoices.get_by_number(number) is not None:
            raise ConflictError(f"Invoice number {number} already exists")

        tax = round(data.subtotal * GST_RATE, 2) if data.tax is None else data.tax
        invoice = Invoice(
            invoice_number=number,
            host_employer_id=data.host_employer_id,
            status=data.status,
            issue_date=data.issue_date,
            due_date=data.due_date,
            subtotal=data.subtotal,
            tax=tax,
            total=round(data.subtotal + tax, 2),
            notes=data.notes,
        )
        invoice = await self.invoices.create(invoice)
        logger.info(f"Created invoice {invoice.invoice_number} total={invoice.total:.2f}")
        return invoice

    async def _next_invoice_number(self, issue_date: date) -> str:
        prefix = f"INV-{issue_date:%Y%m}-"
        latest = await self.invoices.latest_number_with_prefix(prefix)
        sequence = 1
        if latest:
            try:
                sequence = int(latest[len(prefix):]) + 1
            except ValueError:
                logger.warning(f"Unexpected invoice number format: {latest}")
        return f"{prefix}{sequence:04d}"

    async def record_payment(self, invoice_id: int, amount: float) -> Invoice:
        """Add a payment to an invoice; fully paid invoices move to ``paid``."""
        invoice = await self.get_invoice(invoice_id)
        if invoice.status in ("cancelled", "draft"):
            raise ValidationError(
                f"Cannot record a payment against a {invoice.status} invoice",
                details={"current_status": invoice.status},
            )
        invoice.amount_paid = round((invoice.amount_paid or 0) + amount, 2)
        if invoice.amount_paid >= invoice.total:
            invoice.status = "paid"
        invoice = await self.invoices.update(invoice)
        logger.info(f"Recorded payment of {amount:.2f} on invoice {invoice.invoice_number} (status={invoice.status})")
        return invoice

    async def create_expense(self, data: ExpenseCreate) -> Expense:
        return await self.expenses.create(Expense(**data.model_dump()))

    async def summary(self, timeframe: Optional[str] = "month", today: Optional[date] = None) -> FinancialSummary:
        timeframe = timeframe if timeframe in ("month", "quarter", "year", "ytd") else "month"
        today = today or datetime.utcnow().date()
        start = period_start(timeframe, today)
        fy_start = financial_year_start(today)

        invoices = await self.invoices.issued_between(start, today)
        expenses = await self.expenses.between(start, today)
        revenue = round(sum(i.amount_paid or 0 for i in invoices), 2)
        spent = round(sum(e.amount for e in expenses), 2)
        net = round(revenue - spent, 2)

        ytd_invoices = await self.invoices.issued_between(fy_start, today)
        ytd_expenses = await self.expenses.between(fy_start, today)
        outstanding = await self.invoices.outstanding()

        return FinancialSummary(
            timeframe=timeframe,
            totalRevenue=revenue,
            totalExpenses=spent,
            netProfit=net,
            profitMargin=round(net / revenue * 100, 1) if revenue else 0.0,
            revenueYTD=round(sum(i.amount_paid or 0 for i in ytd_invoices), 2),
            expensesYTD=round(sum(e.amount for e in ytd_expenses), 2),
            outstanding=round(sum(i.total - (i.amount_paid or 0) for i in outstanding), 2),
            recentInvoices=[
                InvoiceRead.model_validate(i) for i in await self.invoices.list(limit=RECENT_LIMIT)
            ],
            recentExpenses=[
                ExpenseRead.model_validate(e) for e in await self.expenses.list(limit=RECENT_LIMIT)
            ],
        )
