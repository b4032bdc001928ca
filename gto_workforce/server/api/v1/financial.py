"""
API endpoints for invoices, payments, expenses and the financial summary.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.models.io.finance import (
    ExpenseCreate,
    ExpenseRead,
    FinancialSummary,
    InvoiceCreate,
    InvoiceRead,
    InvoiceUpdate,
    PaymentCreate,
)
from gto_workforce.server.services.financial import FinancialService

router = APIRouter(tags=["financial"])


@router.get(
    "/summary",
    response_model=FinancialSummary,
    summary="Financial Summary",
    description="Revenue, expenses, profit and outstanding balances for month, quarter, year or ytd "
    "(from 1 July).",
)
async def financial_summary(
    timeframe: str = "month",
    session: AsyncSession = Depends(get_session),
) -> FinancialSummary:
    return await FinancialService(session).summary(timeframe)


@router.post(
    "/invoices",
    response_model=InvoiceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Invoice",
    description="Raise an invoice. Tax defaults to 10% GST and the number is generated when omitted.",
    responses={
        404: {"description": "Host employer not found"},
        409: {"description": "Invoice number already exists"},
    },
)
async def create_invoice(invoice: InvoiceCreate, session: AsyncSession = Depends(get_session)) -> InvoiceRead:
    return InvoiceRead.model_validate(await FinancialService(session).create_invoice(invoice))


@router.get("/invoices", response_model=List[InvoiceRead], summary="List Invoices")
async def list_invoices(
    status_filter: Optional[str] = Query(None, alias="status"),
    host_employer_id: Optional[int] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[InvoiceRead]:
    invoices = await FinancialService(session).invoices.list(
        limit=limit, offset=offset, filters={"status": status_filter, "host_employer_id": host_employer_id}
    )
    return [InvoiceRead.model_validate(i) for i in invoices]


@router.get("/invoices/{invoice_id}", response_model=InvoiceRead, summary="Get Invoice")
async def get_invoice(invoice_id: int, session: AsyncSession = Depends(get_session)) -> InvoiceRead:
    return InvoiceRead.model_validate(await FinancialService(session).get_invoice(invoice_id))


@router.put("/invoices/{invoice_id}", response_model=InvoiceRead, summary="Update Invoice")
async def update_invoice(
    invoice_id: int,
    invoice_update: InvoiceUpdate,
    session: AsyncSession = Depends(get_session),
) -> InvoiceRead:
    service = FinancialService(session)
    invoice = await service.get_invoice(invoice_id)
    invoice = await service.invoices.update_fields(invoice, invoice_update.model_dump(exclude_unset=True))
    return InvoiceRead.model_validate(invoice)


@router.post(
    "/invoices/{invoice_id}/payments",
    response_model=InvoiceRead,
    summary="Record Payment",
    description="Add a payment to an invoice. The invoice becomes paid once the total is covered.",
    responses={400: {"description": "Invoice is draft or cancelled"}},
)
async def record_payment(
    invoice_id: int,
    payment: PaymentCreate,
    session: AsyncSession = Depends(get_session),
) -> InvoiceRead:
    return InvoiceRead.model_validate(await FinancialService(session).record_payment(invoice_id, payment.amount))


@router.post(
    "/expenses",
    response_model=ExpenseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Expense",
)
async def create_expense(expense: ExpenseCreate, session: AsyncSession = Depends(get_session)) -> ExpenseRead:
    return ExpenseRead.model_validate(await FinancialService(session).create_expense(expense))


@router.get("/expenses", response_model=List[ExpenseRead], summary="List Expenses")
async def list_expenses(
    category: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[ExpenseRead]:
    expenses = await FinancialService(session).expenses.list(limit=limit, offset=offset, filters={"category": category})
    return [ExpenseRead.model_validate(e) for e in expenses]
