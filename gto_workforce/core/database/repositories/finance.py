"""
Invoice and expense repositories.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.finance import Expense, Invoice
from .base import SQLModelRepository


class InvoiceRepository(SQLModelRepository[Invoice]):
    """Repository for invoices using SQLModel."""

    default_order = ("-issue_date", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Invoice)

    async def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        stmt = select(Invoice).where(Invoice.invoice_number == invoice_number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def latest_number_with_prefix(self, prefix: str) -> Optional[str]:
        """Get the highest invoice number starting with ``prefix`` (e.g. ``INV-202602-``)."""
        stmt = (
            select(Invoice.invoice_number)
            .where(Invoice.invoice_number.startswith(prefix))  # type: ignore[attr-defined]
            .order_by(Invoice.invoice_number.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def issued_between(self, start: date, end: date) -> List[Invoice]:
        stmt = (
            select(Invoice)
            .where(Invoice.issue_date >= start, Invoice.issue_date <= end, Invoice.status != "cancelled")
            .order_by(*self._order_by())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def outstanding(self) -> List[Invoice]:
        stmt = select(Invoice).where(Invoice.status.in_(("sent", "overdue")))  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ExpenseRepository(SQLModelRepository[Expense]):
    """Repository for expenses using SQLModel."""

    default_order = ("-expense_date", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Expense)

    async def between(self, start: date, end: date) -> List[Expense]:
        stmt = (
            select(Expense)
            .where(Expense.expense_date >= start, Expense.expense_date <= end)
            .order_by(*self._order_by())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
