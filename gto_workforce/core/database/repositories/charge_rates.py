"""
Charge rate calculation and quote repositories.
"""

from __future__ import annotations

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.charge_rates import ChargeRateCalculation, Quote, QuoteLineItem
from .base import SQLModelRepository


class ChargeRateCalculationRepository(SQLModelRepository[ChargeRateCalculation]):
    """Repository for charge rate calculations using SQLModel."""

    default_order = ("-calculation_date", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ChargeRateCalculation)


class QuoteRepository(SQLModelRepository[Quote]):
    """Repository for quotes and their line items using SQLModel."""

    default_order = ("-created_at", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Quote)

    async def create_with_items(self, quote: Quote, items: List[QuoteLineItem]) -> Quote:
        """Persist a quote and its line items in one transaction."""
        self.session.add(quote)
        await self.session.flush()
        for item in items:
            item.quote_id = quote.id
            self.session.add(item)
        await self.session.commit()
        await self.session.refresh(quote)
        return quote

    async def get_line_items(self, quote_id: int) -> List[QuoteLineItem]:
        stmt = select(QuoteLineItem).where(QuoteLineItem.quote_id == quote_id).order_by(QuoteLineItem.id.asc())  # type: ignore[union-attr]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
