"""
Lead repository.

Lookups by website id scan ``lead_metadata`` in Python so the query works on
both PostgreSQL and SQLite JSON columns.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.leads import Lead
from .base import SQLModelRepository


class LeadRepository(SQLModelRepository[Lead]):
    """Repository for leads using SQLModel."""

    default_order = ("-created_at", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Lead)

    async def get_by_website_id(self, website_lead_id: str) -> Optional[Lead]:
        result = await self.session.execute(select(Lead))
        for lead in result.scalars().all():
            if lead.website_lead_id == str(website_lead_id):
                return lead
        return None

    async def get_by_email(self, email: str) -> Optional[Lead]:
        stmt = select(Lead).where(Lead.email == email).order_by(Lead.id.asc()).limit(1)  # type: ignore[union-attr]
        result = await self.session.execute(stmt)
        return result.scalars().first()
