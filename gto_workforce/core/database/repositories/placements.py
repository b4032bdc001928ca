"""
Placement repository interface and implementation.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.placements import Placement
from .base import SQLModelRepository


class PlacementRepository(SQLModelRepository[Placement]):
    """Repository for placement data access operations using SQLModel."""

    default_order = ("-start_date", "id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Placement)

    async def get_active(self, apprentice_id: int, host_employer_id: Optional[int] = None) -> Optional[Placement]:
        """Get the most recent active placement for an apprentice.

        Args:
            apprentice_id: Apprentice ID
            host_employer_id: Restrict to one host employer when given

        Returns:
            Active Placement instance or None
        """
        stmt = select(Placement).where(Placement.apprentice_id == apprentice_id, Placement.status == "active")
        if host_employer_id is not None:
            stmt = stmt.where(Placement.host_employer_id == host_employer_id)
        stmt = stmt.order_by(Placement.start_date.desc()).limit(1)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return result.scalars().first()
