"""
Apprentice repository interface and implementation.

This module provides data access operations for apprentices, including
lookups by email and name resolution for list views.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.apprentices import Apprentice
from .base import SQLModelRepository


class ApprenticeRepository(SQLModelRepository[Apprentice]):
    """Repository for apprentice data access operations using SQLModel."""

    default_order = ("last_name", "first_name")

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async session for database operations
        """
        super().__init__(session, Apprentice)

    async def get_by_email(self, email: str) -> Optional[Apprentice]:
        """Get an apprentice by email address.

        Args:
            email: Normalised (lowercase) email address

        Returns:
            Apprentice instance or None
        """
        stmt = select(Apprentice).where(Apprentice.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_names(self, apprentice_ids: Iterable[int]) -> Dict[int, str]:
        """Resolve apprentice ids to display names in one query.

        Args:
            apprentice_ids: Apprentice ids to resolve

        Returns:
            Mapping of id to "First Last"
        """
        ids = {i for i in apprentice_ids if i is not None}
        if not ids:
            return {}
        stmt = select(Apprentice).where(Apprentice.id.in_(ids))  # type: ignore[union-attr]
        result = await self.session.execute(stmt)
        return {a.id: a.full_name for a in result.scalars().all()}
