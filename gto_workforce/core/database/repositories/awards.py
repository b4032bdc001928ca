"""
Award repository interface and implementation.

This module provides data access operations for awards, their
classifications and classification rates, including the effective-date
lookups used by the award rate calculator.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.awards import Award, AwardClassification, AwardRate
from .base import SQLModelRepository


class AwardRepository(SQLModelRepository[Award]):
    """Repository for award data access operations using SQLModel."""

    default_order = ("code",)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Award)

    async def get_by_code(self, code: str) -> Optional[Award]:
        """Get an award by its FairWork code.

        Args:
            code: Award code, e.g. ``MA000003``

        Returns:
            Award instance or None
        """
        stmt = select(Award).where(Award.code == code)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class AwardClassificationRepository(SQLModelRepository[AwardClassification]):
    """Repository for award classification data access operations using SQLModel."""

    default_order = ("award_id", "level", "id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AwardClassification)

    async def list_for_award(self, award_id: int) -> List[AwardClassification]:
        """List the classifications of an award ordered by level."""
        return await self.list(filters={"award_id": award_id})

    async def get_by_level(self, award_id: int, level: int) -> Optional[AwardClassification]:
        stmt = (
            select(AwardClassification)
            .where(AwardClassification.award_id == award_id, AwardClassification.level == level)
            .order_by(AwardClassification.id.asc())  # type: ignore[union-attr]
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()


class AwardRateRepository(SQLModelRepository[AwardRate]):
    """Repository for award rate data access operations using SQLModel."""

    default_order = ("classification_id", "-effective_from")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AwardRate)

    async def find_current_rate(
        self,
        classification_id: int,
        on: date,
        *,
        apprentice_year: Optional[int] = None,
        is_adult: Optional[bool] = None,
        has_completed_year12: Optional[bool] = None,
    ) -> Optional[AwardRate]:
        """Find the rate in effect on a date for a classification.

        Args:
            classification_id: Classification ID
            on: Date the rate must be effective on
            apprentice_year: Match this apprenticeship year when given
            is_adult: Match the adult flag when given
            has_completed_year12: Match the Year 12 flag when given

        Returns:
            The most recently effective matching AwardRate, or None
        """
        stmt = select(AwardRate).where(
            AwardRate.classification_id == classification_id,
            AwardRate.effective_from <= on,
            or_(AwardRate.effective_to.is_(None), AwardRate.effective_to >= on),  # type: ignore[union-attr]
        )
        if apprentice_year is not None:
            stmt = stmt.where(AwardRate.apprentice_year == apprentice_year)
        if is_adult is not None:
            stmt = stmt.where(AwardRate.is_adult == is_adult)
        if has_completed_year12 is not None:
            stmt = stmt.where(AwardRate.has_completed_year12 == has_completed_year12)
        stmt = stmt.order_by(AwardRate.effective_from.desc()).limit(1)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return result.scalars().first()
