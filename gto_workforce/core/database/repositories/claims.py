"""
Funding claim repository interface and implementation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.claims import ApprenticeEligibility, Claim, ClaimHistory, EligibilityCriteria
from .base import SQLModelRepository


class ClaimRepository(SQLModelRepository[Claim]):
    """Repository for claims and claim history using SQLModel."""

    default_order = ("-created_at", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Claim)

    async def latest_number_with_prefix(self, prefix: str) -> Optional[str]:
        """Get the highest claim number starting with ``prefix`` (e.g. ``COM-2026-``)."""
        stmt = (
            select(Claim.claim_number)
            .where(Claim.claim_number.startswith(prefix))  # type: ignore[attr-defined]
            .order_by(Claim.claim_number.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_since(self, since: datetime) -> List[Claim]:
        """List claims created on or after ``since``, newest first."""
        stmt = select(Claim).where(Claim.created_at >= since).order_by(*self._order_by())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def add_history(
        self, claim: Claim, action: str, changes: Dict[str, Any], performed_by: Optional[str] = None
    ) -> ClaimHistory:
        """Stage a history row for a claim. The caller commits."""
        entry = ClaimHistory(claim_id=claim.id, action=action, changes=changes, performed_by=performed_by)
        self.session.add(entry)
        return entry

    async def get_history(self, claim_id: int) -> List[ClaimHistory]:
        stmt = (
            select(ClaimHistory)
            .where(ClaimHistory.claim_id == claim_id)
            .order_by(ClaimHistory.created_at.asc(), ClaimHistory.id.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class EligibilityCriteriaRepository(SQLModelRepository[EligibilityCriteria]):
    default_order = ("claim_type", "id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, EligibilityCriteria)


class ApprenticeEligibilityRepository(SQLModelRepository[ApprenticeEligibility]):
    default_order = ("-created_at", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApprenticeEligibility)

    async def find(self, apprentice_id: int, criteria_id: int) -> Optional[ApprenticeEligibility]:
        """Get the eligibility record for an apprentice against one set of criteria."""
        stmt = select(ApprenticeEligibility).where(
            ApprenticeEligibility.apprentice_id == apprentice_id,
            ApprenticeEligibility.criteria_id == criteria_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
