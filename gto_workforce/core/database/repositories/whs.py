"""
WHS incident, risk assessment and policy repositories.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.whs import WhsIncident, WhsPolicy, WhsRiskAssessment, WhsWitness
from .base import SQLModelRepository


class WhsIncidentRepository(SQLModelRepository[WhsIncident]):
    """Repository for WHS incidents and witnesses using SQLModel."""

    default_order = ("-date_reported", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, WhsIncident)

    async def create_with_witnesses(self, incident: WhsIncident, witnesses: List[WhsWitness]) -> WhsIncident:
        """Persist an incident and its witness statements together."""
        self.session.add(incident)
        await self.session.flush()
        for witness in witnesses:
            witness.incident_id = incident.id
            self.session.add(witness)
        await self.session.commit()
        await self.session.refresh(incident)
        return incident

    async def page(
        self, page: int, limit: int, filters: Optional[Dict[str, Any]] = None
    ) -> Tuple[List[WhsIncident], int]:
        """Return one page of incidents and the total matching count.

        Args:
            page: 1-based page number
            limit: Page size
            filters: Equality filters (type, severity, status)

        Returns:
            ``(incidents, total)``
        """
        total = await self.count(filters)
        incidents = await self.list(limit=limit, offset=(page - 1) * limit, filters=filters)
        return incidents, total

    async def get_witnesses(self, incident_id: int) -> List[WhsWitness]:
        stmt = select(WhsWitness).where(WhsWitness.incident_id == incident_id).order_by(WhsWitness.id.asc())  # type: ignore[union-attr]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_witness(self, witness: WhsWitness) -> WhsWitness:
        self.session.add(witness)
        await self.session.commit()
        await self.session.refresh(witness)
        return witness

    async def count_where(self, *conditions) -> int:
        stmt = select(func.count()).select_from(WhsIncident)
        for condition in conditions:
            stmt = stmt.where(condition)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def delete(self, entity_id: int) -> bool:
        """Delete an incident together with its witnesses."""
        incident = await self.get_by_id(entity_id)
        if incident is None:
            return False
        await self.session.execute(sa_delete(WhsWitness).where(WhsWitness.incident_id == entity_id))
        await self.session.delete(incident)
        await self.session.commit()
        return True




class WhsRiskAssessmentRepository(SQLModelRepository[WhsRiskAssessment]):
    default_order = ("-assessment_date", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, WhsRiskAssessment)

    async def search(
        self, page: int, limit: int, search: Optional[str] = None, filters: Optional[Dict[str, Any]] = None
    ) -> Tuple[List[WhsRiskAssessment], int]:
        """Return one page of assessments matching ``search`` and the total count.

        ``search`` is a case-insensitive substring match on the title, location,
        description and assessor name.
        """
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    WhsRiskAssessment.title.ilike(pattern),  # type: ignore[attr-defined]
                    WhsRiskAssessment.location.ilike(pattern),  # type: ignore[attr-defined]
                    WhsRiskAssessment.description.ilike(pattern),  # type: ignore[attr-defined]
                    WhsRiskAssessment.assessor_name.ilike(pattern),  # type: ignore[attr-defined]
                )
            )
        for key, value in (filters or {}).items():
            if value is not None:
                conditions.append(getattr(WhsRiskAssessment, key) == value)

        count_stmt = select(func.count()).select_from(WhsRiskAssessment).where(*conditions)
        total = int((await self.session.execute(count_stmt)).scalar_one())
        stmt = (
            select(WhsRiskAssessment)
            .where(*conditions)
            .order_by(*self._order_by())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total


class WhsPolicyRepository(SQLModelRepository[WhsPolicy]):
    default_order = ("-created_at", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, WhsPolicy)
