"""
Rate template repository interface and implementation.

Templates are soft-deleted (status ``deleted``); list queries exclude them
unless a status filter asks for them explicitly.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.rate_templates import RateTemplate, RateTemplateHistory
from .base import QueryBuilder, SQLModelRepository


class RateTemplateRepository(SQLModelRepository[RateTemplate]):
    """Repository for rate templates using SQLModel."""

    default_order = ("-created_at", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RateTemplate)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[RateTemplate]:
        """List templates, hiding deleted ones unless filtered by status."""
        filters = dict(filters or {})
        stmt = select(RateTemplate)
        if filters.get("status") is None:
            stmt = stmt.where(RateTemplate.status != "deleted")
        stmt = QueryBuilder.apply_filters(stmt, RateTemplate, filters)
        stmt = stmt.order_by(*self._order_by())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_history(
        self,
        template: RateTemplate,
        action: str,
        changes: Dict[str, Any],
        performed_by: Optional[str] = None,
    ) -> RateTemplateHistory:
        """Append a history row for a template. The caller commits."""
        entry = RateTemplateHistory(
            template_id=template.id,
            org_id=template.org_id,
            action=action,
            changes=changes,
            performed_by=performed_by,
        )
        self.session.add(entry)
        return entry

    async def get_history(self, template_id: int) -> List[RateTemplateHistory]:
        """Get a template's history, newest first."""
        stmt = (
            select(RateTemplateHistory)
            .where(RateTemplateHistory.template_id == template_id)
            .order_by(RateTemplateHistory.created_at.desc(), RateTemplateHistory.id.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def recent_history(self, org_id: str, limit: int = 10) -> List[RateTemplateHistory]:
        stmt = (
            select(RateTemplateHistory)
            .where(RateTemplateHistory.org_id == org_id)
            .order_by(RateTemplateHistory.created_at.desc(), RateTemplateHistory.id.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
