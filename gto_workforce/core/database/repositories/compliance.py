"""
Compliance record repository.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.compliance import ComplianceRecord
from .base import SQLModelRepository


class ComplianceRecordRepository(SQLModelRepository[ComplianceRecord]):
    """Repository for compliance record data access operations using SQLModel."""

    default_order = ("due_date", "id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ComplianceRecord)
