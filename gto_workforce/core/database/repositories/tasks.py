"""
Task repository.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.tasks import Task
from .base import SQLModelRepository


class TaskRepository(SQLModelRepository[Task]):
    """Repository for task data access operations using SQLModel."""

    default_order = ("-created_at", "-id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Task)

    async def count_open(self) -> int:
        stmt = select(func.count()).select_from(Task).where(Task.status != "completed")
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_overdue(self, now: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(Task)
            .where(Task.status != "completed", Task.due_date.is_not(None), Task.due_date < now)  # type: ignore[union-attr]
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
