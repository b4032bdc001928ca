"""
Host employer repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.host_employers import HostEmployer
from .base import SQLModelRepository


class HostEmployerRepository(SQLModelRepository[HostEmployer]):
    """Repository for host employer data access operations using SQLModel."""

    default_order = ("name",)

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, HostEmployer)

    async def get_by_email(self, email: str) -> Optional[HostEmployer]:
        stmt = select(HostEmployer).where(HostEmployer.email == email)
        result = await self.session.execute(stmt)
        return result.scalars().first()
