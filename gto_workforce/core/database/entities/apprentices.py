"""
Apprentice entity models.

This module contains the database entity for apprentices and trainees employed
by the GTO. The ``status`` column follows the lifecycle defined in
``gto_workforce.core.validation.rules.APPRENTICE_STATUS_TRANSITIONS``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, Text

from ..base import Base


class ApprenticeBase(Base):
    """Base fields for apprentices."""

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str = Field(max_length=255, unique=True, index=True)
    phone: Optional[str] = Field(default=None, max_length=32)
    date_of_birth: Optional[date] = Field(default=None)
    trade: str = Field(max_length=128, index=True)
    status: str = Field(default="applicant", max_length=32, index=True)
    progress: int = Field(default=0, description="Completion percentage (0-100)")
    apprenticeship_year: int = Field(default=1, description="Current year of the apprenticeship (1-4)")
    is_adult: bool = Field(default=False, description="Adult apprentice rates apply (21 or older at start)")
    has_completed_year12: bool = Field(default=False)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_type=Text)


class Apprentice(ApprenticeBase, table=True):
    """Persistent apprentice record.

    Table: apprentices
    """

    __tablename__ = "apprentices"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"Apprentice(id={self.id}, name={self.full_name}, status={self.status})"
