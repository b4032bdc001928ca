"""
User entity models.

Staff and portal users. Roles map to permissions in
``gto_workforce.core.validation.business_rules``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field

from ..base import Base


class UserBase(Base):
    """Base fields for users."""

    username: str = Field(max_length=64, unique=True, index=True)
    email: str = Field(max_length=255)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    role: str = Field(default="field_officer", max_length=32, description="admin, field_officer, payroll, ...")
    is_active: bool = Field(default=True)


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, role={self.role})"
