"""
Host employer entity models.

Host employers are the businesses that apprentices are placed with. Custom
margin and admin rates override the charge-rate defaults for that host.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, Text

from ..base import Base


class HostEmployerBase(Base):
    """Base fields for host employers."""

    name: str = Field(max_length=255, index=True)
    industry: str = Field(max_length=128)
    contact_person: str = Field(max_length=128)
    email: str = Field(max_length=255)
    phone: str = Field(max_length=32)
    address: str = Field(sa_type=Text)
    abn: Optional[str] = Field(default=None, max_length=14)
    status: str = Field(default="active", max_length=16, index=True)
    safety_rating: Optional[int] = Field(default=None, description="Safety rating from 1 to 5")
    compliance_status: str = Field(default="pending", max_length=16, index=True)
    custom_margin_rate: Optional[float] = Field(default=None, description="Overrides the default charge-rate margin")
    custom_admin_rate: Optional[float] = Field(default=None, description="Overrides the default admin on-cost rate")
    notes: Optional[str] = Field(default=None, sa_type=Text)


class HostEmployer(HostEmployerBase, table=True):
    """Persistent host employer record.

    Table: host_employers
    """

    __tablename__ = "host_employers"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    def __repr__(self) -> str:
        return f"HostEmployer(id={self.id}, name={self.name}, status={self.status})"
