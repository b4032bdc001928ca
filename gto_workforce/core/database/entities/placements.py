"""
Placement entity models.

A placement assigns an apprentice to a host employer for a period. The
negotiated pay rate and approved charge rate live on the placement.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, Text

from ..base import Base


class PlacementBase(Base):
    """Base fields for placements."""

    apprentice_id: int = Field(foreign_key="apprentices.id", index=True)
    host_employer_id: int = Field(foreign_key="host_employers.id", index=True)
    start_date: date
    end_date: Optional[date] = Field(default=None)
    status: str = Field(default="active", max_length=16, index=True)
    position: Optional[str] = Field(default=None, max_length=128)
    supervisor: Optional[str] = Field(default=None, max_length=128)
    supervisor_contact: Optional[str] = Field(default=None, max_length=128)
    negotiated_rate: Optional[float] = Field(default=None, description="Hourly pay rate agreed for this placement")
    notes: Optional[str] = Field(default=None, sa_type=Text)


class Placement(PlacementBase, table=True):
    """Persistent placement record.

    Table: placements
    """

    __tablename__ = "placements"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    charge_rate: Optional[float] = Field(default=None, description="Approved hourly charge rate")
    last_charge_rate_update: Optional[NaiveDatetime] = Field(default=None)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    def __repr__(self) -> str:
        return (
            f"Placement(id={self.id}, apprentice_id={self.apprentice_id}, "
            f"host_employer_id={self.host_employer_id}, status={self.status})"
        )
