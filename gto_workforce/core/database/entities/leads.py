"""
Lead entity models.

Leads arrive from the public website through the lead webhook. The website's
own identifier is kept in ``lead_metadata["website_lead_id"]``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import NaiveDatetime
from sqlmodel import JSON, Field, Text

from ..base import Base


class Lead(Base, table=True):
    """Table: leads"""

    __tablename__ = "leads"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str = Field(max_length=255, index=True)
    phone: Optional[str] = Field(default=None, max_length=32)
    company: Optional[str] = Field(default=None, max_length=255)
    job_title: Optional[str] = Field(default=None, max_length=128)
    message: Optional[str] = Field(default=None, sa_type=Text)
    service_interest: List[str] = Field(default_factory=list, sa_type=JSON)
    source: str = Field(default="website", max_length=64)
    status: str = Field(default="new", max_length=16, index=True)
    tags: List[str] = Field(default_factory=list, sa_type=JSON)
    lead_metadata: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    @property
    def website_lead_id(self) -> Optional[str]:
        value = (self.lead_metadata or {}).get("website_lead_id")
        return str(value) if value is not None else None
