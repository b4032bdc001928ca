"""
Lead I/O models, including the website webhook envelope.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

LeadStatus = Literal["new", "contacted", "qualified", "converted", "archived"]
LeadEvent = Literal["lead_created", "lead_updated", "lead_deleted"]


class WebhookLeadData(BaseModel):
    """Lead payload as sent by the website.

    Unknown keys are kept so later website versions do not break the hook.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = Field(default=None, description="Website lead identifier")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    message: Optional[str] = None
    service_interest: Optional[List[str]] = None
    source: Optional[str] = None
    status: Optional[LeadStatus] = None
    tags: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None


class LeadRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    message: Optional[str] = None
    service_interest: List[str]
    source: str
    status: str
    tags: List[str]
    lead_metadata: Dict[str, Any]
    created_at: datetime
    updated_at: datetime


class WebhookResponse(BaseModel):
    message: str
    lead: Optional[LeadRead] = None
