"""
Government funding claim entity models.

Claims move through the workflow in
``gto_workforce.server.services.claims.CLAIM_STATUS_TRANSITIONS``. Every
change is recorded in ``claim_history``. Eligibility criteria describe the
funding programmes and ``apprentice_eligibility`` records who qualifies.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import NaiveDatetime
from sqlmodel import JSON, Field, Text

from ..base import Base


class Claim(Base, table=True):
    """Table: claims"""

    __tablename__ = "claims"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    claim_number: str = Field(max_length=32, unique=True, index=True)
    apprentice_id: Optional[int] = Field(default=None, foreign_key="apprentices.id", index=True)
    apprentice_name: Optional[str] = Field(default=None, max_length=255)
    claim_type: str = Field(max_length=32, index=True)
    status: str = Field(default="draft", max_length=16, index=True)

    amount_requested: int = Field(description="Whole dollars requested")
    amount_approved: Optional[int] = Field(default=None)
    funding_body: Optional[str] = Field(default=None, max_length=128)
    jurisdiction: Optional[str] = Field(default=None, max_length=16)

    submission_date: Optional[NaiveDatetime] = Field(default=None)
    reviewer: Optional[str] = Field(default=None, max_length=128)
    review_date: Optional[NaiveDatetime] = Field(default=None)
    rejection_reason: Optional[str] = Field(default=None, sa_type=Text)
    payment_date: Optional[NaiveDatetime] = Field(default=None)
    payment_reference: Optional[str] = Field(default=None, max_length=64)
    notes: Optional[str] = Field(default=None, sa_type=Text)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    def __repr__(self) -> str:
        return f"Claim(id={self.id}, claim_number={self.claim_number}, status={self.status})"


class ClaimHistory(Base, table=True):
    """Table: claim_history"""

    __tablename__ = "claim_history"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    claim_id: int = Field(foreign_key="claims.id", index=True)
    action: str = Field(max_length=32)
    changes: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    performed_by: Optional[str] = Field(default=None, max_length=128)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)


class EligibilityCriteria(Base, table=True):
    """Funding programme rules a claim type is assessed against.

    Table: eligibility_criteria
    """

    __tablename__ = "eligibility_criteria"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    claim_type: str = Field(max_length=32, index=True)
    title: str = Field(max_length=200)
    description: str = Field(sa_type=Text)
    jurisdiction: str = Field(max_length=50, index=True)
    funding_body: str = Field(max_length=100)
    eligibility_rules: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    documentation_required: List[str] = Field(default_factory=list, sa_type=JSON)
    maximum_amount: Optional[int] = Field(default=None)
    active: bool = Field(default=True, index=True)
    expiry_date: Optional[NaiveDatetime] = Field(default=None)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})


class ApprenticeEligibility(Base, table=True):
    """Outcome of checking one apprentice against one set of criteria.

    Table: apprentice_eligibility
    """

    __tablename__ = "apprentice_eligibility"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    apprentice_id: int = Field(foreign_key="apprentices.id", index=True)
    apprentice_name: Optional[str] = Field(default=None, max_length=255)
    criteria_id: int = Field(foreign_key="eligibility_criteria.id", index=True)
    status: str = Field(default="pending-review", max_length=16)
    eligible_from_date: Optional[NaiveDatetime] = Field(default=None)
    eligible_to_date: Optional[NaiveDatetime] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_type=Text)
    reviewed_by_name: Optional[str] = Field(default=None, max_length=128)
    review_date: Optional[NaiveDatetime] = Field(default=None)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})
