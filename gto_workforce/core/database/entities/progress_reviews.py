"""
Apprentice progress review entity models.

A review is scheduled against a template, attended by participants and
produces follow-up action items. Templates are never deleted, only
deactivated, because completed reviews keep pointing at them.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import NaiveDatetime
from sqlmodel import JSON, Field, Text

from ..base import Base


class ProgressReviewTemplate(Base, table=True):
    """Table: progress_review_templates"""

    __tablename__ = "progress_review_templates"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    template_name: str = Field(max_length=128)
    description: Optional[str] = Field(default=None, sa_type=Text)
    template_version: str = Field(default="1.0", max_length=16)
    form_structure: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    is_active: bool = Field(default=True, index=True)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})


class ProgressReview(Base, table=True):
    """Table: progress_reviews"""

    __tablename__ = "progress_reviews"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    apprentice_id: int = Field(foreign_key="apprentices.id", index=True)
    template_id: int = Field(foreign_key="progress_review_templates.id")
    reviewer_id: int = Field(foreign_key="users.id", index=True)
    host_employer_id: Optional[int] = Field(default=None, foreign_key="host_employers.id")

    scheduled_date: NaiveDatetime = Field(index=True)
    review_date: Optional[NaiveDatetime] = Field(default=None, index=True)
    status: str = Field(default="scheduled", max_length=16, index=True)
    review_period_start: Optional[date] = Field(default=None)
    review_period_end: Optional[date] = Field(default=None)
    review_location: Optional[str] = Field(default=None, max_length=255)

    review_data: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    overall_rating: Optional[int] = Field(default=None)
    review_summary: Optional[str] = Field(default=None, sa_type=Text)
    apprentice_feedback: Optional[str] = Field(default=None, sa_type=Text)
    next_review_date: Optional[NaiveDatetime] = Field(default=None)
    next_review_goals: List[str] = Field(default_factory=list, sa_type=JSON)

    supervisor_present: bool = Field(default=False)
    supervisor_name: Optional[str] = Field(default=None, max_length=128)
    supervisor_feedback: Optional[str] = Field(default=None, sa_type=Text)

    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    def __repr__(self) -> str:
        return f"ProgressReview(id={self.id}, apprentice_id={self.apprentice_id}, status={self.status})"


class ProgressReviewParticipant(Base, table=True):
    """Table: progress_review_participants"""

    __tablename__ = "progress_review_participants"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    review_id: int = Field(foreign_key="progress_reviews.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    role: str = Field(max_length=32)
    attendance_status: str = Field(default="invited", max_length=16)
    notes: Optional[str] = Field(default=None, sa_type=Text)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)


class ProgressReviewActionItem(Base, table=True):
    """Table: progress_review_action_items"""

    __tablename__ = "progress_review_action_items"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    review_id: int = Field(foreign_key="progress_reviews.id", index=True)
    action_description: str = Field(sa_type=Text)
    priority: str = Field(default="medium", max_length=16)
    assignee_id: Optional[int] = Field(default=None, foreign_key="users.id")
    due_date: Optional[date] = Field(default=None)
    status: str = Field(default="pending", max_length=16, index=True)
    completion_date: Optional[NaiveDatetime] = Field(default=None)
    completion_notes: Optional[str] = Field(default=None, sa_type=Text)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})
