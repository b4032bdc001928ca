"""
Progress review I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ReviewStatus = Literal["scheduled", "in_progress", "completed", "cancelled"]
AttendanceStatus = Literal["invited", "confirmed", "attended", "absent"]
ActionPriority = Literal["low", "medium", "high", "critical"]
ActionStatus = Literal["pending", "in_progress", "completed", "cancelled"]


class TemplateCreate(BaseModel):
    template_name: str = Field(min_length=3, max_length=128)
    description: Optional[str] = None
    template_version: str = "1.0"
    form_structure: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True
    created_by: Optional[int] = None


class TemplateUpdate(BaseModel):
    template_name: Optional[str] = Field(default=None, min_length=3, max_length=128)
    description: Optional[str] = None
    template_version: Optional[str] = None
    form_structure: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None


class TemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    template_name: str
    description: Optional[str] = None
    template_version: str
    form_structure: Dict[str, Any]
    is_active: bool
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ReviewCreate(BaseModel):
    """Schedule a review. ``scheduled_date`` must be in the future."""

    apprentice_id: int
    template_id: int
    reviewer_id: int
    scheduled_date: datetime
    host_employer_id: Optional[int] = None
    review_period_start: Optional[date] = None
    review_period_end: Optional[date] = None
    review_location: Optional[str] = None
    supervisor_present: bool = False
    supervisor_name: Optional[str] = None


class ReviewUpdate(BaseModel):
    status: Optional[ReviewStatus] = None
    scheduled_date: Optional[datetime] = None
    review_date: Optional[datetime] = None
    review_location: Optional[str] = None
    review_data: Optional[Dict[str, Any]] = None
    overall_rating: Optional[int] = Field(default=None, ge=1, le=5)
    review_summary: Optional[str] = None
    apprentice_feedback: Optional[str] = None
    next_review_date: Optional[datetime] = None
    next_review_goals: Optional[List[str]] = None
    supervisor_present: Optional[bool] = None
    supervisor_name: Optional[str] = None
    supervisor_feedback: Optional[str] = None


class ReviewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    apprentice_id: int
    template_id: int
    reviewer_id: int
    host_employer_id: Optional[int] = None
    scheduled_date: datetime
    review_date: Optional[datetime] = None
    status: str
    review_period_start: Optional[date] = None
    review_period_end: Optional[date] = None
    review_location: Optional[str] = None
    review_data: Dict[str, Any]
    overall_rating: Optional[int] = None
    review_summary: Optional[str] = None
    apprentice_feedback: Optional[str] = None
    next_review_date: Optional[datetime] = None
    next_review_goals: List[str]
    supervisor_present: bool
    supervisor_name: Optional[str] = None
    supervisor_feedback: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ParticipantCreate(BaseModel):
    user_id: int
    role: str = Field(min_length=2, max_length=32)
    attendance_status: AttendanceStatus = "invited"
    notes: Optional[str] = None


class ParticipantUpdate(BaseModel):
    attendance_status: Optional[AttendanceStatus] = None
    notes: Optional[str] = None


class ParticipantRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    review_id: int
    user_id: int
    role: str
    attendance_status: str
    notes: Optional[str] = None


class ActionItemCreate(BaseModel):
    action_description: str = Field(min_length=3)
    priority: ActionPriority = "medium"
    assignee_id: Optional[int] = None
    due_date: Optional[date] = None
    created_by: Optional[int] = None


class ActionItemUpdate(BaseModel):
    action_description: Optional[str] = Field(default=None, min_length=3)
    priority: Optional[ActionPriority] = None
    assignee_id: Optional[int] = None
    due_date: Optional[date] = None
    status: Optional[ActionStatus] = None
    completion_notes: Optional[str] = None


class ActionItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    review_id: int
    action_description: str
    priority: str
    assignee_id: Optional[int] = None
    due_date: Optional[date] = None
    status: str
    completion_date: Optional[datetime] = None
    completion_notes: Optional[str] = None
    created_by: Optional[int] = None


class ReviewDetail(ReviewRead):
    apprentice_name: Optional[str] = None
    reviewer_name: Optional[str] = None
    participants: List[ParticipantRead] = Field(default_factory=list)
    action_items: List[ActionItemRead] = Field(default_factory=list)


class ReviewCounts(BaseModel):
    scheduled: int = 0
    inProgress: int = 0
    completed: int = 0
    cancelled: int = 0


class ActionItemCounts(BaseModel):
    pending: int = 0
    inProgress: int = 0
    completed: int = 0
    cancelled: int = 0


class ReviewStats(BaseModel):
    reviews: ReviewCounts
    actionItems: ActionItemCounts
