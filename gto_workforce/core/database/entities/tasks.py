"""
Task entity models.

Tasks are follow-ups assigned to staff. ``related_to``/``related_id`` point at
any other record (e.g. ``lead``/42) without a hard foreign key.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, Text

from ..base import Base


class TaskBase(Base):
    """Base fields for tasks."""

    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    assigned_to: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    due_date: Optional[NaiveDatetime] = Field(default=None, index=True)
    priority: str = Field(default="medium", max_length=16, index=True)
    status: str = Field(default="pending", max_length=16, index=True)
    related_to: Optional[str] = Field(default=None, max_length=32)
    related_id: Optional[int] = Field(default=None)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")


class Task(TaskBase, table=True):
    """Persistent task.

    Table: tasks
    """

    __tablename__ = "tasks"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[NaiveDatetime] = Field(default=None)

    def __repr__(self) -> str:
        return f"Task(id={self.id}, title={self.title}, status={self.status})"
