"""
User I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import check_email, check_name

UserRole = Literal["admin", "field_officer", "payroll", "host_employer", "apprentice"]


class UserCreate(BaseModel):
    """Schema for creating a user via API."""

    username: str = Field(min_length=3, max_length=64)
    email: str
    first_name: str
    last_name: str
    role: UserRole = "field_officer"

    validate_names = field_validator("first_name", "last_name")(check_name)
    validate_email = field_validator("email")(check_email)


class UserRead(BaseModel):
    """Schema for reading a user from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    created_at: datetime
