"""
Apprentice I/O models for API requests and responses.

Field rules follow ``gto_workforce.core.validation.rules``: names of at
least two characters, Australian phone numbers, ages 15 to 65 and an end date
no earlier than the start date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gto_workforce.core.validation import rules

from .common import check_email, check_name, check_optional_phone

ApprenticeStatus = Literal[
    "applicant", "recruitment", "pre-commencement", "active", "suspended", "withdrawn", "completed"
]


def _check_dob(value: Optional[date]) -> Optional[date]:
    if value is not None and not rules.validate_apprentice_age(value):
        raise ValueError(
            f"apprentice must be between {rules.MIN_APPRENTICE_AGE} and {rules.MAX_APPRENTICE_AGE} years old"
        )
    return value


class ApprenticeCreate(BaseModel):
    """Schema for creating an apprentice via API."""

    first_name: str = Field(description="Given name")
    last_name: str = Field(description="Family name")
    email: str = Field(description="Unique contact email")
    phone: Optional[str] = Field(default=None, description="Australian mobile or landline")
    date_of_birth: Optional[date] = None
    trade: str = Field(description="Trade or qualification, e.g. 'Electrical'")
    status: ApprenticeStatus = "applicant"
    progress: int = Field(default=0, ge=0, le=100)
    apprenticeship_year: int = Field(default=1, ge=1, le=4)
    is_adult: bool = False
    has_completed_year12: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None

    validate_names = field_validator("first_name", "last_name", "trade")(check_name)
    validate_email = field_validator("email")(check_email)
    validate_phone = field_validator("phone")(check_optional_phone)
    validate_dob = field_validator("date_of_birth")(_check_dob)

    @model_validator(mode="after")
    def check_dates(self) -> "ApprenticeCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class ApprenticeUpdate(BaseModel):
    """Schema for updating an apprentice via API.

    ``status`` is not accepted here; use the status transition endpoint.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    trade: Optional[str] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    apprenticeship_year: Optional[int] = Field(default=None, ge=1, le=4)
    is_adult: Optional[bool] = None
    has_completed_year12: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("first_name", "last_name", "trade")
    @classmethod
    def validate_names(cls, value: Optional[str]) -> Optional[str]:
        return check_name(value) if value is not None else None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return check_email(value) if value is not None else None

    validate_phone = field_validator("phone")(check_optional_phone)
    validate_dob = field_validator("date_of_birth")(_check_dob)


class ApprenticeStatusUpdate(BaseModel):
    """Schema for moving an apprentice to a new lifecycle status."""

    status: ApprenticeStatus
    notes: Optional[str] = Field(default=None, description="Reason for the change, appended to notes")


class ApprenticeRead(BaseModel):
    """Schema for reading an apprentice from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    trade: str
    status: str
    progress: int
    apprenticeship_year: int
    is_adult: bool
    has_completed_year12: bool
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
