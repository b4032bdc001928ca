"""
Award I/O models for API requests and responses.

Covers awards, their classifications and the local hourly rates, plus the
responses of the award rate calculator endpoints.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AwardCreate(BaseModel):
    code: str = Field(pattern=r"^MA\d{6}$", description="FairWork award code, e.g. MA000003")
    name: str = Field(min_length=2, max_length=255)
    short_name: Optional[str] = None
    industry: Optional[str] = None
    published_year: Optional[int] = Field(default=None, ge=2000, le=2100)
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    is_active: bool = True
    description: Optional[str] = None


class AwardUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    short_name: Optional[str] = None
    industry: Optional[str] = None
    published_year: Optional[int] = Field(default=None, ge=2000, le=2100)
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    is_active: Optional[bool] = None
    description: Optional[str] = None


class AwardRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    short_name: Optional[str] = None
    industry: Optional[str] = None
    published_year: Optional[int] = None
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    is_active: bool
    description: Optional[str] = None
    created_at: datetime


class AwardClassificationCreate(BaseModel):
    code: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=2, max_length=255)
    level: int = Field(default=1, ge=1)
    is_apprentice: bool = False
    is_trainee: bool = False
    description: Optional[str] = None


class AwardClassificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    award_id: int
    code: str
    name: str
    level: int
    is_apprentice: bool
    is_trainee: bool
    description: Optional[str] = None


class AwardRateCreate(BaseModel):
    """Schema for adding a local hourly rate to a classification."""

    hourly_rate: float = Field(ge=0.01, le=1000)
    weekly_rate: Optional[float] = Field(default=None, ge=0)
    annual_rate: Optional[float] = Field(default=None, ge=0)
    is_adult: bool = True
    has_completed_year12: bool = False
    apprentice_year: Optional[int] = Field(default=None, ge=1, le=4)
    effective_from: date
    effective_to: Optional[date] = None

    @model_validator(mode="after")
    def check_dates(self) -> "AwardRateCreate":
        if self.effective_to and self.effective_to < self.effective_from:
            raise ValueError("Effective to date must be after effective from date")
        return self


class AwardRateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    classification_id: int
    hourly_rate: float
    weekly_rate: Optional[float] = None
    annual_rate: Optional[float] = None
    is_adult: bool
    has_completed_year12: bool
    apprentice_year: Optional[int] = None
    effective_from: date
    effective_to: Optional[date] = None


class PayRateResult(BaseModel):
    """A resolved hourly pay rate and where it came from."""

    award_code: str
    rate: float
    source: Literal["local", "fairwork", "calculated"]
    apprentice_year: Optional[int] = None
    classification_level: Optional[int] = None
