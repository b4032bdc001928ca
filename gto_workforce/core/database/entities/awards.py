"""
Modern award entity models.

This module contains the locally maintained copy of award data:

- ``Award``: a modern award such as MA000003
- ``AwardClassification``: a classification level within an award
- ``AwardRate``: an hourly rate for a classification over an effective period

Local rates take precedence over the FairWork API when calculating pay.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, Text

from ..base import Base


class AwardBase(Base):
    """Base fields for awards."""

    code: str = Field(max_length=16, unique=True, index=True, description="FairWork award code, e.g. MA000003")
    name: str = Field(max_length=255)
    short_name: Optional[str] = Field(default=None, max_length=64)
    industry: Optional[str] = Field(default=None, max_length=128)
    published_year: Optional[int] = Field(default=None)
    effective_from: Optional[date] = Field(default=None)
    effective_to: Optional[date] = Field(default=None)
    is_active: bool = Field(default=True)
    description: Optional[str] = Field(default=None, sa_type=Text)


class Award(AwardBase, table=True):
    """Table: awards"""

    __tablename__ = "awards"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})

    def __repr__(self) -> str:
        return f"Award(id={self.id}, code={self.code})"


class AwardClassificationBase(Base):
    """Base fields for award classifications."""

    award_id: int = Field(foreign_key="awards.id", index=True)
    code: str = Field(max_length=32)
    name: str = Field(max_length=255)
    level: int = Field(default=1)
    is_apprentice: bool = Field(default=False)
    is_trainee: bool = Field(default=False)
    description: Optional[str] = Field(default=None, sa_type=Text)


class AwardClassification(AwardClassificationBase, table=True):
    """Table: award_classifications"""

    __tablename__ = "award_classifications"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)

    def __repr__(self) -> str:
        return f"AwardClassification(id={self.id}, code={self.code}, level={self.level})"


class AwardRateBase(Base):
    """Base fields for award rates."""

    classification_id: int = Field(foreign_key="award_classifications.id", index=True)
    hourly_rate: float
    weekly_rate: Optional[float] = Field(default=None)
    annual_rate: Optional[float] = Field(default=None)
    is_adult: bool = Field(default=True)
    has_completed_year12: bool = Field(default=False)
    apprentice_year: Optional[int] = Field(default=None, index=True)
    effective_from: date
    effective_to: Optional[date] = Field(default=None)


class AwardRate(AwardRateBase, table=True):
    """Table: award_rates"""

    __tablename__ = "award_rates"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)

    def __repr__(self) -> str:
        return f"AwardRate(id={self.id}, classification_id={self.classification_id}, hourly_rate={self.hourly_rate})"
