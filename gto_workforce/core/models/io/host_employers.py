"""
Host employer I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gto_workforce.core.validation import rules

from .common import check_email, check_name

HostEmployerStatus = Literal["active", "inactive", "suspended"]
ComplianceStatus = Literal["compliant", "non-compliant", "pending"]


def _check_phone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not rules.validate_australian_phone(value):
        raise ValueError("must be a valid Australian phone number")
    return rules.format_phone_number(value)


def _check_abn(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    if not rules.validate_abn(value):
        raise ValueError("must be a valid ABN")
    return "".join(value.split())


def _check_address(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = rules.sanitize_string(value)
    if len(value) < rules.MIN_ADDRESS_LENGTH:
        raise ValueError(f"must be at least {rules.MIN_ADDRESS_LENGTH} characters")
    return value


class HostEmployerCreate(BaseModel):
    """Schema for creating a host employer via API."""

    name: str
    industry: str
    contact_person: str
    email: str
    phone: str = Field(description="Australian phone number, stored in +61 form")
    address: str
    abn: Optional[str] = Field(default=None, description="11 digit Australian Business Number")
    status: HostEmployerStatus = "active"
    safety_rating: Optional[int] = Field(default=None, ge=1, le=5)
    compliance_status: ComplianceStatus = "pending"
    custom_margin_rate: Optional[float] = Field(default=None, ge=0, le=1)
    custom_admin_rate: Optional[float] = Field(default=None, ge=0, le=1)
    notes: Optional[str] = None

    validate_names = field_validator("name", "industry", "contact_person")(check_name)
    validate_email = field_validator("email")(check_email)
    validate_phone = field_validator("phone")(_check_phone)
    validate_abn = field_validator("abn")(_check_abn)
    validate_address = field_validator("address")(_check_address)


class HostEmployerUpdate(BaseModel):
    """Schema for updating a host employer via API."""

    name: Optional[str] = None
    industry: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    abn: Optional[str] = None
    status: Optional[HostEmployerStatus] = None
    safety_rating: Optional[int] = Field(default=None, ge=1, le=5)
    compliance_status: Optional[ComplianceStatus] = None
    custom_margin_rate: Optional[float] = Field(default=None, ge=0, le=1)
    custom_admin_rate: Optional[float] = Field(default=None, ge=0, le=1)
    notes: Optional[str] = None

    @field_validator("name", "industry", "contact_person")
    @classmethod
    def validate_names(cls, value: Optional[str]) -> Optional[str]:
        return check_name(value) if value is not None else None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return check_email(value) if value is not None else None

    validate_phone = field_validator("phone")(_check_phone)
    validate_abn = field_validator("abn")(_check_abn)
    validate_address = field_validator("address")(_check_address)


class HostEmployerRead(BaseModel):
    """Schema for reading a host employer from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    industry: str
    contact_person: str
    email: str
    phone: str
    address: str
    abn: Optional[str] = None
    status: str
    safety_rating: Optional[int] = None
    compliance_status: str
    custom_margin_rate: Optional[float] = None
    custom_admin_rate: Optional[float] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
