"""
Shared I/O building blocks: pagination and reusable field validators.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from gto_workforce.core.validation import rules


class Pagination(BaseModel):
    """Pagination metadata returned by paged list endpoints."""

    total: int
    page: int
    limit: int
    totalPages: int = Field(description="Number of pages for the given limit")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, totalPages=(total + limit - 1) // limit if limit else 0)


def check_name(value: str) -> str:
    value = rules.sanitize_string(value)
    if len(value) < rules.MIN_NAME_LENGTH:
        raise ValueError(f"must be at least {rules.MIN_NAME_LENGTH} characters")
    return value


def check_email(value: str) -> str:
    value = rules.sanitize_email(value)
    if not rules.validate_email(value):
        raise ValueError("must be a valid email address")
    return value


def check_optional_phone(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    if not rules.validate_australian_phone(value):
        raise ValueError("must be a valid Australian phone number")
    return value
