"""FairWork API data transfer objects.

The upstream API returns snake_case records with its own naming
(``award_fixed_id``, ``clause_fixed_id`` ...). Each model here exposes our
names and knows how to map one upstream record via ``from_api``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, model_validator


def _str_or_none(value: Any) -> Optional[str]:
    return str(value) if value is not None and value != "" else None


def _float_or_zero(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class ResultsPayloadDTO(BaseModel):
    """List envelope. Accepts ``{"results": [...]}`` or a bare list."""

    results: List[Dict[str, Any]]

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, v):
        if isinstance(v, list):
            return {"results": v}
        if isinstance(v, dict) and not isinstance(v.get("results"), list):
            return {"results": []}
        return v


class FairWorkAward(BaseModel):
    id: str
    code: str
    name: str
    reference_number: Optional[str] = None
    title: Optional[str] = None
    published_year: Optional[int] = None
    version_number: Optional[int] = None
    effective_date: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "FairWorkAward":
        return cls(
            id=_str_or_none(item.get("award_fixed_id")) or "",
            code=item.get("code") or "",
            name=item.get("name") or "",
            reference_number=item.get("reference_number") or None,
            title=item.get("title") or None,
            published_year=item.get("published_year") or None,
            version_number=item.get("version_number") or None,
            effective_date=item.get("award_operative_from") or None,
            description=item.get("description") or None,
        )


class FairWorkClassification(BaseModel):
    id: str
    award_code: str
    name: str
    level: Optional[int] = None
    description: Optional[str] = None
    fair_work_level_code: Optional[str] = None
    parent_classification_name: Optional[str] = None

    @classmethod
    def from_api(cls, award_code: str, item: Dict[str, Any]) -> "FairWorkClassification":
        level = item.get("classification_level")
        return cls(
            id=_str_or_none(item.get("classification_fixed_id")) or "",
            award_code=award_code,
            name=item.get("classification") or "",
            level=int(level) if level not in (None, "") else None,
            description=item.get("clause_description") or None,
            fair_work_level_code=_str_or_none(item.get("clause_fixed_id")),
            parent_classification_name=item.get("parent_classification_name") or None,
        )


class FairWorkPayRate(BaseModel):
    id: str
    classification_id: Optional[str] = None
    classification: Optional[str] = None
    hourly_rate: float
    effective_from: Optional[str] = None
    effective_to: Optional[str] = None
    is_apprentice_rate: bool = False
    apprentice_year: Optional[int] = None
    base_classification: Optional[str] = None
    base_percentage: Optional[float] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "FairWorkPayRate":
        year = item.get("apprentice_year")
        pct = item.get("percentage_of_standard_rate")
        return cls(
            id=_str_or_none(item.get("calculated_pay_rate_id")) or "",
            classification_id=_str_or_none(item.get("classification_fixed_id")),
            classification=item.get("classification") or None,
            hourly_rate=_float_or_zero(item.get("hourly_rate")),
            effective_from=item.get("operative_from") or None,
            effective_to=item.get("operative_to") or None,
            is_apprentice_rate=item.get("employee_rate_type_code") == "AP",
            apprentice_year=int(year) if year not in (None, "") else None,
            base_classification=item.get("parent_classification_name") or None,
            base_percentage=_float_or_zero(pct) if pct not in (None, "") else None,
        )


class RateValidationResult(BaseModel):
    is_valid: bool
    minimum_rate: float = 0.0
    difference: float = 0.0
    message: Optional[str] = None
