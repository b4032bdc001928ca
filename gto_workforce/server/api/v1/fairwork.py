"""
FairWork API proxy endpoints.

Exposes the cached FairWork client to the frontend. Every endpoint returns
503 when no ``FAIRWORK_API_KEY`` is configured.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from gto_workforce.core.models.io.rates import RateValidateRequest
from gto_workforce.fairwork import FairWorkAward, FairWorkClassification, FairWorkPayRate, RateValidationResult
from gto_workforce.server.services.deps import RequiredFairWorkDep

router = APIRouter(tags=["fairwork"])

_UNAVAILABLE = {503: {"description": "FairWork integration is not configured"}}


@router.get("/awards", response_model=List[FairWorkAward], summary="List FairWork Awards", responses=_UNAVAILABLE)
async def list_awards(
    fairwork: RequiredFairWorkDep,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    search: Optional[str] = None,
) -> List[FairWorkAward]:
    return await fairwork.list_awards(page=page, limit=limit, search=search)


@router.get(
    "/awards/{code}",
    response_model=FairWorkAward,
    summary="Get FairWork Award",
    responses={404: {"description": "Award not found"}, **_UNAVAILABLE},
)
async def get_award(code: str, fairwork: RequiredFairWorkDep) -> FairWorkAward:
    award = await fairwork.get_award(code)
    if award is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Award {code} not found")
    return award


@router.get(
    "/awards/{code}/classifications",
    response_model=List[FairWorkClassification],
    summary="List FairWork Classifications",
    responses=_UNAVAILABLE,
)
async def get_classifications(code: str, fairwork: RequiredFairWorkDep) -> List[FairWorkClassification]:
    return await fairwork.get_classifications(code)


@router.get(
    "/awards/{code}/pay-rates",
    response_model=List[FairWorkPayRate],
    summary="List FairWork Pay Rates",
    responses=_UNAVAILABLE,
)
async def get_pay_rates(
    code: str,
    fairwork: RequiredFairWorkDep,
    classification_level: Optional[int] = None,
    classification_fixed_id: Optional[int] = None,
    employee_rate_type_code: Optional[str] = None,
    operative_from: Optional[str] = None,
    operative_to: Optional[str] = None,
) -> List[FairWorkPayRate]:
    return await fairwork.get_pay_rates(
        code,
        classification_level=classification_level,
        classification_fixed_id=classification_fixed_id,
        employee_rate_type_code=employee_rate_type_code,
        operative_from=operative_from,
        operative_to=operative_to,
    )


@router.get(
    "/awards/{code}/apprentice-rates",
    response_model=List[FairWorkPayRate],
    summary="List FairWork Apprentice Rates",
    description="Apprentice rates from FairWork, or percentages of the reference rate when FairWork has none.",
    responses=_UNAVAILABLE,
)
async def get_apprentice_rates(
    code: str,
    fairwork: RequiredFairWorkDep,
    year: Optional[int] = Query(None, ge=1, le=4),
    is_adult: bool = False,
    has_completed_year12: bool = False,
) -> List[FairWorkPayRate]:
    return await fairwork.get_apprentice_rates(
        code, year, is_adult=is_adult, has_completed_year12=has_completed_year12
    )


@router.get("/awards/{code}/allowances", summary="List FairWork Allowances", responses=_UNAVAILABLE)
async def get_allowances(code: str, fairwork: RequiredFairWorkDep) -> Dict[str, List[Dict[str, Any]]]:
    return await fairwork.get_allowances(code)


@router.get("/awards/{code}/penalties", summary="List FairWork Penalties", responses=_UNAVAILABLE)
async def get_penalties(code: str, fairwork: RequiredFairWorkDep) -> List[Dict[str, Any]]:
    return await fairwork.get_penalties(code)


@router.post(
    "/rates/validate",
    response_model=RateValidationResult,
    summary="Validate Rate with FairWork",
    responses=_UNAVAILABLE,
)
async def validate_rate(request: RateValidateRequest, fairwork: RequiredFairWorkDep) -> RateValidationResult:
    return await fairwork.validate_rate(
        request.award_code, request.rate, classification_code=request.classification_code, on=request.date
    )
