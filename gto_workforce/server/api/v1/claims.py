"""
API endpoints for government funding claims.

Status changes go through ``PATCH /claims/{id}/status``, which enforces the
claim workflow and records history. Funding eligibility criteria and
apprentice eligibility checks live under the same prefix.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.models.io.claims import (
    ClaimCreate,
    ClaimDashboard,
    ClaimDetail,
    ClaimHistoryRead,
    ClaimPage,
    ClaimRead,
    ClaimStatusUpdate,
    ClaimUpdate,
    EligibilityCheckRequest,
    EligibilityCheckResult,
    EligibilityCriteriaCreate,
    EligibilityCriteriaList,
    EligibilityCriteriaRead,
)
from gto_workforce.server.services.claims import ClaimService, EligibilityService

router = APIRouter(tags=["claims"])


@router.post(
    "",
    response_model=ClaimRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Claim",
    description="Create a funding claim. A claim number such as COM-2026-0001 is assigned.",
    responses={404: {"description": "Apprentice not found"}},
)
async def create_claim(claim: ClaimCreate, session: AsyncSession = Depends(get_session)) -> ClaimRead:
    return ClaimRead.model_validate(await ClaimService(session).create(claim))


@router.get("", response_model=ClaimPage, summary="List Claims")
async def list_claims(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    claim_type: Optional[str] = None,
    apprentice_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> ClaimPage:
    return await ClaimService(session).list(
        page, limit, status=status_filter, claim_type=claim_type, apprentice_id=apprentice_id
    )


@router.get(
    "/dashboard",
    response_model=ClaimDashboard,
    summary="Claims Dashboard",
    description="Claim metrics and distributions for the last 7, 30 or 90 days.",
)
async def claims_dashboard(
    timeframe: str = "30days",
    session: AsyncSession = Depends(get_session),
) -> ClaimDashboard:
    return await ClaimService(session).dashboard(timeframe)


@router.get(
    "/eligibility-criteria",
    response_model=EligibilityCriteriaList,
    summary="List Eligibility Criteria",
    description="Funding eligibility criteria, active ones only unless ``active=false``.",
)
async def list_eligibility_criteria(
    claim_type: Optional[str] = None,
    jurisdiction: Optional[str] = None,
    active: bool = True,
    session: AsyncSession = Depends(get_session),
) -> EligibilityCriteriaList:
    criteria = await EligibilityService(session).list_criteria(claim_type, jurisdiction, active)
    return EligibilityCriteriaList(criteria=[EligibilityCriteriaRead.model_validate(c) for c in criteria])


@router.post(
    "/eligibility-criteria",
    response_model=EligibilityCriteriaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Eligibility Criteria",
)
async def create_eligibility_criteria(
    criteria: EligibilityCriteriaCreate, session: AsyncSession = Depends(get_session)
) -> EligibilityCriteriaRead:
    return EligibilityCriteriaRead.model_validate(await EligibilityService(session).create_criteria(criteria))


@router.post(
    "/eligibility/check",
    response_model=EligibilityCheckResult,
    summary="Check Apprentice Eligibility",
    description="Check an apprentice against funding criteria, recording the outcome the first time.",
    responses={
        400: {"description": "Apprentice ID or criteria ID missing"},
        404: {"description": "Criteria or apprentice not found"},
    },
)
async def check_eligibility(
    check: EligibilityCheckRequest, session: AsyncSession = Depends(get_session)
) -> EligibilityCheckResult:
    return await EligibilityService(session).check(check)


@router.get(
    "/{claim_id}",
    response_model=ClaimDetail,
    summary="Get Claim",
    description="Get a claim with its full change history.",
    responses={404: {"description": "Claim not found"}},
)
async def get_claim(claim_id: int, session: AsyncSession = Depends(get_session)) -> ClaimDetail:
    service = ClaimService(session)
    claim = await service.get(claim_id)
    history = await service.repo.get_history(claim_id)
    return ClaimDetail(
        claim=ClaimRead.model_validate(claim),
        history=[ClaimHistoryRead.model_validate(h) for h in history],
    )


@router.put("/{claim_id}", response_model=ClaimRead, summary="Update Claim")
async def update_claim(
    claim_id: int,
    claim_update: ClaimUpdate,
    session: AsyncSession = Depends(get_session),
) -> ClaimRead:
    return ClaimRead.model_validate(await ClaimService(session).update(claim_id, claim_update))


@router.patch(
    "/{claim_id}/status",
    response_model=ClaimRead,
    summary="Change Claim Status",
    responses={
        400: {"description": "Transition not allowed from the current status"},
        404: {"description": "Claim not found"},
    },
)
async def update_claim_status(
    claim_id: int,
    status_update: ClaimStatusUpdate,
    session: AsyncSession = Depends(get_session),
) -> ClaimRead:
    return ClaimRead.model_validate(await ClaimService(session).update_status(claim_id, status_update))


@router.delete(
    "/{claim_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Claim",
    responses={400: {"description": "Only draft or cancelled claims can be deleted"}},
)
async def delete_claim(claim_id: int, session: AsyncSession = Depends(get_session)) -> None:
    await ClaimService(session).delete(claim_id)
