"""
API endpoints for modern awards, their classifications and local pay rates.

Pay rate lookups delegate to ``AwardRateCalculator``, which prefers locally
stored rates, then FairWork, then the built-in percentage tables.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.entities.awards import Award, AwardClassification, AwardRate
from gto_workforce.core.database.repositories import (
    AwardClassificationRepository,
    AwardRateRepository,
    AwardRepository,
)
from gto_workforce.core.logging_config import get_logger
from gto_workforce.core.models.io.awards import (
    AwardClassificationCreate,
    AwardClassificationRead,
    AwardCreate,
    AwardRateCreate,
    AwardRateRead,
    AwardRead,
    AwardUpdate,
    PayRateResult,
)
from gto_workforce.server.services.deps import AwardRateCalculatorDep

logger = get_logger(__name__)

router = APIRouter(tags=["awards"])


async def _award_or_404(session: AsyncSession, code: str) -> Award:
    award = await AwardRepository(session).get_by_code(code)
    if not award:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Award {code} not found")
    return award


@router.post(
    "",
    response_model=AwardRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Award",
    responses={409: {"description": "Award code already exists"}},
)
async def create_award(award: AwardCreate, session: AsyncSession = Depends(get_session)) -> AwardRead:
    repo = AwardRepository(session)
    if await repo.get_by_code(award.code) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Award {award.code} already exists")
    db_award = await repo.create(Award.model_validate(award))
    logger.info(f"Created award {db_award.code}")
    return AwardRead.model_validate(db_award)


@router.get("", response_model=List[AwardRead], summary="List Awards")
async def list_awards(
    is_active: Optional[bool] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[AwardRead]:
    awards = await AwardRepository(session).list(limit=limit, offset=offset, filters={"is_active": is_active})
    return [AwardRead.model_validate(a) for a in awards]


@router.get("/{code}", response_model=AwardRead, summary="Get Award by Code")
async def get_award(code: str, session: AsyncSession = Depends(get_session)) -> AwardRead:
    return AwardRead.model_validate(await _award_or_404(session, code))


@router.put("/{code}", response_model=AwardRead, summary="Update Award")
async def update_award(code: str, award_update: AwardUpdate, session: AsyncSession = Depends(get_session)) -> AwardRead:
    award = await _award_or_404(session, code)
    award = await AwardRepository(session).update_fields(award, award_update.model_dump(exclude_unset=True))
    return AwardRead.model_validate(award)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Award")
async def delete_award(code: str, session: AsyncSession = Depends(get_session)) -> None:
    award = await _award_or_404(session, code)
    await AwardRepository(session).delete(award.id)


@router.get(
    "/{code}/classifications",
    response_model=List[AwardClassificationRead],
    summary="List Award Classifications",
)
async def list_classifications(code: str, session: AsyncSession = Depends(get_session)) -> List[AwardClassificationRead]:
    award = await _award_or_404(session, code)
    classifications = await AwardClassificationRepository(session).list_for_award(award.id)
    return [AwardClassificationRead.model_validate(c) for c in classifications]


@router.post(
    "/{code}/classifications",
    response_model=AwardClassificationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Award Classification",
)
async def create_classification(
    code: str,
    classification: AwardClassificationCreate,
    session: AsyncSession = Depends(get_session),
) -> AwardClassificationRead:
    award = await _award_or_404(session, code)
    db_classification = await AwardClassificationRepository(session).create(
        AwardClassification(award_id=award.id, **classification.model_dump())
    )
    return AwardClassificationRead.model_validate(db_classification)


@router.get(
    "/classifications/{classification_id}/rates",
    response_model=List[AwardRateRead],
    summary="List Classification Rates",
)
async def list_rates(classification_id: int, session: AsyncSession = Depends(get_session)) -> List[AwardRateRead]:
    rates = await AwardRateRepository(session).list(filters={"classification_id": classification_id})
    return [AwardRateRead.model_validate(r) for r in rates]


@router.post(
    "/classifications/{classification_id}/rates",
    response_model=AwardRateRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Classification Rate",
    responses={404: {"description": "Classification not found"}},
)
async def create_rate(
    classification_id: int,
    rate: AwardRateCreate,
    session: AsyncSession = Depends(get_session),
) -> AwardRateRead:
    if await AwardClassificationRepository(session).get_by_id(classification_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Classification not found")
    db_rate = await AwardRateRepository(session).create(
        AwardRate(classification_id=classification_id, **rate.model_dump())
    )
    return AwardRateRead.model_validate(db_rate)


@router.get(
    "/{code}/apprentice-rate",
    response_model=PayRateResult,
    summary="Get Apprentice Pay Rate",
    description="Hourly rate for an apprentice year under an award, with the source it came from "
    "(local, fairwork or calculated).",
)
async def get_apprentice_rate(
    code: str,
    calculator: AwardRateCalculatorDep,
    year: int = Query(1, ge=1, le=4),
    is_adult: bool = False,
    has_completed_year12: bool = False,
) -> PayRateResult:
    return await calculator.get_apprentice_pay_rate(
        code, year, is_adult=is_adult, has_completed_year12=has_completed_year12
    )


@router.get(
    "/{code}/classifications/{level}/rate",
    response_model=PayRateResult,
    summary="Get Classification Pay Rate",
)
async def get_classification_rate(code: str, level: int, calculator: AwardRateCalculatorDep) -> PayRateResult:
    return await calculator.get_classification_pay_rate(code, level)
