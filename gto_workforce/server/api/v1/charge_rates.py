"""
API endpoints for stored charge rate calculations and host employer quotes.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.repositories import ChargeRateCalculationRepository
from gto_workforce.core.models.io.rates import (
    ChargeRateCalculationRead,
    ChargeRateCreate,
    QuoteCreate,
    QuoteLineItemRead,
    QuoteRead,
)
from gto_workforce.server.services.deps import ChargeRateServiceDep

router = APIRouter(tags=["charge-rates"])


def _quote_read(quote, items) -> QuoteRead:
    read = QuoteRead.model_validate(quote)
    read.line_items = [QuoteLineItemRead.model_validate(i) for i in items]
    return read


@router.get(
    "",
    response_model=List[ChargeRateCalculationRead],
    summary="List Charge Rate Calculations",
)
async def list_calculations(
    apprentice_id: Optional[int] = None,
    host_employer_id: Optional[int] = None,
    approved: Optional[bool] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[ChargeRateCalculationRead]:
    calculations = await ChargeRateCalculationRepository(session).list(
        limit=limit,
        offset=offset,
        filters={"apprentice_id": apprentice_id, "host_employer_id": host_employer_id, "approved": approved},
    )
    return [ChargeRateCalculationRead.model_validate(c) for c in calculations]


@router.post(
    "",
    response_model=ChargeRateCalculationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Calculate and Store Charge Rate",
    description="Calculate the charge rate for an apprentice at a host employer. The pay rate comes from the "
    "active placement's negotiated rate, or the award rate for the apprentice's year.",
    responses={404: {"description": "Apprentice or host employer not found"}},
)
async def create_calculation(request: ChargeRateCreate, service: ChargeRateServiceDep) -> ChargeRateCalculationRead:
    calculation = await service.calculate_and_save(request.apprentice_id, request.host_employer_id)
    return ChargeRateCalculationRead.model_validate(calculation)


@router.post(
    "/quotes",
    response_model=QuoteRead,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Quote",
    description="Generate a draft annual quote for a host employer with one line per apprentice.",
    responses={
        400: {"description": "No apprentices given"},
        404: {"description": "Host employer or apprentice not found"},
    },
)
async def create_quote(request: QuoteCreate, service: ChargeRateServiceDep) -> QuoteRead:
    quote, items = await service.generate_quote(request.host_employer_id, request.apprentice_ids)
    return _quote_read(quote, items)


@router.get("/quotes/{quote_id}", response_model=QuoteRead, summary="Get Quote")
async def get_quote(quote_id: int, service: ChargeRateServiceDep) -> QuoteRead:
    quote, items = await service.get_quote(quote_id)
    return _quote_read(quote, items)


@router.get("/{calculation_id}", response_model=ChargeRateCalculationRead, summary="Get Charge Rate Calculation")
async def get_calculation(
    calculation_id: int, session: AsyncSession = Depends(get_session)
) -> ChargeRateCalculationRead:
    calculation = await ChargeRateCalculationRepository(session).get_by_id(calculation_id)
    if not calculation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Charge rate calculation not found")
    return ChargeRateCalculationRead.model_validate(calculation)


@router.post(
    "/{calculation_id}/approve",
    response_model=ChargeRateCalculationRead,
    summary="Approve Charge Rate",
    description="Approve a calculation and apply the charge rate to the active placement.",
)
async def approve_calculation(calculation_id: int, service: ChargeRateServiceDep) -> ChargeRateCalculationRead:
    return ChargeRateCalculationRead.model_validate(await service.approve(calculation_id))
