"""
API endpoints for placements of apprentices with host employers.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.entities.placements import Placement
from gto_workforce.core.database.repositories import (
    ApprenticeRepository,
    HostEmployerRepository,
    PlacementRepository,
)
from gto_workforce.core.errors import NotFoundError, ValidationError
from gto_workforce.core.logging_config import get_logger
from gto_workforce.core.models.io.placements import PlacementCreate, PlacementRead, PlacementUpdate
from gto_workforce.core.validation.business_rules import BusinessRuleValidator

logger = get_logger(__name__)

router = APIRouter(tags=["placements"])


@router.post(
    "",
    response_model=PlacementRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Placement",
    description="Place an active apprentice with an active, compliant host employer.",
    responses={
        201: {"description": "Placement created successfully"},
        400: {"description": "Placement business rules not met"},
        404: {"description": "Apprentice or host employer not found"},
    },
)
async def create_placement(
    placement: PlacementCreate,
    session: AsyncSession = Depends(get_session),
) -> PlacementRead:
    apprentice = await ApprenticeRepository(session).get_by_id(placement.apprentice_id)
    if apprentice is None:
        raise NotFoundError("Apprentice", placement.apprentice_id)
    host = await HostEmployerRepository(session).get_by_id(placement.host_employer_id)
    if host is None:
        raise NotFoundError("Host employer", placement.host_employer_id)

    result = BusinessRuleValidator.validate_placement_creation(apprentice, host)
    if not result.valid:
        raise ValidationError("Placement cannot be created", result.errors)

    db_placement = await PlacementRepository(session).create(Placement.model_validate(placement))
    logger.info(f"Placed apprentice {apprentice.id} with host employer {host.id} (placement {db_placement.id})")
    return PlacementRead.model_validate(db_placement)


@router.get(
    "",
    response_model=List[PlacementRead],
    summary="List Placements",
    description="List placements, optionally filtered by apprentice, host employer and status.",
)
async def list_placements(
    apprentice_id: Optional[int] = None,
    host_employer_id: Optional[int] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[PlacementRead]:
    placements = await PlacementRepository(session).list(
        limit=limit,
        offset=offset,
        filters={"apprentice_id": apprentice_id, "host_employer_id": host_employer_id, "status": status_filter},
    )
    return [PlacementRead.model_validate(p) for p in placements]


@router.get(
    "/{placement_id}",
    response_model=PlacementRead,
    summary="Get Placement",
    responses={404: {"description": "Placement not found"}},
)
async def get_placement(placement_id: int, session: AsyncSession = Depends(get_session)) -> PlacementRead:
    placement = await PlacementRepository(session).get_by_id(placement_id)
    if not placement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Placement not found")
    return PlacementRead.model_validate(placement)


@router.put(
    "/{placement_id}",
    response_model=PlacementRead,
    summary="Update Placement",
    responses={404: {"description": "Placement not found"}},
)
async def update_placement(
    placement_id: int,
    placement_update: PlacementUpdate,
    session: AsyncSession = Depends(get_session),
) -> PlacementRead:
    repo = PlacementRepository(session)
    placement = await repo.get_by_id(placement_id)
    if not placement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Placement not found")
    changes = placement_update.model_dump(exclude_unset=True)
    end = changes.get("end_date", placement.end_date)
    if end and end < placement.start_date:
        raise ValidationError("End date must be after start date")
    return PlacementRead.model_validate(await repo.update_fields(placement, changes))


@router.delete(
    "/{placement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Placement",
    responses={404: {"description": "Placement not found"}},
)
async def delete_placement(placement_id: int, session: AsyncSession = Depends(get_session)) -> None:
    if not await PlacementRepository(session).delete(placement_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Placement not found")
