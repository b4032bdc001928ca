"""
API endpoints for apprentices.

Provides CRUD operations plus the lifecycle status endpoint, which enforces
``APPRENTICE_STATUS_TRANSITIONS``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.entities.apprentices import Apprentice
from gto_workforce.core.database.repositories import ApprenticeRepository
from gto_workforce.core.errors import InvalidTransitionError
from gto_workforce.core.logging_config import get_logger
from gto_workforce.core.models.io.apprentices import (
    ApprenticeCreate,
    ApprenticeRead,
    ApprenticeStatusUpdate,
    ApprenticeUpdate,
)
from gto_workforce.core.validation import rules

logger = get_logger(__name__)

router = APIRouter(tags=["apprentices"])


async def _get_or_404(repo: ApprenticeRepository, apprentice_id: int) -> Apprentice:
    apprentice = await repo.get_by_id(apprentice_id)
    if not apprentice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Apprentice not found")
    return apprentice


@router.post(
    "",
    response_model=ApprenticeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Apprentice",
    description="Register a new apprentice or trainee. Emails are unique across apprentices.",
    responses={
        201: {"description": "Apprentice created successfully"},
        409: {"description": "An apprentice with this email already exists"},
        422: {"description": "Invalid apprentice data"},
    },
)
async def create_apprentice(
    apprentice: ApprenticeCreate,
    session: AsyncSession = Depends(get_session),
) -> ApprenticeRead:
    """
    Create a new apprentice.

    - **email**: Must be unique; stored lowercase.
    - **phone**: Australian mobile or landline.
    - **date_of_birth**: The apprentice must be between 15 and 65 years old.
    - **progress**: Completion percentage from 0 to 100.
    """
    repo = ApprenticeRepository(session)
    if await repo.get_by_email(apprentice.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Apprentice with email {apprentice.email} already exists",
        )
    db_apprentice = await repo.create(Apprentice.model_validate(apprentice))
    logger.info(f"Created apprentice {db_apprentice.id} ({db_apprentice.trade})")
    return ApprenticeRead.model_validate(db_apprentice)


@router.get(
    "",
    response_model=List[ApprenticeRead],
    summary="List Apprentices",
    description="List apprentices, optionally filtered by status and trade.",
)
async def list_apprentices(
    status_filter: Optional[str] = Query(None, alias="status"),
    trade: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[ApprenticeRead]:
    apprentices = await ApprenticeRepository(session).list(
        limit=limit, offset=offset, filters={"status": status_filter, "trade": trade}
    )
    return [ApprenticeRead.model_validate(a) for a in apprentices]


@router.get(
    "/{apprentice_id}",
    response_model=ApprenticeRead,
    summary="Get Apprentice",
    responses={404: {"description": "Apprentice not found"}},
)
async def get_apprentice(apprentice_id: int, session: AsyncSession = Depends(get_session)) -> ApprenticeRead:
    return ApprenticeRead.model_validate(await _get_or_404(ApprenticeRepository(session), apprentice_id))


@router.put(
    "/{apprentice_id}",
    response_model=ApprenticeRead,
    summary="Update Apprentice",
    description="Update apprentice details. Status changes go through the status endpoint.",
    responses={
        404: {"description": "Apprentice not found"},
        409: {"description": "Email already used by another apprentice"},
    },
)
async def update_apprentice(
    apprentice_id: int,
    apprentice_update: ApprenticeUpdate,
    session: AsyncSession = Depends(get_session),
) -> ApprenticeRead:
    repo = ApprenticeRepository(session)
    apprentice = await _get_or_404(repo, apprentice_id)
    changes = apprentice_update.model_dump(exclude_unset=True)

    if changes.get("email") and changes["email"] != apprentice.email:
        other = await repo.get_by_email(changes["email"])
        if other is not None and other.id != apprentice_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Apprentice with email {changes['email']} already exists",
            )

    start = changes.get("start_date", apprentice.start_date)
    end = changes.get("end_date", apprentice.end_date)
    if start and end and end < start:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="End date must be after start date")

    apprentice = await repo.update_fields(apprentice, changes)
    return ApprenticeRead.model_validate(apprentice)


@router.patch(
    "/{apprentice_id}/status",
    response_model=ApprenticeRead,
    summary="Change Apprentice Status",
    description="Move an apprentice through the lifecycle: applicant, recruitment, pre-commencement, active, "
    "suspended, withdrawn or completed.",
    responses={
        400: {"description": "Transition not allowed from the current status"},
        404: {"description": "Apprentice not found"},
    },
)
async def update_apprentice_status(
    apprentice_id: int,
    status_update: ApprenticeStatusUpdate,
    session: AsyncSession = Depends(get_session),
) -> ApprenticeRead:
    repo = ApprenticeRepository(session)
    apprentice = await _get_or_404(repo, apprentice_id)
    current = apprentice.status
    if not rules.validate_status_transition(current, status_update.status):
        raise InvalidTransitionError(current, status_update.status)

    changes = {"status": status_update.status}
    if status_update.notes:
        stamp = datetime.utcnow().strftime("%Y-%m-%d")
        entry = f"[{stamp}] {current} -> {status_update.status}: {status_update.notes}"
        changes["notes"] = f"{apprentice.notes}\n{entry}" if apprentice.notes else entry

    apprentice = await repo.update_fields(apprentice, changes)
    logger.info(f"Apprentice {apprentice_id} moved from {current} to {apprentice.status}")
    return ApprenticeRead.model_validate(apprentice)


@router.delete(
    "/{apprentice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Apprentice",
    responses={404: {"description": "Apprentice not found"}},
)
async def delete_apprentice(apprentice_id: int, session: AsyncSession = Depends(get_session)) -> None:
    if not await ApprenticeRepository(session).delete(apprentice_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Apprentice not found")
