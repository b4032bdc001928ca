"""
API endpoints for host employers.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.entities.host_employers import HostEmployer
from gto_workforce.core.database.repositories import HostEmployerRepository
from gto_workforce.core.logging_config import get_logger
from gto_workforce.core.models.io.host_employers import (
    HostEmployerCreate,
    HostEmployerRead,
    HostEmployerUpdate,
)

logger = get_logger(__name__)

router = APIRouter(tags=["host-employers"])


async def _get_or_404(repo: HostEmployerRepository, host_employer_id: int) -> HostEmployer:
    host = await repo.get_by_id(host_employer_id)
    if not host:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Host employer not found")
    return host


@router.post(
    "",
    response_model=HostEmployerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Host Employer",
    description="Register a business that hosts apprentices. The ABN is checksum-validated and the phone "
    "number is normalised to +61 form.",
    responses={
        201: {"description": "Host employer created successfully"},
        409: {"description": "A host employer with this email already exists"},
    },
)
async def create_host_employer(
    host_employer: HostEmployerCreate,
    session: AsyncSession = Depends(get_session),
) -> HostEmployerRead:
    repo = HostEmployerRepository(session)
    if await repo.get_by_email(host_employer.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Host employer with email {host_employer.email} already exists",
        )
    host = await repo.create(HostEmployer.model_validate(host_employer))
    logger.info(f"Created host employer {host.id} ({host.name})")
    return HostEmployerRead.model_validate(host)


@router.get(
    "",
    response_model=List[HostEmployerRead],
    summary="List Host Employers",
    description="List host employers, optionally filtered by status and compliance status.",
)
async def list_host_employers(
    status_filter: Optional[str] = Query(None, alias="status"),
    compliance_status: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[HostEmployerRead]:
    hosts = await HostEmployerRepository(session).list(
        limit=limit, offset=offset, filters={"status": status_filter, "compliance_status": compliance_status}
    )
    return [HostEmployerRead.model_validate(h) for h in hosts]


@router.get(
    "/{host_employer_id}",
    response_model=HostEmployerRead,
    summary="Get Host Employer",
    responses={404: {"description": "Host employer not found"}},
)
async def get_host_employer(host_employer_id: int, session: AsyncSession = Depends(get_session)) -> HostEmployerRead:
    return HostEmployerRead.model_validate(await _get_or_404(HostEmployerRepository(session), host_employer_id))


@router.put(
    "/{host_employer_id}",
    response_model=HostEmployerRead,
    summary="Update Host Employer",
    responses={
        404: {"description": "Host employer not found"},
        409: {"description": "Email already used by another host employer"},
    },
)
async def update_host_employer(
    host_employer_id: int,
    host_update: HostEmployerUpdate,
    session: AsyncSession = Depends(get_session),
) -> HostEmployerRead:
    repo = HostEmployerRepository(session)
    host = await _get_or_404(repo, host_employer_id)
    changes = host_update.model_dump(exclude_unset=True)
    if changes.get("email") and changes["email"] != host.email:
        other = await repo.get_by_email(changes["email"])
        if other is not None and other.id != host_employer_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Host employer with email {changes['email']} already exists",
            )
    host = await repo.update_fields(host, changes)
    return HostEmployerRead.model_validate(host)


@router.delete(
    "/{host_employer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Host Employer",
    responses={404: {"description": "Host employer not found"}},
)
async def delete_host_employer(host_employer_id: int, session: AsyncSession = Depends(get_session)) -> None:
    if not await HostEmployerRepository(session).delete(host_employer_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Host employer not found")
