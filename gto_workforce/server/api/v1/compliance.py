"""
API endpoints for compliance records (police checks, licences, WHS audits, ...).
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.entities.compliance import ComplianceRecord
from gto_workforce.core.database.repositories import ComplianceRecordRepository
from gto_workforce.core.models.io.compliance import (
    ComplianceRecordCreate,
    ComplianceRecordRead,
    ComplianceRecordUpdate,
)

router = APIRouter(tags=["compliance"])


@router.post(
    "",
    response_model=ComplianceRecordRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Compliance Record",
)
async def create_compliance_record(
    record: ComplianceRecordCreate,
    session: AsyncSession = Depends(get_session),
) -> ComplianceRecordRead:
    db_record = await ComplianceRecordRepository(session).create(ComplianceRecord.model_validate(record))
    return ComplianceRecordRead.model_validate(db_record)


@router.get(
    "",
    response_model=List[ComplianceRecordRead],
    summary="List Compliance Records",
    description="List compliance records filtered by type, status and the kind of related record.",
)
async def list_compliance_records(
    type: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    related_to: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[ComplianceRecordRead]:
    records = await ComplianceRecordRepository(session).list(
        limit=limit, offset=offset, filters={"type": type, "status": status_filter, "related_to": related_to}
    )
    return [ComplianceRecordRead.model_validate(r) for r in records]


@router.get("/{record_id}", response_model=ComplianceRecordRead, summary="Get Compliance Record")
async def get_compliance_record(record_id: int, session: AsyncSession = Depends(get_session)) -> ComplianceRecordRead:
    record = await ComplianceRecordRepository(session).get_by_id(record_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Compliance record not found")
    return ComplianceRecordRead.model_validate(record)


@router.put("/{record_id}", response_model=ComplianceRecordRead, summary="Update Compliance Record")
async def update_compliance_record(
    record_id: int,
    record_update: ComplianceRecordUpdate,
    session: AsyncSession = Depends(get_session),
) -> ComplianceRecordRead:
    repo = ComplianceRecordRepository(session)
    record = await repo.get_by_id(record_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Compliance record not found")
    record = await repo.update_fields(record, record_update.model_dump(exclude_unset=True))
    return ComplianceRecordRead.model_validate(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Compliance Record")
async def delete_compliance_record(record_id: int, session: AsyncSession = Depends(get_session)) -> None:
    if not await ComplianceRecordRepository(session).delete(record_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Compliance record not found")
