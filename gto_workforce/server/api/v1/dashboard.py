"""
Dashboard endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.models.io.dashboard import DashboardStats
from gto_workforce.server.services.dashboard import DashboardService

router = APIRouter(tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard Statistics",
    description="Headline counts for apprentices, host employers, placements, timesheets, tasks, "
    "compliance and WHS.",
)
async def dashboard_stats(session: AsyncSession = Depends(get_session)) -> DashboardStats:
    return await DashboardService(session).stats()
