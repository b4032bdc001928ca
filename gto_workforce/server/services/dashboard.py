"""
Dashboard statistics across the GTO's records.
"""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.repositories import (
    ApprenticeRepository,
    ComplianceRecordRepository,
    HostEmployerRepository,
    PlacementRepository,
    TaskRepository,
    TimesheetRepository,
    WhsIncidentRepository,
)
from gto_workforce.core.models.io.dashboard import (
    ApprenticeStats,
    DashboardStats,
    HostEmployerStats,
    TaskStats,
)
from gto_workforce.core.models.io.whs import CLOSED_STATUSES

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def stats(self) -> DashboardStats:
        apprentices_by_status = await ApprenticeRepository(self.session).count_by("status")
        hosts = HostEmployerRepository(self.session)
        tasks = TaskRepository(self.session)
        incidents_by_status = await WhsIncidentRepository(self.session).count_by("status")

        stats = DashboardStats(
            apprentices=ApprenticeStats(total=sum(apprentices_by_status.values()), byStatus=apprentices_by_status),
            hostEmployers=HostEmployerStats(total=await hosts.count(), active=await hosts.count({"status": "active"})),
            activePlacements=await PlacementRepository(self.session).count({"status": "active"}),
            pendingTimesheets=await TimesheetRepository(self.session).count({"status": "pending"}),
            tasks=TaskStats(open=await tasks.count_open(), overdue=await tasks.count_overdue(datetime.utcnow())),
            nonCompliantRecords=await ComplianceRecordRepository(self.session).count({"status": "non-compliant"}),
            openIncidents=sum(n for status, n in incidents_by_status.items() if status not in CLOSED_STATUSES),
        )
        logger.debug(f"Dashboard stats computed: {stats.apprentices.total} apprentices")
        return stats
