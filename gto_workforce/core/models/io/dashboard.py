"""
Dashboard I/O models.
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel


class ApprenticeStats(BaseModel):
    total: int
    byStatus: Dict[str, int]


class HostEmployerStats(BaseModel):
    total: int
    active: int


class TaskStats(BaseModel):
    open: int
    overdue: int


class DashboardStats(BaseModel):
    apprentices: ApprenticeStats
    hostEmployers: HostEmployerStats
    activePlacements: int
    pendingTimesheets: int
    tasks: TaskStats
    nonCompliantRecords: int
    openIncidents: int
