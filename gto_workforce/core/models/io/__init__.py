"""
I/O models for API requests and responses.

One module per business domain, mirroring ``gto_workforce.core.database.entities``:
``XCreate``/``XUpdate`` validate incoming payloads and ``XRead`` serialises
entities (``from_attributes=True``).
"""

from . import (
    apprentices,
    awards,
    claims,
    common,
    compliance,
    dashboard,
    finance,
    host_employers,
    leads,
    placements,
    progress_reviews,
    rate_templates,
    rates,
    tasks,
    timesheets,
    users,
    whs,
)

__all__ = [
    "apprentices",
    "awards",
    "claims",
    "common",
    "compliance",
    "dashboard",
    "finance",
    "host_employers",
    "leads",
    "placements",
    "progress_reviews",
    "rate_templates",
    "rates",
    "tasks",
    "timesheets",
    "users",
    "whs",
]
