"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships. Each module represents either:

1. A single database table and its related logic
2. A business domain that spans multiple related tables

Modules:
- users: Staff and portal users
- apprentices: Apprentice and trainee records
- host_employers: Host employer businesses
- placements: Apprentice placements with host employers
- timesheets: Weekly timesheets and daily detail rows
- tasks: Staff follow-up tasks
- compliance: Compliance records
- awards: Modern awards, classifications and rates
- charge_rates: Charge rate calculations and quotes
- rate_templates: Rate templates and their change history
- progress_reviews: Progress review templates, reviews, participants and action items
- whs: WHS incidents, witnesses, risk assessments and policies
- claims: Funding claims, claim history and eligibility
- finance: Invoices and expenses
- leads: Website leads
"""

from . import (
    apprentices,
    awards,
    charge_rates,
    claims,
    compliance,
    finance,
    host_employers,
    leads,
    placements,
    progress_reviews,
    rate_templates,
    tasks,
    timesheets,
    users,
    whs,
)

__all__ = [
    "apprentices",
    "awards",
    "charge_rates",
    "claims",
    "compliance",
    "finance",
    "host_employers",
    "leads",
    "placements",
    "progress_reviews",
    "rate_templates",
    "tasks",
    "timesheets",
    "users",
    "whs",
]
