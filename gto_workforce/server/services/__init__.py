"""
Business services.

Each service wraps an ``AsyncSession`` and the repositories it needs, raises
``gto_workforce.core.errors`` exceptions and is created per request by the
API routers.
"""

from .award_rate_calculator import AwardRateCalculator
from .charge_rate_calculator import ChargeRateService, calculate_charge_rate
from .claims import ClaimService
from .dashboard import DashboardService
from .financial import FinancialService
from .leads import LeadWebhookService
from .rate_templates import RateTemplateService
from .timesheets import TimesheetService
from .whs import WhsService

__all__ = [
    "AwardRateCalculator",
    "ChargeRateService",
    "ClaimService",
    "DashboardService",
    "FinancialService",
    "LeadWebhookService",
    "RateTemplateService",
    "TimesheetService",
    "WhsService",
    "calculate_charge_rate",
]
