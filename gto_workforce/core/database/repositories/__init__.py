"""
Database repository layer using SQLModel.

This package contains all repository classes organized by business domain
and table relationships. Each module provides type-safe data access operations
for its corresponding SQLModel entity models.

All repositories are built on SQLModel for:
- Type-safe ORM operations with Pydantic validation
- Async-first database access patterns
- Consistent CRUD interface via SQLModelRepository
- Query building utilities for filtering and pagination
"""

from .apprentices import ApprenticeRepository
from .awards import AwardClassificationRepository, AwardRateRepository, AwardRepository
from .base import AsyncBaseRepository, QueryBuilder, SQLModelRepository
from .charge_rates import ChargeRateCalculationRepository, QuoteRepository
from .claims import ApprenticeEligibilityRepository, ClaimRepository, EligibilityCriteriaRepository
from .compliance import ComplianceRecordRepository
from .finance import ExpenseRepository, InvoiceRepository
from .host_employers import HostEmployerRepository
from .leads import LeadRepository
from .placements import PlacementRepository
from .progress_reviews import (
    ProgressReviewActionItemRepository,
    ProgressReviewParticipantRepository,
    ProgressReviewRepository,
    ProgressReviewTemplateRepository,
)
from .rate_templates import RateTemplateRepository
from .tasks import TaskRepository
from .timesheets import TimesheetRepository
from .users import UserRepository
from .whs import WhsIncidentRepository, WhsPolicyRepository, WhsRiskAssessmentRepository

__all__ = [
    "ApprenticeEligibilityRepository",
    "ApprenticeRepository",
    "AsyncBaseRepository",
    "AwardClassificationRepository",
    "AwardRateRepository",
    "AwardRepository",
    "ChargeRateCalculationRepository",
    "ClaimRepository",
    "ComplianceRecordRepository",
    "EligibilityCriteriaRepository",
    "ExpenseRepository",
    "HostEmployerRepository",
    "InvoiceRepository",
    "LeadRepository",
    "PlacementRepository",
    "ProgressReviewActionItemRepository",
    "ProgressReviewParticipantRepository",
    "ProgressReviewRepository",
    "ProgressReviewTemplateRepository",
    "QueryBuilder",
    "QuoteRepository",
    "RateTemplateRepository",
    "SQLModelRepository",
    "TaskRepository",
    "TimesheetRepository",
    "UserRepository",
    "WhsIncidentRepository",
    "WhsPolicyRepository",
    "WhsRiskAssessmentRepository",
]
