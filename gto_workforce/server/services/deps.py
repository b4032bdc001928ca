"""
Service Dependencies.

Provides the FairWork client and the request-scoped services to API endpoints.
The FairWork client is created once in the application lifespan and kept on
``app.state.fairwork``; it is ``None`` when no API key is configured.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.errors import ServiceUnavailableError
from gto_workforce.fairwork import CachedFairWorkClient

from .award_rate_calculator import AwardRateCalculator
from .charge_rate_calculator import ChargeRateService


def get_fairwork(request: Request) -> Optional[CachedFairWorkClient]:
    return getattr(request.app.state, "fairwork", None)


def require_fairwork(request: Request) -> CachedFairWorkClient:
    client = get_fairwork(request)
    if client is None:
        raise ServiceUnavailableError("FairWork API integration is not configured")
    return client


def get_award_rate_calculator(
    session: AsyncSession = Depends(get_session),
    fairwork: Optional[CachedFairWorkClient] = Depends(get_fairwork),
) -> AwardRateCalculator:
    return AwardRateCalculator(session, fairwork)


def get_charge_rate_service(
    session: AsyncSession = Depends(get_session),
    award_rates: AwardRateCalculator = Depends(get_award_rate_calculator),
) -> ChargeRateService:
    return ChargeRateService(session, award_rates)


SessionDep = Annotated[AsyncSession, Depends(get_session)]
FairWorkDep = Annotated[Optional[CachedFairWorkClient], Depends(get_fairwork)]
RequiredFairWorkDep = Annotated[CachedFairWorkClient, Depends(require_fairwork)]
AwardRateCalculatorDep = Annotated[AwardRateCalculator, Depends(get_award_rate_calculator)]
ChargeRateServiceDep = Annotated[ChargeRateService, Depends(get_charge_rate_service)]
