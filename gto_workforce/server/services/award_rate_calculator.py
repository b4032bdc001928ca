"""
Award rate calculation service.

Resolves hourly pay rates for apprentices and award classifications. Lookups
try, in order:

1. the local ``award_rates`` table
2. the FairWork API (apprentice rates only, when configured)
3. a calculated default
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.entities.awards import AwardClassification
from gto_workforce.core.database.repositories import (
    AwardClassificationRepository,
    AwardRateRepository,
    AwardRepository,
)
from gto_workforce.core.models.io.awards import PayRateResult
from gto_workforce.fairwork import CachedFairWorkClient, FairWorkApiError

logger = logging.getLogger(__name__)

APPRENTICE_BASE_RATES = {1: 21.75, 2: 23.50, 3: 25.25, 4: 27.00}
ADULT_MULTIPLIER = 1.15
YEAR12_MULTIPLIER = 1.05
CLASSIFICATION_BASE_RATE = 23.00
CLASSIFICATION_LEVEL_STEP = 2.25
DEFAULT_ENTERPRISE_AGREEMENT_RATE = 28.50


def default_apprentice_rate(year: int, is_adult: bool = True, has_completed_year12: bool = True) -> float:
    """Fallback apprentice rate when neither local data nor FairWork has one."""
    rate = APPRENTICE_BASE_RATES.get(year, 21.75 + (year - 1) * 1.75)
    if is_adult:
        rate *= ADULT_MULTIPLIER
    if has_completed_year12:
        rate *= YEAR12_MULTIPLIER
    return round(rate, 2)


def default_classification_rate(level: int) -> float:
    return round(CLASSIFICATION_BASE_RATE + (level - 1) * CLASSIFICATION_LEVEL_STEP, 2)


class AwardRateCalculator:
    """Looks up award-based pay rates with local, FairWork and calculated fallbacks."""

    def __init__(self, session: AsyncSession, fairwork: Optional[CachedFairWorkClient] = None):
        self.session = session
        self.fairwork = fairwork
        self.awards = AwardRepository(session)
        self.classifications = AwardClassificationRepository(session)
        self.rates = AwardRateRepository(session)

    async def find_apprentice_classification(self, award_id: int) -> Optional[AwardClassification]:
        """Pick the classification apprentice rates hang off.

        Prefers a name containing "apprentice"/"trainee" or a code containing
        "ap"/"tr"; otherwise the lowest level classification of the award.
        """
        classifications = await self.classifications.list_for_award(award_id)
        for classification in classifications:
            name = (classification.name or "").lower()
            code = (classification.code or "").lower()
            if "apprentice" in name or "trainee" in name or "ap" in code or "tr" in code:
                return classification
        if classifications:
            return min(classifications, key=lambda c: c.level or 0)
        return None

    async def get_apprentice_pay_rate(
        self,
        award_code: str,
        year: int,
        is_adult: bool = True,
        has_completed_year12: bool = True,
    ) -> PayRateResult:
        logger.info(
            f"Getting apprentice pay rate: award={award_code} year={year} adult={is_adult} year12={has_completed_year12}"
        )
        award = await self.awards.get_by_code(award_code)
        if award is not None:
            classification = await self.find_apprentice_classification(award.id)
            if classification is not None:
                local = await self.rates.find_current_rate(
                    classification.id,
                    datetime.utcnow().date(),
                    apprentice_year=year,
                    is_adult=is_adult,
                )
                if local is not None:
                    logger.debug(f"Using local apprentice rate {local.hourly_rate} (id={local.id})")
                    return PayRateResult(
                        award_code=award_code, rate=local.hourly_rate, source="local", apprentice_year=year
                    )
        else:
            logger.warning(f"Award {award_code} not found locally")

        if self.fairwork is not None:
            try:
                rates = await self.fairwork.get_apprentice_rates(
                    award_code, year, is_adult=is_adult, has_completed_year12=has_completed_year12
                )
            except FairWorkApiError as e:
                logger.warning(f"FairWork apprentice rate lookup failed for {award_code}: {e}")
                rates = []
            rate = next((r for r in rates if r.hourly_rate > 0), None)
            if rate is not None:
                return PayRateResult(
                    award_code=award_code, rate=rate.hourly_rate, source="fairwork", apprentice_year=year
                )

        calculated = default_apprentice_rate(year, is_adult, has_completed_year12)
        logger.info(f"Using calculated apprentice rate {calculated} for {award_code} year {year}")
        return PayRateResult(award_code=award_code, rate=calculated, source="calculated", apprentice_year=year)

    async def get_classification_pay_rate(self, award_code: str, level: int) -> PayRateResult:
        award = await self.awards.get_by_code(award_code)
        if award is not None:
            classification = await self.classifications.get_by_level(award.id, level)
            if classification is not None:
                local = await self.rates.find_current_rate(classification.id, datetime.utcnow().date())
                if local is not None:
                    return PayRateResult(
                        award_code=award_code, rate=local.hourly_rate, source="local", classification_level=level
                    )
        return PayRateResult(
            award_code=award_code,
            rate=default_classification_rate(level),
            source="calculated",
            classification_level=level,
        )

    async def get_enterprise_agreement_rate(
        self, agreement_id: Optional[int] = None, classification_code: Optional[str] = None
    ) -> float:
        # No enterprise agreement data is stored yet.
        logger.debug(f"Enterprise agreement rate requested: agreement={agreement_id} classification={classification_code}")
        return DEFAULT_ENTERPRISE_AGREEMENT_RATE
