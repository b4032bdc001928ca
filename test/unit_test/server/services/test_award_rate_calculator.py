"""
Unit tests for the award rate calculator.

Tests cover the lookup order: local award rates first, then the FairWork
API, then the calculated default.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from gto_workforce.core.database.entities.awards import Award, AwardClassification, AwardRate
from gto_workforce.fairwork import FairWorkApiError, FairWorkPayRate
from gto_workforce.server.services.award_rate_calculator import (
    AwardRateCalculator,
    default_apprentice_rate,
    default_classification_rate,
)

pytestmark = pytest.mark.asyncio


async def _seed_award(session, *, rate: float = 19.80, year: int = 2, is_adult: bool = True):
    award = Award(code="MA000003", name="Fast Food Industry Award 2020")
    session.add(award)
    await session.commit()
    await session.refresh(award)

    general = AwardClassification(award_id=award.id, code="L1", name="Level 1", level=1)
    apprentice = AwardClassification(award_id=award.id, code="APP", name="Apprentice", level=2, is_apprentice=True)
    session.add_all([general, apprentice])
    await session.commit()
    await session.refresh(apprentice)

    session.add(
        AwardRate(
            classification_id=apprentice.id,
            hourly_rate=rate,
            apprentice_year=year,
            is_adult=is_adult,
            effective_from=date(2020, 7, 1),
        )
    )
    await session.commit()
    return award, apprentice


class TestDefaults:
    def test_default_apprentice_rate_with_multipliers(self):
        assert default_apprentice_rate(2, is_adult=True, has_completed_year12=True) == 28.38

    def test_default_apprentice_rate_junior_without_year12(self):
        assert default_apprentice_rate(1, is_adult=False, has_completed_year12=False) == 21.75

    def test_default_apprentice_rate_beyond_year_four(self):
        assert default_apprentice_rate(5, is_adult=False, has_completed_year12=False) == 28.75

    def test_default_classification_rate(self):
        assert default_classification_rate(1) == 23.00
        assert default_classification_rate(3) == 27.50


class TestApprenticePayRate:
    async def test_local_rate_preferred(self, session):
        await _seed_award(session)
        fairwork = MagicMock()
        fairwork.get_apprentice_rates = AsyncMock()

        result = await AwardRateCalculator(session, fairwork).get_apprentice_pay_rate("MA000003", 2, is_adult=True)

        assert result.rate == 19.80
        assert result.source == "local"
        fairwork.get_apprentice_rates.assert_not_awaited()

    async def test_apprentice_classification_found_by_name(self, session):
        _, apprentice = await _seed_award(session)
        calculator = AwardRateCalculator(session)
        award = await calculator.awards.get_by_code("MA000003")
        found = await calculator.find_apprentice_classification(award.id)
        assert found.id == apprentice.id

    async def test_fairwork_used_when_no_local_rate(self, session):
        fairwork = MagicMock()
        fairwork.get_apprentice_rates = AsyncMock(
            return_value=[FairWorkPayRate(id="0", hourly_rate=0), FairWorkPayRate(id="1", hourly_rate=17.25)]
        )

        result = await AwardRateCalculator(session, fairwork).get_apprentice_pay_rate("MA000010", 1)

        assert result.rate == 17.25
        assert result.source == "fairwork"
        fairwork.get_apprentice_rates.assert_awaited_once_with(
            "MA000010", 1, is_adult=True, has_completed_year12=True
        )

    async def test_calculated_when_fairwork_fails(self, session):
        fairwork = MagicMock()
        fairwork.get_apprentice_rates = AsyncMock(side_effect=FairWorkApiError("down"))

        result = await AwardRateCalculator(session, fairwork).get_apprentice_pay_rate(
            "MA000010", 1, is_adult=False, has_completed_year12=False
        )

        assert result.source == "calculated"
        assert result.rate == 21.75

    async def test_calculated_without_fairwork(self, session):
        result = await AwardRateCalculator(session).get_apprentice_pay_rate("MA000020", 3)
        assert result.source == "calculated"
        assert result.apprentice_year == 3


class TestClassificationPayRate:
    async def test_local_classification_rate(self, session):
        _, apprentice = await _seed_award(session, rate=26.10, year=None)
        result = await AwardRateCalculator(session).get_classification_pay_rate("MA000003", apprentice.level)
        assert result.rate == 26.10
        assert result.source == "local"

    async def test_calculated_classification_rate(self, session):
        result = await AwardRateCalculator(session).get_classification_pay_rate("MA000003", 2)
        assert result.rate == 25.25
        assert result.classification_level == 2


class TestEnterpriseAgreementRate:
    async def test_default_rate_without_agreement_data(self, session):
        rate = await AwardRateCalculator(session).get_enterprise_agreement_rate(agreement_id=7, classification_code="L3")
        assert rate == 28.50
