"""
Charge rate calculation service.

A charge rate is what the GTO bills a host employer per billable hour. It is
derived from the apprentice's hourly pay rate:

1. base wage = pay rate x total annual hours
2. on-costs = super, workers comp, payroll tax, admin (fractions of base wage),
   leave loading (capped at 152 hours) and fixed study and PPE costs
3. cost per hour = (base wage + on-costs) / billable hours
4. charge rate = cost per hour x (1 + margin)

Billable hours exclude leave, public holidays, adverse weather and training
weeks unless the matching ``BillableOptions`` flag says they are billed.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database.entities.apprentices import Apprentice
from gto_workforce.core.database.entities.charge_rates import ChargeRateCalculation, Quote, QuoteLineItem
from gto_workforce.core.database.entities.host_employers import HostEmployer
from gto_workforce.core.database.repositories import (
    ApprenticeRepository,
    ChargeRateCalculationRepository,
    HostEmployerRepository,
    PlacementRepository,
    QuoteRepository,
)
from gto_workforce.core.errors import NotFoundError, ValidationError
from gto_workforce.core.models.io.rates import (
    BillableOptions,
    ChargeRateResult,
    CostConfig,
    OnCosts,
    WorkConfig,
)

from .award_rate_calculator import AwardRateCalculator

logger = logging.getLogger(__name__)

DEFAULT_PAY_RATE = 25.0
DEFAULT_AWARD_CODE = "MA000003"
MAX_LEAVE_LOADING_HOURS = 152
QUOTE_WEEKS = 52
QUOTE_WEEKLY_HOURS = 38
QUOTE_VALID_DAYS = 30


def total_annual_hours(work: WorkConfig) -> float:
    return work.hours_per_day * work.days_per_week * work.weeks_per_year


def billable_hours(work: WorkConfig, cost: CostConfig, billable: BillableOptions) -> float:
    """Annual hours that can be billed to the host employer."""
    unbilled_days = 0.0
    if not billable.include_annual_leave:
        unbilled_days += work.annual_leave_days
    if not billable.include_public_holidays:
        unbilled_days += work.public_holidays
    if not billable.include_sick_leave:
        unbilled_days += work.sick_leave_days
    if not billable.include_adverse_weather:
        unbilled_days += cost.adverse_weather_days

    unbilled_weeks = unbilled_days / work.days_per_week
    if not billable.include_training_time:
        unbilled_weeks += work.training_weeks

    return work.hours_per_day * work.days_per_week * (work.weeks_per_year - unbilled_weeks)


def calculate_on_costs(pay_rate: float, hours: float, cost: CostConfig) -> OnCosts:
    base_wage = pay_rate * hours
    return OnCosts(
        superannuation=base_wage * cost.super_rate,
        workers_comp=base_wage * cost.wc_rate,
        payroll_tax=base_wage * cost.payroll_tax_rate,
        leave_loading=pay_rate * min(hours, MAX_LEAVE_LOADING_HOURS) * cost.leave_loading,
        study_cost=cost.study_cost,
        ppe_cost=cost.ppe_cost,
        admin_cost=base_wage * cost.admin_rate,
    )


def calculate_charge_rate(
    pay_rate: float,
    work: Optional[WorkConfig] = None,
    cost: Optional[CostConfig] = None,
    billable: Optional[BillableOptions] = None,
    margin: Optional[float] = None,
) -> ChargeRateResult:
    """Calculate a charge rate from an hourly pay rate.

    Args:
        pay_rate: Hourly pay rate, must be positive
        work: Working pattern, defaults to a 38 hour week
        cost: On-cost configuration
        billable: Which non-working time is billed
        margin: Profit margin, defaults to ``cost.default_margin``

    Returns:
        ChargeRateResult with the full breakdown

    Raises:
        ValidationError: If the pay rate or billable hours are not positive
    """
    if pay_rate <= 0:
        raise ValidationError("Pay rate must be a positive number")
    work = work or WorkConfig()
    cost = cost or CostConfig()
    billable = billable or BillableOptions()
    margin = cost.default_margin if margin is None else margin

    total_hours = total_annual_hours(work)
    billable_total = billable_hours(work, cost, billable)
    if billable_total <= 0:
        raise ValidationError(
            "Billable hours must be greater than zero",
            details={"billable_hours": billable_total},
        )

    base_wage = pay_rate * total_hours
    on_costs = calculate_on_costs(pay_rate, total_hours, cost)
    total_cost = base_wage + on_costs.total
    cost_per_hour = total_cost / billable_total

    return ChargeRateResult(
        pay_rate=pay_rate,
        total_hours=total_hours,
        billable_hours=billable_total,
        base_wage=base_wage,
        on_costs=on_costs,
        total_cost=total_cost,
        cost_per_hour=cost_per_hour,
        margin=margin,
        charge_rate=cost_per_hour * (1 + margin),
    )


def _cost_config_for(host: HostEmployer) -> CostConfig:
    """Default costs with the host employer's negotiated margin and admin rate."""
    cost = CostConfig()
    if host.custom_margin_rate is not None:
        cost.default_margin = host.custom_margin_rate
    if host.custom_admin_rate is not None:
        cost.admin_rate = host.custom_admin_rate
    return cost


class ChargeRateService:
    """Persists charge rate calculations, approvals and quotes."""

    def __init__(self, session: AsyncSession, award_rates: Optional[AwardRateCalculator] = None):
        self.session = session
        self.apprentices = ApprenticeRepository(session)
        self.hosts = HostEmployerRepository(session)
        self.placements = PlacementRepository(session)
        self.calculations = ChargeRateCalculationRepository(session)
        self.quotes = QuoteRepository(session)
        self.award_rates = award_rates or AwardRateCalculator(session)

    async def _pay_rate_for(self, apprentice: Apprentice, host_employer_id: int) -> float:
        placement = await self.placements.get_active(apprentice.id, host_employer_id)
        if placement is not None and placement.negotiated_rate:
            return float(placement.negotiated_rate)
        result = await self.award_rates.get_apprentice_pay_rate(
            DEFAULT_AWARD_CODE,
            apprentice.apprenticeship_year or 1,
            is_adult=apprentice.is_adult,
            has_completed_year12=apprentice.has_completed_year12,
        )
        return result.rate if result.rate > 0 else DEFAULT_PAY_RATE

    async def calculate_and_save(self, apprentice_id: int, host_employer_id: int) -> ChargeRateCalculation:
        """Calculate the charge rate for an apprentice at a host and store it unapproved."""
        logger.info(f"Calculating charge rate for apprentice {apprentice_id} at host employer {host_employer_id}")
        apprentice = await self.apprentices.get_by_id(apprentice_id)
        if apprentice is None:
            raise NotFoundError("Apprentice", apprentice_id)
        host = await self.hosts.get_by_id(host_employer_id)
        if host is None:
            raise NotFoundError("Host employer", host_employer_id)

        return await self.calculations.create(await self._calculate(apprentice, host))

    async def _calculate(self, apprentice: Apprentice, host: HostEmployer) -> ChargeRateCalculation:
        pay_rate = await self._pay_rate_for(apprentice, host.id)
        cost = _cost_config_for(host)
        logger.debug(
            f"Using pay rate {pay_rate}, margin {cost.default_margin}, admin rate {cost.admin_rate} "
            f"for host employer {host.id}"
        )

        result = calculate_charge_rate(pay_rate, cost=cost)
        return ChargeRateCalculation(
            apprentice_id=apprentice.id,
            host_employer_id=host.id,
            pay_rate=result.pay_rate,
            total_hours=result.total_hours,
            billable_hours=result.billable_hours,
            base_wage=result.base_wage,
            on_costs=result.on_costs.model_dump(),
            total_cost=result.total_cost,
            cost_per_hour=result.cost_per_hour,
            margin=result.margin,
            charge_rate=result.charge_rate,
            approved=False,
        )

    async def approve(self, calculation_id: int) -> ChargeRateCalculation:
        """Approve a calculation and apply its rate to the active placement."""
        calculation = await self.calculations.get_by_id(calculation_id)
        if calculation is None:
            raise NotFoundError("Charge rate calculation", calculation_id)

        now = datetime.utcnow()
        calculation.approved = True
        calculation.approved_date = now
        self.session.add(calculation)

        placement = await self.placements.get_active(calculation.apprentice_id, calculation.host_employer_id)
        if placement is not None:
            placement.charge_rate = calculation.charge_rate
            placement.last_charge_rate_update = now
            placement.updated_at = now
            self.session.add(placement)
        else:
            logger.warning(
                f"No active placement for apprentice {calculation.apprentice_id} at host employer "
                f"{calculation.host_employer_id}; charge rate not applied"
            )

        await self.session.commit()
        await self.session.refresh(calculation)
        logger.info(f"Approved charge rate calculation {calculation_id}: {calculation.charge_rate:.2f}")
        return calculation

    async def generate_quote(
        self, host_employer_id: int, apprentice_ids: Sequence[int]
    ) -> Tuple[Quote, List[QuoteLineItem]]:
        """Build a draft annual quote for a host employer.

        Each apprentice gets one line item billed at their current charge rate
        for 38 hours a week over 52 weeks. The calculation behind each rate is
        stored unapproved so it can be approved once the quote is accepted.
        """
        if not apprentice_ids:
            raise ValidationError("At least one apprentice is required to generate a quote")
        host = await self.hosts.get_by_id(host_employer_id)
        if host is None:
            raise NotFoundError("Host employer", host_employer_id)

        items: List[QuoteLineItem] = []
        for apprentice_id in apprentice_ids:
            apprentice = await self.apprentices.get_by_id(apprentice_id)
            if apprentice is None:
                raise NotFoundError("Apprentice", apprentice_id)
            calculation = await self._calculate(apprentice, host)
            self.session.add(calculation)
            rate = calculation.charge_rate
            items.append(
                QuoteLineItem(
                    apprentice_id=apprentice_id,
                    description=f"{apprentice.first_name} {apprentice.last_name} - Year {apprentice.apprenticeship_year or 1}",
                    quantity=QUOTE_WEEKS,
                    weekly_hours=QUOTE_WEEKLY_HOURS,
                    rate=rate,
                    total=round(rate * QUOTE_WEEKLY_HOURS * QUOTE_WEEKS, 2),
                )
            )

        today = datetime.utcnow().date()
        quote = Quote(
            quote_number=f"Q-{str(int(time.time() * 1000))[-6:]}",
            host_employer_id=host_employer_id,
            title=f"Quote for {host.name} - {today.isoformat()}",
            status="draft",
            valid_until=today + timedelta(days=QUOTE_VALID_DAYS),
            total_amount=round(sum(item.total for item in items), 2),
        )
        quote = await self.quotes.create_with_items(quote, items)
        logger.info(f"Generated quote {quote.quote_number} for host employer {host_employer_id}")
        return quote, items

    async def get_quote(self, quote_id: int) -> Tuple[Quote, List[QuoteLineItem]]:
        quote = await self.quotes.get_by_id(quote_id)
        if quote is None:
            raise NotFoundError("Quote", quote_id)
        return quote, await self.quotes.get_line_items(quote_id)
