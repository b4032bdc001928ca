"""
API endpoints for ad-hoc rate calculation and award minimum validation.

Nothing here is persisted; stored calculations live under ``/charge-rates``.
"""

from __future__ import annotations

from fastapi import APIRouter

from gto_workforce.core.logging_config import get_logger
from gto_workforce.core.models.io.rates import (
    ChargeRateCalculateRequest,
    ChargeRateResult,
    RateValidateRequest,
    RateValidateResponse,
)
from gto_workforce.core.validation import rules
from gto_workforce.server.services.charge_rate_calculator import calculate_charge_rate
from gto_workforce.server.services.deps import FairWorkDep

logger = get_logger(__name__)

router = APIRouter(tags=["rates"])


@router.post(
    "/calculate",
    response_model=ChargeRateResult,
    summary="Calculate Charge Rate",
    description="Compute the hourly charge rate for a pay rate from work patterns, on-costs and margin.",
    responses={400: {"description": "Pay rate or billable hours not positive"}},
)
async def calculate_rate(request: ChargeRateCalculateRequest) -> ChargeRateResult:
    """
    Calculate a charge rate.

    - **pay_rate**: Hourly pay rate; must be greater than zero.
    - **work_config**: Hours, days and leave used for total and billable hours.
    - **cost_config**: Superannuation, workers comp, payroll tax and other on-costs.
    - **billable_options**: Which non-working time is billed to the host.
    - **custom_margin**: Overrides ``cost_config.default_margin``.
    """
    return calculate_charge_rate(
        request.pay_rate,
        work=request.work_config,
        cost=request.cost_config,
        billable=request.billable_options,
        margin=request.custom_margin,
    )


@router.post(
    "/validate",
    response_model=RateValidateResponse,
    summary="Validate Rate Against Award Minimum",
    description="Check a rate against the local award minimum and, when configured, the FairWork API.",
)
async def validate_rate(request: RateValidateRequest, fairwork: FairWorkDep) -> RateValidateResponse:
    minimum = rules.get_award_minimum_rate(request.award_code)
    if not rules.validate_award_rate(request.rate, request.award_code):
        return RateValidateResponse(
            is_valid=False,
            minimum_rate=minimum,
            message=f"Rate {request.rate:.2f} is below the {request.award_code} minimum of {minimum:.2f}",
            source="local",
        )

    if fairwork is not None:
        result = await fairwork.validate_rate(
            request.award_code, request.rate, classification_code=request.classification_code, on=request.date
        )
        # A zero minimum means FairWork could not answer; keep the local result.
        if result.minimum_rate > 0:
            return RateValidateResponse(
                is_valid=result.is_valid,
                minimum_rate=result.minimum_rate,
                message=result.message or ("Rate is valid" if result.is_valid else "Rate is below the award minimum"),
                source="fairwork",
            )
        logger.warning(f"FairWork validation unavailable for {request.award_code}, using local minimum")

    return RateValidateResponse(
        is_valid=True,
        minimum_rate=minimum,
        message=f"Rate meets the {request.award_code} minimum of {minimum:.2f}",
        source="local",
    )
