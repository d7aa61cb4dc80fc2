"""Savings accumulation and retirement drawdown projections."""

from __future__ import annotations

import logging

from backend.core.calc_utils import (
    MONTHS_IN_YEAR,
    future_value,
    geometric_series_sum,
    payout_duration,
    payout_from_lump_sum,
)
from backend.domain.models import AgePolicy, IncomeProjection, RateAssumptions

logger = logging.getLogger(__name__)


def project_balance(
    current_balance: float,
    annual_contribution: float,
    years: int,
    rates: RateAssumptions,
) -> float:
    """
    Future value of the current balance plus a contribution stream.

    The contribution grows each year with income (income_growth_rate) while
    the balance earns savings_return_rate. The first contribution lands at
    year 1, so the series runs over indices 1..years.
    """
    principal_future_value = future_value(current_balance, rates.savings_return_rate, years)

    contributions_future_value = 0.0
    if annual_contribution > 0:
        ratio = (1 + rates.savings_return_rate) * (1 + rates.income_growth_rate)
        contributions_future_value = annual_contribution * geometric_series_sum(1, ratio, years)

    return principal_future_value + contributions_future_value


def effective_retirement_age(requested_retirement_age: int, age_policy: AgePolicy) -> int:
    """Clamp the requested age into [normal_retirement_age, withdrawal_age]."""
    return min(
        age_policy.withdrawal_age,
        max(age_policy.normal_retirement_age, requested_retirement_age),
    )


def project_retirement_savings(
    current_age: int,
    current_balance: float,
    requested_retirement_age: int,
    annual_contribution: float,
    rates: RateAssumptions,
    age_policy: AgePolicy,
) -> float:
    """
    Balance at the effective retirement age.

    Contributions run until the requested retirement age; any years left
    until the effective retirement age only grow the balance.
    """
    working_years = requested_retirement_age - current_age
    working_savings = project_balance(current_balance, annual_contribution, working_years, rates)

    non_working_years = effective_retirement_age(requested_retirement_age, age_policy) - (
        current_age + working_years
    )
    non_working_savings = 0.0
    if non_working_years > 0:
        non_working_savings = project_balance(working_savings, 0, non_working_years, rates)

    logger.debug(
        "projected savings: %s working years, %s growth-only years",
        working_years,
        max(non_working_years, 0),
    )
    return max(working_savings, non_working_savings)


def project_income_and_duration(
    lump_sum: float,
    current_age: int,
    retirement_age: int,
    annual_income: float,
    rates: RateAssumptions,
    age_policy: AgePolicy,
    min_income_replacement_ratio: float,
) -> IncomeProjection:
    """
    Retirement income a lump sum supports and for how long.

    Target income is the final working-year salary times the replacement
    ratio. If an even payout over the whole retirement horizon meets the
    target, that payout is reported for the full horizon. Otherwise the
    target income is reported along with how long the lump sum sustains it.
    """
    min_annual_income = future_value(
        annual_income, rates.income_growth_rate, retirement_age - current_age
    ) * max(0, min_income_replacement_ratio)

    years = age_policy.end_of_retirement_age - effective_retirement_age(retirement_age, age_policy)
    months = 0

    even_yearly_income = payout_from_lump_sum(
        lump_sum,
        rates.post_retirement_return_rate - rates.inflation_rate,
        years,
    )
    yearly_income = even_yearly_income

    if even_yearly_income < min_annual_income:
        duration = payout_duration(
            lump_sum,
            min_annual_income,
            rates.post_retirement_return_rate,
            rates.inflation_rate,
        )
        years, months = duration.years, duration.months
        yearly_income = min_annual_income
        logger.debug(
            "even payout %.2f below target %.2f; target lasts %sy %sm",
            even_yearly_income,
            min_annual_income,
            years,
            months,
        )

    return IncomeProjection(
        years=years,
        months=months,
        monthly_income=yearly_income / MONTHS_IN_YEAR,
        yearly_income=yearly_income,
    )
