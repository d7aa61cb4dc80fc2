"""Yearly contribution amounts from percent or dollar inputs."""

from __future__ import annotations

from typing import Dict

from backend.core.calc_utils import safe_divide
from backend.domain.models import AnnualContributions
from backend.schemas.retirement import RetirementCalculatorInput

PAY_PERIODS: Dict[str, int] = {
    "annually": 1,
    "biweekly": 26,
    "monthly": 12,
    "twiceMonthly": 24,
    "weekly": 52,
}


def annual_contribution(
    contribution_dollar: float,
    contribution_percent: float,
    annual_income: float,
    contribution_frequency: str = "annually",
) -> float:
    """
    Yearly total for whichever of the percent or dollar contribution is larger
    per pay period.
    """
    pay_periods = PAY_PERIODS[contribution_frequency]
    from_percent = (
        annual_income * contribution_percent / pay_periods if contribution_percent > 0 else 0.0
    )
    from_dollar = contribution_dollar / pay_periods if contribution_dollar > 0 else 0.0
    return max(from_percent, from_dollar) * pay_periods


def total_annual_contributions(request: RetirementCalculatorInput) -> AnnualContributions:
    """
    Employee contributions plus the employer match.

    The match is min(income * match_percent, contributions * max_match_percent)
    and is attributed to the regular and additional contributions pro rata.
    """
    base = annual_contribution(
        request.contribution_dollar,
        request.contribution_percent,
        request.annual_income,
        request.contribution_frequency,
    )
    additional = annual_contribution(
        request.additional_contribution_dollar,
        request.additional_contribution_percent,
        request.annual_income,
        request.contribution_frequency,
    )

    employer_match = min(
        request.annual_income * request.employer_match_percent,
        (base + additional) * request.employer_max_match_percent,
    )
    additional_match = employer_match * safe_divide(additional, base + additional)

    return AnnualContributions(
        annual_contribution=base,
        annual_additional_contribution=additional,
        annual_employer_match=employer_match - additional_match,
        annual_additional_employer_match=additional_match,
    )
