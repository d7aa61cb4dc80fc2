"""Rule checks for calculator inputs, reported as readable messages per field."""

from __future__ import annotations

import math
import re
from typing import Dict, Mapping, Optional

from backend.config import CalculatorSettings
from backend.core.calc_utils import precision_number
from backend.domain.models import AnnualContributions
from backend.schemas.retirement import RetirementCalculatorInput

DEFAULT_ERROR_MESSAGES: Dict[str, str] = {
    "additionalContributionDollar": "Additional contribution dollars must be greater than or equal to zero.",
    "additionalContributionPercent": "Additional contribution percentage must be between 0 and 100%.",
    "annualIncome": "Annual income must be between [annualIncomeMin] and [annualIncomeMax].",
    "annualContributionLimit": "Annual contribution exceeds IRS limit of [annualContributionLimitAmt].",
    "contributionsOverAnnualIncome": "Total contributions exceed annual income.",
    "contributionDollar": "Contribution dollars must be greater than or equal to zero.",
    "contributionPercent": "Contribution percentage must be between 0 and 100%.",
    "currentAge": "Age must be between [minimumAge] and [retirementAge].",
    "currentSavings": "Current savings cannot be negative.",
    "employerMatchPercent": "Employer matching percentage must be between 0 and 100%.",
    "employerMaxMatchPercent": "Employer maximum matching percentage must be between 0 and 100%.",
    "endOfRetirementAge": "End of retirement age must be greater than retirement age.",
    "retirementAge": "Retirement age must be greater than current age.",
}

_PLACEHOLDER = re.compile(r"\[(\w+)\]")
_SI_SYMBOLS = ("", "k", "M", "G", "T", "P", "E")


def number_friendly_format(num: float, to_upper_case: bool = False, threshold: float = 1000) -> str:
    """Shorten a number with an SI suffix, e.g. 10_000_000 -> "10.0M"."""
    if num < threshold:
        return f"{num:.0f}"
    exponent = min(int(math.floor(math.log(num) / math.log(threshold))), len(_SI_SYMBOLS) - 1)
    symbol = _SI_SYMBOLS[exponent].upper() if to_upper_case else _SI_SYMBOLS[exponent]
    digits = 0 if num <= threshold else 1
    return f"{num / threshold**exponent:.{digits}f}{symbol}"


def _format_value(key: str, value: float) -> str:
    if "percent" in key.lower():
        return f"{value * 100:g}%"
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,}"


def fill_placeholders(template: str, values: Optional[Mapping[str, object]] = None) -> str:
    """Replace [key] placeholders; unknown keys and non-scalar values are left as is."""
    values = values or {}

    def _replace(match: "re.Match[str]") -> str:
        key = match.group(1)
        value = values.get(key)
        if isinstance(value, bool) or value is None:
            return match.group(0)
        if isinstance(value, (int, float)):
            return _format_value(key, value)
        if isinstance(value, str):
            return value
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


class InputValidator:
    def __init__(self, settings: CalculatorSettings):
        self.settings = settings

    def annual_contribution_limit(self, age: int) -> float:
        """IRS limit for this age; IRA limits take precedence over 401(k) ones."""
        limits = self.settings.irs_limits
        if limits.annual_ira_limit and limits.catch_up_ira_over_50:
            limit = limits.annual_ira_limit
            if age >= 50:
                limit += limits.catch_up_ira_over_50
            return limit
        if limits.annual_401k_limit and limits.catch_up_401k_over_50 and limits.catch_up_401k_60_63:
            limit = limits.annual_401k_limit
            if age >= 50:
                limit += limits.catch_up_401k_over_50
            if 60 <= age <= 63:
                limit += limits.catch_up_401k_60_63
            return limit
        return math.inf

    def error_messages(self, request: RetirementCalculatorInput) -> Dict[str, str]:
        income_min, income_max = self.settings.annual_income_limits
        values: Dict[str, object] = {
            **request.model_dump(by_alias=True),
            "minimumAge": self.settings.minimum_age,
            "annualIncomeMin": number_friendly_format(income_min, True),
            "annualIncomeMax": number_friendly_format(income_max, True),
            "annualContributionLimitAmt": f"${self.annual_contribution_limit(request.current_age):,.0f}",
        }
        templates = {**DEFAULT_ERROR_MESSAGES, **self.settings.error_msgs}
        return {key: fill_placeholders(template, values) for key, template in templates.items()}

    def validate(
        self, request: RetirementCalculatorInput, contributions: AnnualContributions
    ) -> Dict[str, str]:
        """Return {field: message} for every rule the request breaks."""
        settings = self.settings
        messages = self.error_messages(request)
        income_min, income_max = settings.annual_income_limits

        contribution = precision_number(contributions.annual_contribution)
        additional = precision_number(contributions.annual_additional_contribution)
        employer_match = precision_number(contributions.annual_employer_match)
        additional_match = precision_number(contributions.annual_additional_employer_match)

        failed = []
        if contribution + additional + employer_match + additional_match > self.annual_contribution_limit(
            request.current_age
        ):
            failed.append("annualContributionLimit")
        if contribution + additional > request.annual_income:
            failed.append("contributionsOverAnnualIncome")
        if request.additional_contribution_dollar < 0:
            failed.append("additionalContributionDollar")
        if not 0 <= request.additional_contribution_percent <= 1:
            failed.append("additionalContributionPercent")
        if not income_min <= request.annual_income <= income_max:
            failed.append("annualIncome")
        if request.contribution_dollar < 0:
            failed.append("contributionDollar")
        if not 0 <= request.contribution_percent <= 1:
            failed.append("contributionPercent")
        if not settings.minimum_age <= request.current_age <= request.retirement_age:
            failed.append("currentAge")
        if request.current_savings < 0:
            failed.append("currentSavings")
        if not 0 <= request.employer_match_percent <= 1:
            failed.append("employerMatchPercent")
        if not 0 <= request.employer_max_match_percent <= 1:
            failed.append("employerMaxMatchPercent")
        if settings.end_of_retirement_age <= request.retirement_age:
            failed.append("endOfRetirementAge")
        if request.retirement_age <= request.current_age:
            failed.append("retirementAge")

        return {key: messages[key] for key in failed}
