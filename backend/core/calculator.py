"""Full retirement calculation: contributions, validation, savings and income."""

from __future__ import annotations

import logging
from typing import Optional

from backend.config import CalculatorSettings
from backend.core.calc_utils import precision_number, safe_divide
from backend.core.contributions import total_annual_contributions
from backend.core.savings import project_income_and_duration, project_retirement_savings
from backend.core.validation import InputValidator
from backend.domain.models import InputValidationError
from backend.schemas.retirement import (
    RetirementCalculatorInput,
    RetirementResults,
    SavingsDuration,
)

logger = logging.getLogger(__name__)


class RetirementCalculator:
    """Runs calculations against one fixed set of assumptions.

    Instances hold only immutable settings and may be shared between threads.
    """

    def __init__(self, settings: Optional[CalculatorSettings] = None):
        self.settings = settings or CalculatorSettings()
        self.validator = InputValidator(self.settings)
        self._rates = self.settings.rates()
        self._age_policy = self.settings.age_policy()

    def _project_savings(self, request: RetirementCalculatorInput, annual_contribution: float) -> float:
        return project_retirement_savings(
            current_age=request.current_age,
            current_balance=request.current_savings,
            requested_retirement_age=request.retirement_age,
            annual_contribution=annual_contribution,
            rates=self._rates,
            age_policy=self._age_policy,
        )

    def calculate(self, request: RetirementCalculatorInput) -> RetirementResults:
        """
        Project savings at retirement and the income they support.

        Raises InputValidationError with a {field: message} mapping when the
        request breaks any input rule. Values are rounded to cents here and
        nowhere earlier.
        """
        contributions = total_annual_contributions(request)

        errors = self.validator.validate(request, contributions)
        if errors:
            raise InputValidationError(errors)

        results = RetirementResults(
            total_savings_at_retirement=precision_number(
                self._project_savings(request, contributions.base_total)
            )
        )

        if contributions.annual_additional_contribution > 0:
            results.total_additional_savings_at_retirement = precision_number(
                self._project_savings(request, contributions.with_additional_total)
            )
            results.total_savings_difference_at_retirement = precision_number(
                abs(results.total_additional_savings_at_retirement - results.total_savings_at_retirement)
            )
            results.total_savings_difference_percentage_at_retirement = precision_number(
                safe_divide(
                    results.total_savings_at_retirement,
                    results.total_additional_savings_at_retirement,
                )
            )

        income = project_income_and_duration(
            lump_sum=max(
                results.total_additional_savings_at_retirement,
                results.total_savings_at_retirement,
            ),
            current_age=request.current_age,
            retirement_age=request.retirement_age,
            annual_income=request.annual_income,
            rates=self._rates,
            age_policy=self._age_policy,
            min_income_replacement_ratio=self.settings.min_annual_retirement_income_percent,
        )

        results.savings_duration = SavingsDuration(years=income.years, months=income.months)
        results.projected_monthly_income = precision_number(income.monthly_income)
        results.projected_yearly_income = precision_number(income.yearly_income)

        logger.debug(
            "calculated savings %.2f, yearly income %.2f for %sy %sm",
            results.total_savings_at_retirement,
            results.projected_yearly_income,
            income.years,
            income.months,
        )
        return results
