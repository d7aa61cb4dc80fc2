from __future__ import annotations

from math import isclose

import pytest

from backend.core.calc_utils import future_value
from backend.core.calculator import RetirementCalculator
from backend.domain.models import InputValidationError
from backend.schemas.retirement import RetirementCalculatorInput


def scenario_input(**overrides) -> RetirementCalculatorInput:
    payload = {
        "annual_income": 100000,
        "contribution_percent": 0.05,
        "contribution_frequency": "annually",
        "current_age": 30,
        "current_savings": 20000,
        "employer_match_percent": 0.5,
        "employer_max_match_percent": 0.03,
        "retirement_age": 65,
    }
    payload.update(overrides)
    return RetirementCalculatorInput(**payload)


@pytest.fixture()
def calculator(settings) -> RetirementCalculator:
    return RetirementCalculator(settings)


def test_calculates_results_for_valid_input(calculator):
    results = calculator.calculate(scenario_input())

    assert results.total_savings_at_retirement > 0
    assert results.projected_monthly_income > 0
    assert results.total_additional_savings_at_retirement == 0
    assert results.total_savings_difference_at_retirement == 0


def test_target_income_not_sustainable_for_full_horizon(calculator):
    results = calculator.calculate(scenario_input())

    target = future_value(100000, 0.03, 35) * 0.8
    assert isclose(results.projected_yearly_income, target, abs_tol=0.01)
    assert isclose(results.projected_monthly_income, target / 12, abs_tol=0.01)
    assert results.savings_duration.years == 11
    assert 0 <= results.savings_duration.months < 12


def test_results_are_rounded_to_cents(calculator):
    results = calculator.calculate(scenario_input())

    for value in (
        results.total_savings_at_retirement,
        results.projected_yearly_income,
        results.projected_monthly_income,
    ):
        assert round(value, 2) == value


def test_additional_contributions_are_compared(calculator):
    results = calculator.calculate(scenario_input(additional_contribution_percent=0.01))

    assert results.total_additional_savings_at_retirement > results.total_savings_at_retirement
    assert isclose(
        results.total_savings_difference_at_retirement,
        results.total_additional_savings_at_retirement - results.total_savings_at_retirement,
        abs_tol=0.01,
    )
    assert 0 < results.total_savings_difference_percentage_at_retirement < 1


def test_additional_contributions_extend_duration(calculator):
    base = calculator.calculate(scenario_input())
    richer = calculator.calculate(scenario_input(additional_contribution_percent=0.05))

    base_months = base.savings_duration.years * 12 + base.savings_duration.months
    richer_months = richer.savings_duration.years * 12 + richer.savings_duration.months
    assert richer_months > base_months


def test_returns_errors_for_invalid_input(calculator):
    with pytest.raises(InputValidationError) as excinfo:
        calculator.calculate(scenario_input(annual_income=500))

    assert "annualIncome" in excinfo.value.errors
    assert "Annual income" in str(excinfo.value)


def test_generous_savings_last_full_horizon(calculator):
    results = calculator.calculate(scenario_input(current_savings=5_000_000))

    assert results.savings_duration.years == 30
    assert results.savings_duration.months == 0
    assert results.projected_yearly_income > future_value(100000, 0.03, 35) * 0.8
