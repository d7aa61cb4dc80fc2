from __future__ import annotations

from dataclasses import replace
from math import isclose

import pytest

from backend.core.calc_utils import future_value, payout_from_lump_sum
from backend.core.savings import (
    effective_retirement_age,
    project_balance,
    project_income_and_duration,
    project_retirement_savings,
)

ZERO_RATES_KW = dict(
    savings_return_rate=0.0,
    post_retirement_return_rate=0.0,
    inflation_rate=0.0,
    income_growth_rate=0.0,
)


def test_zero_contribution_is_pure_compounding(rates):
    assert project_balance(100000, 0, 10, rates) == future_value(100000, 0.08, 10)


def test_zero_rates_accumulate_contributions_only(rates):
    flat = replace(rates, **ZERO_RATES_KW)
    assert project_balance(1000.0, 500.0, 4, flat) == 3000.0


def test_contributions_grow_with_income_and_returns(rates):
    years = 3
    balance = project_balance(0.0, 1000.0, years, rates)

    ratio = (1 + rates.savings_return_rate) * (1 + rates.income_growth_rate)
    expected = sum(1000.0 * ratio**k for k in range(1, years + 1))
    assert isclose(balance, expected, rel_tol=1e-12)


def test_higher_contribution_means_more_savings(rates):
    assert project_balance(20000, 6000, 30, rates) > project_balance(20000, 5000, 30, rates)


@pytest.mark.parametrize(
    "requested, expected",
    [(50, 65), (65, 65), (70, 70), (75, 75), (80, 75)],
)
def test_effective_retirement_age_clamps_into_policy_band(age_policy, requested, expected):
    assert effective_retirement_age(requested, age_policy) == expected


def test_no_working_years_keeps_current_balance(rates, age_policy):
    assert project_retirement_savings(65, 20000.0, 65, 5000.0, rates, age_policy) == 20000.0


def test_no_working_years_before_normal_age_only_grows(rates, age_policy):
    # retiring at 60 still leaves five growth-only years until 65
    result = project_retirement_savings(60, 20000.0, 60, 5000.0, rates, age_policy)
    assert isclose(result, future_value(20000.0, 0.08, 5))


def test_early_retirement_adds_growth_only_years(rates, age_policy):
    working = project_balance(20000.0, 5000.0, 20, rates)

    result = project_retirement_savings(30, 20000.0, 50, 5000.0, rates, age_policy)

    assert isclose(result, future_value(working, 0.08, 15))
    assert result > working


def test_late_retirement_skips_growth_only_phase(rates, age_policy):
    working = project_balance(20000.0, 5000.0, 50, rates)
    assert project_retirement_savings(30, 20000.0, 80, 5000.0, rates, age_policy) == working


def test_income_lasts_full_horizon_when_lump_sum_is_large(rates, age_policy):
    result = project_income_and_duration(10_000_000.0, 30, 65, 50000.0, rates, age_policy, 0.8)

    expected_income = payout_from_lump_sum(10_000_000.0, 0.02, 30)
    assert result.years == 30
    assert result.months == 0
    assert isclose(result.yearly_income, expected_income)
    assert isclose(result.monthly_income, expected_income / 12)


def test_income_falls_back_to_target_when_lump_sum_is_small(rates, age_policy):
    result = project_income_and_duration(500000.0, 30, 65, 50000.0, rates, age_policy, 0.8)

    target = future_value(50000.0, 0.03, 35) * 0.8
    assert isclose(result.yearly_income, target)
    assert result.years == 4
    assert 0 <= result.months < 12


def test_horizon_starts_at_effective_retirement_age(rates, age_policy):
    # retiring at 50 still means drawing down from 65 to 95
    result = project_income_and_duration(10_000_000.0, 30, 50, 50000.0, rates, age_policy, 0.8)
    assert result.years == 30


def test_negative_replacement_ratio_means_no_target(rates, age_policy):
    result = project_income_and_duration(100000.0, 30, 65, 50000.0, rates, age_policy, -0.5)

    assert result.years == 30
    assert isclose(result.yearly_income, payout_from_lump_sum(100000.0, 0.02, 30))


def test_return_equal_to_inflation_reports_sentinel_duration(rates, age_policy):
    flat_real = replace(rates, post_retirement_return_rate=0.03)

    result = project_income_and_duration(300000.0, 30, 65, 50000.0, flat_real, age_policy, 0.8)

    assert (result.years, result.months) == (0, 0)
    assert isclose(result.yearly_income, future_value(50000.0, 0.03, 35) * 0.8)
