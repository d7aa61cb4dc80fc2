from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


class InputValidationError(ValueError):
    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(errors.values()))
        self.errors = errors


@dataclass(frozen=True)
class RateAssumptions:
    """Constant annual rates, as decimals (0.08 == 8%)."""

    savings_return_rate: float
    post_retirement_return_rate: float
    inflation_rate: float
    income_growth_rate: float


@dataclass(frozen=True)
class AgePolicy:
    """normal_retirement_age <= withdrawal_age <= end_of_retirement_age is up to the caller."""

    normal_retirement_age: int
    withdrawal_age: int
    end_of_retirement_age: int


@dataclass(frozen=True)
class PayoutDuration:
    years: int
    months: int

    @property
    def is_sentinel(self) -> bool:
        # (0, 0) means "not computable": either undefined or the funds never run out
        return self.years == 0 and self.months == 0


@dataclass(frozen=True)
class IncomeProjection:
    years: int
    months: int
    monthly_income: float
    yearly_income: float


@dataclass(frozen=True)
class AnnualContributions:
    annual_contribution: float
    annual_additional_contribution: float
    annual_employer_match: float
    annual_additional_employer_match: float

    @property
    def base_total(self) -> float:
        return self.annual_contribution + self.annual_employer_match

    @property
    def with_additional_total(self) -> float:
        return (
            self.annual_contribution
            + self.annual_additional_contribution
            + self.annual_employer_match
            + self.annual_additional_employer_match
        )
