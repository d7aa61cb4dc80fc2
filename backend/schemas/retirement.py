"""Data contracts for the retirement calculator."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ContributionFrequency = Literal["annually", "biweekly", "monthly", "twiceMonthly", "weekly"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RetirementCalculatorInput(_CamelModel):
    """Inputs for a single retirement calculation.

    Ranges are checked by the calculator's validator so that every rule
    violation can be reported with a readable message.
    """

    annual_income: float
    current_age: int
    retirement_age: int
    current_savings: float = 0.0
    contribution_frequency: ContributionFrequency = "biweekly"
    contribution_percent: float = Field(0.0, description="Share of income, e.g. 0.05 for 5%.")
    contribution_dollar: float = 0.0
    additional_contribution_percent: float = 0.0
    additional_contribution_dollar: float = 0.0
    employer_match_percent: float = Field(0.0, description="Employer match per dollar contributed.")
    employer_max_match_percent: float = Field(
        0.0, description="Largest share of contributions the employer matches."
    )


class SavingsDuration(_CamelModel):
    years: int = 0
    months: int = 0


class RetirementResults(_CamelModel):
    """Calculated metrics, rounded to cents."""

    projected_monthly_income: float = 0.0
    projected_yearly_income: float = 0.0
    savings_duration: SavingsDuration = Field(default_factory=SavingsDuration)
    total_savings_at_retirement: float = Field(
        0.0, description="Savings including employer match, excluding additional contributions."
    )
    total_additional_savings_at_retirement: float = Field(
        0.0, description="Savings including employer match and additional contributions."
    )
    total_savings_difference_at_retirement: float = 0.0
    total_savings_difference_percentage_at_retirement: float = 0.0


class RetirementCalculatorResponse(_CamelModel):
    results: RetirementResults
