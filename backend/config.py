"""Calculator assumptions, overridable through RETIREMENT_* environment variables."""

from __future__ import annotations

from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.domain.models import AgePolicy, RateAssumptions


class IrsLimits(BaseModel):
    """
    Annual contribution limits. Set the 401(k) limits or the IRA limits, not both.
    """

    annual_401k_limit: Optional[float] = 23500
    catch_up_401k_over_50: Optional[float] = 7500
    catch_up_401k_60_63: Optional[float] = 11250
    annual_ira_limit: Optional[float] = None
    catch_up_ira_over_50: Optional[float] = None


class CalculatorSettings(BaseSettings):
    """
    Assumptions shared by every calculation.

    Nested values use a double underscore, e.g.
    RETIREMENT_IRS_LIMITS__ANNUAL_401K_LIMIT=24000.
    """

    model_config = SettingsConfigDict(
        env_prefix="RETIREMENT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    annual_inflation_percent: float = Field(default=0.03, description="Expected inflation rate.")
    annual_income_increase_percent: float = Field(default=0.0, description="Expected yearly raise.")
    annual_post_retirement_return_percent: float = Field(
        default=0.05, description="Return on savings after retirement."
    )
    annual_retirement_savings_return_percent: float = Field(
        default=0.08, description="Return on savings while working."
    )
    min_annual_retirement_income_percent: float = Field(
        default=0.8, description="Target retirement income as a share of final salary."
    )

    minimum_age: int = 16
    normal_retirement_age: int = 65
    withdrawal_age: int = Field(default=75, description="Age when minimum withdrawals are required.")
    end_of_retirement_age: int = 95

    annual_income_limits: Tuple[float, float] = (1000, 10_000_000)
    irs_limits: IrsLimits = Field(default_factory=IrsLimits)
    error_msgs: Dict[str, str] = Field(default_factory=dict)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    cors_origins: Tuple[str, ...] = ("http://localhost:5173", "http://127.0.0.1:5173")

    def rates(self) -> RateAssumptions:
        return RateAssumptions(
            savings_return_rate=self.annual_retirement_savings_return_percent,
            post_retirement_return_rate=self.annual_post_retirement_return_percent,
            inflation_rate=self.annual_inflation_percent,
            income_growth_rate=self.annual_income_increase_percent,
        )

    def age_policy(self) -> AgePolicy:
        return AgePolicy(
            normal_retirement_age=self.normal_retirement_age,
            withdrawal_age=self.withdrawal_age,
            end_of_retirement_age=self.end_of_retirement_age,
        )
