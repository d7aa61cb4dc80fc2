from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import CalculatorSettings
from backend.domain.models import AgePolicy, RateAssumptions


@pytest.fixture()
def settings() -> CalculatorSettings:
    # explicit values so RETIREMENT_* variables in the environment don't leak in
    return CalculatorSettings(
        _env_file=None,
        annual_inflation_percent=0.03,
        annual_income_increase_percent=0.03,
        annual_post_retirement_return_percent=0.05,
        annual_retirement_savings_return_percent=0.08,
        end_of_retirement_age=95,
        min_annual_retirement_income_percent=0.8,
        minimum_age=16,
        normal_retirement_age=65,
        withdrawal_age=75,
    )


@pytest.fixture()
def rates() -> RateAssumptions:
    return RateAssumptions(
        savings_return_rate=0.08,
        post_retirement_return_rate=0.05,
        inflation_rate=0.03,
        income_growth_rate=0.03,
    )


@pytest.fixture()
def age_policy() -> AgePolicy:
    return AgePolicy(normal_retirement_age=65, withdrawal_age=75, end_of_retirement_age=95)


@pytest.fixture()
def app(settings: CalculatorSettings) -> Flask:
    return create_app(settings)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
