"""Closed-form financial math used by the savings projections.

Every function here is pure and total: degenerate inputs produce sentinel
values (``0`` or ``PayoutDuration(0, 0)``) instead of raising.
"""

from __future__ import annotations

import logging
import math

from backend.domain.models import PayoutDuration

logger = logging.getLogger(__name__)

MONTHS_IN_YEAR = 12


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def precision_number(number: float, precision: int = 2) -> float:
    """Round for display. NaN or a negative precision yields 0."""
    if math.isnan(number) or precision < 0:
        return 0.0
    if math.isinf(number):
        return number
    factor = 10**precision
    # halves round toward +inf
    return math.floor(number * factor + 0.5) / factor


def future_value(principal: float, rate: float, years: float) -> float:
    """principal * (1 + rate) ** years.

    ``years`` may be fractional or negative (discounting). ``1 + rate <= 0``
    is not a financial scenario and the result is undefined.
    """
    return principal * (1 + rate) ** years


def geometric_series_sum(start_index: int, ratio: float, end_index: int) -> float:
    """Sum of ratio**k for k in [start_index, end_index].

    >>> geometric_series_sum(2, 2, 4)
    28.0
    >>> geometric_series_sum(0, 1, 4)
    5
    """
    if ratio == 1:
        return end_index - start_index + 1

    total_sum = (ratio ** (end_index + 1) - 1) / (ratio - 1)
    excluded_sum = (ratio**start_index - 1) / (ratio - 1) if start_index > 0 else 0.0
    return total_sum - excluded_sum


def payout_from_lump_sum(principal: float, net_rate: float, years: int) -> float:
    """Constant yearly withdrawal that exhausts ``principal`` in exactly ``years``.

    ``net_rate`` is the real rate (nominal return minus inflation). Only
    meaningful for ``years >= 1``; a zero series sum yields 0.
    """
    return safe_divide(
        future_value(principal, net_rate, years - 1),
        geometric_series_sum(0, 1 + net_rate, years - 1),
    )


def payout_duration(
    lump_sum: float,
    fixed_withdrawal: float,
    return_rate: float,
    inflation_rate: float,
) -> PayoutDuration:
    """How long ``lump_sum`` lasts when withdrawing ``fixed_withdrawal`` a year.

    Solves
        years = -ln(1 - S*g / (W*b)) / ln(b)
    with b = (1 + return_rate) / (1 + inflation_rate) and g = b - 1.

    Returns ``PayoutDuration(0, 0)`` when the formula has no finite answer:
    zero withdrawal, b <= 0, b == 1, or S*g >= W*b (the balance is never
    depleted). Callers must not read that sentinel as a zero duration.
    """
    base = safe_divide(1 + return_rate, 1 + inflation_rate)
    adjusted_growth = base - 1
    numerator = lump_sum * adjusted_growth
    denominator = fixed_withdrawal * base

    if denominator == 0 or base <= 0 or base == 1 or numerator >= denominator:
        logger.debug(
            "payout duration not computable (lump_sum=%s, withdrawal=%s, base=%s)",
            lump_sum,
            fixed_withdrawal,
            base,
        )
        return PayoutDuration(years=0, months=0)

    duration_years = -math.log(1 - numerator / denominator) / math.log(base)
    total_months = math.floor(duration_years * MONTHS_IN_YEAR + 0.5)
    return PayoutDuration(
        years=math.floor(duration_years),
        months=total_months % MONTHS_IN_YEAR,
    )
