"""Retirement savings projection.

Savings are grown year by year at the *real* rate of return, i.e. the nominal
return with inflation backed out:

    r = (1 + nominal) / (1 + inflation) - 1

so balances are expressed in today's dollars.  Row 0 is the starting balance
and reports the starting savings as its contribution; each later row adds one
annual contribution after growth.

Example
-------

>>> params = RetirementParams(current_age=30, retirement_age=32,
...                           current_savings=1000, annual_contribution=100,
...                           expected_return=0.0, inflation_rate=0.0)
>>> [p.balance for p in project_retirement(params)]
[1000.0, 1100.0, 1200.0]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

import pandas as pd

from .errors import InvalidPercentage, InvalidRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetirementParams:
    current_age: int = 30
    retirement_age: int = 65
    current_savings: float = 50000.0
    annual_contribution: float = 6000.0
    expected_return: float = 7.0   # nominal, percent
    inflation_rate: float = 2.5    # percent


@dataclass(frozen=True)
class RetirementPoint:
    age: int
    year: int
    balance: float
    contribution: float


@dataclass(frozen=True)
class RetirementSummary:
    final_balance: float
    total_contributions: float
    growth: float
    years_to_retirement: int


def real_rate(expected_return: float, inflation_rate: float) -> float:
    """Convert a nominal percentage return into a real decimal rate."""
    return (1 + expected_return / 100) / (1 + inflation_rate / 100) - 1


def _validate(params: RetirementParams) -> None:
    if params.retirement_age <= params.current_age:
        raise InvalidRange(
            f"Retirement age ({params.retirement_age}) must be greater than "
            f"current age ({params.current_age})."
        )
    if params.expected_return < 0:
        raise InvalidPercentage("Expected return cannot be negative.")
    if params.inflation_rate < 0:
        raise InvalidPercentage("Inflation rate cannot be negative.")


def project_retirement(params: RetirementParams) -> List[RetirementPoint]:
    """Project the retirement balance from ``current_age`` to ``retirement_age``.

    Parameters
    ----------
    params : RetirementParams
        Ages, balances and percentage rates.  Negative dollar amounts are
        treated as zero.

    Returns
    -------
    list of RetirementPoint
        ``retirement_age - current_age + 1`` rows, one per age.

    Raises
    ------
    InvalidRange
        If ``retirement_age`` is not after ``current_age``.
    InvalidPercentage
        If the return or the inflation rate is negative.
    """
    _validate(params)
    years = params.retirement_age - params.current_age
    rate = real_rate(params.expected_return, params.inflation_rate)
    contribution = max(0.0, float(params.annual_contribution))
    balance = max(0.0, float(params.current_savings))

    points = [RetirementPoint(age=params.current_age, year=0, balance=balance, contribution=balance)]
    for year in range(1, years + 1):
        balance = balance * (1 + rate) + contribution
        points.append(
            RetirementPoint(
                age=params.current_age + year,
                year=year,
                balance=balance,
                contribution=contribution,
            )
        )

    logger.debug("retirement projection: %d rows at real rate %.5f", len(points), rate)
    return points


def summarize(points: Sequence[RetirementPoint]) -> RetirementSummary:
    """Final balance and how much of it came from contributions."""
    if not points:
        return RetirementSummary(0.0, 0.0, 0.0, 0)
    total = sum(p.contribution for p in points)
    final = points[-1].balance
    return RetirementSummary(
        final_balance=final,
        total_contributions=total,
        growth=final - total,
        years_to_retirement=points[-1].year,
    )


def to_frame(points: Sequence[RetirementPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [(p.age, p.year, p.balance, p.contribution) for p in points],
        columns=["age", "year", "balance", "contribution"],
    )


__all__ = [
    "RetirementParams",
    "RetirementPoint",
    "RetirementSummary",
    "real_rate",
    "project_retirement",
    "summarize",
    "to_frame",
]
