"""Savings growth with a selectable compounding frequency.

The account is simulated month by month.  Every month the contribution is
deposited first, then interest is credited if a compounding event falls in
that month:

* ``monthly`` credits ``rate / 12`` every month;
* ``annually``, ``semiannually`` and ``quarterly`` credit ``rate / n`` every
  ``12 / n`` months;
* ``daily`` credits thirty days of daily interest, ``(1 + rate / 365) ** 30``,
  every month.

Rows are kept for month 0, every twelfth month and the final month.
Contributions are tracked at face value, without interest.

Example
-------

>>> params = SavingsParams(initial_deposit=1000, monthly_contribution=100,
...                        interest_rate=0.0, years=1)
>>> [(p.month, p.balance) for p in project_savings(params)]
[(0, 1000.0), (12, 2200.0)]
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

import pandas as pd

from .errors import InvalidPercentage, InvalidRange

logger = logging.getLogger(__name__)

# Compounding events per year
COMPOUND_FREQUENCIES = {
    "annually": 1,
    "semiannually": 2,
    "quarterly": 4,
    "monthly": 12,
    "daily": 365,
}

DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class SavingsParams:
    initial_deposit: float = 1000.0
    monthly_contribution: float = 200.0
    interest_rate: float = 5.0  # percent
    years: float = 10   # fractional horizons run to the nearest month
    compound_frequency: str = "monthly"


@dataclass(frozen=True)
class SavingsPoint:
    month: int
    year: float
    balance: float
    total_contributions: float

    @property
    def interest(self) -> float:
        return self.balance - self.total_contributions


@dataclass(frozen=True)
class SavingsSummary:
    final_balance: float
    total_contributions: float
    interest_earned: float


def _monthly_factor(month: int, rate: float, frequency: str) -> float:
    """Growth factor applied at the end of ``month`` (1.0 when nothing compounds)."""
    if frequency == "monthly":
        return 1 + rate / 12
    if frequency == "daily":
        return (1 + rate / 365) ** DAYS_PER_MONTH
    n = COMPOUND_FREQUENCIES[frequency]
    if month % (12 // n) == 0:
        return 1 + rate / n
    return 1.0


def project_savings(params: SavingsParams) -> List[SavingsPoint]:
    """Simulate the account for ``years * 12`` months (rounded to a whole month)
    and sample it yearly, plus the final month when the horizon is fractional.

    Raises
    ------
    InvalidRange
        If ``years`` is below 1.
    InvalidPercentage
        If the interest rate is negative.
    ValueError
        For an unknown compounding frequency.
    """
    if params.years < 1:
        raise InvalidRange(f"Savings horizon must be at least 1 year, got {params.years}.")
    if params.interest_rate < 0:
        raise InvalidPercentage("Interest rate cannot be negative.")
    if params.compound_frequency not in COMPOUND_FREQUENCIES:
        raise ValueError(
            f"Unknown compounding frequency {params.compound_frequency!r}; "
            f"expected one of {', '.join(COMPOUND_FREQUENCIES)}."
        )

    rate = params.interest_rate / 100
    initial = max(0.0, float(params.initial_deposit))
    monthly = max(0.0, float(params.monthly_contribution))
    total_months = round(params.years * 12)

    balance = initial
    points: List[SavingsPoint] = []
    for month in range(total_months + 1):
        if month > 0:
            balance += monthly
            balance *= _monthly_factor(month, rate, params.compound_frequency)

        if month % 12 == 0 or month == total_months:
            points.append(
                SavingsPoint(
                    month=month,
                    year=math.floor(month / 12 * 10) / 10,
                    balance=balance,
                    total_contributions=initial + monthly * month,
                )
            )

    logger.debug(
        "savings projection: %d months, %s compounding, final %.2f",
        total_months, params.compound_frequency, balance,
    )
    return points


def summarize(points: Sequence[SavingsPoint]) -> SavingsSummary:
    if not points:
        return SavingsSummary(0.0, 0.0, 0.0)
    last = points[-1]
    return SavingsSummary(
        final_balance=last.balance,
        total_contributions=last.total_contributions,
        interest_earned=last.interest,
    )


def to_frame(points: Sequence[SavingsPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [(p.year, p.month, p.balance, p.total_contributions, p.interest) for p in points],
        columns=["year", "month", "balance", "total_contributions", "interest"],
    )


__all__ = [
    "COMPOUND_FREQUENCIES",
    "SavingsParams",
    "SavingsPoint",
    "SavingsSummary",
    "project_savings",
    "summarize",
    "to_frame",
]
