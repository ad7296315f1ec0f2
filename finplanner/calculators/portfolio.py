"""Risk-profile portfolio projection.

A risk profile is a fixed mix of asset classes, each with an allocation
percentage and an expected annual return.  The blended expected return is
the allocation-weighted average of the asset returns, and a lump sum is
compounded at that rate:

    value(y) = amount * (1 + blended / 100) ** y,   y = 0 .. horizon

Profiles are read from ``data/risk_profiles.json``.

Example
-------

>>> round(blended_return(get_profile("moderate")), 3)
5.525
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import InvalidPercentage, InvalidRange

_DEFAULT_PROFILE_PATH = Path(__file__).resolve().parent.parent / "data" / "risk_profiles.json"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetClass:
    name: str
    percentage: float
    expected_return: float
    color: str = "#6B7280"


@dataclass(frozen=True)
class PortfolioParams:
    investment_amount: float = 100000.0
    risk_profile: str = "moderate"
    horizon_years: int = 15


@dataclass(frozen=True)
class Allocation:
    name: str
    percentage: float
    expected_return: float
    amount: float
    color: str


@dataclass(frozen=True)
class PortfolioPoint:
    year: int
    value: float
    growth: float


@dataclass(frozen=True)
class PortfolioProjection:
    allocations: Tuple[Allocation, ...]
    blended_return: float
    series: Tuple[PortfolioPoint, ...]

    @property
    def final_value(self) -> float:
        return self.series[-1].value if self.series else 0.0


def validate_profile(name: str, assets: Sequence[AssetClass]) -> None:
    """Raise :class:`InvalidPercentage` unless allocations are non-negative and total 100."""
    if any(a.percentage < 0 for a in assets):
        raise InvalidPercentage(f"Risk profile {name!r} has a negative allocation.")
    total = sum(a.percentage for a in assets)
    if not math.isclose(total, 100.0, abs_tol=1e-9):
        raise InvalidPercentage(f"Allocations for risk profile {name!r} sum to {total}, not 100.")


@lru_cache(maxsize=None)
def load_risk_profiles(path: Optional[Path] = None) -> Mapping[str, Tuple[AssetClass, ...]]:
    """Load and validate the risk profiles, once per path.

    The result is cached and shared, so it is returned read-only.
    """
    p = Path(path) if path else _DEFAULT_PROFILE_PATH
    with open(p, "r", encoding="utf-8") as f:
        raw = json.load(f)

    profiles = {}
    for name, rows in raw.items():
        assets = tuple(
            AssetClass(
                name=row["name"],
                percentage=float(row["percentage"]),
                expected_return=float(row["expected_return"]),
                color=row.get("color", "#6B7280"),
            )
            for row in rows
        )
        validate_profile(name, assets)
        profiles[name] = assets
    logger.debug("loaded %d risk profiles from %s", len(profiles), p)
    return MappingProxyType(profiles)


def get_profile(name: str, profiles: Optional[Mapping[str, Tuple[AssetClass, ...]]] = None) -> Tuple[AssetClass, ...]:
    profiles = profiles if profiles is not None else load_risk_profiles()
    try:
        return profiles[name]
    except KeyError:
        raise ValueError(f"Unknown risk profile {name!r}; expected one of {', '.join(profiles)}.") from None


def blended_return(assets: Sequence[AssetClass]) -> float:
    """Allocation-weighted expected return, in percent."""
    return sum((a.expected_return * a.percentage / 100 for a in assets), 0.0)


def allocate(amount: float, assets: Sequence[AssetClass]) -> List[Allocation]:
    """Dollar amount held in each asset class."""
    amount = max(0.0, float(amount))
    return [
        Allocation(a.name, a.percentage, a.expected_return, a.percentage / 100 * amount, a.color)
        for a in assets
    ]


def growth_series(amount: float, rate_pct: float, horizon_years: int) -> List[PortfolioPoint]:
    amount = max(0.0, float(amount))
    years = np.arange(horizon_years + 1)
    values = amount * np.power(1 + rate_pct / 100, years)
    return [
        PortfolioPoint(year=int(y), value=float(v), growth=float(v) - amount)
        for y, v in zip(years, values)
    ]


def project_portfolio(
    params: PortfolioParams,
    profiles: Optional[Mapping[str, Tuple[AssetClass, ...]]] = None,
) -> PortfolioProjection:
    """Allocation breakdown and value path for ``params``.

    Raises
    ------
    InvalidRange
        If the horizon is negative.
    InvalidPercentage
        If the chosen profile has a negative allocation or its allocations
        do not sum to 100.
    ValueError
        If the risk profile is unknown.
    """
    if params.horizon_years < 0:
        raise InvalidRange(f"Investment horizon cannot be negative, got {params.horizon_years}.")
    assets = get_profile(params.risk_profile, profiles)
    validate_profile(params.risk_profile, assets)

    rate = blended_return(assets)
    return PortfolioProjection(
        allocations=tuple(allocate(params.investment_amount, assets)),
        blended_return=rate,
        series=tuple(growth_series(params.investment_amount, rate, int(params.horizon_years))),
    )


def allocation_frame(projection: PortfolioProjection) -> pd.DataFrame:
    return pd.DataFrame(
        [(a.name, a.percentage, a.amount, a.expected_return) for a in projection.allocations],
        columns=["asset_class", "percentage", "amount", "expected_return"],
    )


def to_frame(projection: PortfolioProjection) -> pd.DataFrame:
    return pd.DataFrame(
        [(p.year, p.value, p.growth) for p in projection.series],
        columns=["year", "value", "growth"],
    )


__all__ = [
    "AssetClass",
    "Allocation",
    "PortfolioParams",
    "PortfolioPoint",
    "PortfolioProjection",
    "validate_profile",
    "load_risk_profiles",
    "get_profile",
    "blended_return",
    "allocate",
    "growth_series",
    "project_portfolio",
    "allocation_frame",
    "to_frame",
]
