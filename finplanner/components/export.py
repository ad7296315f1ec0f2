"""CSV export for calculator results.

Every calculator tab downloads its table through :func:`series_to_csv`: a
header row plus one line per result row, where each column is produced by a
field accessor (an attribute name or a callable).  Currency columns are
formatted the way the tables display them, e.g. ``$1,234``.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Sequence, Union

import pandas as pd

Field = Union[str, Callable[[Any], Any]]


def round_dollars(value: float) -> int:
    """Nearest whole dollar, with halves rounded up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def format_currency(value: float) -> str:
    """Whole-dollar currency with thousands separators."""
    amount = round_dollars(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def format_percent(value: float, digits: int = 2) -> str:
    return f"{value:.{digits}f}%"


def _accessor(field: Field) -> Callable[[Any], Any]:
    if callable(field):
        return field
    return lambda row: getattr(row, field)


def series_to_csv(rows: Iterable[Any], header: Sequence[str], fields: Sequence[Field]) -> str:
    """Render ``rows`` as comma-separated text.

    Parameters
    ----------
    rows : iterable
        Result rows (dataclasses, tuples, anything the accessors understand).
    header : sequence of str
        Column titles, written as the first line.
    fields : sequence of str or callable
        One accessor per column.  Strings are attribute names.

    Returns
    -------
    str
        CSV text with ``\\n`` line endings.  Cells containing commas are quoted.
    """
    if len(header) != len(fields):
        raise ValueError(f"header has {len(header)} columns but {len(fields)} fields were given")
    getters = [_accessor(f) for f in fields]
    data = [[get(row) for get in getters] for row in rows]
    df = pd.DataFrame(data, columns=list(header))
    return df.to_csv(index=False, lineterminator="\n")


# ---------- Per-calculator layouts ----------
def retirement_csv(points) -> str:
    return series_to_csv(
        points,
        ["Age", "Year", "Balance", "Contribution"],
        ["age", "year", lambda p: round_dollars(p.balance), lambda p: round_dollars(p.contribution)],
    )


def savings_csv(points) -> str:
    return series_to_csv(
        points,
        ["Year", "Month", "Balance", "Total Contributions"],
        ["year", "month", lambda p: round_dollars(p.balance), lambda p: round_dollars(p.total_contributions)],
    )


def tax_csv(result) -> str:
    rows = [
        ("Gross Income", format_currency(result.income)),
        ("Taxable Income", format_currency(result.taxable_income)),
        ("Federal Tax", format_currency(result.federal_tax)),
        ("State Tax", format_currency(result.state_tax)),
        ("Social Security Tax", format_currency(result.social_security_tax)),
        ("Medicare Tax", format_currency(result.medicare_tax)),
        ("Total Tax", format_currency(result.total_tax)),
        ("Take-home Pay", format_currency(result.take_home_pay)),
        ("Effective Tax Rate", format_percent(result.effective_rate)),
    ]
    return series_to_csv(rows, ["Category", "Amount"], [lambda r: r[0], lambda r: r[1]])


def allocation_csv(projection) -> str:
    return series_to_csv(
        projection.allocations,
        ["Asset Class", "Percentage", "Amount", "Expected Return"],
        [
            "name",
            lambda a: format_percent(a.percentage, 0),
            lambda a: format_currency(a.amount),
            lambda a: format_percent(a.expected_return, 1),
        ],
    )


def returns_csv(projection) -> str:
    return series_to_csv(
        projection.series,
        ["Year", "Portfolio Value", "Growth"],
        ["year", lambda p: format_currency(p.value), lambda p: format_currency(p.growth)],
    )


__all__ = [
    "round_dollars",
    "format_currency",
    "format_percent",
    "series_to_csv",
    "retirement_csv",
    "savings_csv",
    "tax_csv",
    "allocation_csv",
    "returns_csv",
]
