"""Income and payroll tax estimate.

This module implements a simplified U.S. tax model:

* taxable income is gross income less retirement contributions and other
  deductions, floored at zero;
* federal tax uses progressive brackets for the filing status (``single``,
  ``married`` or ``head``);
* state tax is a flat rate on *taxable* income (zero for states without an
  income tax);
* Social Security is charged on wages up to the wage base, Medicare on all
  wages plus the additional rate above the threshold.

The defaults embed 2023 figures from ``data/tax_tables.json``.  Less common
provisions (credits, AMT, state deductions) are omitted.

Example
-------

>>> # Federal tax on $56 050 of taxable income for a single filer
>>> round(compute_federal_tax(56050), 2)
7638.5

>>> result = calculate_taxes(TaxParams(income=75000, state="texas"))
>>> result.state_tax
0.0

The tables can be replaced by passing a path to a JSON file matching the
schema of the shipped one.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

_DEFAULT_TAX_TABLE_PATH = Path(__file__).resolve().parent.parent / "data" / "tax_tables.json"

FILING_STATUSES = {
    "single": "Single",
    "married": "Married Filing Jointly",
    "head": "Head of Household",
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bracket:
    rate: float
    up_to: float  # inf for the top bracket


@dataclass(frozen=True)
class TaxTables:
    year: int
    federal: Mapping[str, Tuple[Bracket, ...]]
    state_rates: Mapping[str, float]
    state_labels: Mapping[str, str]
    ss_rate: float
    ss_wage_base: float
    medicare_rate: float
    medicare_additional_rate: float
    medicare_threshold: float


@dataclass(frozen=True)
class TaxParams:
    income: float = 75000.0
    filing_status: str = "single"
    retirement_contributions: float = 6000.0
    other_deductions: float = 12950.0  # 2023 single standard deduction
    state: str = "california"


@dataclass(frozen=True)
class BracketSlice:
    rate: float
    lower: float
    upper: float
    amount: float
    tax: float


@dataclass(frozen=True)
class TaxResult:
    income: float
    taxable_income: float
    federal_tax: float
    state_tax: float
    social_security_tax: float
    medicare_tax: float
    total_tax: float
    effective_rate: float  # percent of gross income
    take_home_pay: float
    marginal_rate: float
    slices: Tuple[BracketSlice, ...] = ()


def _parse_brackets(status: str, rows: Sequence[dict]) -> Tuple[Bracket, ...]:
    brackets = []
    for row in rows:
        up_to = row["up_to"]
        brackets.append(Bracket(rate=float(row["rate"]), up_to=float("inf") if up_to is None else float(up_to)))
    brackets.sort(key=lambda b: b.up_to)

    if not brackets:
        raise ValueError(f"No federal brackets for filing status {status!r}")
    previous = 0.0
    for b in brackets:
        if not 0.0 <= b.rate <= 1.0:
            raise ValueError(f"Bracket rate {b.rate} for {status!r} must be between 0 and 1")
        if b.up_to <= previous:
            raise ValueError(f"Bracket bounds for {status!r} must be strictly increasing and positive")
        previous = b.up_to
    if brackets[-1].up_to != float("inf"):
        raise ValueError(f"Top bracket for {status!r} must be unbounded (up_to: null)")
    return tuple(brackets)


def parse_tax_tables(raw: dict) -> TaxTables:
    """Build :class:`TaxTables` from the JSON structure, validating brackets.

    The lookup tables are read-only mappings, since loaded tables are cached
    and shared between callers.
    """
    federal = {
        status: _parse_brackets(status, info["brackets"])
        for status, info in raw["federal"].items()
    }
    states = raw.get("state", {})
    fica = raw["fica"]
    return TaxTables(
        year=int(raw.get("year", 0)),
        federal=MappingProxyType(federal),
        state_rates=MappingProxyType({k: float(v.get("rate", 0.0)) for k, v in states.items()}),
        state_labels=MappingProxyType({k: v.get("label", k.title()) for k, v in states.items()}),
        ss_rate=float(fica["social_security"]["rate"]),
        ss_wage_base=float(fica["social_security"]["wage_base"]),
        medicare_rate=float(fica["medicare"]["rate"]),
        medicare_additional_rate=float(fica["medicare"].get("additional_rate", 0.0)),
        medicare_threshold=float(fica["medicare"].get("threshold", float("inf"))),
    )


@lru_cache(maxsize=None)
def load_tax_tables(path: Optional[Path] = None) -> TaxTables:
    """Load and validate tax tables from JSON.

    If ``path`` is not provided, the file shipped with the package is used.
    Results are cached per path, so the tables are read once per process.
    """
    p = Path(path) if path else _DEFAULT_TAX_TABLE_PATH
    with open(p, "r", encoding="utf-8") as f:
        raw = json.load(f)
    tables = parse_tax_tables(raw)
    logger.debug("loaded %s tax tables from %s", tables.year, p)
    return tables


def brackets_for(filing_status: str, tables: Optional[TaxTables] = None) -> Tuple[Bracket, ...]:
    """Bracket schedule for ``filing_status``; unknown statuses use ``single``."""
    tables = tables or load_tax_tables()
    if filing_status not in tables.federal:
        logger.warning("unknown filing status %r, using single brackets", filing_status)
        filing_status = "single"
    return tables.federal[filing_status]


def bracket_slices(taxable_income: float, brackets: Sequence[Bracket]) -> List[BracketSlice]:
    """Split ``taxable_income`` across ``brackets``.

    Brackets are walked in ascending order of their upper bound; each takes
    the part of the remaining income that fits between the previous bound and
    its own.  Only brackets that receive income are returned.
    """
    slices = []
    remaining = max(0.0, taxable_income)
    previous = 0.0
    for b in sorted(brackets, key=lambda b: b.up_to):
        if remaining <= 0:
            break
        amount = min(remaining, b.up_to - previous)
        if amount <= 0:
            break
        slices.append(BracketSlice(b.rate, previous, b.up_to, amount, amount * b.rate))
        remaining -= amount
        previous = b.up_to
    return slices


def compute_federal_tax(
    taxable_income: float,
    filing_status: str = "single",
    tables: Optional[TaxTables] = None,
) -> float:
    """Compute federal income tax due on ``taxable_income``."""
    return sum((s.tax for s in bracket_slices(taxable_income, brackets_for(filing_status, tables))), 0.0)


def marginal_rate(
    taxable_income: float,
    filing_status: str = "single",
    tables: Optional[TaxTables] = None,
) -> float:
    """Rate applied to the last dollar of ``taxable_income`` (lowest rate at zero)."""
    brackets = brackets_for(filing_status, tables)
    slices = bracket_slices(taxable_income, brackets)
    return slices[-1].rate if slices else brackets[0].rate


def compute_state_tax(
    taxable_income: float,
    state: str = "california",
    tables: Optional[TaxTables] = None,
) -> float:
    """Flat state tax on ``taxable_income``.  Unknown states are untaxed."""
    tables = tables or load_tax_tables()
    rate = tables.state_rates.get(state)
    if rate is None:
        logger.warning("no state rate for %r, assuming no state income tax", state)
        rate = 0.0
    return max(0.0, taxable_income) * rate


def compute_payroll_taxes(income: float, tables: Optional[TaxTables] = None) -> Tuple[float, float]:
    """Return ``(social_security, medicare)`` on gross wages."""
    tables = tables or load_tax_tables()
    income = max(0.0, income)
    social_security = min(income, tables.ss_wage_base) * tables.ss_rate
    medicare = income * tables.medicare_rate
    if income > tables.medicare_threshold:
        medicare += (income - tables.medicare_threshold) * tables.medicare_additional_rate
    return social_security, medicare


def calculate_taxes(params: TaxParams, tables: Optional[TaxTables] = None) -> TaxResult:
    """Compute the full tax picture for ``params``.

    Parameters
    ----------
    params : TaxParams
        Gross income, filing status, deductions and state.  Negative amounts
        are treated as zero.
    tables : TaxTables, optional
        Alternative tables; defaults to the shipped 2023 tables.

    Returns
    -------
    TaxResult
        Federal, state and payroll taxes, the effective rate in percent of
        gross income (0 when income is 0) and take-home pay.
    """
    tables = tables or load_tax_tables()
    income = max(0.0, float(params.income))
    deductions = max(0.0, float(params.retirement_contributions)) + max(0.0, float(params.other_deductions))
    taxable_income = max(0.0, income - deductions)

    brackets = brackets_for(params.filing_status, tables)
    slices = tuple(bracket_slices(taxable_income, brackets))
    federal_tax = sum((s.tax for s in slices), 0.0)
    state_tax = compute_state_tax(taxable_income, params.state, tables)
    social_security, medicare = compute_payroll_taxes(income, tables)

    total_tax = federal_tax + state_tax + social_security + medicare
    effective_rate = total_tax / income * 100 if income > 0 else 0.0

    return TaxResult(
        income=income,
        taxable_income=taxable_income,
        federal_tax=federal_tax,
        state_tax=state_tax,
        social_security_tax=social_security,
        medicare_tax=medicare,
        total_tax=total_tax,
        effective_rate=effective_rate,
        take_home_pay=income - total_tax,
        marginal_rate=slices[-1].rate if slices else brackets[0].rate,
        slices=slices,
    )


def tax_breakdown(result: TaxResult) -> List[Tuple[str, float]]:
    """Where each dollar of gross income goes, in display order."""
    return [
        ("Federal Tax", result.federal_tax),
        ("State Tax", result.state_tax),
        ("Social Security", result.social_security_tax),
        ("Medicare", result.medicare_tax),
        ("Take-home Pay", result.take_home_pay),
    ]


__all__ = [
    "FILING_STATUSES",
    "Bracket",
    "BracketSlice",
    "TaxTables",
    "TaxParams",
    "TaxResult",
    "parse_tax_tables",
    "load_tax_tables",
    "brackets_for",
    "bracket_slices",
    "compute_federal_tax",
    "marginal_rate",
    "compute_state_tax",
    "compute_payroll_taxes",
    "calculate_taxes",
    "tax_breakdown",
]
