"""Unit tests for the taxes module.

Values use the 2023 federal brackets, flat state rates and FICA limits
shipped in ``finplanner/data/tax_tables.json``.
"""

import json
import math

import pytest

from finplanner.calculators import taxes as tax_calc
from finplanner.calculators.taxes import Bracket, TaxParams


def test_example_filer_in_texas():
    """$75k single filer with $6k 401(k) and the standard deduction, no state tax."""
    result = tax_calc.calculate_taxes(TaxParams(
        income=75000, filing_status="single", retirement_contributions=6000,
        other_deductions=12950, state="texas",
    ))
    assert result.taxable_income == 56050
    assert result.state_tax == 0
    assert math.isclose(result.federal_tax, 7638.5, rel_tol=1e-9)
    assert math.isclose(result.social_security_tax, 4650.0, rel_tol=1e-9)
    assert math.isclose(result.medicare_tax, 1087.5, rel_tol=1e-9)
    assert math.isclose(result.total_tax, 13376.0, rel_tol=1e-9)
    assert math.isclose(result.effective_rate, 13376.0 / 75000 * 100, rel_tol=1e-9)
    assert math.isclose(result.take_home_pay, 61624.0, rel_tol=1e-9)
    assert result.total_tax <= result.income


def test_state_tax_uses_taxable_income():
    result = tax_calc.calculate_taxes(TaxParams(income=75000, state="california"))
    assert math.isclose(result.state_tax, 56050 * 0.093, rel_tol=1e-9)


def test_federal_married_joint():
    """Married filing jointly uses the wider brackets."""
    tax = tax_calc.compute_federal_tax(100000, filing_status="married")
    assert math.isclose(tax, 2200 + 8094 + 2321, rel_tol=1e-9)


@pytest.mark.parametrize(
    "bound, expected",
    [
        (11000, 1100.0),
        (44725, 1100.0 + 4047.0),
        (95375, 1100.0 + 4047.0 + 50650 * 0.22),
    ],
)
def test_income_at_bracket_bound(bound, expected):
    slices = tax_calc.bracket_slices(bound, tax_calc.brackets_for("single"))
    assert math.isclose(sum(s.tax for s in slices), expected, rel_tol=1e-9)
    assert slices[-1].upper == bound
    assert tax_calc.compute_federal_tax(bound + 1) - tax_calc.compute_federal_tax(bound) > slices[-1].rate


def test_slices_ignore_bracket_order():
    brackets = tax_calc.brackets_for("head")
    forward = tax_calc.bracket_slices(120000, brackets)
    backward = tax_calc.bracket_slices(120000, list(reversed(brackets)))
    assert forward == backward
    assert sum(s.amount for s in forward) == pytest.approx(120000)


def test_marginal_rate():
    assert tax_calc.marginal_rate(56050) == 0.22
    assert tax_calc.marginal_rate(0) == 0.10
    assert tax_calc.marginal_rate(1_000_000, "married") == 0.37


def test_social_security_wage_base_and_additional_medicare():
    ss, medicare = tax_calc.compute_payroll_taxes(250000)
    assert math.isclose(ss, 160200 * 0.062, rel_tol=1e-9)
    assert math.isclose(medicare, 250000 * 0.0145 + 50000 * 0.009, rel_tol=1e-9)


def test_zero_income_has_zero_effective_rate():
    result = tax_calc.calculate_taxes(TaxParams(income=0))
    assert result.effective_rate == 0.0
    assert result.total_tax == 0.0
    assert result.take_home_pay == 0.0


def test_deductions_above_income_floor_taxable_at_zero():
    result = tax_calc.calculate_taxes(TaxParams(income=10000, other_deductions=20000))
    assert result.taxable_income == 0.0
    assert result.federal_tax == 0.0
    assert result.state_tax == 0.0


def test_unknown_filing_status_and_state_fall_back():
    result = tax_calc.calculate_taxes(TaxParams(filing_status="widow", state="atlantis"))
    single = tax_calc.calculate_taxes(TaxParams(state="texas"))
    assert result.federal_tax == single.federal_tax
    assert result.state_tax == 0.0


@pytest.mark.parametrize("income", [0, 5000, 75000, 250000, 1_000_000])
@pytest.mark.parametrize("state", ["california", "texas", "georgia"])
def test_total_tax_never_exceeds_income(income, state):
    result = tax_calc.calculate_taxes(TaxParams(income=income, state=state))
    assert result.total_tax <= result.income


def test_breakdown_sums_to_income():
    result = tax_calc.calculate_taxes(TaxParams())
    assert sum(v for _, v in tax_calc.tax_breakdown(result)) == pytest.approx(result.income)


def _raw_tables(brackets):
    return {
        "year": 2099,
        "federal": {"single": {"brackets": brackets}},
        "state": {"nowhere": {"rate": 0.05}},
        "fica": {
            "social_security": {"rate": 0.0, "wage_base": 1},
            "medicare": {"rate": 0.0},
        },
    }


def test_custom_tables_from_file(tmp_path):
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(_raw_tables([
        {"rate": 0.2, "up_to": None},
        {"rate": 0.1, "up_to": 1000},
    ])))
    tables = tax_calc.load_tax_tables(path)
    assert tables.federal["single"] == (Bracket(0.1, 1000.0), Bracket(0.2, float("inf")))
    result = tax_calc.calculate_taxes(
        TaxParams(income=3000, retirement_contributions=0, other_deductions=0, state="nowhere"),
        tables,
    )
    assert result.federal_tax == pytest.approx(100 + 400)
    assert result.state_tax == pytest.approx(150)


@pytest.mark.parametrize(
    "brackets",
    [
        [{"rate": 0.1, "up_to": 1000}],
        [{"rate": 0.1, "up_to": 1000}, {"rate": 0.2, "up_to": 1000}, {"rate": 0.3, "up_to": None}],
        [{"rate": 1.5, "up_to": None}],
        [],
    ],
)
def test_malformed_brackets_rejected(brackets):
    with pytest.raises(ValueError):
        tax_calc.parse_tax_tables(_raw_tables(brackets))


def test_calculation_is_repeatable():
    params = TaxParams(income=123456, filing_status="head", state="newyork")
    assert tax_calc.calculate_taxes(params) == tax_calc.calculate_taxes(params)


def test_loaded_tables_are_read_only():
    tables = tax_calc.load_tax_tables()
    with pytest.raises(TypeError):
        tables.federal["single"] = (Bracket(0.0, float("inf")),)
    with pytest.raises(TypeError):
        tables.state_rates["california"] = 0.0
    with pytest.raises(TypeError):
        tables.state_labels["texas"] = "Elsewhere"
    assert tax_calc.load_tax_tables().state_rates["california"] == pytest.approx(0.093)
    assert tax_calc.compute_federal_tax(11000) == pytest.approx(1100.0)
