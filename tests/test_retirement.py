"""Tests for the retirement savings projection."""

import math

import pytest

from finplanner.calculators import retirement
from finplanner.calculators.errors import InvalidPercentage, InvalidRange
from finplanner.calculators.retirement import RetirementParams


def _default_params(**overrides):
    values = dict(
        current_age=30,
        retirement_age=65,
        current_savings=50000.0,
        annual_contribution=6000.0,
        expected_return=7.0,
        inflation_rate=2.5,
    )
    values.update(overrides)
    return RetirementParams(**values)


def test_series_length_and_start():
    points = retirement.project_retirement(_default_params())
    assert len(points) == 36
    assert points[0].balance == 50000.0
    assert points[0].contribution == 50000.0
    assert [p.year for p in points] == list(range(36))
    assert points[0].age == 30 and points[-1].age == 65


def test_balance_never_decreases_with_positive_real_rate():
    points = retirement.project_retirement(_default_params())
    balances = [p.balance for p in points]
    assert all(b2 >= b1 for b1, b2 in zip(balances, balances[1:]))


def test_first_year_uses_real_rate():
    points = retirement.project_retirement(_default_params())
    expected = 50000.0 * (1.07 / 1.025) + 6000.0
    assert points[1].balance == pytest.approx(expected)
    assert points[1].contribution == 6000.0


def test_real_rate():
    assert math.isclose(retirement.real_rate(7.0, 2.5), 1.07 / 1.025 - 1)
    assert retirement.real_rate(3.0, 3.0) == pytest.approx(0.0)


def test_zero_rates_accumulate_contributions():
    params = _default_params(
        retirement_age=32, current_savings=1000.0, annual_contribution=100.0,
        expected_return=0.0, inflation_rate=0.0,
    )
    balances = [p.balance for p in retirement.project_retirement(params)]
    assert balances == [1000.0, 1100.0, 1200.0]


def test_one_year_horizon_gives_two_points():
    points = retirement.project_retirement(_default_params(retirement_age=31))
    assert len(points) == 2


@pytest.mark.parametrize("retirement_age", [30, 25])
def test_retirement_age_must_follow_current_age(retirement_age):
    with pytest.raises(InvalidRange):
        retirement.project_retirement(_default_params(retirement_age=retirement_age))


def test_negative_return_rejected():
    with pytest.raises(InvalidPercentage):
        retirement.project_retirement(_default_params(expected_return=-1.0))


@pytest.mark.parametrize("inflation_rate", [-2.0, -100.0, -150.0])
def test_negative_inflation_rejected(inflation_rate):
    with pytest.raises(InvalidPercentage):
        retirement.project_retirement(_default_params(inflation_rate=inflation_rate))


def test_inflation_above_return_shrinks_real_balance():
    params = _default_params(current_savings=1000.0, annual_contribution=0.0,
                             expected_return=1.0, inflation_rate=4.0)
    balances = [p.balance for p in retirement.project_retirement(params)]
    assert all(b2 < b1 for b1, b2 in zip(balances, balances[1:]))


def test_negative_amounts_clamped_to_zero():
    params = _default_params(current_savings=-500.0, annual_contribution=-10.0)
    points = retirement.project_retirement(params)
    assert points[0].balance == 0.0
    assert all(p.balance == 0.0 for p in points)


def test_summary():
    points = retirement.project_retirement(_default_params())
    summary = retirement.summarize(points)
    assert summary.total_contributions == pytest.approx(50000.0 + 35 * 6000.0)
    assert summary.final_balance == points[-1].balance
    assert summary.growth == pytest.approx(summary.final_balance - summary.total_contributions)
    assert summary.years_to_retirement == 35


def test_projection_is_repeatable():
    params = _default_params()
    assert retirement.project_retirement(params) == retirement.project_retirement(params)


def test_to_frame_columns():
    df = retirement.to_frame(retirement.project_retirement(_default_params()))
    assert list(df.columns) == ["age", "year", "balance", "contribution"]
    assert len(df) == 36
