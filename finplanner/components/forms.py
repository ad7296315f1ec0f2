import streamlit as st

from finplanner.calculators.portfolio import PortfolioParams, load_risk_profiles
from finplanner.calculators.retirement import RetirementParams
from finplanner.calculators.savings import COMPOUND_FREQUENCIES, SavingsParams
from finplanner.calculators.taxes import FILING_STATUSES, TaxParams, load_tax_tables

# Stable widget keys so we can programmatically set values on load
WIDGET_KEYS = {
    # Retirement
    "current_age": "in_current_age",
    "retirement_age": "in_retirement_age",
    "current_savings": "in_current_savings",
    "annual_contribution": "in_annual_contribution",
    "expected_return": "in_expected_return",
    "inflation_rate": "in_inflation_rate",

    # Savings
    "initial_deposit": "in_initial_deposit",
    "monthly_contribution": "in_monthly_contribution",
    "interest_rate": "in_interest_rate",
    "years": "in_years",
    "compound_frequency": "in_compound_frequency",

    # Tax
    "income": "in_income",
    "filing_status": "in_filing_status",
    "retirement_contributions": "in_retirement_contributions",
    "other_deductions": "in_other_deductions",
    "state": "in_state",

    # Portfolio
    "investment_amount": "in_investment_amount",
    "risk_profile": "in_risk_profile",
    "horizon_years": "in_horizon_years",
}

FREQUENCY_LABELS = {
    "annually": "Annually",
    "semiannually": "Semi-annually",
    "quarterly": "Quarterly",
    "monthly": "Monthly",
    "daily": "Daily",
}


def _d(key, fallback):
    return st.session_state.get("form_defaults", {}).get(key, fallback)


def _index(options, value):
    return options.index(value) if value in options else 0


def retirement_form() -> RetirementParams:
    base = RetirementParams()
    c1, c2 = st.columns(2)
    with c1:
        current_age = st.slider(
            "Current age", min_value=18, max_value=80,
            value=_d("current_age", base.current_age), key=WIDGET_KEYS["current_age"],
        )
        retirement_age = st.slider(
            "Retirement age", min_value=19, max_value=90,
            value=_d("retirement_age", base.retirement_age), key=WIDGET_KEYS["retirement_age"],
            help="Must be later than your current age.",
        )
        current_savings = st.number_input(
            "Current savings ($)", min_value=0.0, step=1000.0,
            value=float(_d("current_savings", base.current_savings)), key=WIDGET_KEYS["current_savings"],
        )
    with c2:
        annual_contribution = st.number_input(
            "Annual contribution ($)", min_value=0.0, step=500.0,
            value=float(_d("annual_contribution", base.annual_contribution)),
            key=WIDGET_KEYS["annual_contribution"],
        )
        expected_return = st.slider(
            "Expected return (%)", min_value=1.0, max_value=12.0, step=0.1,
            value=float(_d("expected_return", base.expected_return)), key=WIDGET_KEYS["expected_return"],
            help="Nominal annual return before inflation.",
        )
        inflation_rate = st.slider(
            "Inflation rate (%)", min_value=0.0, max_value=8.0, step=0.1,
            value=float(_d("inflation_rate", base.inflation_rate)), key=WIDGET_KEYS["inflation_rate"],
            help="Balances are shown in today's dollars.",
        )
    return RetirementParams(
        current_age=int(current_age),
        retirement_age=int(retirement_age),
        current_savings=float(current_savings),
        annual_contribution=float(annual_contribution),
        expected_return=float(expected_return),
        inflation_rate=float(inflation_rate),
    )


def savings_form() -> SavingsParams:
    base = SavingsParams()
    frequencies = list(COMPOUND_FREQUENCIES)
    c1, c2 = st.columns(2)
    with c1:
        initial_deposit = st.number_input(
            "Initial deposit ($)", min_value=0.0, step=100.0,
            value=float(_d("initial_deposit", base.initial_deposit)), key=WIDGET_KEYS["initial_deposit"],
        )
        monthly_contribution = st.number_input(
            "Monthly contribution ($)", min_value=0.0, step=50.0,
            value=float(_d("monthly_contribution", base.monthly_contribution)),
            key=WIDGET_KEYS["monthly_contribution"],
        )
        interest_rate = st.slider(
            "Interest rate (%)", min_value=0.0, max_value=15.0, step=0.1,
            value=float(_d("interest_rate", base.interest_rate)), key=WIDGET_KEYS["interest_rate"],
        )
    with c2:
        years = st.slider(
            "Years", min_value=1, max_value=50,
            value=int(_d("years", base.years)), key=WIDGET_KEYS["years"],
        )
        compound_frequency = st.selectbox(
            "Compounding", frequencies,
            index=_index(frequencies, _d("compound_frequency", base.compound_frequency)),
            format_func=FREQUENCY_LABELS.get, key=WIDGET_KEYS["compound_frequency"],
            help="Daily compounding is approximated as 30 days of interest per month.",
        )
    return SavingsParams(
        initial_deposit=float(initial_deposit),
        monthly_contribution=float(monthly_contribution),
        interest_rate=float(interest_rate),
        years=int(years),
        compound_frequency=compound_frequency,
    )


def tax_form() -> TaxParams:
    base = TaxParams()
    tables = load_tax_tables()
    statuses = list(FILING_STATUSES)
    states = list(tables.state_rates)
    c1, c2 = st.columns(2)
    with c1:
        income = st.number_input(
            "Annual income ($)", min_value=0.0, step=1000.0,
            value=float(_d("income", base.income)), key=WIDGET_KEYS["income"],
        )
        filing_status = st.selectbox(
            "Filing status", statuses,
            index=_index(statuses, _d("filing_status", base.filing_status)),
            format_func=FILING_STATUSES.get, key=WIDGET_KEYS["filing_status"],
        )
        state = st.selectbox(
            "State", states,
            index=_index(states, _d("state", base.state)),
            format_func=lambda s: tables.state_labels.get(s, s), key=WIDGET_KEYS["state"],
            help="Flat rate applied to taxable income.",
        )
    with c2:
        retirement_contributions = st.number_input(
            "Retirement contributions ($)", min_value=0.0, step=500.0,
            value=float(_d("retirement_contributions", base.retirement_contributions)),
            key=WIDGET_KEYS["retirement_contributions"],
            help="Pre-tax 401(k)/IRA contributions.",
        )
        other_deductions = st.number_input(
            "Other deductions ($)", min_value=0.0, step=500.0,
            value=float(_d("other_deductions", base.other_deductions)),
            key=WIDGET_KEYS["other_deductions"],
            help="Standard deduction is $12,950 for single filers (2023).",
        )
    return TaxParams(
        income=float(income),
        filing_status=filing_status,
        retirement_contributions=float(retirement_contributions),
        other_deductions=float(other_deductions),
        state=state,
    )


def portfolio_form() -> PortfolioParams:
    base = PortfolioParams()
    profiles = list(load_risk_profiles())
    c1, c2, c3 = st.columns(3)
    investment_amount = c1.number_input(
        "Investment amount ($)", min_value=0.0, step=1000.0,
        value=float(_d("investment_amount", base.investment_amount)), key=WIDGET_KEYS["investment_amount"],
    )
    risk_profile = c2.selectbox(
        "Risk profile", profiles,
        index=_index(profiles, _d("risk_profile", base.risk_profile)),
        format_func=str.title, key=WIDGET_KEYS["risk_profile"],
    )
    horizon_years = c3.slider(
        "Investment horizon (years)", min_value=1, max_value=40,
        value=int(_d("horizon_years", base.horizon_years)), key=WIDGET_KEYS["horizon_years"],
    )
    return PortfolioParams(
        investment_amount=float(investment_amount),
        risk_profile=risk_profile,
        horizon_years=int(horizon_years),
    )
