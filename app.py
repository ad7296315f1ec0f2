# app.py
import logging

import pandas as pd
import streamlit as st

from finplanner.calculators import portfolio, retirement, savings, taxes
from finplanner.calculators.errors import CalculatorError
from finplanner.components import charts, export
from finplanner.components.forms import portfolio_form, retirement_form, savings_form, tax_form
from finplanner.components.workbook import sample_workbook

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("finplanner.app")


# ---------- Page config ----------
st.set_page_config(
    page_title="Retirement Planning Calculators",
    layout="wide",
    initial_sidebar_state="auto",
)

# Hide Streamlit's default menu and footer
HIDE_STREAMLIT_STYLE = """
    <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
    </style>
"""
st.markdown(HIDE_STREAMLIT_STYLE, unsafe_allow_html=True)

st.markdown(
    """
<style>
/* Global layout */
.block-container {
    padding: 1.5rem 2rem;
    max-width: 1400px;
    margin: auto;
}

/* Cards for metrics and charts */
div[data-testid="stMetric"] {
    background: #FFFFFF;
    border-radius: 12px;
    padding: 1rem;
    box-shadow: 0 2px 8px rgba(0,0,0,0.05);
    border: 1px solid #E5E7EB;
}
div.stPlotlyChart {
    background: #FFFFFF;
    border-radius: 12px;
    padding: 0.75rem;
    border: 1px solid #E5E7EB;
    box-shadow: 0 2px 8px rgba(0,0,0,0.05);
}

/* Tables */
div[data-testid="stDataFrame"] {
    border-radius: 12px;
    overflow: hidden;
    box-shadow: 0 2px 8px rgba(0,0,0,0.05);
}

/* Mobile tweaks */
@media (max-width: 600px) {
    .block-container {
        padding: 1rem;
    }
    div.stPlotlyChart {
        padding: 0.5rem 0;
    }
}
</style>
""",
    unsafe_allow_html=True,
)

# ---------- Session boot ----------
st.session_state.setdefault("form_defaults", {})


def _money(x: float) -> str:
    return export.format_currency(x)


def _download(label: str, csv_text: str, file_name: str, key: str):
    st.download_button(
        label,
        data=csv_text.encode("utf-8"),
        file_name=file_name,
        mime="text/csv",
        key=key,
    )


# ---------- Header bar ----------
def header_bar():
    st.markdown(
        """
        ### **Retirement Planning Calculators**
        _Plan your financial future: retirement savings, compound growth, taxes and portfolio allocation._
        """
    )

header_bar()


# ====== SIDEBAR: WORKBOOK SAMPLER ======
st.sidebar.header("Workbook Inspector")
st.sidebar.caption("Upload a planning spreadsheet to see its sheets and first rows.")
uploaded = st.sidebar.file_uploader("Excel workbook", type=["xlsx"])
if uploaded:
    try:
        for sheet in sample_workbook(uploaded):
            with st.sidebar.expander(f"{sheet.name} ({sheet.rows} × {sheet.columns})"):
                st.dataframe(pd.DataFrame(sheet.sample_data), use_container_width=True)
    except Exception as exc:  # openpyxl raises several unrelated types for bad files
        logger.warning("workbook upload failed: %s", exc)
        st.sidebar.error("Could not read that workbook.")


tab_ret, tab_sav, tab_inv, tab_tax = st.tabs(
    ["Retirement Calculator", "Savings Calculator", "Investment Calculator", "Tax Calculator"]
)


# ====== RETIREMENT ======
with tab_ret:
    st.subheader("Input Parameters")
    params = retirement_form()
    try:
        points = retirement.project_retirement(params)
    except CalculatorError as exc:
        st.error(str(exc))
    else:
        summary = retirement.summarize(points)
        k1, k2, k3 = st.columns(3)
        k1.metric("Projected savings at retirement", _money(summary.final_balance))
        k2.metric("Total contributions", _money(summary.total_contributions))
        k3.metric("Investment growth", _money(summary.growth))
        st.caption(
            f"In today's dollars, at a real return of "
            f"{retirement.real_rate(params.expected_return, params.inflation_rate) * 100:.2f}% "
            f"over {summary.years_to_retirement} years."
        )

        st.plotly_chart(
            charts.retirement_chart([p.age for p in points], [p.balance for p in points]),
            use_container_width=True,
        )
        df = retirement.to_frame(points)
        st.dataframe(df.round(0), use_container_width=True, height=300)
        _download("⬇️ CSV (retirement projection)", export.retirement_csv(points),
                  "retirement_projection.csv", "dl_retirement")


# ====== SAVINGS ======
with tab_sav:
    st.subheader("Savings Parameters")
    params = savings_form()
    try:
        points = savings.project_savings(params)
    except CalculatorError as exc:
        st.error(str(exc))
    else:
        summary = savings.summarize(points)
        k1, k2, k3 = st.columns(3)
        k1.metric("Final balance", _money(summary.final_balance))
        k2.metric("Total contributions", _money(summary.total_contributions))
        k3.metric("Interest earned", _money(summary.interest_earned))

        st.plotly_chart(
            charts.savings_chart(
                [p.year for p in points],
                [p.balance for p in points],
                [p.total_contributions for p in points],
            ),
            use_container_width=True,
        )
        st.dataframe(savings.to_frame(points).round(2), use_container_width=True, height=300)
        _download("⬇️ CSV (savings projection)", export.savings_csv(points),
                  "savings_projection.csv", "dl_savings")


# ====== INVESTMENT ======
with tab_inv:
    st.subheader("Investment Parameters")
    params = portfolio_form()
    try:
        projection = portfolio.project_portfolio(params)
    except ValueError as exc:  # includes unknown risk profiles
        st.error(str(exc))
    else:
        k1, k2, k3 = st.columns(3)
        k1.metric("Blended expected return", f"{projection.blended_return:.2f}%")
        k2.metric(f"Value after {params.horizon_years} years", _money(projection.final_value))
        k3.metric("Expected growth", _money(projection.series[-1].growth))

        c1, c2 = st.columns(2)
        with c1:
            st.plotly_chart(charts.allocation_pie(projection.allocations), use_container_width=True)
        with c2:
            st.plotly_chart(
                charts.growth_chart(
                    [p.year for p in projection.series],
                    [p.value for p in projection.series],
                    max(0.0, params.investment_amount),
                ),
                use_container_width=True,
            )

        st.dataframe(portfolio.allocation_frame(projection), use_container_width=True)
        d1, d2 = st.columns(2)
        with d1:
            _download("⬇️ CSV (allocation)", export.allocation_csv(projection),
                      "portfolio_allocation.csv", "dl_allocation")
        with d2:
            _download("⬇️ CSV (expected returns)", export.returns_csv(projection),
                      "expected_returns.csv", "dl_returns")


# ====== TAX ======
with tab_tax:
    st.subheader("Tax Parameters")
    params = tax_form()
    result = taxes.calculate_taxes(params)

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total tax", _money(result.total_tax))
    k2.metric("Effective rate", export.format_percent(result.effective_rate))
    k3.metric("Marginal federal rate", f"{result.marginal_rate:.0%}")
    k4.metric("Take-home pay", _money(result.take_home_pay))

    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(charts.tax_breakdown_chart(taxes.tax_breakdown(result)), use_container_width=True)
    with c2:
        st.plotly_chart(charts.bracket_chart(result.slices), use_container_width=True)

    st.dataframe(
        pd.DataFrame(
            [("Taxable Income", result.taxable_income)] + taxes.tax_breakdown(result),
            columns=["Category", "Amount"],
        ).round(2),
        use_container_width=True,
    )
    st.caption("State tax is a flat rate applied to taxable income. Figures use 2023 brackets.")
    _download("⬇️ CSV (tax calculation)", export.tax_csv(result), "tax_calculation.csv", "dl_tax")
