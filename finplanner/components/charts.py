# components/charts.py
# Plotly chart helpers used across the app.
# All functions return a Plotly Figure that Streamlit can display with st.plotly_chart(...).

from typing import Sequence, Tuple

import plotly.graph_objects as go

import plotly.io as pio
pio.templates.default = "plotly_white"

_LAYOUT = dict(
    template="plotly_white",
    height=380,
    margin=dict(l=10, r=10, t=40, b=10),
    legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
)


def _fit(series, n):
    arr = list(series)
    if len(arr) < n: arr += [0.0] * (n - len(arr))
    return arr[:n]


# ---------- Retirement balance by age ----------
def retirement_chart(ages: Sequence[int],
                     balances: Sequence[float],
                     title: str = "Projected Retirement Savings") -> go.Figure:
    """Bar per age, in today's dollars."""
    fig = go.Figure(go.Bar(
        x=list(ages), y=_fit(balances, len(ages)), name="Balance",
        marker_color="#3B82F6",
        hovertemplate="Age %{x}<br>$%{y:,.0f}<extra></extra>"
    ))
    fig.update_layout(title=title, xaxis_title="Age", yaxis_title="Dollars (real)", **_LAYOUT)
    return fig


# ---------- Savings balance vs. contributions ----------
def savings_chart(years: Sequence[float],
                  balances: Sequence[float],
                  contributions: Sequence[float],
                  title: str = "Savings Growth") -> go.Figure:
    """Balance line over the contributions line; the gap is interest earned."""
    n = len(years)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=list(years), y=_fit(balances, n), mode="lines+markers", name="Balance",
        hovertemplate="Year %{x}<br>$%{y:,.0f}<extra></extra>"
    ))
    fig.add_trace(go.Scatter(
        x=list(years), y=_fit(contributions, n), mode="lines+markers", name="Total contributions",
        line=dict(dash="dot"),
        hovertemplate="Year %{x}<br>$%{y:,.0f}<extra></extra>"
    ))
    fig.update_layout(title=title, xaxis_title="Year", yaxis_title="Dollars", **_LAYOUT)
    return fig


# ---------- Where the paycheck goes ----------
def tax_breakdown_chart(breakdown: Sequence[Tuple[str, float]],
                        title: str = "Tax Breakdown") -> go.Figure:
    """One bar per category (federal, state, payroll, take-home)."""
    labels = [name for name, _ in breakdown]
    values = [value for _, value in breakdown]
    fig = go.Figure(go.Bar(
        x=labels, y=values, marker_color="#4F46E5",
        hovertemplate="%{x}<br>$%{y:,.0f}<extra></extra>"
    ))
    fig.update_layout(title=title, xaxis_title="", yaxis_title="Dollars", **_LAYOUT)
    return fig


def bracket_chart(slices, title: str = "Federal Tax by Bracket") -> go.Figure:
    """Income and tax falling in each marginal bracket."""
    labels = [f"{s.rate:.0%}" for s in slices]
    fig = go.Figure()
    fig.add_bar(x=labels, y=[s.amount for s in slices], name="Income in bracket")
    fig.add_bar(x=labels, y=[s.tax for s in slices], name="Tax")
    fig.update_layout(barmode="group", title=title, xaxis_title="Marginal rate",
                      yaxis_title="Dollars", **_LAYOUT)
    return fig


# ---------- Portfolio ----------
def allocation_pie(allocations, title: str = "Portfolio Allocation") -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=[a.name for a in allocations],
        values=[a.amount for a in allocations],
        marker=dict(colors=[a.color for a in allocations]),
        hole=0.35,
        hovertemplate="%{label}<br>$%{value:,.0f} (%{percent})<extra></extra>"
    ))
    fig.update_layout(title=title, template="plotly_white", height=380,
                      margin=dict(l=10, r=10, t=40, b=10))
    return fig


def growth_chart(years: Sequence[int],
                 values: Sequence[float],
                 principal: float,
                 title: str = "Expected Portfolio Value") -> go.Figure:
    """Stacked principal + growth area."""
    n = len(years)
    values = _fit(values, n)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=list(years), y=[principal] * n, mode="lines", name="Principal",
        stackgroup="one",
        hovertemplate="Year %{x}<br>$%{y:,.0f}<extra></extra>"
    ))
    fig.add_trace(go.Scatter(
        x=list(years), y=[v - principal for v in values], mode="lines", name="Growth",
        stackgroup="one",
        hovertemplate="Year %{x}<br>$%{y:,.0f}<extra></extra>"
    ))
    fig.update_layout(title=title, xaxis_title="Year", yaxis_title="Dollars (nominal)", **_LAYOUT)
    return fig
