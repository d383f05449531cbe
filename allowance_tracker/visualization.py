"""Plotly figures for the allowance dashboard.

Each function accepts one of the DataFrames produced by
:mod:`allowance_tracker.ledger_analytics` and returns a
``plotly.graph_objects.Figure`` that Streamlit renders with
``st.plotly_chart``.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .formatting import category_icon, category_label


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_category_pie(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Donut chart of spending per category.

    Parameters
    ----------
    breakdown : pandas.DataFrame
        Output of ``category_breakdown``: indexed by category with a
        ``Total_Spent`` column.
    title : str, optional
        Chart title.
    """
    if breakdown.empty:
        return _empty_figure("No expenses yet")
    labels = [f"{category_icon(c)} {category_label(c)}" for c in breakdown.index]
    fig = px.pie(
        values=breakdown['Total_Spent'].values,
        names=labels,
        hole=0.45,
        color_discrete_sequence=px.colors.qualitative.Set3,
    )
    fig.update_traces(textposition='inside', textinfo='percent+label')
    fig.update_layout(title=title or "Spending by Category", showlegend=False)
    return fig


def create_daily_spending_chart(daily: pd.DataFrame, ideal_daily: float | None = None, title: str | None = None) -> go.Figure:
    """Bar chart of spend per day with an optional ideal-daily reference line.

    Parameters
    ----------
    daily : pandas.DataFrame
        Output of ``daily_spending`` with ``date`` and ``amount`` columns.
    ideal_daily : float, optional
        Allowance divided by the days in the month. Drawn as a dashed line
        when positive.
    title : str, optional
        Chart title.
    """
    if daily.empty:
        return _empty_figure()
    fig = px.bar(daily, x='date', y='amount')
    fig.update_traces(marker_color='#6366f1')
    if ideal_daily and ideal_daily > 0:
        fig.add_hline(
            y=ideal_daily,
            line_dash='dash',
            line_color='#10b981',
            annotation_text='Ideal daily',
            annotation_position='top left',
        )
    fig.update_layout(
        title=title or "Daily Spending This Month",
        xaxis_title="Day",
        yaxis_title="Spent",
        bargap=0.2,
    )
    return fig
