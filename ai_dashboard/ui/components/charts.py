"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from ai_dashboard.config import DATE_TICK_FORMAT, EDITS_COLOR, SATISFACTION_COLOR, SATISFACTION_SCALE

DEFAULT_TEMPLATE = "plotly_white"
CHART_HEIGHT = 400


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    legend_title: Optional[str] = None,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        title=title,
        legend_title=legend_title,
        hovermode="x unified",
        height=CHART_HEIGHT,
        margin=dict(l=40, r=40, t=60, b=40),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    fig.update_xaxes(showgrid=True, griddash="dash")
    return fig


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def dual_axis_trend(
    daily: pd.DataFrame,
    title: Optional[str] = None,
) -> go.Figure:
    """
    Average satisfaction (left axis, fixed 0-5) and average edits (right axis,
    auto-scaled) over a shared date axis. Days without a value for a series
    are left as gaps.
    """
    dates = pd.to_datetime(daily["date"]) if not daily.empty else pd.Series(dtype="datetime64[ns]")

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=dates,
            y=daily.get("avg_satisfaction", pd.Series(dtype="float64")),
            mode="lines+markers",
            name="Average Satisfaction",
            line=dict(color=SATISFACTION_COLOR, shape="spline"),
            yaxis="y",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=dates,
            y=daily.get("avg_edits", pd.Series(dtype="float64")),
            mode="lines+markers",
            name="Average Edits",
            line=dict(color=EDITS_COLOR, shape="spline"),
            yaxis="y2",
        )
    )

    fig = _configure_layout(fig, title)
    fig.update_layout(
        xaxis=dict(tickformat=DATE_TICK_FORMAT, hoverformat=DATE_TICK_FORMAT),
        yaxis=dict(title="Satisfaction", range=list(SATISFACTION_SCALE), showgrid=True),
        yaxis2=dict(title="Edits", overlaying="y", side="right", showgrid=False, rangemode="tozero"),
    )
    return fig
