"""
Layout helpers for the Streamlit application (sidebar filters, summaries, diagnostics).
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st

from ai_dashboard.config import ALL_ROLES, APP_TITLE
from ai_dashboard.data.filters import DEFAULT_FILTERS, FilterState, describe_filters, filters_from_inputs
from ai_dashboard.ui.components.formatting import format_number

DATE_RANGE_KEY = "ai_date_range"
ROLE_KEY = "ai_role"


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title=APP_TITLE,
        layout="centered",
        page_icon=":bar_chart:",
    )


def _data_bounds(records: pd.DataFrame) -> Tuple[Optional[dt.date], Optional[dt.date]]:
    if records.empty:
        return None, None
    timestamps = records["timestamp"].dropna()
    if timestamps.empty:
        return None, None
    return timestamps.min().date(), timestamps.max().date()


def _role_index(roles: List[str], selected: str) -> int:
    try:
        return roles.index(selected)
    except ValueError:
        return 0


def sidebar_filters_ui(
    records: pd.DataFrame,
    roles: List[str],
    defaults: FilterState = DEFAULT_FILTERS,
) -> FilterState:
    """
    Render the sidebar filter controls and return the selected values.
    """
    st.sidebar.header("Filters")

    min_date, max_date = _data_bounds(records)
    date_input = st.sidebar.date_input(
        "Date Range",
        value=(),
        min_value=min_date,
        max_value=max_date,
        key=DATE_RANGE_KEY,
        format="MM/DD/YYYY",
        help="Pick a start and end date; events stamped exactly on either bound are excluded. Clear to show all dates.",
    )

    role = st.sidebar.selectbox(
        "Role",
        roles or [ALL_ROLES],
        index=_role_index(roles, defaults.role),
        key=ROLE_KEY,
    )

    if st.sidebar.button("Reset Filters"):
        _reset_filter_state()
        st.rerun()

    return filters_from_inputs(date_input, role)


def _reset_filter_state() -> None:
    for key in (DATE_RANGE_KEY, ROLE_KEY):
        st.session_state.pop(key, None)


def active_filter_summary(filters: FilterState, days: int, total_records: int) -> None:
    st.markdown(f"**{describe_filters(filters)}**")
    st.caption(
        f"Showing {format_number(days, 0)} days from {format_number(total_records, 0)} events after filters."
    )


def render_diagnostics(diagnostics: Dict[str, Any]) -> None:
    with st.expander("Data Diagnostics", expanded=False):
        if not diagnostics:
            st.info("No diagnostics metadata available.")
            return
        for key, value in diagnostics.items():
            st.write(f"- **{key.replace('_', ' ').title()}**: {value}")
