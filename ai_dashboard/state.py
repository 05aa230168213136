"""
Dashboard state and the pure functions that derive it.

The Streamlit script keeps one `DashboardState` in session state and replaces
it with the value returned by `update_filters` whenever the selection changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

import pandas as pd

from ai_dashboard.data.aggregation import aggregate_daily, extract_roles, summarize_records
from ai_dashboard.data.filters import DEFAULT_FILTERS, FilterState, apply_filters


@dataclass(frozen=True, eq=False)
class DashboardState:
    records: pd.DataFrame
    roles: List[str]
    filters: FilterState
    initial_series: pd.DataFrame
    series: pd.DataFrame
    summary: Dict[str, Any]
    diagnostics: Dict[str, Any] = field(default_factory=dict)


def initial_state(records: pd.DataFrame, diagnostics: Optional[Dict[str, Any]] = None) -> DashboardState:
    series = aggregate_daily(records)
    return DashboardState(
        records=records,
        roles=extract_roles(records),
        filters=DEFAULT_FILTERS,
        initial_series=series,
        series=series,
        summary=summarize_records(records),
        diagnostics=dict(diagnostics or {}),
    )


def update_filters(state: DashboardState, filters: FilterState) -> DashboardState:
    """Return a new state with the series recomputed for ``filters``."""
    filtered = apply_filters(state.records, filters)
    return replace(
        state,
        filters=filters,
        series=aggregate_daily(filtered),
        summary=summarize_records(filtered),
    )
