"""
Filter utilities that narrow the raw usage records before aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple, Union

import pandas as pd

from ai_dashboard.config import ALL_ROLES

DateBound = Union[pd.Timestamp, datetime, date, None]


@dataclass(frozen=True)
class FilterState:
    date_range: Tuple[DateBound, DateBound] = (None, None)
    role: str = ALL_ROLES

    @property
    def has_date_range(self) -> bool:
        start, end = self.date_range
        return start is not None and end is not None

    @property
    def has_role(self) -> bool:
        return self.role != ALL_ROLES


DEFAULT_FILTERS = FilterState()


def _as_timestamp(value: DateBound) -> pd.Timestamp:
    # Plain dates mean midnight; offset-aware bounds keep their wall clock
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def apply_filters(records: pd.DataFrame, filters: FilterState) -> pd.DataFrame:
    """
    Return the records that satisfy both the date-range and role predicates.

    The date predicate only applies when both bounds are set and is strict on
    both sides: a record stamped exactly on a bound is excluded. The role
    predicate only applies when a specific role is selected and is an exact,
    case-sensitive match. Row order is preserved and the input is left as is.
    """
    filtered = records
    if filtered.empty:
        return filtered.copy()

    if filters.has_date_range:
        start, end = (_as_timestamp(bound) for bound in filters.date_range)
        timestamps = filtered["timestamp"]
        filtered = filtered[(timestamps > start) & (timestamps < end)]

    if filters.has_role:
        filtered = filtered[filtered["role"] == filters.role]

    return filtered.copy()


def serialize_filters(filters: FilterState) -> Dict[str, Any]:
    """
    Convert the FilterState dataclass to a JSON-serialisable dictionary to be
    stored in session_state or used for logging/debugging.
    """
    return {
        "date_range": tuple(
            v.isoformat() if hasattr(v, "isoformat") else v for v in filters.date_range
        ),
        "role": filters.role,
    }


def describe_filters(filters: FilterState) -> str:
    badges = []
    if filters.has_date_range:
        start, end = (_as_timestamp(bound) for bound in filters.date_range)
        badges.append(f"Dates: {start:%m/%d/%Y} – {end:%m/%d/%Y} (exclusive)")
    if filters.has_role:
        badges.append(f"Role: {filters.role}")
    return "Active Filters: " + " | ".join(badges) if badges else "Active Filters: All data"


def filters_from_inputs(date_input: Any, role: Optional[str]) -> FilterState:
    """Translate raw widget values into a FilterState.

    ``st.date_input`` in range mode yields an empty tuple when cleared and a
    one-element tuple while the second date is still being picked; both count
    as "no date range".
    """
    date_range: Tuple[DateBound, DateBound] = (None, None)
    if isinstance(date_input, (list, tuple)) and len(date_input) == 2:
        start, end = date_input
        if start is not None and end is not None:
            if start > end:
                start, end = end, start
            date_range = (start, end)
    return FilterState(date_range=date_range, role=role or ALL_ROLES)
