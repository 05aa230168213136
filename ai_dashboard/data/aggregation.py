"""
Daily aggregation of usage records and role extraction for the filter controls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

import pandas as pd

from ai_dashboard.config import ALL_ROLES

AGGREGATE_COLUMNS: List[str] = ["date", "avg_edits", "avg_satisfaction"]
DATE_KEY_FORMAT = "%Y-%m-%d"
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class DailyAggregate:
    date: str
    avg_edits: Optional[float] = None
    avg_satisfaction: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "avg_edits": self.avg_edits,
            "avg_satisfaction": self.avg_satisfaction,
        }


def _optional(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return float(value)


def round_half_up(value: float) -> float:
    """Round to two decimals with exact halves going up (4.125 -> 4.13)."""
    if math.isnan(value):
        return value
    # Quantize the exact binary value: 4.125 is a true half, 2.675 is stored just below one
    return float(Decimal(float(value)).quantize(CENTS, rounding=ROUND_HALF_UP))


def aggregate_daily(records: pd.DataFrame) -> pd.DataFrame:
    """
    Group records by calendar day and average the numeric fields.

    Each average only counts the records that carry a valid value for that
    field, so a day can have an edit average but no satisfaction average (and
    vice versa). Days without any valid value for a field get NaN there.
    Averages are rounded half up to two decimals; rows are sorted by ascending date.
    """
    if records.empty:
        return pd.DataFrame(
            {
                "date": pd.Series(dtype=object),
                "avg_edits": pd.Series(dtype="float64"),
                "avg_satisfaction": pd.Series(dtype="float64"),
            }
        )

    day_keys = records["timestamp"].dt.strftime(DATE_KEY_FORMAT).rename("date")
    grouped = records.groupby(day_keys, sort=True)
    daily = pd.DataFrame(
        {
            "avg_edits": grouped["edit_count"].mean(),
            "avg_satisfaction": grouped["satisfaction_rating"].mean(),
        }
    )
    daily = daily.astype("float64").apply(lambda column: column.map(round_half_up)).reset_index()
    return daily[AGGREGATE_COLUMNS]


def aggregate_rows(records: pd.DataFrame) -> List[DailyAggregate]:
    """Same result as `aggregate_daily`, as row objects with None for gaps."""
    daily = aggregate_daily(records)
    return [
        DailyAggregate(
            date=row.date,
            avg_edits=_optional(row.avg_edits),
            avg_satisfaction=_optional(row.avg_satisfaction),
        )
        for row in daily.itertuples(index=False)
    ]


def extract_roles(records: pd.DataFrame) -> List[str]:
    """
    Return the role filter options: the "all roles" sentinel first, then each
    distinct role in order of first appearance.
    """
    roles = [ALL_ROLES]
    if records.empty or "role" not in records:
        return roles
    for role in pd.unique(records["role"].dropna()):
        if role != ALL_ROLES:
            roles.append(str(role))
    return roles


def summarize_records(records: pd.DataFrame) -> Dict[str, Any]:
    """Headline numbers for the KPI cards over the records currently in view."""
    if records.empty:
        return {
            "records": 0,
            "days": 0,
            "avg_edits": None,
            "avg_satisfaction": None,
        }
    return {
        "records": int(len(records)),
        "days": int(records["timestamp"].dt.normalize().nunique()),
        "avg_edits": _optional(records["edit_count"].mean()),
        "avg_satisfaction": _optional(records["satisfaction_rating"].mean()),
    }
