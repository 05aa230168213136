"""
Typed schema for raw usage events and helpers that coerce loosely-typed JSON
values into it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Set

import numpy as np
import pandas as pd

from ai_dashboard.config import (
    DEFAULT_TIMEZONE,
    FIELD_EDITS,
    FIELD_ROLE,
    FIELD_SATISFACTION,
    FIELD_TIMESTAMP,
)

SENTINELS: Set[str] = {"", "None", "none", "N/A", "n/a", "NA", "na", "null", "Null", "-", "—"}

RECORD_COLUMNS: List[str] = ["timestamp", "edit_count", "satisfaction_rating", "role"]


@dataclass(frozen=True)
class RawRecord:
    timestamp: pd.Timestamp
    edit_count: Optional[float] = None
    satisfaction_rating: Optional[float] = None
    role: Optional[str] = None

    @classmethod
    def from_payload(cls, item: Mapping[str, Any], timezone: str = DEFAULT_TIMEZONE) -> "RawRecord":
        """Build a record from one JSON object of the data source.

        Raises ValueError when the timestamp is missing or unparseable; every
        other field degrades to None.
        """
        timestamp = parse_timestamp(item.get(FIELD_TIMESTAMP), timezone)
        if timestamp is None:
            raise ValueError(f"unparseable timestamp: {item.get(FIELD_TIMESTAMP)!r}")
        return cls(
            timestamp=timestamp,
            edit_count=coerce_number(item.get(FIELD_EDITS)),
            satisfaction_rating=coerce_number(item.get(FIELD_SATISFACTION)),
            role=coerce_role(item.get(FIELD_ROLE)),
        )


def coerce_number(value: Any) -> Optional[float]:
    """Return a finite float for numeric-looking values, else None."""
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, float, np.number)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text in SENTINELS:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def coerce_role(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (bool, int, float)):
        return str(value)
    return None


def parse_timestamp(value: Any, timezone: str = DEFAULT_TIMEZONE) -> Optional[pd.Timestamp]:
    """Parse a timestamp into naive wall-clock time in ``timezone``.

    Offset-aware inputs are converted to ``timezone``; naive inputs are
    assumed to already be in it.
    """
    if isinstance(value, str):
        if value.strip() in SENTINELS:
            return None
    elif not isinstance(value, datetime):
        return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert(timezone).tz_localize(None)
    return parsed


def empty_records_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "timestamp": pd.Series(dtype="datetime64[ns]"),
            "edit_count": pd.Series(dtype="float64"),
            "satisfaction_rating": pd.Series(dtype="float64"),
            "role": pd.Series(dtype=object),
        }
    )


def records_to_frame(records: Iterable[RawRecord]) -> pd.DataFrame:
    """Build the records frame consumed by the filter and aggregation stages."""
    records = list(records)
    if not records:
        return empty_records_frame()
    return pd.DataFrame(
        {
            "timestamp": pd.to_datetime(pd.Series([record.timestamp for record in records])),
            "edit_count": pd.Series([record.edit_count for record in records], dtype="float64"),
            "satisfaction_rating": pd.Series([record.satisfaction_rating for record in records], dtype="float64"),
            "role": pd.Series([record.role for record in records], dtype=object),
        }
    )
