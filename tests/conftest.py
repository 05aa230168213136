from __future__ import annotations

from typing import Any, Callable, Dict, List

import pandas as pd
import pytest

from ai_dashboard.data.loader import parse_payload


def event(timestamp: str, edits: Any = None, rating: Any = None, role: Any = "Engineer") -> Dict[str, Any]:
    return {
        "Date and Time": timestamp,
        "Number of Edits": edits,
        "User Satisfaction Rating": rating,
        "Grouped User Role": role,
    }


@pytest.fixture
def example_payload() -> List[Dict[str, Any]]:
    return [
        event("2024-01-01T10:00", edits=4, rating=5, role="Engineer"),
        event("2024-01-01T12:00", edits=2, rating="n/a", role="Designer"),
    ]


@pytest.fixture
def make_records() -> Callable[[List[Dict[str, Any]]], pd.DataFrame]:
    def _make(payload: List[Dict[str, Any]]) -> pd.DataFrame:
        records, _ = parse_payload(payload)
        return records

    return _make


@pytest.fixture
def week_records(make_records) -> pd.DataFrame:
    return make_records(
        [
            event("2024-01-03T09:00", edits=3, rating=4, role="Engineer"),
            event("2024-01-01T08:00", edits=1, rating=5, role="Designer"),
            event("2024-01-02T00:00", edits=2, rating=None, role="Engineer"),
            event("2024-01-01T18:30", edits=None, rating=3, role="Engineer"),
            event("2024-01-02T13:15", edits="n/a", rating=4, role="Product Manager"),
            event("2024-01-04T00:00", edits=6, rating=2, role="Designer"),
        ]
    )
