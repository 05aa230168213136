"""Quick validation script for the filter and aggregation stages.

Run with `python scripts/validate_aggregation.py` to check the daily averages
produced for a small hand-computed sample.
"""

from __future__ import annotations

from ai_dashboard.data.aggregation import aggregate_rows, extract_roles
from ai_dashboard.data.filters import FilterState, apply_filters
from ai_dashboard.data.loader import parse_payload


def main() -> None:
    sample = [
        {
            "Date and Time": "2024-01-01T10:00",
            "Number of Edits": 4,
            "User Satisfaction Rating": 5,
            "Grouped User Role": "Engineer",
        },
        {
            "Date and Time": "2024-01-01T12:00",
            "Number of Edits": 2,
            "User Satisfaction Rating": "n/a",
            "Grouped User Role": "Designer",
        },
    ]

    records, diagnostics = parse_payload(sample)
    if diagnostics["records_loaded"] != len(sample):
        raise SystemExit(f"Expected {len(sample)} records, got {diagnostics}")

    rows = [row.to_dict() for row in aggregate_rows(records)]
    expected = [{"date": "2024-01-01", "avg_edits": 3.0, "avg_satisfaction": 5.0}]
    assert rows == expected, f"Unfiltered aggregate mismatch: {rows}"

    engineer = apply_filters(records, FilterState(role="Engineer"))
    rows = [row.to_dict() for row in aggregate_rows(engineer)]
    expected = [{"date": "2024-01-01", "avg_edits": 4.0, "avg_satisfaction": 5.0}]
    assert rows == expected, f"Role-filtered aggregate mismatch: {rows}"

    roles = extract_roles(records)
    assert roles == ["All", "Engineer", "Designer"], f"Unexpected roles: {roles}"

    print("Aggregation validation passed. Records:", len(records))


if __name__ == "__main__":
    main()
