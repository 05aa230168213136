"""
Utility helpers for formatting counts, averages and ratings for display.
"""

from __future__ import annotations

from typing import Optional

from ai_dashboard.config import SATISFACTION_SCALE


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return "–"
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def format_rating(value: Optional[float], decimals: int = 2) -> str:
    formatted = format_number(value, decimals)
    if formatted == "–":
        return formatted
    return f"{formatted} / {SATISFACTION_SCALE[1]}"
