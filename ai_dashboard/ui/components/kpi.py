from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import streamlit as st

from ai_dashboard.ui.components.formatting import format_number, format_rating


@dataclass
class KpiCard:
    label: str
    value: Optional[float] = None
    value_display: Optional[str] = None
    decimals: int = 0
    help_text: Optional[str] = None


def _format_value(card: KpiCard) -> str:
    if card.value_display is not None:
        return card.value_display
    return format_number(card.value, decimals=card.decimals)


def summary_cards(summary: Dict[str, Any]) -> List[KpiCard]:
    return [
        KpiCard(label="Events in View", value=summary.get("records")),
        KpiCard(label="Days in View", value=summary.get("days")),
        KpiCard(
            label="Average Satisfaction",
            value=summary.get("avg_satisfaction"),
            value_display=format_rating(summary.get("avg_satisfaction")),
            help_text="Mean over events with a numeric rating.",
        ),
        KpiCard(
            label="Average Edits",
            value=summary.get("avg_edits"),
            decimals=2,
            help_text="Mean over events with a numeric edit count.",
        ),
    ]


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 4) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        st.info("No KPIs available for the current filters.")
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(label=card.label, value=_format_value(card))
                if card.help_text:
                    st.caption(card.help_text)
