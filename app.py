import ai_dashboard.bootstrap_env  # must be first to set env/secrets
import logging

import streamlit as st

from ai_dashboard.config import APP_TITLE, Settings, configure_logging, load_settings
from ai_dashboard.data.filters import serialize_filters
from ai_dashboard.data.loader import clear_cache, load_records
from ai_dashboard.state import DashboardState, initial_state, update_filters
from ai_dashboard.ui.components.charts import dual_axis_trend, render_plotly
from ai_dashboard.ui.components.kpi import render_kpi_cards, summary_cards
from ai_dashboard.ui.components.tables import render_table
from ai_dashboard.ui.layout import active_filter_summary, render_diagnostics, setup_page, sidebar_filters_ui

logger = logging.getLogger(__name__)

STATE_KEY = "ai_dashboard_state"

AGGREGATE_COLUMN_CONFIG = {
    "avg_satisfaction": {"type": "number", "decimals": 2},
    "avg_edits": {"type": "number", "decimals": 2},
}
AGGREGATE_COLUMN_LABELS = {
    "date": "Date",
    "avg_satisfaction": "Average Satisfaction",
    "avg_edits": "Average Edits",
}


def _get_state(settings: Settings) -> DashboardState:
    state = st.session_state.get(STATE_KEY)
    if state is None:
        records, diagnostics = load_records(settings)
        state = initial_state(records, diagnostics)
        st.session_state[STATE_KEY] = state
    return state


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    setup_page()
    st.title(APP_TITLE)

    if st.sidebar.button("🔄 Refresh Data"):
        clear_cache()
        st.session_state.pop(STATE_KEY, None)

    state = _get_state(settings)

    filters = sidebar_filters_ui(state.records, state.roles)
    if filters != state.filters:
        state = update_filters(state, filters)
        st.session_state[STATE_KEY] = state
        st.session_state["ai_active_filters"] = serialize_filters(filters)
        logger.debug("Filters changed: %s", st.session_state["ai_active_filters"])

    if state.records.empty:
        if state.diagnostics.get("error"):
            st.error("Could not load the usage data. See the diagnostics below for details.")
        else:
            st.info("The dataset is empty.")

    active_filter_summary(state.filters, len(state.series), state.summary["records"])
    render_kpi_cards(summary_cards(state.summary))
    render_plotly(dual_axis_trend(state.series))

    with st.expander("Daily Averages", expanded=False):
        render_table(
            state.series,
            column_config=AGGREGATE_COLUMN_CONFIG,
            column_labels=AGGREGATE_COLUMN_LABELS,
            export_file_name="daily_averages.csv",
        )

    render_diagnostics(state.diagnostics)


if __name__ == "__main__":
    main()
