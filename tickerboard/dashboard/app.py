# tickerboard/dashboard/app.py
"""
Streamlit entrypoint for the Tickerboard dashboard.

Usage:
    streamlit run tickerboard/dashboard/app.py -- --config config/app_config.yaml
"""

import argparse
import asyncio
import os
from typing import Optional

import streamlit as st

from tickerboard.dashboard.charts import ChartArena
from tickerboard.dashboard.detail import build_detail
from tickerboard.dashboard.loader import DashboardData, DashboardLoadError, load_dashboard_data
from tickerboard.dashboard.state import (
    DashboardState,
    DataLoaded,
    LoadFailed,
    SetRange,
    SetSearch,
    SetSort,
    build_grid,
    last_updated_label,
    reduce,
)
from tickerboard.dashboard.ui_components import render_controls, render_detail, render_grid
from tickerboard.dashboard.utils import get_ui_logger
from tickerboard.utils.config import AppConfig, load_typed_config
from tickerboard.utils.logger import configure_root_logging

logger = get_ui_logger("tickerboard.dashboard.app")

STATE_KEY = "tickerboard_state"
ARENA_KEY = "tickerboard_charts"

LOGO_CSS = """
<style>
.tb-logo, .tb-logo-fallback { width: 40px; height: 40px; border-radius: 8px; }
.tb-logo-fallback {
    display: flex; align-items: center; justify-content: center;
    background: #e5edff; color: #2f6bff; font-weight: 700;
}
</style>
"""


def read_config() -> AppConfig:
    """Config path comes from ``-- --config`` or the TICKERBOARD_CONFIG variable."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--config", "-c", default=os.environ.get("TICKERBOARD_CONFIG"))
    args, _ = parser.parse_known_args()
    return load_typed_config(args.config)


@st.cache_data(ttl=300, show_spinner="Loading market data...")
def fetch_dashboard_data(data_source: str, error_log: Optional[str]) -> DashboardData:
    return asyncio.run(load_dashboard_data(data_source, error_log_path=error_log))


def dispatch(action) -> DashboardState:
    st.session_state[STATE_KEY] = reduce(st.session_state[STATE_KEY], action)
    return st.session_state[STATE_KEY]


@st.dialog("Details", width="large")
def show_detail(detail) -> None:
    render_detail(detail)


def main():
    config = read_config()
    configure_root_logging(config.logging.level, config.logging.file)
    dash_cfg = config.dashboard

    st.set_page_config(page_title="Tickerboard", layout="wide")
    st.markdown(LOGO_CSS, unsafe_allow_html=True)
    st.markdown("<h2>Tickerboard</h2>", unsafe_allow_html=True)

    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = DashboardState(
            selected_range=dash_cfg.default_range,
            sort_by=dash_cfg.default_sort,
        )
    if ARENA_KEY not in st.session_state:
        st.session_state[ARENA_KEY] = ChartArena()

    # ==========================================================
    # Step 1 - Load data (symbols + summary, then every series)
    # ==========================================================
    try:
        data = fetch_dashboard_data(dash_cfg.data_source, config.logging.error_log)
        state = dispatch(DataLoaded(data))
    except DashboardLoadError as exc:
        logger.error(f"Dashboard load failed: {exc}")
        dispatch(LoadFailed(str(exc)))
        st.error("Data could not be loaded.")
        return

    st.caption(last_updated_label(state.summary))

    # ==========================================================
    # Step 2 - Controls feed the reducer
    # ==========================================================
    query, selected_range, sort_by = render_controls(state)
    dispatch(SetSearch(query))
    dispatch(SetRange(selected_range))
    state = dispatch(SetSort(sort_by))
    logger.info(
        f"Controls - search: {state.search_query!r}, range: {state.selected_range}, sort: {state.sort_by}"
    )

    # ==========================================================
    # Step 3 - Grid (full rebuild) and detail dialog
    # ==========================================================
    grid = build_grid(state, dash_cfg.sparkline_points)
    selected = render_grid(grid, st.session_state[ARENA_KEY])

    if selected:
        entry = next(e for e in state.symbols if e.key == selected)
        show_detail(
            build_detail(
                state,
                entry,
                window=dash_cfg.forecast_window,
                horizon=dash_cfg.forecast_horizon,
                recent_rows=dash_cfg.recent_rows,
            )
        )

    logger.info("Dashboard render complete.")


if __name__ == "__main__":
    main()
