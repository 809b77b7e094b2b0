# tickerboard/dashboard/ui_components.py

import html
from typing import Tuple

import pandas as pd
import streamlit as st

from tickerboard.dashboard.charts import ChartArena, detail_figure, sparkline_figure
from tickerboard.dashboard.detail import DetailModel
from tickerboard.dashboard.state import (
    RANGE_OPTIONS,
    SORT_OPTIONS,
    CardModel,
    DashboardState,
    GridModel,
    format_number,
    format_percent,
)
from tickerboard.dashboard.utils import (
    BADGE_COLORS,
    CARD_COLUMNS,
    STATUS_CAPTIONS,
    TONE_COLORS,
    get_ui_logger,
)
from tickerboard.validation.sanitizer import InputSanitizer

logger = get_ui_logger("tickerboard.dashboard.ui_components")

SORT_LABELS = {"performance": "Performance", "name": "Name"}

SEARCH_KEY = "tb_search"
RANGE_KEY = "tb_range"
SORT_KEY = "tb_sort"


# ==========================================================
# Controls
# ==========================================================
def render_controls(state: DashboardState) -> Tuple[str, int, str]:
    """
    Render the search, range and sort controls.

    The widgets own their values through stable keys; they are seeded from
    ``state`` on the first run only, so an edit is never overwritten by the
    value dispatched on the previous run.

    Returns:
        tuple: (search_query, selected_range, sort_by)
    """
    seeds = {
        SEARCH_KEY: state.search_query,
        RANGE_KEY: InputSanitizer.sanitize_range(state.selected_range, RANGE_OPTIONS),
        SORT_KEY: state.sort_by,
    }
    for key, value in seeds.items():
        if key not in st.session_state:
            st.session_state[key] = value

    search_col, range_col, sort_col = st.columns([3, 1, 1])

    query = search_col.text_input("Search", key=SEARCH_KEY, placeholder="Name or symbol")
    selected_range = range_col.selectbox("Range (days)", options=list(RANGE_OPTIONS), key=RANGE_KEY)
    sort_by = sort_col.selectbox(
        "Sort by",
        options=list(SORT_OPTIONS),
        key=SORT_KEY,
        format_func=lambda x: SORT_LABELS[x],
    )
    return query, int(selected_range), sort_by


# ==========================================================
# Cards
# ==========================================================
def _logo_html(card: CardModel) -> str:
    initials = html.escape(card.initials)
    fallback = f"<div class='tb-logo-fallback'>{initials}</div>"
    if not card.logo_url:
        return fallback
    # <object> renders its children when the image cannot be loaded
    return (
        f"<object class='tb-logo' data='{html.escape(card.logo_url)}' type='image/png'>"
        f"{fallback}</object>"
    )


def _badge_html(card: CardModel) -> str:
    color = BADGE_COLORS.get(card.badge.tone, BADGE_COLORS["neutral"])
    return (
        f"<span style='background:{color};color:white;padding:2px 8px;"
        f"border-radius:999px;font-size:0.85em'>{html.escape(card.badge.text)}</span>"
    )


def render_card(card: CardModel, arena: ChartArena) -> bool:
    """
    Render one card. Returns True when its "Details" button was pressed.
    """
    with st.container(border=True):
        st.markdown(
            f"<div style='display:flex;gap:10px;align-items:center'>{_logo_html(card)}"
            f"<div><strong>{html.escape(card.name)}</strong><br>"
            f"<span style='color:#6b7280'>{html.escape(card.symbol)}</span></div></div>",
            unsafe_allow_html=True,
        )
        st.markdown(
            f"<div style='font-size:1.4em;font-weight:600'>{card.price_text}</div>"
            f"<div style='color:#6b7280'>{html.escape(card.date_text)}</div>",
            unsafe_allow_html=True,
        )

        if card.has_data:
            figure = arena.add(card.key, sparkline_figure(card.sparkline))
            st.plotly_chart(
                figure,
                width="stretch",
                key=f"spark-{card.key}",
                config={"displayModeBar": False, "staticPlot": True},
            )
        else:
            st.caption(STATUS_CAPTIONS.get(card.status.value, "No data"))

        badge_col, button_col = st.columns([2, 1])
        badge_col.markdown(_badge_html(card), unsafe_allow_html=True)
        return button_col.button("Details", key=f"details-{card.key}")


def render_grid(grid: GridModel, arena: ChartArena) -> str:
    """
    Render every card, or the empty-state placeholder.

    Returns:
        str: Key of the card whose details were requested, or "".
    """
    arena.reset()

    if grid.empty:
        st.info("No symbols match your search.")
        return ""

    selected = ""
    columns = st.columns(CARD_COLUMNS)
    for index, card in enumerate(grid.cards):
        with columns[index % CARD_COLUMNS]:
            if render_card(card, arena):
                selected = card.key

    logger.info(f"Rendered {len(grid.cards)} cards with {len(arena)} sparklines")
    return selected


# ==========================================================
# Detail dialog
# ==========================================================
def render_detail(detail: DetailModel) -> None:
    st.markdown(f"#### {html.escape(detail.title)}  \n`{html.escape(detail.subtitle)}`")

    color = TONE_COLORS[detail.performance_tone]
    st.markdown(
        f"Performance: <span style='color:{color};font-weight:600'>"
        f"{detail.performance_text}</span>",
        unsafe_allow_html=True,
    )
    st.caption(detail.summary_text)

    st.plotly_chart(detail_figure(detail), width="stretch", key="detail-chart")

    table = pd.DataFrame(
        {
            "Date": [row.date for row in detail.recent],
            "Close": [format_number(row.close) for row in detail.recent],
            "Change": [format_percent(row.change) for row in detail.recent],
        }
    )
    st.dataframe(table, hide_index=True, width="stretch")
