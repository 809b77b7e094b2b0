# tickerboard/dashboard/utils.py

import logging

from tickerboard.utils.logger import get_logger


def get_ui_logger(name: str = "tickerboard.dashboard") -> logging.Logger:
    """Logger for the Streamlit modules, under the ``tickerboard`` hierarchy."""
    if not name.startswith("tickerboard."):
        name = f"tickerboard.dashboard.{name}"
    return get_logger(name)


# -------------------------------
# Dashboard Constants
# -------------------------------
BADGE_COLORS = {"positive": "#16a34a", "negative": "#dc2626", "neutral": "#6b7280"}
TONE_COLORS = {"positive": "#16a34a", "negative": "#dc2626", "muted": "#6b7280"}
STATUS_CAPTIONS = {
    "missing": "No price file for this symbol yet.",
    "failed": "Price data could not be loaded.",
}
CARD_COLUMNS = 3
