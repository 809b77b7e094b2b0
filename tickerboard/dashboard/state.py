# tickerboard/dashboard/state.py
"""
Dashboard state and the pure transformations behind the card grid.

The state is an immutable dataclass. Controls dispatch actions through
``reduce`` and the view renders whatever ``build_grid`` returns for the new
state, so nothing here touches Streamlit.
"""

import locale
import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple, Union

from tickerboard.analytics.performance import performance_key
from tickerboard.config.symbols import SymbolConfig
from tickerboard.dashboard.loader import DashboardData, SeriesStatus
from tickerboard.data.csv_parser import to_number
from tickerboard.data.schemas import PricePoint, Summary, SymbolSeries
from tickerboard.validation.sanitizer import InputSanitizer

PLACEHOLDER = "—"
RANGE_OPTIONS = (7, 14, 30)
SORT_OPTIONS = ("performance", "name")
LOGO_URL_TEMPLATE = "https://logo.clearbit.com/{domain}"


# -------------------------------
# State + actions
# -------------------------------
@dataclass(frozen=True)
class DashboardState:
    symbols: Tuple[SymbolConfig, ...] = ()
    summary: Optional[Summary] = None
    series: Dict[str, SymbolSeries] = field(default_factory=dict)
    statuses: Dict[str, SeriesStatus] = field(default_factory=dict)
    selected_range: int = 30
    sort_by: str = "performance"
    search_query: str = ""
    load_error: Optional[str] = None


@dataclass(frozen=True)
class SetSearch:
    query: str


@dataclass(frozen=True)
class SetRange:
    days: int


@dataclass(frozen=True)
class SetSort:
    sort_by: str


@dataclass(frozen=True)
class DataLoaded:
    data: DashboardData


@dataclass(frozen=True)
class LoadFailed:
    message: str


Action = Union[SetSearch, SetRange, SetSort, DataLoaded, LoadFailed]


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Return the state that results from applying ``action``."""
    if isinstance(action, SetSearch):
        return replace(state, search_query=action.query or "")
    if isinstance(action, SetRange):
        return replace(state, selected_range=InputSanitizer.sanitize_range(action.days, RANGE_OPTIONS))
    if isinstance(action, SetSort):
        if action.sort_by not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort mode: {action.sort_by}")
        return replace(state, sort_by=action.sort_by)
    if isinstance(action, DataLoaded):
        return replace(
            state,
            symbols=tuple(action.data.symbols),
            summary=action.data.summary,
            series=dict(action.data.series),
            statuses=dict(action.data.statuses),
            load_error=None,
        )
    if isinstance(action, LoadFailed):
        return replace(state, load_error=action.message)
    raise TypeError(f"Unsupported action: {action!r}")


# -------------------------------
# Formatting
# -------------------------------
def format_number(value, digits: int = 2) -> str:
    number = to_number(value)
    if number is None:
        return PLACEHOLDER
    return f"{number:.{digits}f}"


def format_percent(value) -> str:
    number = to_number(value)
    if number is None:
        return PLACEHOLDER
    return f"{number:.2f}%"


def last_updated_label(summary: Optional[Summary]) -> str:
    if summary is None or not summary.lastUpdated:
        return "No updated data available."
    raw = summary.lastUpdated
    try:
        stamp = datetime.fromisoformat(raw.replace("Z", "+00:00")).astimezone()
    except ValueError:
        return f"Last update: {raw}"
    return f"Last update: {stamp.strftime('%Y-%m-%d %H:%M:%S')}"


# -------------------------------
# Filter / sort
# -------------------------------
def get_performance_value(state: DashboardState, symbol: str) -> Optional[float]:
    """Performance of ``symbol`` for the selected range, or None if unavailable."""
    if state.summary is None:
        return None
    entry = state.summary.symbols.get(symbol.lower())
    if entry is None:
        return None
    return to_number(getattr(entry, performance_key(state.selected_range), None))


def filter_entries(symbols: Sequence[SymbolConfig], query: str) -> List[SymbolConfig]:
    """Keep entries whose "<name> <symbol>" contains ``query``, case-insensitively."""
    needle = (query or "").lower()
    return [entry for entry in symbols if needle in f"{entry.name} {entry.symbol}".lower()]


def _name_key(entry: SymbolConfig):
    return (locale.strxfrm(entry.name.casefold()), entry.name)


def sort_entries(entries: Sequence[SymbolConfig], state: DashboardState) -> List[SymbolConfig]:
    """
    Order by name ascending, or by the selected-range performance descending
    with entries lacking a value placed last.
    """
    if state.sort_by == "name":
        return sorted(entries, key=_name_key)

    def perf_key(entry: SymbolConfig):
        value = get_performance_value(state, entry.key)
        return (value is None, -value if value is not None else 0.0)

    return sorted(entries, key=perf_key)


def visible_entries(state: DashboardState) -> List[SymbolConfig]:
    return sort_entries(filter_entries(state.symbols, state.search_query), state)


# -------------------------------
# Card view-models
# -------------------------------
@dataclass(frozen=True)
class Badge:
    tone: str
    text: str


@dataclass(frozen=True)
class CardModel:
    key: str
    symbol: str
    name: str
    logo_url: Optional[str]
    initials: str
    price_text: str
    date_text: str
    badge: Badge
    sparkline: Tuple[PricePoint, ...]
    status: SeriesStatus

    @property
    def has_data(self) -> bool:
        return len(self.sparkline) > 0


@dataclass(frozen=True)
class GridModel:
    cards: Tuple[CardModel, ...]

    @property
    def empty(self) -> bool:
        return not self.cards


def initials_for(name: str) -> str:
    """Up to two upper-case initials, used when the logo cannot be shown."""
    return "".join(chunk[0] for chunk in name.split(" ") if chunk)[:2].upper()


def badge_for(performance: Optional[float]) -> Badge:
    if performance is None or math.isnan(performance):
        return Badge(tone="neutral", text="No data")
    if performance >= 0:
        return Badge(tone="positive", text=f"▲ {format_percent(performance)}")
    return Badge(tone="negative", text=f"▼ {format_percent(performance)}")


def series_for(state: DashboardState, symbol: str) -> List[PricePoint]:
    entry = state.series.get(symbol.lower())
    return list(entry.series) if entry is not None else []


def build_card(state: DashboardState, entry: SymbolConfig, sparkline_points: int = 20) -> CardModel:
    key = entry.key
    series = series_for(state, key)
    summary_entry = state.summary.symbols.get(key) if state.summary is not None else None

    latest_close = summary_entry.latestClose if summary_entry is not None else None
    latest_date = summary_entry.latestDate if summary_entry is not None else None
    if latest_close is None and series:
        latest_close = series[-1].close
    if latest_date is None and series:
        latest_date = series[-1].date

    return CardModel(
        key=key,
        symbol=entry.symbol.upper(),
        name=entry.name,
        logo_url=LOGO_URL_TEMPLATE.format(domain=entry.domain) if entry.domain else None,
        initials=initials_for(entry.name),
        price_text=format_number(latest_close),
        date_text=latest_date or PLACEHOLDER,
        badge=badge_for(get_performance_value(state, key)),
        sparkline=tuple(series[-sparkline_points:]),
        status=state.statuses.get(key, SeriesStatus.OK if series else SeriesStatus.MISSING),
    )


def build_grid(state: DashboardState, sparkline_points: int = 20) -> GridModel:
    """Filter, sort and build one card per remaining entry."""
    return GridModel(
        cards=tuple(build_card(state, entry, sparkline_points) for entry in visible_entries(state))
    )
