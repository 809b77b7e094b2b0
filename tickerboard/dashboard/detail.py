# tickerboard/dashboard/detail.py

from dataclasses import dataclass
from typing import List, Optional, Tuple

from tickerboard.analytics.forecast import (
    RecentRow,
    build_forecast,
    calculate_volatility,
    forecast_band,
    forecast_change,
    recent_activity,
)
from tickerboard.config.symbols import SymbolConfig
from tickerboard.dashboard.state import (
    DashboardState,
    format_percent,
    get_performance_value,
    series_for,
)
from tickerboard.data.schemas import PricePoint


@dataclass(frozen=True)
class DetailModel:
    title: str
    subtitle: str
    history: Tuple[PricePoint, ...]
    forecast: Tuple[float, ...]
    band: Tuple[Tuple[float, float], ...]
    volatility: float
    forecast_change: float
    performance: Optional[float]
    performance_text: str
    performance_tone: str
    summary_text: str
    recent: Tuple[RecentRow, ...]
    labels: Tuple[str, ...]


def performance_tone(performance: Optional[float]) -> str:
    if performance is None:
        return "muted"
    return "positive" if performance >= 0 else "negative"


def build_detail(
    state: DashboardState,
    entry: SymbolConfig,
    window: int = 30,
    horizon: int = 7,
    recent_rows: int = 10,
) -> DetailModel:
    """Forecast, volatility band and recent activity for one symbol."""
    series: List[PricePoint] = series_for(state, entry.key)
    history = series[-window:]
    closes = [p.close for p in history]

    forecast = build_forecast(closes, horizon)
    volatility = calculate_volatility(closes)
    last_actual = closes[-1] if closes else 0.0
    last_forecast = forecast[-1] if forecast else last_actual
    change = forecast_change(last_actual, last_forecast)

    performance = get_performance_value(state, entry.key)

    return DetailModel(
        title=entry.name,
        subtitle=entry.symbol.upper(),
        history=tuple(history),
        forecast=tuple(forecast),
        band=tuple(forecast_band(forecast, volatility)),
        volatility=volatility,
        forecast_change=change,
        performance=performance,
        performance_text=format_percent(performance),
        performance_tone=performance_tone(performance),
        summary_text=(
            f"Expected change ({horizon} days): {format_percent(change)} "
            f"| Volatility: {volatility * 100:.2f}%"
        ),
        recent=tuple(recent_activity(series, recent_rows)),
        labels=tuple([p.date for p in history] + [f"+{i}" for i in range(1, horizon + 1)]),
    )
