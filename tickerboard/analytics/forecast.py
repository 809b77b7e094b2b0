# tickerboard/analytics/forecast.py
"""
Forecast math for the detail view.

A straight-line least-squares fit over the most recent closes is projected
forward a few days, and the spread of day-over-day returns is used as a
proportional uncertainty band around it. This is a visual guide, not a
statistical model: the band is not a confidence interval.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from tickerboard.data.schemas import PricePoint


class Regression(NamedTuple):
    slope: float
    intercept: float


@dataclass(frozen=True)
class RecentRow:
    date: str
    close: float
    change: float


def calculate_regression(values: Sequence[float]) -> Regression:
    """
    Ordinary least squares fit of ``value = intercept + slope * index``.

    Index positions run ``0..n-1``. An empty input, or a single value (zero
    variance in the index), yields a slope of 0.
    """
    n = len(values)
    if n == 0:
        return Regression(slope=0.0, intercept=0.0)

    x = np.arange(n, dtype=float)
    y = np.asarray(values, dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()

    denominator = n * sum_x2 - sum_x * sum_x
    slope = 0.0 if denominator == 0 else (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return Regression(slope=float(slope), intercept=float(intercept))


def build_forecast(values: Sequence[float], forecast_days: int = 7) -> List[float]:
    """Project the regression line ``forecast_days`` points past the last value."""
    slope, intercept = calculate_regression(values)
    n = len(values)
    return [intercept + slope * (n - 1 + step) for step in range(1, forecast_days + 1)]


def calculate_volatility(values: Sequence[float]) -> float:
    """
    Sample standard deviation of simple day-over-day returns (not annualized).

    Steps whose previous value is 0 are skipped. Fewer than two usable
    returns gives 0.
    """
    if len(values) < 2:
        return 0.0

    returns = [
        (curr - prev) / prev
        for prev, curr in zip(values[:-1], values[1:])
        if prev != 0
    ]
    if len(returns) < 2:
        return 0.0
    return float(np.std(np.asarray(returns, dtype=float), ddof=1))


def forecast_band(forecast: Sequence[float], volatility: float) -> List[Tuple[float, float]]:
    """``(lower, upper)`` envelope of +/- ``volatility`` around each forecast point."""
    return [(value * (1 - volatility), value * (1 + volatility)) for value in forecast]


def forecast_change(last_actual: float, last_forecast: float) -> float:
    """Percent change from the last actual close to the last forecast point."""
    if not last_actual:
        return 0.0
    return (last_forecast - last_actual) / last_actual * 100


def recent_activity(series: Sequence[PricePoint], rows: int = 10) -> List[RecentRow]:
    """
    Last ``rows`` points, most recent first, with the percent change against
    the previous chronological close. The first point of the series, and any
    point following a zero close, reports a change of 0.
    """
    result = []
    start = max(len(series) - rows, 0)
    for position in range(len(series) - 1, start - 1, -1):
        item = series[position]
        prev = series[position - 1].close if position > 0 else item.close
        change = 0.0 if not prev else (item.close - prev) / prev * 100
        result.append(RecentRow(date=item.date, close=item.close, change=change))
    return result
