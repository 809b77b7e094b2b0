# tickerboard/analytics/performance.py

from typing import Iterable, List, Optional, Sequence

from tickerboard.data.schemas import PricePoint, SymbolSummary

DEFAULT_WINDOWS = (7, 14, 30)


def performance_key(days: int) -> str:
    """Summary field name for an N-day trailing performance."""
    return f"performance_{days}d"


def calculate_performance(series: Sequence[PricePoint], days_back: int) -> Optional[float]:
    """
    Percent change of the latest close against the close ``days_back`` points earlier.

    Args:
        series: Price points ordered oldest to newest.
        days_back: Number of trading days to look back.

    Returns:
        Optional[float]: Percentage change, or None when the series is too
        short or either close is missing or the base close is zero.
    """
    if len(series) <= days_back:
        return None

    latest = series[-1].close
    previous = series[len(series) - 1 - days_back].close
    if latest is None or previous is None or previous == 0:
        return None
    return (latest - previous) / previous * 100


def summarize_series(series: List[PricePoint], windows: Iterable[int] = DEFAULT_WINDOWS) -> SymbolSummary:
    """Build the summary entry for a non-empty series."""
    if not series:
        raise ValueError("Cannot summarize an empty series")

    latest = series[-1]
    performance = {performance_key(days): calculate_performance(series, days) for days in windows}
    return SymbolSummary(latestClose=latest.close, latestDate=latest.date, **performance)
