import math

import pytest

from tickerboard.config.symbols import SymbolConfig
from tickerboard.dashboard.detail import build_detail, performance_tone
from tickerboard.dashboard.loader import DashboardData
from tickerboard.dashboard.state import DashboardState, DataLoaded, SetRange, reduce
from tickerboard.data.schemas import Summary
from tests.mocks.price_mocks import get_summary, get_symbol_series


@pytest.fixture
def entry():
    return SymbolConfig(symbol="ABC", name="Abc Corp", domain="abc.com")


def _state(entry, closes, summary=None):
    data = DashboardData(
        symbols=[entry],
        summary=summary or get_summary(),
        series={"abc": get_symbol_series("abc", closes=closes)} if closes is not None else {},
    )
    return reduce(DashboardState(), DataLoaded(data))


def test_detail_forecast_uses_last_window(entry):
    closes = [1000.0] * 10 + [float(i) for i in range(1, 31)]
    detail = build_detail(_state(entry, closes), entry)

    assert len(detail.history) == 30
    assert detail.history[0].close == 1.0
    assert detail.forecast == pytest.approx(tuple(float(i) for i in range(31, 38)))
    assert detail.labels[-7:] == ("+1", "+2", "+3", "+4", "+5", "+6", "+7")
    assert len(detail.labels) == 37
    assert detail.forecast_change == pytest.approx((37.0 - 30.0) / 30.0 * 100)


def test_detail_band_and_summary_text(entry):
    detail = build_detail(_state(entry, [100.0, 110.0, 99.0]), entry)

    volatility = math.sqrt(0.02)
    assert detail.volatility == pytest.approx(volatility)
    lower, upper = detail.band[0]
    assert lower == pytest.approx(detail.forecast[0] * (1 - volatility))
    assert upper == pytest.approx(detail.forecast[0] * (1 + volatility))
    assert detail.summary_text.startswith("Expected change (7 days): ")
    assert detail.summary_text.endswith("| Volatility: 14.14%")


def test_detail_recent_rows(entry):
    closes = [float(i) for i in range(1, 16)]
    detail = build_detail(_state(entry, closes), entry)

    assert len(detail.recent) == 10
    assert detail.recent[0].close == 15.0


def test_detail_without_series(entry):
    detail = build_detail(_state(entry, None), entry)

    assert detail.history == ()
    assert detail.forecast == (0.0,) * 7
    assert detail.volatility == 0
    assert detail.forecast_change == 0
    assert detail.recent == ()


def test_detail_performance_follows_selected_range(entry):
    state = _state(entry, [1.0, 2.0])

    assert build_detail(state, entry).performance_text == "5.25%"
    assert build_detail(state, entry).performance_tone == "positive"

    week = build_detail(reduce(state, SetRange(7)), entry)
    assert week.performance_text == "-1.50%"
    assert week.performance_tone == "negative"

    fortnight = build_detail(reduce(state, SetRange(14)), entry)
    assert fortnight.performance_text == "—"
    assert fortnight.performance_tone == "muted"


def test_detail_titles(entry):
    detail = build_detail(_state(entry, [1.0], summary=Summary()), entry)

    assert detail.title == "Abc Corp"
    assert detail.subtitle == "ABC"


def test_performance_tone():
    assert performance_tone(None) == "muted"
    assert performance_tone(0.0) == "positive"
    assert performance_tone(-0.1) == "negative"
