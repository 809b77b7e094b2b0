import math

import pytest

from tickerboard.analytics.forecast import (
    build_forecast,
    calculate_regression,
    calculate_volatility,
    forecast_band,
    forecast_change,
    recent_activity,
)
from tests.mocks.price_mocks import get_price_points


class TestRegression:
    def test_linear_closes(self):
        regression = calculate_regression([1, 2, 3, 4, 5])

        assert regression.slope == pytest.approx(1.0)
        assert regression.intercept == pytest.approx(1.0)

    def test_forecast_continues_the_line(self):
        forecast = build_forecast([1, 2, 3, 4, 5], 7)

        assert forecast[0] == pytest.approx(6.0)
        assert forecast[1] == pytest.approx(7.0)
        assert forecast == pytest.approx([6, 7, 8, 9, 10, 11, 12])

    def test_empty_series(self):
        regression = calculate_regression([])

        assert regression.slope == 0
        assert regression.intercept == 0
        assert build_forecast([], 3) == [0.0, 0.0, 0.0]

    def test_single_point_has_zero_slope(self):
        regression = calculate_regression([42.0])

        assert regression.slope == 0
        assert regression.intercept == pytest.approx(42.0)
        assert build_forecast([42.0], 2) == pytest.approx([42.0, 42.0])

    def test_flat_series(self):
        assert calculate_regression([3.0, 3.0, 3.0]).slope == pytest.approx(0.0)

    def test_falling_series(self):
        regression = calculate_regression([10.0, 8.0, 6.0])

        assert regression.slope == pytest.approx(-2.0)
        assert regression.intercept == pytest.approx(10.0)


class TestVolatility:
    @pytest.mark.parametrize("values", [[], [100.0]])
    def test_fewer_than_two_points_is_zero(self, values):
        assert calculate_volatility(values) == 0

    def test_constant_returns_have_zero_volatility(self):
        assert calculate_volatility([100.0, 110.0, 121.0]) == pytest.approx(0.0)

    def test_two_alternating_returns(self):
        # returns: +0.10, -0.10 -> mean 0, sample variance 0.02
        assert calculate_volatility([100.0, 110.0, 99.0]) == pytest.approx(math.sqrt(0.02))

    def test_single_usable_return_is_zero(self):
        assert calculate_volatility([100.0, 110.0]) == 0

    def test_zero_previous_is_skipped(self):
        assert calculate_volatility([0.0, 10.0, 11.0]) == pytest.approx(0.0)

    def test_no_usable_returns_is_zero(self):
        result = calculate_volatility([0.0, 0.0])

        assert result == 0
        assert not math.isnan(result)


def test_forecast_band_is_proportional():
    band = forecast_band([100.0, 200.0], 0.05)

    assert band[0] == pytest.approx((95.0, 105.0))
    assert band[1] == pytest.approx((190.0, 210.0))


@pytest.mark.parametrize(
    "last_actual, last_forecast, expected",
    [(100.0, 110.0, 10.0), (100.0, 90.0, -10.0), (0.0, 50.0, 0.0)],
)
def test_forecast_change(last_actual, last_forecast, expected):
    assert forecast_change(last_actual, last_forecast) == pytest.approx(expected)


class TestRecentActivity:
    def test_most_recent_first_with_day_over_day_change(self):
        series = get_price_points([100.0, 110.0, 99.0])

        rows = recent_activity(series)

        assert [r.date for r in rows] == [series[2].date, series[1].date, series[0].date]
        assert rows[0].change == pytest.approx(-10.0)
        assert rows[1].change == pytest.approx(10.0)
        assert rows[2].change == 0

    def test_limited_to_requested_rows(self):
        series = get_price_points([float(i) for i in range(1, 21)])

        rows = recent_activity(series, rows=10)

        assert len(rows) == 10
        assert rows[0].close == 20.0
        assert rows[-1].close == 11.0
        assert rows[-1].change == pytest.approx((11.0 - 10.0) / 10.0 * 100)

    def test_previous_zero_close_reports_zero(self):
        rows = recent_activity(get_price_points([0.0, 5.0]))

        assert rows[0].change == 0

    def test_empty_series(self):
        assert recent_activity([]) == []
