from unittest.mock import MagicMock

import pytest
import requests

from tickerboard.data.price_source import PriceSourceError, StooqPriceSource
from tests.mocks.price_mocks import get_mock_response, get_stooq_csv


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


def test_build_url_fills_symbol_and_interval(session):
    source = StooqPriceSource(session=session)

    assert source.build_url("aapl.us") == "https://stooq.com/q/d/l/?s=aapl.us&i=d"


def test_fetch_csv_passes_timeout(session):
    session.get.return_value = get_mock_response(text="Date,Close\n2024-01-01,1\n")
    source = StooqPriceSource(interval="w", timeout=5.0, session=session)

    text = source.fetch_csv("abc")

    assert text.startswith("Date,Close")
    session.get.assert_called_once_with("https://stooq.com/q/d/l/?s=abc&i=w", timeout=5.0)


def test_fetch_csv_http_error_raises_price_source_error(session):
    session.get.return_value = get_mock_response(status_code=503)
    source = StooqPriceSource(session=session)

    with pytest.raises(PriceSourceError, match="503"):
        source.fetch_csv("abc")


def test_fetch_csv_connection_error_propagates(session):
    session.get.side_effect = requests.exceptions.ConnectionError("down")
    source = StooqPriceSource(session=session)

    with pytest.raises(requests.exceptions.ConnectionError):
        source.fetch_csv("abc")


def test_fetch_series_parses_payload(session):
    session.get.return_value = get_mock_response(text=get_stooq_csv(closes=(1.0, 2.0)))
    source = StooqPriceSource(session=session)

    series = source.fetch_series("abc")

    assert [p.close for p in series] == [1.0, 2.0]
