import requests
from typing import List, Optional

from tickerboard.data.csv_parser import parse_price_csv
from tickerboard.data.schemas import PricePoint
from tickerboard.utils.config import STOOQ_URL_TEMPLATE
from tickerboard.utils.logger import get_logger


class PriceSourceError(Exception):
    """Raised when the CSV endpoint answers with a non-success status."""


class StooqPriceSource:
    """
    Fetches daily OHLCV CSV payloads from the Stooq download endpoint.

    Attributes:
        url_template (str): URL with ``{symbol}`` and ``{interval}`` placeholders.
        interval (str): Stooq interval code ("d" daily, "w" weekly, "m" monthly).
        timeout (Optional[float]): Request timeout in seconds; None waits indefinitely.
        session (requests.Session): Shared HTTP session.
    """

    def __init__(
        self,
        url_template: str = STOOQ_URL_TEMPLATE,
        interval: str = "d",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url_template = url_template
        self.interval = interval
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = get_logger(f"tickerboard.{self.__class__.__name__}")

    def build_url(self, symbol: str) -> str:
        return self.url_template.format(symbol=symbol, interval=self.interval)

    def fetch_csv(self, symbol: str) -> str:
        """
        Download the raw CSV text for one symbol.

        Raises:
            PriceSourceError: On a 4xx/5xx response.
            requests.exceptions.RequestException: On connection-level failures.
        """
        url = self.build_url(symbol)
        self.logger.info(f"Sending GET request: {url}")
        response = self.session.get(url, timeout=self.timeout)
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as http_err:
            raise PriceSourceError(
                f"Failed to fetch {symbol}: {response.status_code}"
            ) from http_err
        return response.text

    def fetch_series(self, symbol: str) -> List[PricePoint]:
        """Download and normalize the full price history for ``symbol``."""
        series = parse_price_csv(self.fetch_csv(symbol))
        self.logger.info(f"Parsed {len(series)} price points for {symbol}")
        return series

    def close(self) -> None:
        self.session.close()
