# tickerboard/dashboard/loader.py
"""
Dashboard data loading.

Loads the symbol list and the summary concurrently, then every per-symbol
series concurrently. A per-symbol failure never fails the load: the symbol
gets an empty series and a status telling whether its file was missing or
could not be loaded. Only a failure of the symbol list or the summary is
fatal.
"""

import asyncio
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from tickerboard.config.symbols import SymbolConfig, parse_symbols
from tickerboard.data.schemas import Summary, SymbolSeries
from tickerboard.monitoring.error_logging import ErrorComponent, ErrorLogger, FallbackReason
from tickerboard.utils.logger import get_logger

logger = get_logger(__name__)

SYMBOLS_PATH = "config/symbols.json"
SUMMARY_PATH = "data/summary.json"


class SourceNotFound(Exception):
    """The requested file does not exist (missing file or HTTP 404)."""


class DashboardLoadError(Exception):
    """The symbol list or the summary could not be loaded."""


class SeriesStatus(str, Enum):
    OK = "ok"
    MISSING = "missing"
    FAILED = "failed"


# -------------------------------
# Sources
# -------------------------------
class LocalFileSource:
    """Reads the JSON contract from a directory holding ``config/`` and ``data/``."""

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)

    async def get_json(self, path: str) -> Any:
        file_path = self.root / path
        try:
            text = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise SourceNotFound(str(file_path)) from e
        return json.loads(text)

    async def aclose(self) -> None:
        return None


class HttpSource:
    """Reads the JSON contract over HTTP, e.g. from ``main.py serve``."""

    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient()

    async def get_json(self, path: str) -> Any:
        url = f"{self.base_url}/{path}"
        response = await self.client.get(url)
        if response.status_code == 404:
            raise SourceNotFound(url)
        response.raise_for_status()
        return response.json()

    async def aclose(self) -> None:
        await self.client.aclose()


def make_source(data_source: str) -> Union[LocalFileSource, HttpSource]:
    """Pick the source type from the configured location."""
    if data_source.startswith(("http://", "https://")):
        return HttpSource(data_source)
    return LocalFileSource(data_source)


# -------------------------------
# Loaded data
# -------------------------------
@dataclass
class DashboardData:
    symbols: List[SymbolConfig]
    summary: Summary
    series: Dict[str, SymbolSeries] = field(default_factory=dict)
    statuses: Dict[str, SeriesStatus] = field(default_factory=dict)


class DashboardLoader:
    """
    Loads everything the dashboard renders from one source.

    Attributes:
        source: LocalFileSource or HttpSource.
        errors (ErrorLogger): Records each per-symbol fallback.
    """

    def __init__(self, source, error_log_path: Optional[str] = None):
        self.source = source
        self.errors = ErrorLogger(
            component=ErrorComponent.DASHBOARD_LOADER,
            error_log_path=error_log_path,
        )

    async def load_series(self, symbol: str) -> Tuple[str, SymbolSeries, SeriesStatus]:
        """Load one series file; failures resolve to an empty series."""
        path = f"data/{symbol}.json"
        try:
            data = await self.source.get_json(path)
            return symbol, SymbolSeries(**data), SeriesStatus.OK
        except SourceNotFound as exc:
            self.errors.log_fallback(
                reason=FallbackReason.MISSING_FILE,
                exception=exc,
                context={"symbol": symbol, "path": path},
                fallback_action="Empty series",
            )
            return symbol, SymbolSeries(symbol=symbol), SeriesStatus.MISSING
        except Exception as exc:
            self.errors.log_fallback(
                reason=FallbackReason.CORRUPT_DATA
                if isinstance(exc, (ValueError, ValidationError, TypeError))
                else FallbackReason.EXTERNAL_API_FAILURE,
                exception=exc,
                context={"symbol": symbol, "path": path},
                fallback_action="Empty series",
            )
            return symbol, SymbolSeries(symbol=symbol), SeriesStatus.FAILED

    async def load(self) -> DashboardData:
        """
        Load the symbol list, the summary and every series.

        Raises:
            DashboardLoadError: If the symbol list or the summary cannot be loaded.
        """
        try:
            raw_symbols, raw_summary = await asyncio.gather(
                self.source.get_json(SYMBOLS_PATH),
                self.source.get_json(SUMMARY_PATH),
            )
            symbols = parse_symbols(raw_symbols)
            summary = Summary(**raw_summary)
        except Exception as exc:
            logger.error(f"Dashboard data could not be loaded: {exc}")
            raise DashboardLoadError(str(exc)) from exc

        results = await asyncio.gather(*(self.load_series(entry.key) for entry in symbols))

        data = DashboardData(symbols=symbols, summary=summary)
        for symbol, series, status in results:
            data.series[symbol] = series
            data.statuses[symbol] = status

        logger.info(
            "Dashboard data loaded | symbols=%d | missing=%d | failed=%d",
            len(symbols),
            sum(1 for s in data.statuses.values() if s is SeriesStatus.MISSING),
            sum(1 for s in data.statuses.values() if s is SeriesStatus.FAILED),
        )
        return data


async def load_dashboard_data(data_source: str = ".", error_log_path: Optional[str] = None) -> DashboardData:
    """Open a source for ``data_source``, load everything and close the source."""
    source = make_source(data_source)
    try:
        return await DashboardLoader(source, error_log_path=error_log_path).load()
    finally:
        await source.aclose()
