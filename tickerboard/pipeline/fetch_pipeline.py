# tickerboard/pipeline/fetch_pipeline.py
"""
Fetch Pipeline
--------------
Downloads daily OHLCV data for every configured symbol and writes the JSON
files the dashboard reads.

Run guarantees:
- One best-effort sequential pass, no retries
- A failing symbol is logged and skipped, never aborts the run
- Series files are written before the summary file
- The summary only lists symbols processed in this run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from tickerboard.analytics.performance import summarize_series
from tickerboard.config.symbols import load_symbols
from tickerboard.data.price_source import PriceSourceError, StooqPriceSource
from tickerboard.data.schemas import Summary, SymbolSeries
from tickerboard.data.store import ensure_data_dir, write_series, write_summary
from tickerboard.monitoring.error_logging import ErrorComponent, ErrorLogger, FallbackReason
from tickerboard.utils.config import AppConfig, load_typed_config
from tickerboard.utils.logger import get_logger

logger = get_logger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class FetchReport:
    summary: Summary
    processed: List[str] = field(default_factory=list)
    skipped: Dict[str, str] = field(default_factory=dict)
    summary_path: Optional[Path] = None
    errors: Dict[str, Any] = field(default_factory=dict)


class FetchPipeline:
    """
    Orchestrates one fetch pass over the configured symbol list.
    """

    def __init__(self, config: Optional[AppConfig] = None, source: Optional[StooqPriceSource] = None) -> None:
        self.config = config or AppConfig()

        self.symbols_file = Path(self.config.paths.symbols_file)
        self.data_dir = Path(self.config.paths.data_dir)
        self.summary_file = self.config.paths.summary_file
        self.windows = list(self.config.performance.windows)

        self.source = source or StooqPriceSource(
            url_template=self.config.source.url_template,
            interval=self.config.source.interval,
            timeout=self.config.source.timeout,
        )
        self.errors = ErrorLogger(
            component=ErrorComponent.FETCHER,
            error_log_path=self.config.logging.error_log,
        )

        logger.info(
            "FetchPipeline initialized | symbols_file=%s | data_dir=%s | windows=%s",
            self.symbols_file,
            self.data_dir,
            self.windows,
        )

    @classmethod
    def from_config_path(cls, config_path: Optional[str] = None) -> "FetchPipeline":
        return cls(load_typed_config(config_path))

    # ------------------------------------------------------------------
    # Per-symbol step
    # ------------------------------------------------------------------
    def _process_symbol(self, symbol: str, summary: Summary) -> bool:
        """Fetch, summarize and persist one symbol. Returns False if it produced no data."""
        series = self.source.fetch_series(symbol)
        if not series:
            logger.warning(f"No data for {symbol}")
            return False

        entry = summarize_series(series, self.windows)
        write_series(
            self.data_dir,
            SymbolSeries(symbol=symbol, updatedAt=summary.lastUpdated, series=series),
        )
        summary.symbols[symbol] = entry
        return True

    @staticmethod
    def _reason_for(exc: Exception) -> FallbackReason:
        if isinstance(exc, (PriceSourceError, requests.exceptions.RequestException)):
            return FallbackReason.EXTERNAL_API_FAILURE
        if isinstance(exc, (ValueError, ValidationError)):
            return FallbackReason.CORRUPT_DATA
        return FallbackReason.UNKNOWN

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(self) -> FetchReport:
        """
        Execute the pass.

        Raises:
            SymbolConfigError: If the symbol list cannot be read.
            OSError: If the output directory or the summary file cannot be written.
        """
        ensure_data_dir(self.data_dir)
        symbols = load_symbols(self.symbols_file)

        summary = Summary(lastUpdated=utc_timestamp(), symbols={})
        report = FetchReport(summary=summary)

        for entry in symbols:
            symbol = entry.key
            try:
                if self._process_symbol(symbol, summary):
                    report.processed.append(symbol)
                else:
                    report.skipped[symbol] = FallbackReason.INSUFFICIENT_DATA.value
            except Exception as exc:
                reason = self._reason_for(exc)
                logger.error(f"Error fetching {symbol}: {exc}")
                self.errors.log_fallback(
                    reason=reason,
                    exception=exc,
                    context={"symbol": symbol},
                    fallback_action="Symbol skipped",
                )
                report.skipped[symbol] = reason.value

        try:
            report.summary_path = write_summary(self.data_dir, summary, self.summary_file)
        except OSError as exc:
            self.errors.log_error(
                "Summary could not be written",
                exception=exc,
                context={"data_dir": self.data_dir},
                severity="critical",
            )
            raise

        report.errors = self.errors.get_error_summary()
        logger.info(
            "Fetch run complete | processed=%d | skipped=%d",
            len(report.processed),
            len(report.skipped),
        )
        return report


def run_fetch(config: Optional[AppConfig] = None) -> FetchReport:
    """Entry point used by the CLI."""
    pipeline = FetchPipeline(config)
    try:
        return pipeline.run()
    finally:
        pipeline.source.close()
