# tickerboard/monitoring/error_logging.py
"""
Structured error logging for the fetcher and the dashboard loader.

A skipped symbol or an empty-series fallback is recorded with its component,
a reason code and the symbol it concerns. Records stay in memory for the run
report and, when ``logging.error_log`` is configured, are appended to a JSONL
file.
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tickerboard.utils.logger import get_logger

RECENT_LIMIT = 10


class ErrorComponent(Enum):
    FETCHER = "fetcher"
    DASHBOARD_LOADER = "dashboard_loader"


class FallbackReason(Enum):
    """Why a symbol was skipped or replaced by an empty series."""
    EXTERNAL_API_FAILURE = "external_api_failure"
    CORRUPT_DATA = "corrupt_data"
    INSUFFICIENT_DATA = "insufficient_data"
    MISSING_FILE = "missing_file"
    UNKNOWN = "unknown"


class ErrorLogger:
    """
    Component-tagged error records.

    Usage:
        errors = ErrorLogger(ErrorComponent.FETCHER, error_log_path="logs/error_log.jsonl")
        try:
            series = source.fetch_series(symbol)
        except PriceSourceError as exc:
            errors.log_fallback(
                FallbackReason.EXTERNAL_API_FAILURE,
                exception=exc,
                context={"symbol": symbol},
                fallback_action="Symbol skipped",
            )
    """

    def __init__(
        self,
        component: ErrorComponent,
        base_logger: Optional[logging.Logger] = None,
        error_log_path: Optional[Union[str, Path]] = None,
    ):
        self.component = component
        self.logger = base_logger or get_logger(f"tickerboard.error.{component.value}")

        self.error_count = 0
        self.fallback_count = 0
        self.error_history: List[Dict[str, Any]] = []

        self.error_log_path = Path(error_log_path) if error_log_path else None
        if self.error_log_path is not None:
            self.error_log_path.parent.mkdir(parents=True, exist_ok=True)

    def _record(self, exception: Optional[BaseException], context: Optional[Dict[str, Any]], **fields) -> Dict[str, Any]:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "component": self.component.value,
            **fields,
            "exception_type": type(exception).__name__ if exception else None,
            "exception_message": str(exception) if exception else None,
            "traceback": _format_traceback(exception),
            "context": context or {},
        }
        self.error_history.append(record)
        self._persist_error(record)
        return record

    def _prefix(self, context: Optional[Dict[str, Any]]) -> str:
        tags = " ".join(f"{k}={v}" for k, v in (context or {}).items())
        return f"[{self.component.value.upper()}] {tags}".rstrip()

    def log_fallback(
        self,
        reason: FallbackReason,
        exception: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
        fallback_action: str = "Skipped",
    ) -> Dict[str, Any]:
        """
        Record work that was skipped or replaced by a fallback value.

        Args:
            reason: Reason code for the fallback.
            exception: Exception that caused it, if any.
            context: Identifying fields such as the symbol or file path.
            fallback_action: What was done instead.

        Returns:
            Dict[str, Any]: The stored record.
        """
        self.fallback_count += 1
        record = self._record(
            exception,
            context,
            reason=reason.value,
            fallback_count=self.fallback_count,
            fallback_action=fallback_action,
        )
        detail = f": {exception}" if exception else ""
        self.logger.warning(f"{self._prefix(context)} {reason.value}{detail} -> {fallback_action}")
        return record

    def log_error(
        self,
        error_msg: str,
        exception: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
        severity: str = "error",
    ) -> Dict[str, Any]:
        """Record an error that does not substitute any value."""
        self.error_count += 1
        record = self._record(exception, context, message=error_msg, severity=severity)
        log_func = getattr(self.logger, severity, self.logger.error)
        log_func(f"{self._prefix(context)} {error_msg}")
        return record

    def _persist_error(self, record: Dict[str, Any]) -> None:
        if self.error_log_path is None:
            return
        try:
            with open(self.error_log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(record, default=str) + "\n")
        except OSError as e:
            self.logger.error(f"Failed to write error log {self.error_log_path}: {e}")

    def get_error_summary(self) -> Dict[str, Any]:
        """Counts plus the most recent records."""
        return {
            "component": self.component.value,
            "total_errors": self.error_count,
            "total_fallbacks": self.fallback_count,
            "recent_errors": self.error_history[-RECENT_LIMIT:],
        }


def _format_traceback(exception: Optional[BaseException]) -> Optional[str]:
    if exception is None:
        return None
    return "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
