import json
import logging

from tickerboard.monitoring.error_logging import ErrorComponent, ErrorLogger, FallbackReason


def test_log_fallback_records_context_and_reason():
    errors = ErrorLogger(component=ErrorComponent.FETCHER)

    record = errors.log_fallback(
        reason=FallbackReason.EXTERNAL_API_FAILURE,
        exception=RuntimeError("HTTP 503"),
        context={"symbol": "aapl.us"},
        fallback_action="Symbol skipped",
    )

    assert record["component"] == "fetcher"
    assert record["reason"] == "external_api_failure"
    assert record["exception_type"] == "RuntimeError"
    assert record["exception_message"] == "HTTP 503"
    assert record["context"] == {"symbol": "aapl.us"}
    assert record["fallback_action"] == "Symbol skipped"
    assert errors.fallback_count == 1


def test_log_fallback_without_exception_defaults_action():
    errors = ErrorLogger(component=ErrorComponent.DASHBOARD_LOADER)

    record = errors.log_fallback(reason=FallbackReason.MISSING_FILE)

    assert record["exception_type"] is None
    assert record["traceback"] is None
    assert record["fallback_action"] == "Skipped"


def test_log_error_uses_severity():
    base_logger = logging.getLogger("tickerboard.test_error_logging")
    errors = ErrorLogger(component=ErrorComponent.FETCHER, base_logger=base_logger)

    record = errors.log_error("Could not write summary", severity="critical")

    assert record["severity"] == "critical"
    assert errors.error_count == 1
    assert errors.fallback_count == 0


def test_records_appended_to_jsonl(tmp_path):
    path = tmp_path / "logs" / "errors.jsonl"
    errors = ErrorLogger(component=ErrorComponent.FETCHER, error_log_path=path)

    errors.log_fallback(reason=FallbackReason.CORRUPT_DATA, context={"symbol": "abc"})
    errors.log_error("second", context={"path": tmp_path})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first, second = (json.loads(line) for line in lines)
    assert first["reason"] == "corrupt_data"
    assert second["context"]["path"] == str(tmp_path)


def test_error_summary_keeps_last_ten():
    errors = ErrorLogger(component=ErrorComponent.FETCHER)
    for i in range(12):
        errors.log_fallback(reason=FallbackReason.UNKNOWN, context={"i": i})

    summary = errors.get_error_summary()

    assert summary["component"] == "fetcher"
    assert summary["total_fallbacks"] == 12
    assert summary["total_errors"] == 0
    assert len(summary["recent_errors"]) == 10
    assert summary["recent_errors"][0]["context"] == {"i": 2}
