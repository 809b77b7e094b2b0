import logging

from tickerboard.utils.logger import configure_root_logging, get_logger


def test_console_logging(capsys):
    """Test that logger prints to stderr when no log_file is provided."""
    logger = get_logger("test_console_logger", level="INFO")
    logger.info("console log message")

    captured = capsys.readouterr()
    assert "console log message" in captured.err
    assert "test_console_logger" in captured.err
    assert captured.out == ""


def test_file_logging(tmp_path):
    """Test that logger writes logs to a file when log_file is provided."""
    log_file = tmp_path / "logs" / "test.log"
    logger = get_logger("test_file_logger", level="DEBUG", log_file=str(log_file))
    logger.error("file log message")

    for handler in logger.handlers:
        handler.flush()

    assert log_file.exists(), f"Log file was not created at {log_file}"
    content = log_file.read_text()
    assert "file log message" in content
    assert "test_file_logger" in content


def test_logger_level_info_suppresses_debug(capsys):
    """Test that DEBUG messages are suppressed when level=INFO is set."""
    logger = get_logger("test_info_logger", level="INFO")
    logger.debug("this should NOT appear")
    logger.info("this should appear")

    captured = capsys.readouterr()
    assert "this should appear" in captured.err
    assert "this should NOT appear" not in captured.err


def test_logger_reuse_does_not_duplicate_handlers():
    """Test that calling get_logger multiple times does not duplicate handlers."""
    logger1 = get_logger("test_reuse_logger")
    logger2 = get_logger("test_reuse_logger")

    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_invalid_log_level_defaults_to_info():
    logger = get_logger("test_invalid_level_logger", level="NOT_A_LEVEL")

    assert logger.level == logging.INFO


def test_configure_root_logging_applies_level_and_file(tmp_path):
    child = get_logger("tickerboard.test_child", level="INFO")
    log_file = tmp_path / "app.log"

    configure_root_logging("WARNING", str(log_file))
    try:
        assert child.level == logging.WARNING
        child.warning("written to the package log")
        for handler in logging.getLogger("tickerboard").handlers:
            handler.flush()
        assert "written to the package log" in log_file.read_text()
    finally:
        package_logger = logging.getLogger("tickerboard")
        for handler in list(package_logger.handlers):
            if isinstance(handler, logging.FileHandler):
                package_logger.removeHandler(handler)
                handler.close()
        configure_root_logging("INFO")
