import logging
import sys
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Create or retrieve a logger with optional file logging.

    Console output goes to stderr so that a fetch run can report skipped
    symbols without polluting stdout.

    Args:
        name (str): Name of the logger.
        level (str, optional): Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        log_file (str, optional): Path to log file. If None, logs only to console.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.hasHandlers():  # Avoid adding duplicate handlers
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(numeric_level)

        console_handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(LOG_FORMAT)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def configure_root_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Apply the configured level (and optional log file) to every
    ``tickerboard`` logger at once. Called once by the CLI after the
    application config has been read.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    package_logger = logging.getLogger("tickerboard")
    package_logger.setLevel(numeric_level)

    for name, existing in logging.root.manager.loggerDict.items():
        if name.startswith("tickerboard.") and isinstance(existing, logging.Logger):
            existing.setLevel(numeric_level)

    if log_file and not any(isinstance(h, logging.FileHandler) for h in package_logger.handlers):
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(file_handler)
