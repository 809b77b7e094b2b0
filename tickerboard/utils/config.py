# tickerboard/utils/config.py

import yaml
from typing import Any, Dict, List, Optional
from pathlib import Path
import logging

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

STOOQ_URL_TEMPLATE = "https://stooq.com/q/d/l/?s={symbol}&i={interval}"


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        config_path (str): Path to the YAML config file.

    Returns:
        Dict[str, Any]: Configuration dictionary (empty for an empty file).

    Raises:
        FileNotFoundError: If config file does not exist.
        yaml.YAMLError: If YAML parsing fails.
    """
    path = Path(config_path)
    if not path.is_file():
        logger.error(f"Config file not found: {config_path}")
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(path, "r", encoding="utf-8") as file:
            config = yaml.safe_load(file)
        logger.info(f"Successfully loaded config from {config_path}")
        return config or {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML config file: {e}")
        raise


# -------------------
# Pydantic Configs
# -------------------
class PathsConfig(BaseModel):
    symbols_file: str = "config/symbols.json"
    data_dir: str = "data"
    summary_file: str = "summary.json"


class SourceConfig(BaseModel):
    url_template: str = STOOQ_URL_TEMPLATE
    interval: str = "d"
    timeout: Optional[float] = None

    @field_validator("url_template")
    @classmethod
    def validate_template(cls, v):
        if "{symbol}" not in v:
            raise ValueError("url_template must contain a '{symbol}' placeholder")
        return v


class PerformanceConfig(BaseModel):
    windows: List[int] = Field(default_factory=lambda: [7, 14, 30])

    @field_validator("windows")
    @classmethod
    def validate_windows(cls, v):
        if not v or any(day <= 0 for day in v):
            raise ValueError("windows must be a non-empty list of positive day counts")
        return v


class DashboardConfig(BaseModel):
    # Either an http(s) base URL or a local directory holding config/ and data/
    data_source: str = "."
    sparkline_points: int = Field(default=20, ge=1)
    forecast_window: int = Field(default=30, ge=1)
    forecast_horizon: int = Field(default=7, ge=1)
    recent_rows: int = Field(default=10, ge=1)
    default_range: int = 30
    default_sort: str = "performance"

    @field_validator("default_sort")
    @classmethod
    def validate_sort(cls, v):
        if v not in ("performance", "name"):
            raise ValueError("default_sort must be 'performance' or 'name'")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[str] = None
    error_log: Optional[str] = None


class AppConfig(BaseModel):
    paths: PathsConfig = Field(default_factory=PathsConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# -------------------
# Functions
# -------------------
def load_typed_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load and validate the application config as a typed Pydantic model.

    Args:
        config_path (str, optional): Path to the YAML config file. When omitted
            the built-in defaults are used.

    Returns:
        AppConfig: Typed configuration object.
    """
    if config_path is None:
        return AppConfig()
    raw_config = load_config(config_path)
    return AppConfig(**raw_config)
