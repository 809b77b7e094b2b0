# tickerboard/data/store.py

import json
from pathlib import Path
from typing import Any, Union

from tickerboard.data.schemas import Summary, SymbolSeries
from tickerboard.utils.logger import get_logger
from tickerboard.validation.sanitizer import InputSanitizer

logger = get_logger(__name__)

SUMMARY_FILE = "summary.json"

PathLike = Union[str, Path]


def ensure_data_dir(data_dir: PathLike) -> Path:
    """Create the output directory (and parents) if it does not exist."""
    path = Path(data_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def series_path(data_dir: PathLike, symbol: str) -> Path:
    return Path(data_dir) / f"{InputSanitizer.symbol_key(symbol)}.json"


def _write_json(path: Path, payload: Any) -> None:
    # Full overwrite, never appended
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_series(data_dir: PathLike, series: SymbolSeries) -> Path:
    """Write ``<data_dir>/<symbol>.json`` and return its path."""
    path = series_path(data_dir, series.symbol)
    _write_json(path, series.model_dump(mode="json"))
    logger.debug(f"Wrote {len(series.series)} points to {path}")
    return path


def read_series(data_dir: PathLike, symbol: str) -> SymbolSeries:
    """
    Read a series file back. Points keep the order they were written in.

    Raises:
        FileNotFoundError: If no file exists for the symbol.
    """
    return SymbolSeries(**_read_json(series_path(data_dir, symbol)))


def write_summary(data_dir: PathLike, summary: Summary, filename: str = SUMMARY_FILE) -> Path:
    path = Path(data_dir) / filename
    _write_json(path, summary.model_dump(mode="json"))
    logger.info(f"Wrote summary for {len(summary.symbols)} symbols to {path}")
    return path


def read_summary(data_dir: PathLike, filename: str = SUMMARY_FILE) -> Summary:
    return Summary(**_read_json(Path(data_dir) / filename))
