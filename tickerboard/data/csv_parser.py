# tickerboard/data/csv_parser.py
"""
CSV ingestion for daily OHLCV downloads.

The Stooq CSV endpoint returns a header row followed by one line per trading
day (``Date,Open,High,Low,Close,Volume``). Unknown symbols come back as a
single ``No data`` line, which parses to an empty series.
"""

import math
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from tickerboard.data.schemas import PricePoint
from tickerboard.utils.logger import get_logger

logger = get_logger(__name__)

PRICE_COLUMNS = ["open", "high", "low", "close", "volume"]


def csv_to_rows(csv_text: str) -> List[Dict[str, Optional[str]]]:
    """
    Split CSV text into one dict per data line, keyed by lower-cased header.

    Values are matched to headers by position; a short line leaves the
    remaining headers as None and surplus values are ignored.

    Args:
        csv_text (str): Raw CSV payload.

    Returns:
        List[Dict[str, Optional[str]]]: Rows in input order. Empty when the
        payload has fewer than two lines.
    """
    lines = (csv_text or "").strip().split("\n")
    if len(lines) <= 1:
        return []

    headers = [header.strip().lower() for header in lines[0].split(",")]
    rows = []
    for line in lines[1:]:
        values = line.split(",")
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index].strip() if index < len(values) else None
        rows.append(row)
    return rows


def to_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None if it cannot be parsed."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def normalize_rows(rows: List[Dict[str, Optional[str]]]) -> List[PricePoint]:
    """
    Turn raw CSV rows into price points.

    Rows without a date are dropped, numeric fields that are not finite
    numbers become None, and rows without a usable close are dropped.
    Input order is preserved.
    """
    if not rows:
        return []

    df = pd.DataFrame(rows).reindex(columns=["date"] + PRICE_COLUMNS)

    dates = df["date"].fillna("").astype(str).str.strip()
    df = df[dates != ""].copy()
    df["date"] = dates[dates != ""]

    for column in PRICE_COLUMNS:
        numeric = pd.to_numeric(df[column], errors="coerce").astype(float)
        df[column] = numeric.replace([np.inf, -np.inf], np.nan)

    dropped = int(df["close"].isna().sum())
    df = df.dropna(subset=["close"])
    if dropped:
        logger.debug(f"Dropped {dropped} rows without a close price")

    records = df.astype(object).where(pd.notna(df), None).to_dict(orient="records")
    return [PricePoint(**record) for record in records]


def parse_price_csv(csv_text: str) -> List[PricePoint]:
    """Parse a full CSV payload into an ordered list of price points."""
    return normalize_rows(csv_to_rows(csv_text))
