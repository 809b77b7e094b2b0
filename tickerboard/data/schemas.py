"""
Pydantic models for the JSON file contract shared by the fetcher and the dashboard.

Field names are part of the contract (``latestClose``, ``performance_7d`` ...)
and must not be renamed.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """One daily OHLCV row. ``close`` is always present after normalization."""

    date: str
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: float
    volume: Optional[float] = None


class SymbolSeries(BaseModel):
    """Full price history for one symbol, ordered oldest to newest."""

    symbol: str
    updatedAt: Optional[str] = None
    series: List[PricePoint] = Field(default_factory=list)


class SymbolSummary(BaseModel):
    """Latest close plus trailing performance (percent) per configured window."""

    # Windows other than 7/14/30 are carried as extra ``performance_<N>d`` keys
    model_config = ConfigDict(extra="allow")

    latestClose: Optional[float] = None
    latestDate: Optional[str] = None
    performance_7d: Optional[float] = None
    performance_14d: Optional[float] = None
    performance_30d: Optional[float] = None


class Summary(BaseModel):
    lastUpdated: Optional[str] = None
    symbols: Dict[str, SymbolSummary] = Field(default_factory=dict)
