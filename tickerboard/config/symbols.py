# tickerboard/config/symbols.py

import json
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from tickerboard.utils.logger import get_logger
from tickerboard.validation.sanitizer import InputSanitizer

logger = get_logger(__name__)


class SymbolConfigError(Exception):
    """Raised when the symbol list cannot be read or is not valid."""


class SymbolConfig(BaseModel):
    """One configured ticker: the Stooq symbol, a display name and the company web domain."""

    symbol: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    domain: str = ""

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v):
        cleaned = InputSanitizer.sanitize_symbol(v)
        if cleaned is None:
            raise ValueError(f"Invalid symbol: {v!r}")
        return cleaned

    @property
    def key(self) -> str:
        return InputSanitizer.symbol_key(self.symbol)


def parse_symbols(raw: object) -> List[SymbolConfig]:
    """
    Validate a decoded ``symbols.json`` payload.

    Raises:
        SymbolConfigError: If the payload is not a list of symbol entries.
    """
    if not isinstance(raw, list):
        raise SymbolConfigError("Symbol config must be a JSON array")
    try:
        return [SymbolConfig(**entry) for entry in raw]
    except (TypeError, ValidationError) as e:
        raise SymbolConfigError(f"Invalid symbol entry: {e}") from e


def load_symbols(path: Union[str, Path]) -> List[SymbolConfig]:
    """
    Read the symbol list from disk.

    Args:
        path: Path to ``symbols.json``.

    Returns:
        List[SymbolConfig]: Entries in file order.

    Raises:
        SymbolConfigError: If the file is missing, is not JSON or has invalid entries.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        logger.error(f"Symbol config not found: {path}")
        raise SymbolConfigError(f"Symbol config not found: {path}") from e
    except json.JSONDecodeError as e:
        logger.error(f"Symbol config is not valid JSON: {e}")
        raise SymbolConfigError(f"Symbol config is not valid JSON: {path}") from e

    symbols = parse_symbols(raw)
    logger.info(f"Loaded {len(symbols)} symbols from {path}")
    return symbols
