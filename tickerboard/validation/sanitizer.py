"""Input sanitization for ticker symbols and user-entered dashboard values."""

from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)

# Stooq uses '^' for indices (e.g. ^SPX) and '.' for the exchange suffix (AAPL.US)
ALLOWED_SYMBOL_CHARS = set(".-_^")


class InputSanitizer:
    """Sanitize and clean symbols and dashboard control values."""

    @staticmethod
    def sanitize_symbol(symbol: str, allowed_length: int = 20) -> Optional[str]:
        """Sanitize a ticker symbol.

        Args:
            symbol: Ticker symbol (e.g. 'AAPL.US', '^SPX')
            allowed_length: Maximum allowed symbol length

        Returns:
            Sanitized symbol or None if invalid
        """
        if not symbol or not isinstance(symbol, str):
            logger.warning(f"Invalid symbol type: {type(symbol)}")
            return None

        symbol = symbol.strip()

        if len(symbol) < 1:
            logger.warning("Symbol is empty")
            return None

        if not all(c.isalnum() or c in ALLOWED_SYMBOL_CHARS for c in symbol):
            logger.warning(f"Symbol contains invalid characters: {symbol}")
            return None

        # Symbols double as file names under data/
        if symbol.strip(".") == "":
            logger.warning(f"Symbol is not a usable file name: {symbol}")
            return None

        if len(symbol) > allowed_length:
            logger.warning(f"Symbol too long: {symbol} (max {allowed_length})")
            return None

        return symbol

    @staticmethod
    def symbol_key(symbol: str) -> str:
        """Lower-cased key used for summary entries and series file names."""
        return symbol.strip().lower()

    @staticmethod
    def sanitize_range(days: Union[int, str], allowed: tuple = (7, 14, 30), default: int = 30) -> int:
        """Coerce a trailing-range selection to one of the supported windows."""
        try:
            value = int(days)
        except (ValueError, TypeError) as e:
            logger.warning(f"Cannot convert range to int: {e}")
            return default

        if value not in allowed:
            logger.warning(f"Unsupported range {value}, falling back to {default}")
            return default
        return value
