"""Market data sources."""

from parity.market.geckoterminal import Candle, GeckoTerminalClient

__all__ = ["Candle", "GeckoTerminalClient"]
