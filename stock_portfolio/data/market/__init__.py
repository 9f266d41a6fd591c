"""Market data feeds (quotes, symbol search)."""

from .client import FinnhubClient, MarketDataError

__all__ = ["FinnhubClient", "MarketDataError"]
