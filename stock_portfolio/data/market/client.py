"""Finnhub market data client (quotes and symbol search)."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from stock_portfolio.config import Settings

logger = logging.getLogger(__name__)

FINNHUB_BASE_URL = "https://finnhub.io/api/v1"

# Timeout for Finnhub API calls (seconds)
FINNHUB_TIMEOUT = 15


class MarketDataError(Exception):
    """Raised when an outbound market data call fails.

    Covers network errors, non-2xx responses and undecodable bodies.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FinnhubClient:
    """Thin proxy over the Finnhub REST API.

    Every call performs exactly one outbound request. Responses are returned
    as decoded JSON without further interpretation.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = FINNHUB_BASE_URL,
        timeout: float = FINNHUB_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize client.

        Args:
            api_key: Finnhub API token, sent as the ``token`` query parameter
            base_url: API root, without trailing slash
            timeout: Timeout for each request in seconds
            session: Optional requests session (a new one is created otherwise)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "FinnhubClient":
        """Build a client from application settings."""
        return cls(
            api_key=settings.finnhub_api_key,
            base_url=settings.finnhub_base_url,
            timeout=settings.finnhub_timeout_seconds,
        )

    def get_quote(self, symbol: str) -> Dict[str, Any]:
        """Get the latest quote for a symbol.

        Args:
            symbol: Stock ticker symbol (case-insensitive)

        Returns:
            Decoded Finnhub quote payload (``c`` is the current price)

        Raises:
            MarketDataError: If the request fails
        """
        return self._get("/quote", {"symbol": symbol.upper()})

    def search_symbols(self, query: str) -> Dict[str, Any]:
        """Search symbols matching a free-text query.

        Args:
            query: Search text, passed through unchanged

        Returns:
            Decoded Finnhub search payload

        Raises:
            MarketDataError: If the request fails
        """
        return self._get("/search", {"q": query})

    def _get(self, path: str, params: Dict[str, str]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(
                url,
                params={**params, "token": self.api_key},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.warning(f"Finnhub timeout after {self.timeout}s on {path}")
            raise MarketDataError(f"Request to {path} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            logger.warning(f"Finnhub request failed on {path}: {self._redact(str(e))}")
            raise MarketDataError(self._redact(str(e))) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Finnhub API error on {path}: {response.status_code}")
            raise MarketDataError(
                f"{response.status_code} {response.reason or 'Error'} from {path}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Finnhub returned an undecodable body on {path}")
            raise MarketDataError(f"Invalid JSON in response from {path}") from e

        logger.debug(f"Fetched {path} {params}")
        return payload

    def _redact(self, text: str) -> str:
        """Strip the API token from error text before it is logged or returned."""
        if self.api_key:
            return text.replace(self.api_key, "***")
        return text
