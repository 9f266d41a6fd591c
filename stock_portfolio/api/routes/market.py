"""Market data proxy API routes (quote, symbol search)."""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter

from stock_portfolio.api.deps import get_market_data
from stock_portfolio.data.market.client import FinnhubClient, MarketDataError

logger = logging.getLogger(__name__)


def create_router(limiter: Limiter, rate_limit: str) -> APIRouter:
    """Build the proxy routes, rate limited per client address.

    Args:
        limiter: The app's limiter (also set on ``app.state.limiter``)
        rate_limit: Limit string such as ``"60/minute"``
    """
    router = APIRouter()

    @router.get("/quote/{symbol}")
    @limiter.limit(rate_limit)
    def get_stock_quote(
        request: Request,
        symbol: str,
        market_data: FinnhubClient = Depends(get_market_data),
    ):
        """Proxy a quote request to the market data API."""
        try:
            return market_data.get_quote(symbol)
        except MarketDataError as e:
            logger.error(f"Quote lookup failed for {symbol.upper()}: {e}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": f"Error fetching stock quote: {e}"},
            )

    @router.get("/search")
    @limiter.limit(rate_limit)
    def search_stocks(
        request: Request,
        q: str = Query(..., description="Search text"),
        market_data: FinnhubClient = Depends(get_market_data),
    ):
        """Proxy a symbol search to the market data API."""
        try:
            return market_data.search_symbols(q)
        except MarketDataError as e:
            logger.error(f"Symbol search failed for {q!r}: {e}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": f"Error searching stocks: {e}"},
            )

    return router
