"""Stock holding API routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from stock_portfolio.api.deps import get_portfolio_service
from stock_portfolio.core.portfolio.models import (
    HoldingCreate,
    HoldingResponse,
    HoldingUpdate,
    PortfolioSummary,
)
from stock_portfolio.core.portfolio.service import PortfolioService
from stock_portfolio.data.market.client import MarketDataError

logger = logging.getLogger(__name__)

router = APIRouter()

# Static paths must be registered before the /{holding_id} routes; the market
# router (quote, search) is included ahead of this one.


@router.get("", response_model=List[HoldingResponse])
def list_holdings(service: PortfolioService = Depends(get_portfolio_service)):
    """List all holdings."""
    return service.list_holdings()


@router.post("", response_model=HoldingResponse)
def add_holding(
    payload: HoldingCreate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Add a new holding. The server assigns its ID."""
    return service.add_holding(payload)


@router.get("/portfolio-value")
def portfolio_value(service: PortfolioService = Depends(get_portfolio_service)):
    """Total value of the portfolio (sum of quantity x current price)."""
    return service.compute_portfolio_value()


@router.get("/summary", response_model=PortfolioSummary)
def portfolio_summary(service: PortfolioService = Depends(get_portfolio_service)):
    """Portfolio totals and best/worst performers."""
    return service.summarize()


@router.get("/health", response_class=PlainTextResponse)
def health():
    """Liveness probe."""
    return "Service operational"


@router.get("/{holding_id}", response_model=HoldingResponse)
def get_holding(
    holding_id: int,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Get a specific holding by ID."""
    holding = service.get_holding(holding_id)
    if not holding:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return holding


@router.put("/{holding_id}", response_model=HoldingResponse)
def update_holding(
    holding_id: int,
    payload: HoldingUpdate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Replace symbol, name, quantity and purchase price of a holding."""
    updated = service.update_holding(holding_id, payload)
    if not updated:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return updated


@router.delete("/{holding_id}")
def delete_holding(
    holding_id: int,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Delete a holding. Missing IDs are ignored."""
    service.delete_holding(holding_id)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/{holding_id}/refresh-price", response_model=HoldingResponse)
def refresh_holding_price(
    holding_id: int,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Update a holding's current price from a live quote."""
    try:
        refreshed = service.refresh_price(holding_id)
    except MarketDataError as e:
        logger.error(f"Price refresh failed for holding {holding_id}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Error refreshing stock price: {e}"},
        )
    if not refreshed:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return refreshed
