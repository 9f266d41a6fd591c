"""FastAPI dependencies."""

from __future__ import annotations

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from stock_portfolio.core.portfolio.repository import SqlHoldingRepository
from stock_portfolio.core.portfolio.service import PortfolioService
from stock_portfolio.data.market.client import FinnhubClient
from stock_portfolio.db.database import get_db as db_context


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session from the app's session factory."""
    with db_context(request.app.state.session_factory) as db:
        yield db


def get_market_data(request: Request) -> FinnhubClient:
    """Market data client assembled at startup."""
    return request.app.state.market_data


def get_portfolio_service(
    db: Session = Depends(get_db),
    market_data: FinnhubClient = Depends(get_market_data),
) -> PortfolioService:
    """Portfolio service bound to the request's session."""
    return PortfolioService(SqlHoldingRepository(db), market_data=market_data)
