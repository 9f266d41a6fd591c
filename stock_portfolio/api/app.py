"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy.engine import Engine

from stock_portfolio.api.routes import market, stocks
from stock_portfolio.config import (
    PRODUCT_DESCRIPTION,
    PRODUCT_NAME,
    PRODUCT_VERSION,
    Settings,
    get_settings,
    validate_settings,
)
from stock_portfolio.data.market.client import FinnhubClient
from stock_portfolio.db import database

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    market_data: Optional[FinnhubClient] = None,
) -> FastAPI:
    """Validate configuration and assemble the application.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        engine: Database engine. Defaults to one built from settings.database_url.
        market_data: Market data client. Defaults to a Finnhub client from settings.

    Raises:
        ConfigurationError: If the Finnhub API key is missing
    """
    settings = validate_settings(settings or get_settings())
    engine = engine or database.make_engine(settings.database_url)
    market_data = market_data or FinnhubClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize database on startup."""
        database.init_db(engine)
        logger.info(f"{PRODUCT_NAME} API ready")
        yield

    app = FastAPI(
        title=f"{PRODUCT_NAME} API",
        description=PRODUCT_DESCRIPTION,
        version=PRODUCT_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_factory = database.make_session_factory(engine)
    app.state.market_data = market_data

    # Add rate limiter to app state
    limiter = Limiter(key_func=get_remote_address)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # The web client is served from a different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        market.create_router(limiter, settings.proxy_rate_limit),
        prefix="/api/stocks",
        tags=["market"],
    )
    app.include_router(stocks.router, prefix="/api/stocks", tags=["stocks"])

    return app
