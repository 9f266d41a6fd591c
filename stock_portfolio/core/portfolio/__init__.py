"""Portfolio management and valuation."""

from .models import (
    HoldingCreate,
    HoldingUpdate,
    HoldingResponse,
    PortfolioSummary,
)
from .repository import HoldingRepository, InMemoryHoldingRepository, SqlHoldingRepository
from .service import PortfolioService

__all__ = [
    "HoldingCreate",
    "HoldingUpdate",
    "HoldingResponse",
    "PortfolioSummary",
    "HoldingRepository",
    "InMemoryHoldingRepository",
    "SqlHoldingRepository",
    "PortfolioService",
]
