"""Portfolio service - holding CRUD and valuation on top of a repository."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, TYPE_CHECKING

from stock_portfolio.data.market.client import MarketDataError
from stock_portfolio.db.models import Holding
from .models import HoldingCreate, HoldingUpdate, PortfolioSummary, quantize_money
from .repository import HoldingRepository

if TYPE_CHECKING:
    from stock_portfolio.data.market.client import FinnhubClient

logger = logging.getLogger(__name__)


class PortfolioService:
    """Service for managing holdings and computing portfolio metrics."""

    def __init__(
        self,
        repository: HoldingRepository,
        market_data: Optional["FinnhubClient"] = None,
    ):
        """Initialize the portfolio service.

        Args:
            repository: Holding store
            market_data: Market data client, only needed for price refreshes
        """
        self.repo = repository
        self.market_data = market_data

    def list_holdings(self) -> List[Holding]:
        """List all holdings in store order."""
        return self.repo.get_all()

    def get_holding(self, holding_id: int) -> Optional[Holding]:
        """Get a single holding, or None if it does not exist."""
        return self.repo.get_by_id(holding_id)

    def add_holding(self, candidate: HoldingCreate) -> Holding:
        """Add a holding. The store assigns its ID."""
        holding = self.repo.create(
            symbol=candidate.symbol,
            name=candidate.name,
            quantity=candidate.quantity,
            purchase_price=candidate.purchase_price,
            current_price=candidate.current_price,
        )
        logger.info(f"Added holding {holding.id} ({holding.symbol} x{holding.quantity})")
        return holding

    def update_holding(self, holding_id: int, replacement: HoldingUpdate) -> Optional[Holding]:
        """Overwrite symbol, name, quantity and purchase price of a holding.

        current_price is left untouched.

        Returns:
            Updated holding or None if not found
        """
        holding = self.repo.get_by_id(holding_id)
        if not holding:
            return None

        holding.symbol = replacement.symbol
        holding.name = replacement.name
        holding.quantity = replacement.quantity
        holding.purchase_price = replacement.purchase_price

        holding = self.repo.save(holding)
        logger.info(f"Updated holding {holding_id}")
        return holding

    def delete_holding(self, holding_id: int) -> None:
        """Delete a holding. Deleting a missing holding is not an error."""
        if self.repo.delete(holding_id):
            logger.info(f"Deleted holding {holding_id}")
        else:
            logger.debug(f"Delete of missing holding {holding_id} ignored")

    def compute_portfolio_value(self) -> Decimal:
        """Sum quantity x current price over all holdings, in exact decimal."""
        return sum(
            (holding.market_value for holding in self.repo.get_all()),
            Decimal("0"),
        )

    def summarize(self) -> PortfolioSummary:
        """Aggregate value, cost and best/worst performers."""
        holdings = self.repo.get_all()

        total_value = Decimal("0")
        total_investment = Decimal("0")
        returns = []

        for h in holdings:
            total_value += h.market_value
            total_investment += h.total_cost

            purchase_price = Decimal(h.purchase_price or 0)
            if purchase_price > 0:
                change = (Decimal(h.current_price or 0) - purchase_price) / purchase_price
                returns.append((change, h.symbol))

        top = max(returns, key=lambda r: r[0])[1] if returns else None
        worst = min(returns, key=lambda r: r[0])[1] if returns else None

        return PortfolioSummary(
            total_value=total_value,
            total_investment=total_investment,
            total_pnl=total_value - total_investment,
            holdings_count=len(holdings),
            top_performer=top,
            worst_performer=worst,
        )

    def refresh_price(self, holding_id: int) -> Optional[Holding]:
        """Set a holding's current price from a live quote.

        Returns:
            Updated holding or None if not found

        Raises:
            MarketDataError: If the quote fails or carries no usable price
        """
        holding = self.repo.get_by_id(holding_id)
        if not holding:
            return None

        if self.market_data is None:
            raise MarketDataError("Market data client is not configured")

        quote = self.market_data.get_quote(holding.symbol)
        price = quote.get("c") if isinstance(quote, dict) else None

        # Finnhub reports c=0 for symbols it does not know
        if isinstance(price, bool) or not isinstance(price, (int, float)) or price <= 0:
            raise MarketDataError(f"No current price available for {holding.symbol.upper()}")

        holding.current_price = quantize_money(Decimal(str(price)))
        holding = self.repo.save(holding)
        logger.info(f"Refreshed {holding.symbol} price to {holding.current_price}")
        return holding
