"""Tests for PortfolioService."""

import pytest
from decimal import Decimal
from unittest.mock import Mock

from stock_portfolio.core.portfolio.models import HoldingCreate, HoldingUpdate
from stock_portfolio.core.portfolio.repository import InMemoryHoldingRepository
from stock_portfolio.core.portfolio.service import PortfolioService
from stock_portfolio.data.market.client import FinnhubClient, MarketDataError


def make_holding(symbol="AAPL", quantity=10, purchase_price="100", current_price="150", name=""):
    return HoldingCreate(
        symbol=symbol,
        name=name,
        quantity=quantity,
        purchase_price=Decimal(purchase_price),
        current_price=Decimal(current_price),
    )


@pytest.fixture
def repo():
    return InMemoryHoldingRepository()


@pytest.fixture
def service(repo):
    return PortfolioService(repo)


class TestHoldingCrud:
    """CRUD behaviour of PortfolioService."""

    def test_list_is_empty_initially(self, service):
        assert service.list_holdings() == []

    def test_add_assigns_unique_ids(self, service):
        """Each added holding gets its own id and shows up in the list."""
        first = service.add_holding(make_holding("AAPL"))
        second = service.add_holding(make_holding("MSFT"))
        third = service.add_holding(make_holding("GOOG"))

        ids = [h.id for h in service.list_holdings()]
        assert ids == [first.id, second.id, third.id]
        assert len(set(ids)) == 3

    def test_list_excludes_deleted(self, service):
        kept = service.add_holding(make_holding("AAPL"))
        gone = service.add_holding(make_holding("MSFT"))

        service.delete_holding(gone.id)

        assert [h.symbol for h in service.list_holdings()] == ["AAPL"]
        assert service.list_holdings()[0].id == kept.id

    def test_ids_are_not_reused_after_delete(self, service):
        first = service.add_holding(make_holding("AAPL"))
        service.delete_holding(first.id)

        second = service.add_holding(make_holding("MSFT"))

        assert second.id != first.id

    def test_update_missing_returns_none(self, service):
        """Updating an unknown id reports not-found and leaves the store alone."""
        existing = service.add_holding(make_holding("AAPL"))

        result = service.update_holding(
            999,
            HoldingUpdate(symbol="TSLA", name="Tesla", quantity=1, purchase_price=Decimal("1")),
        )

        assert result is None
        holdings = service.list_holdings()
        assert len(holdings) == 1
        assert holdings[0].id == existing.id
        assert holdings[0].symbol == "AAPL"

    def test_update_on_empty_store_returns_none(self, service):
        result = service.update_holding(
            999,
            HoldingUpdate(symbol="TSLA", name="Tesla", quantity=1, purchase_price=Decimal("1")),
        )

        assert result is None
        assert service.list_holdings() == []

    def test_update_overwrites_fields_and_keeps_id(self, service):
        original = service.add_holding(make_holding("AAPL", quantity=10, current_price="150"))

        updated = service.update_holding(
            original.id,
            HoldingUpdate(
                symbol="MSFT",
                name="Microsoft",
                quantity=5,
                purchase_price=Decimal("250.50"),
            ),
        )

        assert updated.id == original.id
        holdings = service.list_holdings()
        assert len(holdings) == 1
        assert holdings[0].symbol == "MSFT"
        assert holdings[0].name == "Microsoft"
        assert holdings[0].quantity == 5
        assert holdings[0].purchase_price == Decimal("250.50")

    def test_update_leaves_current_price(self, service):
        original = service.add_holding(make_holding(current_price="150"))

        service.update_holding(
            original.id,
            HoldingUpdate(symbol="AAPL", name="Apple", quantity=1, purchase_price=Decimal("90")),
        )

        assert service.get_holding(original.id).current_price == Decimal("150")

    def test_delete_missing_is_silent(self, service):
        service.delete_holding(12345)

        assert service.list_holdings() == []

    def test_delete_twice_is_silent(self, service):
        holding = service.add_holding(make_holding())

        service.delete_holding(holding.id)
        service.delete_holding(holding.id)

        assert service.list_holdings() == []


class TestPortfolioValue:
    """Valuation of the portfolio."""

    def test_empty_portfolio_is_zero(self, service):
        assert service.compute_portfolio_value() == Decimal("0")

    def test_sum_is_exact(self, service):
        """2 x 10.50 + 1 x 5.25 must be exactly 26.25."""
        service.add_holding(make_holding("AAA", quantity=2, current_price="10.50"))
        service.add_holding(make_holding("BBB", quantity=1, current_price="5.25"))

        value = service.compute_portfolio_value()

        assert isinstance(value, Decimal)
        assert value == Decimal("26.25")

    def test_no_drift_over_many_holdings(self, service):
        for _ in range(1000):
            service.add_holding(make_holding("PENNY", quantity=1, current_price="0.10"))

        assert service.compute_portfolio_value() == Decimal("100.00")

    def test_summary(self, service):
        service.add_holding(make_holding("WIN", quantity=10, purchase_price="100", current_price="150"))
        service.add_holding(make_holding("LOSE", quantity=5, purchase_price="20", current_price="10"))

        summary = service.summarize()

        assert summary.total_value == Decimal("1550")
        assert summary.total_investment == Decimal("1100")
        assert summary.total_pnl == Decimal("450")
        assert summary.holdings_count == 2
        assert summary.top_performer == "WIN"
        assert summary.worst_performer == "LOSE"

    def test_summary_of_empty_portfolio(self, service):
        summary = service.summarize()

        assert summary.total_value == Decimal("0")
        assert summary.holdings_count == 0
        assert summary.top_performer is None
        assert summary.worst_performer is None


class TestRefreshPrice:
    """Refreshing current price from market data."""

    def test_sets_current_price_from_quote(self, repo):
        market_data = Mock(spec=FinnhubClient)
        market_data.get_quote.return_value = {"c": 187.25, "h": 190.0, "l": 185.1}
        service = PortfolioService(repo, market_data=market_data)
        holding = service.add_holding(make_holding("aapl", current_price="0"))

        refreshed = service.refresh_price(holding.id)

        market_data.get_quote.assert_called_once_with("aapl")
        assert refreshed.current_price == Decimal("187.25")
        assert service.compute_portfolio_value() == Decimal("1872.50")

    def test_missing_holding_skips_quote(self, repo):
        market_data = Mock(spec=FinnhubClient)
        service = PortfolioService(repo, market_data=market_data)

        assert service.refresh_price(42) is None
        market_data.get_quote.assert_not_called()

    def test_zero_price_is_an_error(self, repo):
        """Finnhub answers c=0 for unknown symbols."""
        market_data = Mock(spec=FinnhubClient)
        market_data.get_quote.return_value = {"c": 0, "d": None}
        service = PortfolioService(repo, market_data=market_data)
        holding = service.add_holding(make_holding("NOPE", current_price="12"))

        with pytest.raises(MarketDataError):
            service.refresh_price(holding.id)

        assert service.get_holding(holding.id).current_price == Decimal("12")

    def test_remote_failure_leaves_price(self, repo):
        market_data = Mock(spec=FinnhubClient)
        market_data.get_quote.side_effect = MarketDataError("Connection refused")
        service = PortfolioService(repo, market_data=market_data)
        holding = service.add_holding(make_holding(current_price="150"))

        with pytest.raises(MarketDataError, match="Connection refused"):
            service.refresh_price(holding.id)

        assert service.get_holding(holding.id).current_price == Decimal("150")
