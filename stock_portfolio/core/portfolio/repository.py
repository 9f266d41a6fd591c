"""Portfolio repositories for holding CRUD operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from stock_portfolio.db.models import Holding


class HoldingRepository(ABC):
    """Storage contract for Holding records.

    The store owns identity: ids are assigned on create and never change.
    """

    @abstractmethod
    def get_all(self) -> List[Holding]:
        """Get all holdings, ordered by id."""

    @abstractmethod
    def get_by_id(self, holding_id: int) -> Optional[Holding]:
        """Get a holding by ID, or None if absent."""

    @abstractmethod
    def create(
        self,
        symbol: str,
        name: str,
        quantity: int,
        purchase_price: Decimal,
        current_price: Decimal = Decimal("0"),
    ) -> Holding:
        """Create a new holding and assign its ID."""

    @abstractmethod
    def save(self, holding: Holding) -> Holding:
        """Persist in-place changes to an existing holding."""

    @abstractmethod
    def delete(self, holding_id: int) -> bool:
        """Delete a holding.

        Returns:
            True if deleted, False if there was nothing to delete
        """


class SqlHoldingRepository(HoldingRepository):
    """Repository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        self.db = db

    def get_all(self) -> List[Holding]:
        return self.db.query(Holding).order_by(Holding.id).all()

    def get_by_id(self, holding_id: int) -> Optional[Holding]:
        return self.db.query(Holding).filter_by(id=holding_id).first()

    def create(
        self,
        symbol: str,
        name: str,
        quantity: int,
        purchase_price: Decimal,
        current_price: Decimal = Decimal("0"),
    ) -> Holding:
        holding = Holding(
            symbol=symbol,
            name=name,
            quantity=quantity,
            purchase_price=purchase_price,
            current_price=current_price,
        )
        self.db.add(holding)
        self.db.flush()  # Get the ID without committing
        return holding

    def save(self, holding: Holding) -> Holding:
        self.db.add(holding)
        self.db.flush()
        return holding

    def delete(self, holding_id: int) -> bool:
        holding = self.get_by_id(holding_id)
        if not holding:
            return False

        self.db.delete(holding)
        self.db.flush()
        return True


class InMemoryHoldingRepository(HoldingRepository):
    """Dict-backed repository. Nothing survives the process."""

    def __init__(self):
        self._holdings: Dict[int, Holding] = {}
        self._next_id = 1

    def get_all(self) -> List[Holding]:
        return [self._holdings[key] for key in sorted(self._holdings)]

    def get_by_id(self, holding_id: int) -> Optional[Holding]:
        return self._holdings.get(holding_id)

    def create(
        self,
        symbol: str,
        name: str,
        quantity: int,
        purchase_price: Decimal,
        current_price: Decimal = Decimal("0"),
    ) -> Holding:
        holding = Holding(
            id=self._next_id,
            symbol=symbol,
            name=name,
            quantity=quantity,
            purchase_price=purchase_price,
            current_price=current_price,
        )
        self._holdings[holding.id] = holding
        self._next_id += 1
        return holding

    def save(self, holding: Holding) -> Holding:
        self._holdings[holding.id] = holding
        return holding

    def delete(self, holding_id: int) -> bool:
        return self._holdings.pop(holding_id, None) is not None
