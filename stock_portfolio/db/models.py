"""SQLAlchemy ORM models."""

from decimal import Decimal

from sqlalchemy import Column, Integer, Numeric, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Money columns keep four decimal places; values are quantized to this before storage
MONEY_SCALE = 4


class Holding(Base):
    """Portfolio holding model."""

    __tablename__ = "holdings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    symbol = Column(String(16), nullable=False)
    name = Column(String(255), nullable=False, default="")
    quantity = Column(Integer, nullable=False)
    purchase_price = Column(Numeric(19, MONEY_SCALE), nullable=False)  # Per share
    current_price = Column(Numeric(19, MONEY_SCALE), nullable=False, default=Decimal("0"))

    @property
    def market_value(self) -> Decimal:
        """Current value of this position."""
        return Decimal(self.quantity) * Decimal(self.current_price or 0)

    @property
    def total_cost(self) -> Decimal:
        """Total cost basis for this position."""
        return Decimal(self.quantity) * Decimal(self.purchase_price or 0)

    def __repr__(self) -> str:
        return f"<Holding(id={self.id}, symbol={self.symbol}, quantity={self.quantity})>"
