"""Pydantic schemas for portfolio operations."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from stock_portfolio.db.models import MONEY_SCALE

MONEY_QUANTUM = Decimal(1).scaleb(-MONEY_SCALE)


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to the stored scale (half-up)."""
    try:
        return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount out of range: {value}")


# Monetary amounts stay Decimal in Python and go out as JSON numbers
Money = Annotated[
    Decimal,
    AfterValidator(quantize_money),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class HoldingCreate(CamelModel):
    """Schema for creating a new holding. Any client-sent id is ignored."""

    symbol: str
    name: str = ""
    quantity: int
    purchase_price: Money
    current_price: Money = Decimal("0")


class HoldingUpdate(CamelModel):
    """Schema for replacing the editable fields of a holding.

    current_price is deliberately absent; it changes only through a price refresh.
    """

    symbol: str
    name: str = ""
    quantity: int
    purchase_price: Money


class HoldingResponse(CamelModel):
    """Schema for holding response."""

    id: int
    symbol: str
    name: str
    quantity: int
    purchase_price: Money
    current_price: Money


class PortfolioSummary(CamelModel):
    """Portfolio summary with aggregated metrics."""

    total_value: Money
    total_investment: Money
    total_pnl: Money
    holdings_count: int
    top_performer: Optional[str] = Field(None, description="Symbol with the best return")
    worst_performer: Optional[str] = Field(None, description="Symbol with the worst return")
