"""
Common types for normalized market data models.

This module provides the small value types shared by the event models
and the mapper contract.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class BookPriceLevel(BaseModel):
    """
    A single order book price level.

    In a snapshot this is the aggregate resting amount at the price. In an
    incremental update it is the new amount for the price, where 0 is
    forwarded unchanged and left for consumers to interpret.
    """

    price: Decimal
    amount: Decimal

    model_config = ConfigDict(frozen=True, allow_inf_nan=True)

    @property
    def is_valid(self) -> bool:
        """Check the amount is a number and not negative."""
        if self.amount.is_nan():
            return False
        return self.amount >= 0

    def to_tuple(self) -> tuple[Decimal, Decimal]:
        """Convert to tuple for compatibility."""
        return (self.price, self.amount)


class SubscriptionFilter(BaseModel):
    """
    Channel subscription descriptor produced by a mapper.

    ``symbols`` are upper-cased exchange symbols, or ``None`` to subscribe
    to the channel for every symbol.
    """

    channel: str
    symbols: tuple[str, ...] | None = None

    model_config = ConfigDict(frozen=True)
