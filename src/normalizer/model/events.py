"""
Normalized event models for market data streaming.

These models are the only shapes downstream consumers see. Exchange mappers
build them at the adapter boundary; nothing exchange specific leaks past
these types except the opaque ``exchange_specific`` bag on trades.

Field names are snake_case in Python. Dumping with ``by_alias=True`` gives
the camelCase names of the normalized wire format (``localTimestamp``,
``isSnapshot``, ``bidPrice``, ...).
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from normalizer.enums import DataType, Exchange, TradeSide
from normalizer.model.types import BookPriceLevel


class NormalizedEvent(BaseModel):
    """Base event for all normalized market data."""

    type: DataType
    exchange: Exchange
    symbol: str
    timestamp: datetime = Field(
        description="Event time at millisecond resolution (exchange or fallback)"
    )
    timestamp_micros: int | None = Field(
        default=None,
        ge=0,
        le=999,
        description="Sub-millisecond remainder, None when not taken from the exchange",
    )
    local_timestamp: datetime = Field(description="Receipt time from the transport")

    model_config = ConfigDict(
        frozen=True,
        allow_inf_nan=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @property
    def precise_timestamp(self) -> datetime:
        """Event time with the microsecond remainder applied."""
        if self.timestamp_micros is None:
            return self.timestamp
        return self.timestamp + timedelta(microseconds=self.timestamp_micros)

    def to_log_entry(self) -> str:
        """Generate a log-friendly representation."""
        return (
            f"[{self.type.value.upper()}] {self.exchange.value}:{self.symbol} "
            f"@ {self.precise_timestamp.isoformat()}"
        )


class Trade(NormalizedEvent):
    """Single matched trade, sided by the taker."""

    type: Literal[DataType.TRADE] = DataType.TRADE
    id: str = Field(description="Exchange trade identifier")
    price: Decimal
    amount: Decimal
    side: TradeSide = Field(description="Aggressor (taker) side")
    exchange_specific: dict[str, Any] = Field(
        default_factory=dict,
        description="Raw exchange fields not mapped to normalized fields",
    )

    @property
    def value(self) -> Decimal:
        """Calculate trade value (price * amount)."""
        return self.price * self.amount


class BookChange(NormalizedEvent):
    """
    Order book change.

    For a snapshot the levels are the full visible book. For an incremental
    update they are the changed levels only, amounts forwarded as received.
    """

    type: Literal[DataType.BOOK_CHANGE] = DataType.BOOK_CHANGE
    is_snapshot: bool
    bids: tuple[BookPriceLevel, ...] = ()
    asks: tuple[BookPriceLevel, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Check whether neither side carries a level."""
        return not self.bids and not self.asks


class BookTicker(NormalizedEvent):
    """
    Top of book quote.

    Quote fields the exchange omitted stay unset: ``None`` in Python and
    left out of ``model_dump(exclude_unset=True)``. An unset field means
    unknown, never an empty side.
    """

    type: Literal[DataType.BOOK_TICKER] = DataType.BOOK_TICKER
    bid_price: Decimal | None = None
    bid_amount: Decimal | None = None
    ask_price: Decimal | None = None
    ask_amount: Decimal | None = None

    @property
    def spread(self) -> Decimal | None:
        """Calculate bid-ask spread when both prices are known."""
        if self.bid_price is None or self.ask_price is None:
            return None
        return self.ask_price - self.bid_price

