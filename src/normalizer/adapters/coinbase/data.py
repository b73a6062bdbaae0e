"""
Coinbase WebSocket feed Pydantic models.

This module implements Pydantic models for the raw Coinbase Exchange feed
messages the mappers consume (``match``, ``snapshot``, ``l2update`` and
``ticker``). The models only check the message shape; numeric and time
fields are kept as the raw strings the exchange sent.

Key design principles:
- Pydantic models inherit ONLY from BaseModel
- Raw fields store exchange data as-is (with _raw suffix)
- Properties expose parsed values and never raise on malformed text
- Unknown fields are kept so mappers can pass them through
"""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from normalizer.enums import TradeSide
from normalizer.model.types import BookPriceLevel
from normalizer.utils import parse_decimal, parse_micros, parse_timestamp

RawNumber = str | float | int


class CoinbaseBaseMessage(BaseModel):
    """
    Base message model for Coinbase feed messages.

    Every market data message carries the ``type`` discriminant and the
    ``product_id`` symbol.
    """

    type: str
    product_id: str

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def symbol(self) -> str:
        """Get market identifier."""
        return self.product_id


class CoinbaseTimedMessage(CoinbaseBaseMessage):
    """Message with an optional exchange ``time`` field."""

    time: str | None = None

    @property
    def exchange_time(self) -> datetime | None:
        """
        Get exchange time at millisecond resolution.

        None when the field is missing or cannot be parsed.
        """
        if self.time is None:
            return None
        return parse_timestamp(self.time)

    @property
    def time_micros(self) -> int:
        """Get the sub-millisecond remainder of the exchange time."""
        if self.time is None:
            return 0
        return parse_micros(self.time)


# Matches Channel Models
class CoinbaseMatch(CoinbaseTimedMessage):
    """
    Matched trade from the ``matches`` channel.

    Coinbase reports the side of the resting (maker) order.
    """

    trade_id_raw: RawNumber = Field(alias="trade_id")
    size_raw: RawNumber = Field(alias="size")
    price_raw: RawNumber = Field(alias="price")
    side_raw: str = Field(alias="side")

    @property
    def trade_id(self) -> str:
        """Get unique trade identifier."""
        return str(self.trade_id_raw)

    @property
    def price(self) -> Decimal:
        """Get trade price."""
        return parse_decimal(self.price_raw)

    @property
    def size(self) -> Decimal:
        """Get trade size."""
        return parse_decimal(self.size_raw)

    @property
    def taker_side(self) -> TradeSide:
        """Get trade aggressor side, the opposite of the maker side."""
        return TradeSide.BUY if self.side_raw == "sell" else TradeSide.SELL


# Level2 (Order Book) Channel Models
def _element(values: Sequence[RawNumber], index: int) -> RawNumber | None:
    # Missing elements parse as NaN instead of failing the whole message
    return values[index] if len(values) > index else None


def _snapshot_level(level: Sequence[RawNumber]) -> BookPriceLevel:
    return BookPriceLevel(
        price=parse_decimal(_element(level, 0)),
        amount=parse_decimal(_element(level, 1)),
    )


def _update_level(change: Sequence[RawNumber]) -> BookPriceLevel:
    return BookPriceLevel(
        price=parse_decimal(_element(change, 1)),
        amount=parse_decimal(_element(change, 2)),
    )


class CoinbaseLevel2Snapshot(CoinbaseTimedMessage):
    """
    Full order book snapshot sent when subscribing to ``level2``.

    Levels are ``[price, size]`` string pairs.
    """

    bids_raw: list[list[Any]] = Field(alias="bids", default_factory=list)
    asks_raw: list[list[Any]] = Field(alias="asks", default_factory=list)

    @property
    def bids(self) -> list[BookPriceLevel]:
        """Get bid levels in exchange order, unfiltered."""
        return [_snapshot_level(level) for level in self.bids_raw]

    @property
    def asks(self) -> list[BookPriceLevel]:
        """Get ask levels in exchange order, unfiltered."""
        return [_snapshot_level(level) for level in self.asks_raw]


class CoinbaseLevel2Update(CoinbaseTimedMessage):
    """
    Incremental order book update from the ``level2`` channel.

    Changes are ``[side, price, size]`` triples where side is the book
    side being changed (``buy`` for bids, ``sell`` for asks).
    """

    time: str
    changes: list[list[Any]] = Field(default_factory=list)

    @property
    def bid_changes(self) -> list[BookPriceLevel]:
        """Get changed bid levels in exchange order."""
        return [
            _update_level(change)
            for change in self.changes
            if _element(change, 0) == "buy"
        ]

    @property
    def ask_changes(self) -> list[BookPriceLevel]:
        """Get changed ask levels in exchange order."""
        return [
            _update_level(change)
            for change in self.changes
            if _element(change, 0) == "sell"
        ]


# Ticker Channel Models
class CoinbaseTicker(CoinbaseTimedMessage):
    """
    Ticker update from the ``ticker`` channel.

    Best bid/ask sizes are missing for some products, so every quote
    field is optional.
    """

    best_bid_raw: RawNumber | None = Field(alias="best_bid", default=None)
    best_bid_size_raw: RawNumber | None = Field(alias="best_bid_size", default=None)
    best_ask_raw: RawNumber | None = Field(alias="best_ask", default=None)
    best_ask_size_raw: RawNumber | None = Field(alias="best_ask_size", default=None)

    def quote_fields(self) -> dict[str, Decimal]:
        """
        Get the quote fields the exchange actually sent.

        Keys are the normalized BookTicker field names. Fields missing
        from the message are left out rather than set to None.
        """
        raw = {
            "bid_price": self.best_bid_raw,
            "bid_amount": self.best_bid_size_raw,
            "ask_price": self.best_ask_raw,
            "ask_amount": self.best_ask_size_raw,
        }
        return {
            name: parse_decimal(value) for name, value in raw.items() if value is not None
        }

