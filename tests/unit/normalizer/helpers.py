"""Test helpers for building raw Coinbase feed messages."""

from typing import Any


class MatchBuilder:
    """Builder for creating test ``match`` messages."""

    def __init__(self) -> None:
        """Initialize with sensible defaults."""
        self._data: dict[str, Any] = {
            "type": "match",
            "trade_id": 463751434,
            "maker_order_id": "ac928c66-ca53-498f-9c13-a110027a60e8",
            "taker_order_id": "132fb6ae-456b-4654-b4e0-d681ac05cea1",
            "side": "sell",
            "size": "0.05",
            "price": "17165.16",
            "product_id": "BTC-USD",
            "sequence": 50978628538,
            "time": "2022-12-01T00:00:00.122581Z",
        }

    def with_symbol(self, symbol: str) -> "MatchBuilder":
        """Set the product ID/symbol."""
        self._data["product_id"] = symbol
        return self

    def with_side(self, side: str) -> "MatchBuilder":
        """Set the maker side."""
        self._data["side"] = side
        return self

    def with_price(self, price: str) -> "MatchBuilder":
        """Set the price."""
        self._data["price"] = price
        return self

    def with_size(self, size: str) -> "MatchBuilder":
        """Set the size."""
        self._data["size"] = size
        return self

    def with_time(self, time: str) -> "MatchBuilder":
        """Set the exchange time."""
        self._data["time"] = time
        return self

    def build(self) -> dict[str, Any]:
        """Build as raw decoded JSON."""
        return dict(self._data)


class SnapshotBuilder:
    """Builder for creating test level2 ``snapshot`` messages."""

    def __init__(self) -> None:
        """Initialize with an empty book."""
        self._data: dict[str, Any] = {
            "type": "snapshot",
            "product_id": "BTC-USD",
            "bids": [],
            "asks": [],
        }

    def with_symbol(self, symbol: str) -> "SnapshotBuilder":
        """Set the product ID/symbol."""
        self._data["product_id"] = symbol
        return self

    def with_bid(self, price: str, size: str) -> "SnapshotBuilder":
        """Add a bid level."""
        self._data["bids"].append([price, size])
        return self

    def with_ask(self, price: str, size: str) -> "SnapshotBuilder":
        """Add an ask level."""
        self._data["asks"].append([price, size])
        return self

    def with_time(self, time: str) -> "SnapshotBuilder":
        """Set the exchange time."""
        self._data["time"] = time
        return self

    def build(self) -> dict[str, Any]:
        """Build as raw decoded JSON."""
        return {
            **self._data,
            "bids": list(self._data["bids"]),
            "asks": list(self._data["asks"]),
        }


class L2UpdateBuilder:
    """Builder for creating test ``l2update`` messages."""

    def __init__(self) -> None:
        """Initialize with no changes."""
        self._data: dict[str, Any] = {
            "type": "l2update",
            "product_id": "BTC-USD",
            "time": "2024-01-01T00:00:00.123456Z",
            "changes": [],
        }

    def with_symbol(self, symbol: str) -> "L2UpdateBuilder":
        """Set the product ID/symbol."""
        self._data["product_id"] = symbol
        return self

    def with_change(self, side: str, price: str, size: str) -> "L2UpdateBuilder":
        """Add a changed level."""
        self._data["changes"].append([side, price, size])
        return self

    def with_time(self, time: str) -> "L2UpdateBuilder":
        """Set the exchange time."""
        self._data["time"] = time
        return self

    def build(self) -> dict[str, Any]:
        """Build as raw decoded JSON."""
        return {**self._data, "changes": list(self._data["changes"])}


class TickerBuilder:
    """Builder for creating test ``ticker`` messages."""

    def __init__(self) -> None:
        """Initialize with a full top of book quote."""
        self._data: dict[str, Any] = {
            "type": "ticker",
            "sequence": 50978628538,
            "product_id": "BTC-USD",
            "price": "17165.16",
            "best_bid": "17165.15",
            "best_bid_size": "0.61540890",
            "best_ask": "17167.76",
            "best_ask_size": "0.18528568",
            "side": "sell",
            "time": "2022-12-01T00:00:00.122581Z",
        }

    def with_symbol(self, symbol: str) -> "TickerBuilder":
        """Set the product ID/symbol."""
        self._data["product_id"] = symbol
        return self

    def with_time(self, time: str) -> "TickerBuilder":
        """Set the exchange time."""
        self._data["time"] = time
        return self

    def without(self, *fields: str) -> "TickerBuilder":
        """Drop fields from the message."""
        for field in fields:
            self._data.pop(field, None)
        return self

    def build(self) -> dict[str, Any]:
        """Build as raw decoded JSON."""
        return dict(self._data)
