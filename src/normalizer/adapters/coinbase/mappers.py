"""
Coinbase feed mappers.

Each mapper turns one family of Coinbase Exchange WebSocket messages into
normalized events and satisfies MapperProtocol through structural typing:
- CoinbaseTradesMapper: ``match`` -> Trade
- CoinbaseBookChangeMapper: ``snapshot`` / ``l2update`` -> BookChange
- CoinbaseBookTickerMapper: ``ticker`` -> BookTicker

Only the book change mapper holds state, the last valid exchange time per
symbol, used to repair the occasional invalid time on ``l2update``.

https://docs.cloud.coinbase.com/exchange/docs/websocket-channels
"""

import logging
from collections.abc import Iterable, Iterator
from datetime import datetime
from typing import NamedTuple

from normalizer.adapters.coinbase.data import (
    CoinbaseLevel2Snapshot,
    CoinbaseLevel2Update,
    CoinbaseMatch,
    CoinbaseTicker,
)
from normalizer.enums import CoinbaseMessageType, Exchange
from normalizer.model.events import BookChange, BookTicker, Trade
from normalizer.model.types import BookPriceLevel, SubscriptionFilter
from normalizer.protocols.mapper import RawMessage
from normalizer.utils import is_valid_timestamp, prune_keys, upper_case_symbols

logger = logging.getLogger(__name__)

# Raw match fields already carried by normalized Trade fields
TRADE_MAPPED_FIELDS = ("type", "trade_id", "product_id", "size", "price", "side")


class ExchangeTime(NamedTuple):
    """Exchange time at millisecond resolution plus its microsecond remainder."""

    timestamp: datetime
    micros: int | None


def _valid_amounts_only(levels: Iterable[BookPriceLevel]) -> tuple[BookPriceLevel, ...]:
    return tuple(level for level in levels if level.is_valid)


class CoinbaseTradesMapper:
    """Maps ``match`` messages to taker-sided Trade events."""

    exchange = Exchange.COINBASE

    def can_handle(self, message: RawMessage) -> bool:
        """Check for a matched trade message."""
        return message.get("type") == CoinbaseMessageType.MATCH.value

    def get_filters(
        self, symbols: Iterable[str] | None = None
    ) -> list[SubscriptionFilter]:
        """Subscribe to the match pseudo-channel."""
        return [
            SubscriptionFilter(
                channel=CoinbaseMessageType.MATCH.value,
                symbols=upper_case_symbols(symbols),
            )
        ]

    def map(self, message: RawMessage, local_timestamp: datetime) -> Iterator[Trade]:
        """
        Yield exactly one Trade for a match message.

        Coinbase reports the maker order side, so the normalized side is
        inverted to name the taker. Price and size are not validated;
        malformed values come through as NaN. A missing or unparseable time
        falls back to the receipt time with no microsecond remainder.
        """
        match = CoinbaseMatch.model_validate(message)

        timestamp = match.exchange_time
        if timestamp is not None:
            micros: int | None = match.time_micros
        else:
            timestamp, micros = local_timestamp, None

        yield Trade(
            exchange=self.exchange,
            symbol=match.symbol,
            id=match.trade_id,
            price=match.price,
            amount=match.size,
            side=match.taker_side,
            timestamp=timestamp,
            timestamp_micros=micros,
            local_timestamp=local_timestamp,
            exchange_specific=prune_keys(message, TRADE_MAPPED_FIELDS),
        )


class CoinbaseBookChangeMapper:
    """
    Maps ``snapshot`` and ``l2update`` messages to BookChange events.

    Coinbase very rarely sends an ``l2update`` stamped
    ``0001-01-01T00:00:00.000000Z`` whose changes are still valid. Such an
    update reuses the last valid time seen for its symbol, or is dropped
    if the symbol has none yet. One instance must serve one feed
    connection; calls must not interleave.
    """

    exchange = Exchange.COINBASE

    def __init__(self) -> None:
        """Initialize with an empty per-symbol time cache."""
        self._last_valid_times: dict[str, ExchangeTime] = {}

    def can_handle(self, message: RawMessage) -> bool:
        """Check for an order book snapshot or incremental update."""
        return message.get("type") in (
            CoinbaseMessageType.SNAPSHOT.value,
            CoinbaseMessageType.L2UPDATE.value,
        )

    def get_filters(
        self, symbols: Iterable[str] | None = None
    ) -> list[SubscriptionFilter]:
        """Subscribe to the snapshot and l2update pseudo-channels."""
        normalized = upper_case_symbols(symbols)
        return [
            SubscriptionFilter(
                channel=CoinbaseMessageType.SNAPSHOT.value, symbols=normalized
            ),
            SubscriptionFilter(
                channel=CoinbaseMessageType.L2UPDATE.value, symbols=normalized
            ),
        ]

    def last_valid_time(self, symbol: str) -> ExchangeTime | None:
        """Get the last valid l2update time seen for a symbol."""
        return self._last_valid_times.get(symbol)

    def map(
        self, message: RawMessage, local_timestamp: datetime
    ) -> Iterator[BookChange]:
        """Yield one BookChange, or nothing for an update that cannot be timed."""
        if message.get("type") == CoinbaseMessageType.SNAPSHOT.value:
            yield self._map_snapshot(
                CoinbaseLevel2Snapshot.model_validate(message), local_timestamp
            )
            return

        update = CoinbaseLevel2Update.model_validate(message)
        bids, asks = tuple(update.bid_changes), tuple(update.ask_changes)
        exchange_time = self._update_time(update)
        if exchange_time is None:
            logger.debug(
                f"Dropping l2update for {update.symbol}: invalid time "
                f"{update.time!r} and no previous valid time"
            )
            return

        yield BookChange(
            exchange=self.exchange,
            symbol=update.symbol,
            is_snapshot=False,
            bids=bids,
            asks=asks,
            timestamp=exchange_time.timestamp,
            timestamp_micros=exchange_time.micros,
            local_timestamp=local_timestamp,
        )

    def _map_snapshot(
        self, snapshot: CoinbaseLevel2Snapshot, local_timestamp: datetime
    ) -> BookChange:
        """Build a snapshot BookChange, keeping only levels with valid amounts."""
        timestamp = snapshot.exchange_time
        if timestamp is not None and is_valid_timestamp(timestamp):
            micros: int | None = snapshot.time_micros
        else:
            timestamp, micros = local_timestamp, None

        return BookChange(
            exchange=self.exchange,
            symbol=snapshot.symbol,
            is_snapshot=True,
            bids=_valid_amounts_only(snapshot.bids),
            asks=_valid_amounts_only(snapshot.asks),
            timestamp=timestamp,
            timestamp_micros=micros,
            local_timestamp=local_timestamp,
        )

    def _update_time(self, update: CoinbaseLevel2Update) -> ExchangeTime | None:
        """Resolve the event time of an update, caching it when valid."""
        timestamp = update.exchange_time
        if timestamp is not None and is_valid_timestamp(timestamp):
            exchange_time = ExchangeTime(timestamp, update.time_micros)
            self._last_valid_times[update.symbol] = exchange_time
            return exchange_time

        previous = self._last_valid_times.get(update.symbol)
        if previous is not None:
            logger.debug(
                f"l2update for {update.symbol} has invalid time {update.time!r}, "
                f"reusing {previous.timestamp.isoformat()}"
            )
        return previous


class CoinbaseBookTickerMapper:
    """Maps ``ticker`` messages to BookTicker events."""

    exchange = Exchange.COINBASE

    def can_handle(self, message: RawMessage) -> bool:
        """Check for a ticker message."""
        return message.get("type") == CoinbaseMessageType.TICKER.value

    def get_filters(
        self, symbols: Iterable[str] | None = None
    ) -> list[SubscriptionFilter]:
        """Subscribe to the ticker channel."""
        return [
            SubscriptionFilter(
                channel=CoinbaseMessageType.TICKER.value,
                symbols=upper_case_symbols(symbols),
            )
        ]

    def map(
        self, message: RawMessage, local_timestamp: datetime
    ) -> Iterator[BookTicker]:
        """
        Yield exactly one BookTicker.

        A missing or invalid exchange time falls back to the receipt time
        with no microsecond remainder.
        """
        ticker = CoinbaseTicker.model_validate(message)

        timestamp = ticker.exchange_time
        if timestamp is not None and is_valid_timestamp(timestamp):
            micros: int | None = ticker.time_micros
        else:
            timestamp, micros = local_timestamp, None

        yield BookTicker(
            exchange=self.exchange,
            symbol=ticker.symbol,
            timestamp=timestamp,
            timestamp_micros=micros,
            local_timestamp=local_timestamp,
            **ticker.quote_fields(),
        )
