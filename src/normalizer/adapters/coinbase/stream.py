"""
Coinbase WebSocket feed handling.

This module sits between a transport delivering raw text frames and the
normalized event consumers. It decodes frames, stamps receipt time, routes
them through the dispatcher and hands every resulting event to a callback.
Connection management stays with the transport.
"""

import json
import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from normalizer.config import FeedConfig, config
from normalizer.enums import CoinbaseChannel, CoinbaseMessageType, Exchange
from normalizer.model.events import NormalizedEvent
from normalizer.service.dispatcher import MessageDispatcher
from normalizer.service.normalizers import (
    normalize_book_changes,
    normalize_book_tickers,
    normalize_trades,
)

logger = logging.getLogger(__name__)

# Mapper pseudo-channels -> Coinbase subscribe channels
CHANNEL_MAP: dict[str, CoinbaseChannel] = {
    CoinbaseMessageType.MATCH.value: CoinbaseChannel.MATCHES,
    CoinbaseMessageType.SNAPSHOT.value: CoinbaseChannel.LEVEL2,
    CoinbaseMessageType.L2UPDATE.value: CoinbaseChannel.LEVEL2,
    CoinbaseMessageType.TICKER.value: CoinbaseChannel.TICKER,
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CoinbaseFeedHandler:
    """
    Handles Coinbase WebSocket frames and emits normalized events.

    This class:
    - Decodes incoming JSON frames
    - Routes market data messages through one MessageDispatcher
    - Emits each normalized event via callback
    - Logs bad frames instead of raising, so one frame cannot stop the feed
    """

    def __init__(
        self,
        on_event: Callable[[NormalizedEvent], None],
        dispatcher: MessageDispatcher | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Initialize the feed handler.

        Args:
            on_event: Callback receiving every normalized event
            dispatcher: Dispatcher owning this feed's mappers; defaults to
                fresh Coinbase trade, book change and book ticker mappers
            clock: Source of receipt timestamps

        """
        self.on_event = on_event
        if dispatcher is None:
            dispatcher = MessageDispatcher(
                [
                    normalize_trades(Exchange.COINBASE),
                    normalize_book_changes(Exchange.COINBASE),
                    normalize_book_tickers(Exchange.COINBASE),
                ]
            )
        self.dispatcher = dispatcher
        self.clock = clock
        self.symbols: list[str] | None = None

    @classmethod
    def from_config(
        cls,
        on_event: Callable[[NormalizedEvent], None],
        feed_config: FeedConfig | None = None,
    ) -> "CoinbaseFeedHandler":
        """
        Create a handler for the configured data types and symbols.

        Args:
            on_event: Callback receiving every normalized event
            feed_config: Feed configuration, the environment config by default

        Returns:
            Handler with fresh mappers and default subscription symbols

        """
        feed_config = feed_config or config
        handler = cls(on_event, dispatcher=MessageDispatcher.from_config(feed_config))
        handler.symbols = feed_config.subscription_symbols
        return handler

    def handle_message(self, msg: str) -> None:
        """
        Handle a raw WebSocket frame from Coinbase.

        This is the entry point called by the transport for every frame.
        """
        local_timestamp = self.clock()
        try:
            data = json.loads(msg)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON message: {e}")
            return

        if not isinstance(data, dict):
            logger.error(f"Unexpected message payload: {type(data).__name__}")
            return

        self.handle_decoded(data, local_timestamp)

    def handle_decoded(self, data: dict[str, Any], local_timestamp: datetime) -> None:
        """Normalize an already decoded message and emit its events."""
        message_type = data.get("type")

        # Control messages carry no market data
        match message_type:
            case "error":
                logger.warning(
                    f"Coinbase error: {data.get('message')} ({data.get('reason')})"
                )
                return
            case "subscriptions" | "heartbeat":
                return

        try:
            events = self.dispatcher.normalize(data, local_timestamp)
        except ValidationError as e:
            logger.error(f"Malformed {message_type} message: {e}")
            return

        for event in events:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(event.to_log_entry())
            self.on_event(event)

    def subscription_request(
        self, symbols: Iterable[str] | None = None
    ) -> dict[str, Any]:
        """
        Build the Coinbase subscribe request for this handler's mappers.

        Args:
            symbols: Product IDs to subscribe to, None for the feed default

        Returns:
            Subscribe message body ready to be JSON encoded

        """
        channels: list[str] = []
        product_ids: list[str] = []
        if symbols is None:
            symbols = self.symbols
        for subscription in self.dispatcher.get_filters(symbols):
            channel = CHANNEL_MAP[subscription.channel].value
            if channel not in channels:
                channels.append(channel)
            for symbol in subscription.symbols or ():
                if symbol not in product_ids:
                    product_ids.append(symbol)

        return {
            "type": "subscribe",
            "product_ids": product_ids,
            "channels": channels,
        }
