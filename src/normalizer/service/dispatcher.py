"""
Message dispatcher routing raw feed messages to mappers.

The dispatcher owns the mappers for one feed connection. Routing is a direct
lookup on the message ``type`` discriminant: at registration each mapper's
``can_handle`` is asked once per known message type and the answers fill a
routing table, so per-message work is a single dict access.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from normalizer.config import FeedConfig
from normalizer.enums import CoinbaseMessageType, Exchange
from normalizer.model.events import NormalizedEvent
from normalizer.model.types import SubscriptionFilter
from normalizer.protocols.mapper import MapperProtocol, RawMessage
from normalizer.service.normalizers import NORMALIZERS

logger = logging.getLogger(__name__)

KNOWN_MESSAGE_TYPES: dict[Exchange, tuple[str, ...]] = {
    Exchange.COINBASE: tuple(message_type.value for message_type in CoinbaseMessageType),
}


class MessageDispatcher:
    """
    Routes raw messages of one exchange feed to the mappers that handle them.

    Not thread safe: messages must be handed in one at a time, which keeps
    stateful mappers consistent without locking.
    """

    def __init__(self, mappers: Iterable[MapperProtocol] = ()) -> None:
        """
        Initialize the dispatcher.

        Args:
            mappers: Mappers to register, in subscription order

        """
        self.mappers: list[MapperProtocol] = []
        self._routes: dict[str, list[MapperProtocol]] = {}
        for mapper in mappers:
            self.register(mapper)

    @classmethod
    def from_config(cls, feed_config: FeedConfig) -> "MessageDispatcher":
        """
        Build a dispatcher with fresh mappers for the configured data types.

        Args:
            feed_config: Feed configuration

        Returns:
            Dispatcher owning one mapper per configured data type

        """
        return cls(
            NORMALIZERS[data_type](feed_config.exchange)
            for data_type in dict.fromkeys(feed_config.data_types)
        )

    def register(self, mapper: MapperProtocol) -> None:
        """
        Register a mapper under every message type it handles.

        Raises:
            ValueError: If the mapper is already registered or handles
                no known message type of its exchange

        """
        if mapper in self.mappers:
            raise ValueError(f"Mapper {type(mapper).__name__} already registered")

        handled = [
            message_type
            for message_type in KNOWN_MESSAGE_TYPES.get(mapper.exchange, ())
            if mapper.can_handle({"type": message_type})
        ]
        if not handled:
            raise ValueError(
                f"Mapper {type(mapper).__name__} handles no known "
                f"{mapper.exchange.value} message type"
            )

        self.mappers.append(mapper)
        for message_type in handled:
            self._routes.setdefault(message_type, []).append(mapper)
        logger.debug(f"Registered {type(mapper).__name__} for {', '.join(handled)}")

    @property
    def message_types(self) -> set[str]:
        """Get the message types with at least one registered mapper."""
        return set(self._routes)

    def can_handle(self, message: RawMessage) -> bool:
        """Check whether any registered mapper accepts the message."""
        message_type = message.get("type")
        return isinstance(message_type, str) and message_type in self._routes

    def normalize(
        self, message: RawMessage, local_timestamp: datetime
    ) -> list[NormalizedEvent]:
        """
        Map one raw message to normalized events.

        Args:
            message: JSON-decoded exchange message
            local_timestamp: Receipt time of the message

        Returns:
            Events from every mapper registered for the message type,
            empty when none is

        """
        message_type = message.get("type")
        mappers = (
            self._routes.get(message_type, ()) if isinstance(message_type, str) else ()
        )
        if not mappers:
            logger.debug(f"No mapper for message type {message_type!r}")
            return []

        events: list[NormalizedEvent] = []
        for mapper in mappers:
            events.extend(mapper.map(message, local_timestamp))
        return events

    def get_filters(
        self, symbols: Iterable[str] | None = None
    ) -> list[SubscriptionFilter]:
        """Collect subscription filters of all mappers in registration order."""
        symbol_list: Sequence[str] | None = None if symbols is None else list(symbols)
        filters: list[SubscriptionFilter] = []
        for mapper in self.mappers:
            filters.extend(mapper.get_filters(symbol_list))
        return filters
