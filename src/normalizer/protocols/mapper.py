"""
Mapper Protocol for the market data normalizer.

A mapper turns one kind of raw exchange message into normalized events.
Concrete mappers satisfy this protocol through structure, not inheritance,
so exchange adapters stay free of any base-class coupling.

Contract:
- ``can_handle`` is a pure, cheap predicate on the message discriminant
- ``get_filters`` is a pure function of its argument
- ``map`` is a synchronous generator; callers drain it before handing in
  the next message, so a mapper never sees interleaved calls
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from typing import Any, Protocol, TypeVar, runtime_checkable

from normalizer.enums import Exchange
from normalizer.model.events import NormalizedEvent
from normalizer.model.types import SubscriptionFilter

EventT_co = TypeVar("EventT_co", bound=NormalizedEvent, covariant=True)

RawMessage = Mapping[str, Any]


@runtime_checkable
class MapperProtocol(Protocol[EventT_co]):
    """
    Protocol for per-message-type exchange mappers.

    Semantic Role: Adapter boundary between raw feed and normalized events
    Relationships:
    - Produces: one normalized event type (Trade, BookChange or BookTicker)
    - Consumed by: MessageDispatcher
    - State: stateless, except mappers that must repair exchange defects
    """

    @property
    def exchange(self) -> Exchange:
        """
        Get the exchange this mapper understands.

        Returns:
            Exchange identifier stamped on every produced event

        """
        ...

    def can_handle(self, message: RawMessage) -> bool:
        """
        Check whether a raw message belongs to this mapper.

        Args:
            message: JSON-decoded exchange message

        Returns:
            True if ``map`` should be called with this message

        """
        ...

    def get_filters(
        self, symbols: Iterable[str] | None = None
    ) -> list[SubscriptionFilter]:
        """
        Build subscription filters for the channels this mapper consumes.

        Args:
            symbols: Exchange symbols to subscribe to, None for all

        Returns:
            One filter per channel with upper-cased symbols

        """
        ...

    def map(self, message: RawMessage, local_timestamp: datetime) -> Iterator[EventT_co]:
        """
        Transform a raw message into normalized events.

        Args:
            message: JSON-decoded exchange message accepted by ``can_handle``
            local_timestamp: Receipt time supplied by the transport

        Returns:
            Iterator over zero or more normalized events

        """
        ...
