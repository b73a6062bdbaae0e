"""
Enums for the normalized market data vocabulary.

This module defines the standardized enum values shared by the exchange
mappers and the normalized event models. Normalized values are exchange
agnostic; the Coinbase enums name the raw feed vocabulary they are mapped from.

"""

from __future__ import annotations

import enum

# =============================================================================
# NORMALIZED ENUMS
# =============================================================================


class Exchange(str, enum.Enum):
    """
    Supported exchange identifiers.

    Every normalized event carries one of these values so consumers can
    tell which feed produced it.
    """

    COINBASE = "coinbase"


class DataType(str, enum.Enum):
    """
    Normalized event type tags.

    Each normalized event model carries one of these as its ``type``
    discriminator, and configuration uses them to select which mappers
    a feed runs.
    """

    TRADE = "trade"
    BOOK_CHANGE = "book_change"
    BOOK_TICKER = "book_ticker"


class TradeSide(str, enum.Enum):
    """
    Standardized enum for trade sides.

    A normalized trade side always names the taker (aggressor) direction.
    """

    BUY = "buy"
    SELL = "sell"


# =============================================================================
# COINBASE FEED ENUMS
# =============================================================================


class CoinbaseMessageType(str, enum.Enum):
    """
    Values of the ``type`` field on Coinbase WebSocket feed messages.

    The first four are mapped to normalized events; the rest are
    control messages the feed handler recognizes and skips.
    """

    MATCH = "match"
    SNAPSHOT = "snapshot"
    L2UPDATE = "l2update"
    TICKER = "ticker"
    SUBSCRIPTIONS = "subscriptions"
    HEARTBEAT = "heartbeat"
    ERROR = "error"


class CoinbaseChannel(str, enum.Enum):
    """Exchange channel names used in Coinbase subscribe requests."""

    MATCHES = "matches"
    LEVEL2 = "level2"
    TICKER = "ticker"
