"""Normalized market data models."""

from normalizer.model.events import (
    BookChange,
    BookTicker,
    NormalizedEvent,
    Trade,
)
from normalizer.model.types import BookPriceLevel, SubscriptionFilter

__all__ = [
    "BookChange",
    "BookPriceLevel",
    "BookTicker",
    "NormalizedEvent",
    "SubscriptionFilter",
    "Trade",
]
