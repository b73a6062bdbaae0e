"""Normalizer services."""

from normalizer.service.dispatcher import MessageDispatcher
from normalizer.service.normalizers import (
    normalize_book_changes,
    normalize_book_tickers,
    normalize_trades,
)

__all__ = [
    "MessageDispatcher",
    "normalize_book_changes",
    "normalize_book_tickers",
    "normalize_trades",
]
