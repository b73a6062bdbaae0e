"""Exchange market data normalizer package."""

from normalizer.adapters.coinbase.stream import CoinbaseFeedHandler
from normalizer.model import BookChange, BookPriceLevel, BookTicker, Trade
from normalizer.service import (
    MessageDispatcher,
    normalize_book_changes,
    normalize_book_tickers,
    normalize_trades,
)

__all__ = [
    "BookChange",
    "BookPriceLevel",
    "BookTicker",
    "CoinbaseFeedHandler",
    "MessageDispatcher",
    "Trade",
    "normalize_book_changes",
    "normalize_book_tickers",
    "normalize_trades",
]
