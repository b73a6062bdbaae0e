"""
Mapper factories keyed by exchange and normalized data type.

Stateless mappers are shared; stateful ones are created fresh on every call
so each feed connection owns its own per-symbol state.
"""

from collections.abc import Callable

from normalizer.adapters.coinbase.mappers import (
    CoinbaseBookChangeMapper,
    CoinbaseBookTickerMapper,
    CoinbaseTradesMapper,
)
from normalizer.enums import DataType, Exchange
from normalizer.model.events import BookChange, BookTicker, Trade
from normalizer.protocols.mapper import MapperProtocol

_coinbase_trades = CoinbaseTradesMapper()
_coinbase_book_tickers = CoinbaseBookTickerMapper()

TRADES_MAPPERS: dict[Exchange, Callable[[], MapperProtocol[Trade]]] = {
    Exchange.COINBASE: lambda: _coinbase_trades,
}

BOOK_CHANGES_MAPPERS: dict[Exchange, Callable[[], MapperProtocol[BookChange]]] = {
    Exchange.COINBASE: CoinbaseBookChangeMapper,
}

BOOK_TICKERS_MAPPERS: dict[Exchange, Callable[[], MapperProtocol[BookTicker]]] = {
    Exchange.COINBASE: lambda: _coinbase_book_tickers,
}


def _lookup(
    factories: dict[Exchange, Callable[[], MapperProtocol]],
    exchange: Exchange | str,
    kind: str,
) -> MapperProtocol:
    try:
        factory = factories[Exchange(exchange)]
    except (KeyError, ValueError):
        raise ValueError(
            f"{kind} normalization is not supported for {exchange!r}"
        ) from None
    return factory()


def normalize_trades(exchange: Exchange | str) -> MapperProtocol[Trade]:
    """Get the trade mapper for an exchange."""
    return _lookup(TRADES_MAPPERS, exchange, "Trade")


def normalize_book_changes(exchange: Exchange | str) -> MapperProtocol[BookChange]:
    """
    Create a book change mapper for an exchange.

    Returns a new instance on every call; use one per feed connection.
    """
    return _lookup(BOOK_CHANGES_MAPPERS, exchange, "Book change")


def normalize_book_tickers(exchange: Exchange | str) -> MapperProtocol[BookTicker]:
    """Get the book ticker mapper for an exchange."""
    return _lookup(BOOK_TICKERS_MAPPERS, exchange, "Book ticker")


NORMALIZERS: dict[DataType, Callable[[Exchange | str], MapperProtocol]] = {
    DataType.TRADE: normalize_trades,
    DataType.BOOK_CHANGE: normalize_book_changes,
    DataType.BOOK_TICKER: normalize_book_tickers,
}
