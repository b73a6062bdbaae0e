"""
Minimal tests to verify raw Coinbase message parsing.

These cover the model layer under the mappers: raw values stay as sent and
parsed properties never raise on malformed text.
"""

from datetime import UTC, datetime
from decimal import Decimal

from normalizer.adapters.coinbase.data import (
    CoinbaseLevel2Snapshot,
    CoinbaseLevel2Update,
    CoinbaseMatch,
    CoinbaseTicker,
)
from normalizer.enums import TradeSide
from tests.unit.normalizer.helpers import MatchBuilder, TickerBuilder


def test_can_parse_match() -> None:
    """Verify we can parse a match into our model."""
    # Given: Realistic match JSON from Coinbase
    match_json = MatchBuilder().build()

    # When: We parse it
    match = CoinbaseMatch.model_validate(match_json)

    # Then: Raw values are kept and properties parse them
    assert match.price_raw == "17165.16"
    assert match.price == Decimal("17165.16")
    assert match.trade_id == "463751434"
    assert match.taker_side == TradeSide.BUY
    assert match.model_extra is not None
    assert match.model_extra["maker_order_id"] == "ac928c66-ca53-498f-9c13-a110027a60e8"


def test_can_parse_snapshot_levels() -> None:
    """Verify snapshot levels keep exchange order and are unfiltered."""
    snapshot = CoinbaseLevel2Snapshot.model_validate(
        {
            "type": "snapshot",
            "product_id": "BTC-USD",
            "bids": [["10101.10", "0.45054140"], ["10101.00", "-1"]],
            "asks": [],
        }
    )

    assert [level.to_tuple() for level in snapshot.bids] == [
        (Decimal("10101.10"), Decimal("0.45054140")),
        (Decimal("10101.00"), Decimal("-1")),
    ]
    assert snapshot.asks == []
    assert snapshot.exchange_time is None


def test_can_parse_update_changes() -> None:
    """Verify changes are split by book side tag."""
    update = CoinbaseLevel2Update.model_validate(
        {
            "type": "l2update",
            "product_id": "BTC-USD",
            "time": "2019-08-14T20:42:27.265Z",
            "changes": [["buy", "10101.80", "0.162567"], ["sell", "10102", "0"]],
        }
    )

    assert [level.price for level in update.bid_changes] == [Decimal("10101.80")]
    assert [level.amount for level in update.ask_changes] == [Decimal("0")]
    assert update.exchange_time == datetime(2019, 8, 14, 20, 42, 27, 265000, tzinfo=UTC)
    assert update.time_micros == 0


def test_ticker_quote_fields_only_include_sent_values() -> None:
    """Verify missing quote fields are left out."""
    ticker = CoinbaseTicker.model_validate(
        TickerBuilder().without("best_bid_size", "best_ask").build()
    )

    assert ticker.quote_fields() == {
        "bid_price": Decimal("17165.15"),
        "ask_amount": Decimal("0.18528568"),
    }
