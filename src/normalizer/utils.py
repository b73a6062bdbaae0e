"""
Numeric and timestamp helpers shared by the exchange mappers.

Exchanges send prices and sizes as strings and encode sub-millisecond
precision in ISO-8601 time strings. These helpers turn that raw text into
values the normalized models can carry without ever raising on bad data:
malformed numbers become NaN and unparseable times become ``None``.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

# Fractional seconds directly after the seconds field, e.g. "00:03:03.1238784Z"
_FRACTION_PATTERN = re.compile(r"T?\d{2}:\d{2}:\d{2}\.(\d+)")

NAN = Decimal("NaN")


def parse_micros(value: str) -> int:
    """
    Extract the sub-millisecond part of an ISO-8601 timestamp.

    Returns the 4th to 6th fractional digits as an integer in the range
    0-999, e.g. ``"2024-01-01T00:00:00.123456Z"`` gives ``456``. Strings
    with millisecond precision or less give 0.
    """
    match = _FRACTION_PATTERN.search(value)
    if match is None:
        return 0

    digits = match.group(1)[3:6]
    if not digits:
        return 0
    return int(digits.ljust(3, "0"))


def parse_timestamp(value: str) -> datetime | None:
    """
    Parse an exchange time string to a UTC datetime with millisecond resolution.

    The sub-millisecond remainder is dropped here; use ``parse_micros`` to
    recover it. Returns ``None`` when the string is not a valid ISO-8601
    timestamp. Times without an offset are taken to be UTC.
    """
    # datetime only keeps six fractional digits
    text = re.sub(r"(\.\d{6})\d+", r"\1", value.strip()).replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)

    return parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)


def is_valid_timestamp(timestamp: datetime | None) -> bool:
    """Check that a parsed exchange time is not before the Unix epoch."""
    if timestamp is None:
        return False
    return timestamp.timestamp() >= 0


def parse_decimal(value: Any) -> Decimal:
    """Convert a string-encoded number to Decimal, NaN when it is malformed."""
    if value is None:
        return NAN
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        return NAN


def upper_case_symbols(symbols: Iterable[str] | None) -> tuple[str, ...] | None:
    """Normalize symbols for subscription filters, ``None`` meaning all."""
    if symbols is None:
        return None
    return tuple(symbol.upper() for symbol in symbols)


def prune_keys(message: Mapping[str, Any], excluded: Iterable[str]) -> dict[str, Any]:
    """Copy a raw message without the keys already mapped to normalized fields."""
    excluded_keys = set(excluded)
    return {key: value for key, value in message.items() if key not in excluded_keys}
