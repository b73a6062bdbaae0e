"""Test configuration and fixtures for the entire test suite."""

from datetime import UTC, datetime

import pytest
from dotenv import load_dotenv

from normalizer.adapters.coinbase.mappers import CoinbaseBookChangeMapper


@pytest.fixture(scope="session", autouse=True)
def load_env() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


@pytest.fixture
def local_timestamp() -> datetime:
    """Receipt time handed to mappers alongside each message."""
    return datetime(2024, 6, 1, 12, 30, 0, 250000, tzinfo=UTC)


@pytest.fixture
def book_change_mapper() -> CoinbaseBookChangeMapper:
    """Fresh book change mapper with an empty time cache."""
    return CoinbaseBookChangeMapper()
