"""
Normalizer configuration using Pydantic Settings.

This module provides configuration management for the feed normalizer,
allowing environment-based configuration with type validation and defaults.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from normalizer.enums import DataType, Exchange


class FeedConfig(BaseSettings):
    """Configuration for one normalized exchange feed."""

    model_config = SettingsConfigDict(env_prefix="NORMALIZER_")

    # Feed selection
    exchange: Exchange = Field(
        default=Exchange.COINBASE, description="Exchange whose feed is normalized"
    )
    symbols: list[str] = Field(
        default_factory=list,
        description="Exchange symbols to subscribe to (empty = all)",
    )
    data_types: list[DataType] = Field(
        default_factory=lambda: list(DataType),
        min_length=1,
        description="Normalized event types to produce",
    )

    # Global settings
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )

    @field_validator("symbols")
    @classmethod
    def normalize_symbols(cls, v: list[str]) -> list[str]:
        """Strip and upper-case configured symbols."""
        return [symbol.strip().upper() for symbol in v if symbol.strip()]

    @property
    def subscription_symbols(self) -> list[str] | None:
        """Get symbols for subscription filters, None meaning all."""
        return self.symbols or None

    @classmethod
    def from_env(cls) -> "FeedConfig":
        """
        Load configuration from environment variables.

        Returns:
            Configured FeedConfig instance

        """
        return cls()


def configure_logging(feed_config: FeedConfig) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=feed_config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global config instance
config = FeedConfig.from_env()
