"""
============================

Market Data Exchange Adapters.

============================

This package contains adapter implementations for exchange feeds. Adapters
parse exchange-specific messages and map them to the normalized event models,
satisfying the protocol interfaces defined in the protocols package.

"""
