"""Mapper protocols."""

from normalizer.protocols.mapper import MapperProtocol, RawMessage

__all__ = [
    "MapperProtocol",
    "RawMessage",
]
