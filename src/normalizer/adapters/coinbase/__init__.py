"""Coinbase Exchange WebSocket feed adapter."""
