"""Cache entities."""

from .protocols import KeyStore

__all__ = ["KeyStore"]
