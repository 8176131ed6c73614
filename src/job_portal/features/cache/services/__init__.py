"""Cache services."""

from .cache_service import ResponseCache
from .decorators import cached

__all__ = ["ResponseCache", "cached"]
