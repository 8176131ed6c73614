"""Shared helpers."""

from .datetime import utc_now, ensure_utc
from .uuid import generate_uuid_v7, is_valid_uuid

__all__ = [
    "utc_now",
    "ensure_utc",
    "generate_uuid_v7",
    "is_valid_uuid",
]
