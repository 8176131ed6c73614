"""Database access."""

from .connection import DatabaseManager
from .schema import ensure_schema, SCHEMA_STATEMENTS
from .utils import process_database_record, to_jsonb

__all__ = [
    "DatabaseManager",
    "ensure_schema",
    "SCHEMA_STATEMENTS",
    "process_database_record",
    "to_jsonb",
]
