"""
Database utility functions for common operations.
"""

import json
from typing import Any, Dict, List
from uuid import UUID

from ..utils.datetime import ensure_utc


def process_database_record(
    data: Any,  # Can be Dict or asyncpg.Record
    jsonb_fields: List[str] = None,
    datetime_fields: List[str] = None,
) -> Dict[str, Any]:
    """Process a database record for entity construction.

    - Converts asyncpg.Record to dict
    - Converts UUID values to strings
    - Parses JSONB fields returned as text (asyncpg default), null -> []
    - Normalizes timestamps to aware UTC

    Args:
        data: Raw database record
        jsonb_fields: Field names holding JSONB lists
        datetime_fields: Field names holding timestamps

    Returns:
        Processed data ready for the entity constructor
    """
    data = dict(data)

    for field, value in data.items():
        if isinstance(value, UUID):
            data[field] = str(value)

    for field in jsonb_fields or []:
        if field not in data:
            continue
        value = data[field]
        if isinstance(value, str):
            try:
                data[field] = json.loads(value) if value else []
            except json.JSONDecodeError:
                data[field] = []
        elif value is None:
            data[field] = []

    for field in datetime_fields or []:
        if field in data:
            data[field] = ensure_utc(data[field])

    return data


def to_jsonb(value: Any) -> str:
    """Serialize a value for a ``$n::jsonb`` parameter."""
    return json.dumps(value, default=str)
