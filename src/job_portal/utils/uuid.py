"""UUID utilities."""

import time
import uuid


def generate_uuid_v7() -> str:
    """
    Generate a UUIDv7 with time-based ordering.

    Time-ordered identifiers keep primary key indexes compact and let
    "newest first" listings fall back on id order.

    Returns:
        String representation of UUIDv7
    """
    timestamp_ms = int(time.time() * 1000)
    timestamp_bytes = timestamp_ms.to_bytes(6, byteorder='big')
    random_bytes = uuid.uuid4().bytes[6:]
    uuid_bytes = timestamp_bytes + random_bytes

    # Version 7
    uuid_bytes = uuid_bytes[:6] + bytes([(uuid_bytes[6] & 0x0f) | 0x70]) + uuid_bytes[7:]
    # Variant 10
    uuid_bytes = uuid_bytes[:8] + bytes([(uuid_bytes[8] & 0x3f) | 0x80]) + uuid_bytes[9:]

    return str(uuid.UUID(bytes=uuid_bytes))


def is_valid_uuid(value: str) -> bool:
    """Check whether a string parses as a UUID."""
    try:
        uuid.UUID(str(value))
        return True
    except (ValueError, TypeError, AttributeError):
        return False
