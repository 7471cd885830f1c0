"""Utility functions for storage adapters."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any


def generate_uuid() -> str:
    """Generate a new UUID as string.

    Returns:
        UUID string (e.g., "123e4567-e89b-12d3-a456-426614174000")
    """
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Get the current timezone-aware UTC timestamp."""
    return datetime.now(UTC)


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def parse_datetime(value: str) -> datetime:
    """Parse a stored ISO 8601 timestamp.

    Args:
        value: ISO string, with either a ``Z`` or a numeric UTC offset

    Returns:
        Timezone-aware datetime
    """
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def build_update_clause(updates: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build SQL UPDATE SET clause from updates dictionary.

    Args:
        updates: Dictionary of column names to new values; None values are skipped

    Returns:
        Tuple of (SET clause string, parameters list)
    """
    set_parts = []
    params = []

    for key, value in updates.items():
        if value is not None:
            set_parts.append(f"{key} = ?")
            params.append(value)

    set_clause = ", ".join(set_parts)
    return set_clause, params
