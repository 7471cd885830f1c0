"""Database schema for the SQLite task store."""

from __future__ import annotations

import sqlite3

SCHEMA_VERSION = 1

# seq gives a strict insertion order for rows sharing a created_at value.
TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    id TEXT NOT NULL UNIQUE,
    text TEXT NOT NULL CHECK (length(trim(text)) > 0),
    completed INTEGER NOT NULL DEFAULT 0 CHECK (completed IN (0, 1)),
    created_at TEXT NOT NULL
)
"""

TASKS_CREATED_AT_INDEX = """
CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks (created_at DESC, seq DESC)
"""

ALL_TABLES = [TASKS_TABLE]
ALL_INDEXES = [TASKS_CREATED_AT_INDEX]


def initialize_schema(connection: sqlite3.Connection) -> None:
    """Create tables and indexes if they do not exist yet.

    Args:
        connection: Open database connection
    """
    for statement in ALL_TABLES + ALL_INDEXES:
        connection.execute(statement)
    connection.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
    connection.commit()
