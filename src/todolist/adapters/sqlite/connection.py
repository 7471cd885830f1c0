"""Database connection management for the SQLite task store.

The connection is a single long-lived resource owned by whoever opens it
(the server lifespan, a CLI command, a test fixture) and handed to the
repository explicitly. There is no process-wide global.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todolist.adapters.sqlite.schema import initialize_schema
from todolist.exceptions import StoreError
from todolist.utils.logger import get_logger

DEFAULT_DB_NAME = "todos.db"


def default_db_path() -> Path:
    """Default database location inside the platform data directory."""
    return Path(user_data_dir("todolist")) / DEFAULT_DB_NAME


class DatabaseConnection:
    """Connection handle for the local SQLite store.

    Provides:
    - Explicit open (connect, configure, apply schema) that fails fast
    - WAL mode for better concurrency
    - Automatic directory creation
    - Graceful close, also as a context manager
    """

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = Path(db_path) if db_path is not None else default_db_path()
        self._connection: sqlite3.Connection | None = None

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def connection(self) -> sqlite3.Connection:
        """The open sqlite3 connection.

        Raises:
            StoreError: If the handle has not been opened
        """
        if self._connection is None:
            raise StoreError("Database connection is not open")
        return self._connection

    def open(self) -> sqlite3.Connection:
        """Connect to the database and make sure the schema exists.

        Returns:
            sqlite3.Connection configured for todolist usage

        Raises:
            StoreError: If the database cannot be opened or initialised
        """
        if self._connection is not None:
            return self._connection

        logger = get_logger()
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,  # Allow multi-threaded access
                timeout=30.0,  # Wait up to 30s for locks
            )
            connection.row_factory = sqlite3.Row
            connection.execute("PRAGMA journal_mode = WAL")
            initialize_schema(connection)
        except (sqlite3.Error, OSError) as e:
            logger.error("database connection failed: %s (%s)", self.db_path, e)
            raise StoreError(
                "Could not connect to the database", detail=f"{self.db_path}: {e}"
            ) from e

        logger.info("database connected: %s", self.db_path)
        self._connection = connection
        return connection

    def close(self) -> None:
        """Close database connection gracefully."""
        if self._connection is None:
            return
        try:
            self._connection.commit()  # Commit any pending transactions
            self._connection.close()
        except sqlite3.Error as e:
            get_logger().warning("error while closing database: %s", e)
        finally:
            self._connection = None
        get_logger().info("database closed: %s", self.db_path)

    def __enter__(self) -> DatabaseConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
