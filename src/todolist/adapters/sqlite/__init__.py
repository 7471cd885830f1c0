"""SQLite adapter for the todo store."""

from todolist.adapters.sqlite.connection import DatabaseConnection, default_db_path
from todolist.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = ["DatabaseConnection", "SqliteTaskRepository", "default_db_path"]
