"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3

from todolist.adapters.sqlite.connection import DatabaseConnection
from todolist.adapters.sqlite.utils import (
    build_update_clause,
    generate_uuid,
    parse_datetime,
    row_to_dict,
    utc_now,
)
from todolist.exceptions import StoreError
from todolist.models import Task, TaskCreate, TaskUpdate
from todolist.repositories import TaskRepository

_COLUMNS = "id, text, completed, created_at"


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, database: DatabaseConnection):
        """Initialize SQLite task repository.

        Args:
            database: Connection handle; opened on first use if it is not yet
        """
        self.database = database

    @property
    def connection(self) -> sqlite3.Connection:
        return self.database.open()

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        task_dict = row_to_dict(row)
        task_dict["completed"] = bool(task_dict["completed"])
        task_dict["created_at"] = parse_datetime(task_dict["created_at"])
        return Task(**task_dict)

    def _fetch(self, task_id: str) -> sqlite3.Row | None:
        cursor = self.connection.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?", (task_id,)
        )
        return cursor.fetchone()

    async def list_all(self) -> list[Task]:
        """List all tasks, newest first."""
        try:
            cursor = self.connection.execute(
                f"SELECT {_COLUMNS} FROM tasks ORDER BY created_at DESC, seq DESC"
            )
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise StoreError("Failed to list tasks", detail=str(e)) from e
        return [self._row_to_task(row) for row in rows]

    async def get(self, task_id: str) -> Task | None:
        """Get a specific task by ID."""
        try:
            row = self._fetch(task_id)
        except sqlite3.Error as e:
            raise StoreError("Failed to fetch task", detail=str(e)) from e
        return self._row_to_task(row) if row else None

    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task."""
        task = Task(
            id=generate_uuid(),
            text=(task_data.text or "").strip(),
            completed=False,
            created_at=utc_now(),
        )
        try:
            with self.connection:
                self.connection.execute(
                    "INSERT INTO tasks (id, text, completed, created_at) VALUES (?, ?, ?, ?)",
                    (
                        task.id,
                        task.text,
                        int(task.completed),
                        task.created_at.isoformat(timespec="microseconds"),
                    ),
                )
        except sqlite3.Error as e:
            raise StoreError("Failed to create task", detail=str(e)) from e
        return task

    async def update(self, task_id: str, updates: TaskUpdate) -> Task | None:
        """Overwrite the supplied fields of a task."""
        values: dict[str, object] = {}
        if updates.text is not None:
            values["text"] = updates.text.strip()
        if updates.completed is not None:
            values["completed"] = int(updates.completed)

        try:
            with self.connection:
                if values:
                    set_clause, params = build_update_clause(values)
                    self.connection.execute(
                        f"UPDATE tasks SET {set_clause} WHERE id = ?",
                        (*params, task_id),
                    )
                row = self._fetch(task_id)
        except sqlite3.Error as e:
            raise StoreError("Failed to update task", detail=str(e)) from e
        return self._row_to_task(row) if row else None

    async def delete(self, task_id: str) -> bool:
        """Delete a task permanently."""
        try:
            with self.connection:
                cursor = self.connection.execute(
                    "DELETE FROM tasks WHERE id = ?", (task_id,)
                )
        except sqlite3.Error as e:
            raise StoreError("Failed to delete task", detail=str(e)) from e
        return cursor.rowcount > 0
