"""Task service - Business logic for todo operations.

This service layer sits between the HTTP routes and the repository. It owns
the validation rules and the existence checks; persistence failures from the
repository propagate unchanged as ``StoreError``.
"""

from __future__ import annotations

from typing import Any

from todolist.exceptions import NotFoundError, ValidationError
from todolist.models import Task, TaskCreate, TaskUpdate
from todolist.repositories import TaskRepository
from todolist.utils.logger import get_logger

TODO_TEXT_REQUIRED = "Todo text is required"


def _require_text(text: Any) -> str:
    """Return the trimmed text or raise ValidationError if it is blank."""
    if not isinstance(text, str) or text.strip() == "":
        raise ValidationError(TODO_TEXT_REQUIRED)
    return text.strip()


class TaskService:
    """Service for todo business logic.

    Each operation is independent; the repository is the only shared state.
    """

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository
        self.logger = get_logger()

    async def list_tasks(self) -> list[Task]:
        """List all tasks, newest first."""
        return await self.repository.list_all()

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If no task has this ID
        """
        task = await self.repository.get(task_id)
        if task is None:
            raise NotFoundError()
        return task

    async def add_task(self, text: str | None) -> Task:
        """Create a new, not yet completed task.

        Args:
            text: Todo text; surrounding whitespace is trimmed

        Raises:
            ValidationError: If text is missing, empty or whitespace-only
        """
        clean_text = _require_text(text)
        task = await self.repository.add(TaskCreate(text=clean_text))
        self.logger.info("todo created: %s", task.id)
        return task

    async def update_task(
        self,
        task_id: str,
        *,
        text: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        """Overwrite the given fields of a task.

        Args:
            task_id: Unique identifier for the task
            text: New text, validated like on create when supplied
            completed: New completion status

        Raises:
            NotFoundError: If no task has this ID
            ValidationError: If the supplied text is blank
        """
        await self.get_task(task_id)

        if text is not None:
            text = _require_text(text)

        updated = await self.repository.update(
            task_id, TaskUpdate(text=text, completed=completed)
        )
        if updated is None:
            # Removed by another client between the check and the write
            raise NotFoundError()
        self.logger.info("todo updated: %s", task_id)
        return updated

    async def toggle_task(self, task_id: str, completed: bool | None = None) -> Task:
        """Set or flip a task's completion status.

        Args:
            task_id: Unique identifier for the task
            completed: Explicit value to set; None (not sent) flips the
                stored value. An explicit False is honoured, not flipped.

        Raises:
            NotFoundError: If no task has this ID
        """
        task = await self.get_task(task_id)

        if completed is None:
            completed = not task.completed

        updated = await self.repository.update(task_id, TaskUpdate(completed=completed))
        if updated is None:
            raise NotFoundError()
        self.logger.info("todo toggled: %s -> completed=%s", task_id, completed)
        return updated

    async def delete_task(self, task_id: str) -> None:
        """Delete a task permanently.

        Raises:
            NotFoundError: If no task has this ID, including one already deleted
        """
        await self.get_task(task_id)

        if not await self.repository.delete(task_id):
            raise NotFoundError()
        self.logger.info("todo deleted: %s", task_id)
