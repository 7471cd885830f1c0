"""Repository abstraction layer for todolist.

This module defines the abstract base class (interface) for task persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

The service layer depends only on this contract, so the storage backend
(SQLite, in-memory) can be swapped without touching business logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todolist.models import Task, TaskCreate, TaskUpdate


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Every operation is atomic per record. Persistence failures surface as
    ``StoreError``; a missing record is reported through the return value,
    never as an exception.
    """

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """List all tasks, newest first.

        Returns:
            Tasks ordered by ``created_at`` descending; among equal
            timestamps the later insert comes first

        Raises:
            StoreError: If the backend fails
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task | None:
        """Get a specific task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object, or None if no task has this ID
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            task_data: TaskCreate object whose text has already been validated

        Returns:
            Created Task with generated ID, trimmed text, ``completed=False``
            and ``created_at`` set
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task | None:
        """Overwrite the supplied fields of a task.

        Fields left as None in ``updates`` keep their stored value.

        Args:
            task_id: Unique identifier for the task
            updates: TaskUpdate object with fields to update

        Returns:
            Updated Task object, or None if no task has this ID
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task permanently.

        Args:
            task_id: Unique identifier for the task

        Returns:
            True if a task was removed, False if none matched
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )
