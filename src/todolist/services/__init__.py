"""Business logic services."""

from .task_service import TODO_TEXT_REQUIRED, TaskService

__all__ = ["TaskService", "TODO_TEXT_REQUIRED"]
