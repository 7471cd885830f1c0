"""Repository interfaces."""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
