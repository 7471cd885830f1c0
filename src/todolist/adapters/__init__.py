"""Storage adapters implementing the repository interfaces."""

from todolist.adapters.memory import InMemoryTaskRepository

__all__ = ["InMemoryTaskRepository"]
