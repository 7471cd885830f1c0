"""todolist domain models.

Pydantic models for the todo entity and the request bodies the HTTP API
accepts. They are shared by the server, the store adapters and the client.
"""

from .core import MessageResponse, Task, TaskCreate, TaskToggle, TaskUpdate

__all__ = [
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskToggle",
    "MessageResponse",
]
