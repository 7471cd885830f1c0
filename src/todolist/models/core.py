"""Todo data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Task(BaseModel):
    """Task model representing a stored todo item.

    Serialises with camelCase keys (``createdAt``) and accepts either
    spelling on input.

    Attributes:
        id: Unique identifier assigned by the store
        text: Todo text, trimmed and never empty
        completed: Completion status
        created_at: Creation timestamp, set once by the store
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    text: str
    completed: bool = False
    created_at: datetime


class TaskCreate(BaseModel):
    """Request body for creating a todo.

    ``text`` is optional here so that a missing value reaches the service
    and is rejected with the same message as an empty one.

    Attributes:
        text: Todo text (required by the service)
    """

    text: str | None = None


class TaskUpdate(BaseModel):
    """Request body for overwriting a todo.

    All fields are optional - only provided fields will be updated.

    Attributes:
        text: New todo text
        completed: New completion status
    """

    text: str | None = None
    completed: bool | None = None


class TaskToggle(BaseModel):
    """Request body for toggling a todo.

    A missing ``completed`` key means "flip the stored value"; an explicit
    value, ``false`` included, is set verbatim.
    """

    completed: bool | None = Field(default=None)

    @field_validator("completed")
    @classmethod
    def reject_null(cls, v: bool | None) -> bool:
        # Runs only for values actually sent; the default never gets here.
        if v is None:
            raise ValueError("completed must be a boolean")
        return v

    def requested_state(self) -> bool | None:
        """Return the explicit value, or None when the key was not sent."""
        if "completed" not in self.model_fields_set:
            return None
        return self.completed


class MessageResponse(BaseModel):
    """Plain ``{"message": ...}`` payload used for confirmations and errors."""

    message: str
