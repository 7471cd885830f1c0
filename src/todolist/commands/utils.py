"""Helpers shared by the todo commands."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import NoReturn

from todolist.api import TodosAPI, get_client
from todolist.client import TodoListController
from todolist.exceptions import NetworkError, NotFoundError, ValidationError
from todolist.models import Task


@asynccontextmanager
async def open_todo_list(profile: str = "default") -> AsyncIterator[TodoListController]:
    """Yield a controller bound to the profile's API endpoint."""
    client = get_client(profile)
    try:
        yield TodoListController(TodosAPI(client))
    finally:
        await client.close()


def raise_for_error(controller: TodoListController) -> None:
    """Turn the controller's last error into a command failure."""
    if controller.last_error:
        raise NetworkError(controller.last_error)


def resolve_task_ref(tasks: list[Task], ref: str) -> str:
    """Resolve a full ID or a unique ID suffix to a full task ID.

    Raises:
        ValidationError: If the reference is empty
        NotFoundError: If the reference matches no todo
        ValidationError: If the suffix matches more than one todo
    """
    ref = ref.strip()
    if not ref:
        raise ValidationError("A todo ID is required")

    for task in tasks:
        if task.id == ref:
            return task.id

    matches = [task.id for task in tasks if task.id.endswith(ref)]
    if not matches:
        raise NotFoundError(f"No todo matches '{ref}'")
    if len(matches) > 1:
        raise ValidationError(
            f"'{ref}' matches {len(matches)} todos; use more characters of the ID"
        )
    return matches[0]


def reraise_api_error(error: NetworkError) -> NoReturn:
    """Re-raise 400 and 404 responses as ValidationError and NotFoundError."""
    if error.response_status == 400:
        raise ValidationError(error.message) from error
    if error.response_status == 404:
        raise NotFoundError(error.message) from error
    raise error
