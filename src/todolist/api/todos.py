"""Todos API endpoints."""

from typing import Any, Optional

from todolist.api.client import APIClient
from todolist.models import Task


class TodosAPI:
    """Todos API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_todos(self) -> list[Task]:
        """List all todos, newest first."""
        response = await self.client.get("/todos")
        return [Task.model_validate(item) for item in response.json()]

    async def get_todo(self, todo_id: str) -> Task:
        """Get a specific todo by ID."""
        response = await self.client.get(f"/todos/{todo_id}")
        return Task.model_validate(response.json())

    async def create_todo(self, text: str) -> Task:
        """Create a new todo."""
        response = await self.client.post("/todos", json={"text": text})
        return Task.model_validate(response.json())

    async def update_todo(
        self,
        todo_id: str,
        *,
        text: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Task:
        """Overwrite the given fields of a todo."""
        data: dict[str, Any] = {}
        if text is not None:
            data["text"] = text
        if completed is not None:
            data["completed"] = completed

        response = await self.client.put(f"/todos/{todo_id}", json=data)
        return Task.model_validate(response.json())

    async def toggle_todo(self, todo_id: str, completed: Optional[bool] = None) -> Task:
        """Toggle a todo, or set ``completed`` explicitly when given.

        The key is left out of the body when ``completed`` is None so the
        server flips the stored value.
        """
        data: dict[str, Any] = {}
        if completed is not None:
            data["completed"] = completed

        response = await self.client.patch(f"/todos/{todo_id}", json=data)
        return Task.model_validate(response.json())

    async def delete_todo(self, todo_id: str) -> str:
        """Delete a todo and return the server's confirmation message."""
        response = await self.client.delete(f"/todos/{todo_id}")
        return response.json()["message"]
