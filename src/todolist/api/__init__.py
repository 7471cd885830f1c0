"""HTTP client for the todo API."""

from todolist.api.client import APIClient, get_client
from todolist.api.todos import TodosAPI

__all__ = ["APIClient", "TodosAPI", "get_client"]
