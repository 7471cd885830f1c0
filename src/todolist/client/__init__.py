"""Client-side todo list state."""

from todolist.client.todo_list import TodoListController

__all__ = ["TodoListController"]
