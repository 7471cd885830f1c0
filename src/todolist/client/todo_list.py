"""Local mirror of the server's todo list.

The controller loads the list once, then patches it from each mutating
response instead of re-fetching. The server is the source of truth; the
cached snapshots are advisory.

A single ``pending`` flag covers every mutating call: while one request is
in flight, all other mutations are refused, the way a view disables its
controls.
"""

from __future__ import annotations

from todolist.api.todos import TodosAPI
from todolist.exceptions import AppError
from todolist.models import Task
from todolist.utils.logger import get_logger

LOAD_ERROR = "Failed to load todos. Please refresh the page."
ADD_ERROR = "Failed to add todo. Please try again."
DELETE_ERROR = "Failed to delete todo. Please try again."
UPDATE_ERROR = "Failed to update todo. Please try again."

# AppError covers transport and status failures, ValueError malformed bodies.
_REQUEST_FAILURES = (AppError, ValueError)


class TodoListController:
    """Holds the cached todo list and the view flags around it.

    Attributes:
        tasks: Task snapshots in server order, new ones appended at the end
        pending: True while a mutating request is in flight
        last_error: User-facing message of the last failed operation
        initializing: True until the first load resolves
        new_text: Text typed into the add form
        show_add_form: Whether the add form is open
    """

    def __init__(self, api: TodosAPI):
        self.api = api
        self.tasks: list[Task] = []
        self.pending = False
        self.last_error: str | None = None
        self.initializing = True
        self.new_text = ""
        self.show_add_form = False
        self.logger = get_logger()

    def find(self, task_id: str) -> Task | None:
        """Return the cached snapshot for ``task_id``."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def open_add_form(self) -> None:
        self.show_add_form = True

    def close_add_form(self) -> None:
        self.show_add_form = False
        self.new_text = ""

    def _begin_mutation(self, operation: str) -> bool:
        if self.pending:
            self.logger.debug("%s ignored: another request is pending", operation)
            return False
        self.pending = True
        self.last_error = None
        return True

    async def load(self) -> None:
        """Replace the cached list with the server's list."""
        self.last_error = None
        try:
            self.tasks = await self.api.list_todos()
        except _REQUEST_FAILURES as e:
            self.last_error = LOAD_ERROR
            self.logger.error("error fetching todos: %s", e)
        finally:
            self.initializing = False

    async def add(self, text: str | None = None) -> Task | None:
        """Create a todo from ``text`` (or the add form) and append it.

        Returns:
            The created task, or None when nothing was created
        """
        if text is None:
            text = self.new_text
        if text.strip() == "":
            return None
        if not self._begin_mutation("add"):
            return None

        try:
            task = await self.api.create_todo(text)
        except _REQUEST_FAILURES as e:
            self.last_error = ADD_ERROR
            self.logger.error("error adding todo: %s", e)
            return None
        finally:
            self.pending = False

        self.tasks = [*self.tasks, task]
        self.close_add_form()
        return task

    async def delete(self, task_id: str) -> bool:
        """Delete a todo and drop it from the cached list.

        Returns:
            True when the server confirmed the delete
        """
        if not self._begin_mutation("delete"):
            return False

        try:
            await self.api.delete_todo(task_id)
        except _REQUEST_FAILURES as e:
            self.last_error = DELETE_ERROR
            self.logger.error("error deleting todo %s: %s", task_id, e)
            return False
        finally:
            self.pending = False

        self.tasks = [task for task in self.tasks if task.id != task_id]
        return True

    async def toggle(self, task_id: str) -> Task | None:
        """Flip a todo's completion status.

        The request carries the negation of the cached value; the cached
        snapshot is then replaced by the server's copy.

        Returns:
            The server's updated task, or None on failure
        """
        if not self._begin_mutation("toggle"):
            return None

        try:
            current = self.find(task_id)
            if current is None:
                raise LookupError(f"todo {task_id} is not in the list")
            updated = await self.api.toggle_todo(task_id, not current.completed)
        except (*_REQUEST_FAILURES, LookupError) as e:
            self.last_error = UPDATE_ERROR
            self.logger.error("error updating todo %s: %s", task_id, e)
            return None
        finally:
            self.pending = False

        self.tasks = [updated if task.id == task_id else task for task in self.tasks]
        return updated
