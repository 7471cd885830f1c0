"""In-memory implementation of TaskRepository.

Used by tests and by ``database.backend = "memory"``; data lives only as long
as the process.
"""

from __future__ import annotations

import itertools

from todolist.adapters.sqlite.utils import generate_uuid, utc_now
from todolist.models import Task, TaskCreate, TaskUpdate
from todolist.repositories import TaskRepository


class InMemoryTaskRepository(TaskRepository):
    """Dict-backed task store."""

    def __init__(self):
        self._tasks: dict[str, Task] = {}
        # Insertion sequence, breaks ties between equal timestamps
        self._sequence: dict[str, int] = {}
        self._counter = itertools.count()

    async def list_all(self) -> list[Task]:
        return sorted(
            self._tasks.values(),
            key=lambda t: (t.created_at, self._sequence[t.id]),
            reverse=True,
        )

    async def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    async def add(self, task_data: TaskCreate) -> Task:
        task = Task(
            id=generate_uuid(),
            text=(task_data.text or "").strip(),
            completed=False,
            created_at=utc_now(),
        )
        self._tasks[task.id] = task
        self._sequence[task.id] = next(self._counter)
        return task

    async def update(self, task_id: str, updates: TaskUpdate) -> Task | None:
        task = self._tasks.get(task_id)
        if task is None:
            return None

        changes = updates.model_dump(exclude_none=True)
        if "text" in changes:
            changes["text"] = changes["text"].strip()

        updated = task.model_copy(update=changes)
        self._tasks[task_id] = updated
        return updated

    async def delete(self, task_id: str) -> bool:
        if task_id not in self._tasks:
            return False
        del self._tasks[task_id]
        del self._sequence[task_id]
        return True
