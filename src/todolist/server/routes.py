"""Todo routes under ``/api/todos``.

    GET    /api/todos          -> all todos, newest first
    GET    /api/todos/{id}     -> one todo
    POST   /api/todos          -> create, 201
    PUT    /api/todos/{id}     -> overwrite text and/or completed
    PATCH  /api/todos/{id}     -> toggle, or set ``completed`` when sent
    DELETE /api/todos/{id}     -> delete, confirmation message
"""

from __future__ import annotations

import functools
import time
import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from todolist.exceptions import AppError, NotFoundError, StoreError, ValidationError
from todolist.models import MessageResponse, Task, TaskCreate, TaskToggle, TaskUpdate
from todolist.services import TaskService
from todolist.utils.logger import get_logger

router = APIRouter(prefix="/api/todos", tags=["todos"])

TODO_DELETED = "Todo deleted successfully"


def get_task_service(request: Request) -> TaskService:
    """Dependency returning the service created by the app lifespan."""
    return request.app.state.task_service


def route_wrapper(action: str):
    """Wrap a route with logging and the generic 500 fallback.

    Validation and not-found errors pass through to the app's handlers.
    Anything else is logged with its detail and replaced by
    ``"Server error while <action>"`` so store internals never reach clients.
    """

    def decorator(func: Callable[..., Awaitable[Any]]):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            logger = get_logger()
            start = time.monotonic()
            logger.debug("request started: %s", action)
            try:
                result = await func(*args, **kwargs)
            except (ValidationError, NotFoundError) as e:
                elapsed = time.monotonic() - start
                logger.info("request rejected: %s (%.3fs) - %s", action, elapsed, e.message)
                raise
            except Exception as e:
                elapsed = time.monotonic() - start
                detail = e.detail if isinstance(e, StoreError) else str(e)
                logger.error(
                    "request failed: %s (%.3fs) - %s\n%s",
                    action,
                    elapsed,
                    detail,
                    traceback.format_exc(),
                )
                raise AppError(f"Server error while {action}", status_code=500) from e

            elapsed = time.monotonic() - start
            logger.info("request completed: %s (%.3fs)", action, elapsed)
            return result

        return wrapper

    return decorator


@router.get("", response_model=list[Task])
@route_wrapper("fetching todos")
async def list_todos(service: TaskService = Depends(get_task_service)) -> list[Task]:
    return await service.list_tasks()


@router.get("/{task_id}", response_model=Task)
@route_wrapper("fetching todo")
async def get_todo(
    task_id: str, service: TaskService = Depends(get_task_service)
) -> Task:
    return await service.get_task(task_id)


@router.post("", response_model=Task, status_code=201)
@route_wrapper("creating todo")
async def create_todo(
    payload: TaskCreate | None = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> Task:
    return await service.add_task(payload.text if payload else None)


@router.put("/{task_id}", response_model=Task)
@route_wrapper("updating todo")
async def update_todo(
    task_id: str,
    payload: TaskUpdate | None = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> Task:
    payload = payload or TaskUpdate()
    return await service.update_task(
        task_id, text=payload.text, completed=payload.completed
    )


@router.patch("/{task_id}", response_model=Task)
@route_wrapper("toggling todo status")
async def toggle_todo(
    task_id: str,
    payload: TaskToggle | None = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> Task:
    completed = payload.requested_state() if payload is not None else None
    return await service.toggle_task(task_id, completed)


@router.delete("/{task_id}", response_model=MessageResponse)
@route_wrapper("deleting todo")
async def delete_todo(
    task_id: str, service: TaskService = Depends(get_task_service)
) -> MessageResponse:
    await service.delete_task(task_id)
    return MessageResponse(message=TODO_DELETED)
