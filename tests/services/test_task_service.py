"""Unit tests for TaskService."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from todolist.exceptions import NotFoundError, StoreError, ValidationError
from todolist.models import Task, TaskUpdate
from todolist.services import TODO_TEXT_REQUIRED, TaskService

CREATED = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def _task(completed: bool = False, text: str = "Buy milk") -> Task:
    return Task(id="task-1", text=text, completed=completed, created_at=CREATED)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.list_all = AsyncMock(return_value=[])
    repo.get = AsyncMock(return_value=None)
    repo.add = AsyncMock()
    repo.update = AsyncMock()
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture()
def mocked_service(mock_repo):
    return TaskService(mock_repo)


# ---------------------------------------------------------------------------
# add_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_then_get_returns_trimmed_incomplete_task(service):
    created = await service.add_task("  Buy milk ")

    fetched = await service.get_task(created.id)

    assert fetched.text == "Buy milk"
    assert fetched.completed is False


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "   ", "\t\n"])
async def test_add_blank_text_is_rejected(mocked_service, mock_repo, text):
    with pytest.raises(ValidationError) as exc_info:
        await mocked_service.add_task(text)

    assert exc_info.value.message == TODO_TEXT_REQUIRED
    assert exc_info.value.status_code == 400
    mock_repo.add.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_non_string_text_is_rejected(mocked_service, mock_repo):
    with pytest.raises(ValidationError):
        await mocked_service.add_task(42)  # type: ignore[arg-type]
    mock_repo.add.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_blank_text_creates_no_record(service):
    with pytest.raises(ValidationError):
        await service.add_task("   ")

    assert await service.list_tasks() == []


@pytest.mark.asyncio
async def test_add_passes_trimmed_text_to_repository(mocked_service, mock_repo):
    mock_repo.add.return_value = _task()

    await mocked_service.add_task("  Buy milk  ")

    task_create = mock_repo.add.call_args[0][0]
    assert task_create.text == "Buy milk"


# ---------------------------------------------------------------------------
# list / get
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_is_newest_first(service):
    a = await service.add_task("A")
    b = await service.add_task("B")

    assert [t.id for t in await service.list_tasks()] == [b.id, a.id]


@pytest.mark.asyncio
async def test_get_unknown_id_is_not_found(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.get_task("missing")

    assert exc_info.value.message == "Todo not found"
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_store_errors_propagate(mocked_service, mock_repo):
    mock_repo.list_all.side_effect = StoreError("Failed to list tasks", detail="disk I/O")

    with pytest.raises(StoreError):
        await mocked_service.list_tasks()


# ---------------------------------------------------------------------------
# update_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_overwrites_given_fields(service):
    created = await service.add_task("Buy milk")

    updated = await service.update_task(created.id, text=" Buy bread ", completed=True)

    assert updated.text == "Buy bread"
    assert updated.completed is True
    assert updated.created_at == created.created_at


@pytest.mark.asyncio
async def test_update_without_text_keeps_text(service):
    created = await service.add_task("Buy milk")

    updated = await service.update_task(created.id, completed=True)

    assert updated.text == "Buy milk"


@pytest.mark.asyncio
async def test_update_blank_text_is_rejected(service):
    created = await service.add_task("Buy milk")

    with pytest.raises(ValidationError):
        await service.update_task(created.id, text="   ")

    assert (await service.get_task(created.id)).text == "Buy milk"


@pytest.mark.asyncio
async def test_update_checks_existence_first(mocked_service, mock_repo):
    with pytest.raises(NotFoundError):
        await mocked_service.update_task("missing", text="x")

    mock_repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_of_concurrently_deleted_task_is_not_found(mocked_service, mock_repo):
    mock_repo.get.return_value = _task()
    mock_repo.update.return_value = None

    with pytest.raises(NotFoundError):
        await mocked_service.update_task("task-1", completed=True)


# ---------------------------------------------------------------------------
# toggle_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_toggle_without_value_flips(service):
    created = await service.add_task("Buy milk")

    toggled = await service.toggle_task(created.id)

    assert toggled.completed is True


@pytest.mark.asyncio
async def test_toggle_twice_restores_original(service):
    created = await service.add_task("Buy milk")

    await service.toggle_task(created.id)
    toggled = await service.toggle_task(created.id)

    assert toggled.completed is False


@pytest.mark.asyncio
@pytest.mark.parametrize("stored", [True, False])
@pytest.mark.parametrize("requested", [True, False])
async def test_toggle_with_value_sets_exactly_that(mocked_service, mock_repo, stored, requested):
    mock_repo.get.return_value = _task(completed=stored)
    mock_repo.update.return_value = _task(completed=requested)

    result = await mocked_service.toggle_task("task-1", requested)

    assert result.completed is requested
    mock_repo.update.assert_awaited_once_with("task-1", TaskUpdate(completed=requested))


@pytest.mark.asyncio
async def test_toggle_explicit_false_is_not_treated_as_absent(service):
    created = await service.add_task("Buy milk")

    toggled = await service.toggle_task(created.id, False)

    assert toggled.completed is False


@pytest.mark.asyncio
async def test_toggle_unknown_id_is_not_found(service):
    with pytest.raises(NotFoundError):
        await service.toggle_task("missing")


# ---------------------------------------------------------------------------
# delete_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_delete_then_get_is_not_found(service):
    created = await service.add_task("Buy milk")

    await service.delete_task(created.id)

    with pytest.raises(NotFoundError):
        await service.get_task(created.id)


@pytest.mark.asyncio
async def test_second_delete_is_not_found(service):
    created = await service.add_task("Buy milk")
    await service.delete_task(created.id)

    with pytest.raises(NotFoundError):
        await service.delete_task(created.id)


@pytest.mark.asyncio
async def test_delete_unknown_id_does_not_touch_repository(mocked_service, mock_repo):
    with pytest.raises(NotFoundError):
        await mocked_service.delete_task("missing")

    mock_repo.delete.assert_not_awaited()
