"""Tests for the SQLite connection handle and adapter failure modes."""

from __future__ import annotations

import pytest

from todolist.adapters.sqlite import (
    DatabaseConnection,
    SqliteTaskRepository,
    default_db_path,
)
from todolist.exceptions import StoreError
from todolist.models import TaskCreate


def test_open_creates_database_and_parent_dirs(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "todos.db"

    with DatabaseConnection(db_path) as database:
        assert database.is_open
        tables = database.connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'tasks'"
        ).fetchall()
        assert len(tables) == 1

    assert db_path.exists()
    assert not database.is_open


def test_open_failure_raises_store_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")

    database = DatabaseConnection(blocker / "todos.db")

    with pytest.raises(StoreError) as exc_info:
        database.open()
    assert str(blocker) in exc_info.value.detail
    assert not database.is_open


def test_connection_before_open_raises_store_error(tmp_path):
    database = DatabaseConnection(tmp_path / "todos.db")

    with pytest.raises(StoreError):
        database.connection


def test_close_is_idempotent(tmp_path):
    database = DatabaseConnection(tmp_path / "todos.db")
    database.open()

    database.close()
    database.close()

    assert not database.is_open


def test_default_path_lives_in_user_data_dir(isolated_dirs):
    assert default_db_path() == isolated_dirs / "data" / "todos.db"


@pytest.mark.asyncio
async def test_tasks_survive_reopen(tmp_path):
    db_path = tmp_path / "todos.db"

    with DatabaseConnection(db_path) as database:
        created = await SqliteTaskRepository(database).add(TaskCreate(text="Buy milk"))

    with DatabaseConnection(db_path) as database:
        tasks = await SqliteTaskRepository(database).list_all()

    assert tasks == [created]


@pytest.mark.asyncio
async def test_repository_opens_connection_lazily(tmp_path):
    database = DatabaseConnection(tmp_path / "todos.db")
    repo = SqliteTaskRepository(database)

    await repo.add(TaskCreate(text="Buy milk"))

    assert database.is_open
    database.close()


@pytest.mark.asyncio
async def test_backend_failure_becomes_store_error(tmp_path):
    database = DatabaseConnection(tmp_path / "todos.db")
    repo = SqliteTaskRepository(database)
    database.open()
    # Close the raw sqlite connection behind the handle's back
    database.connection.close()

    with pytest.raises(StoreError):
        await repo.list_all()
    with pytest.raises(StoreError):
        await repo.add(TaskCreate(text="Buy milk"))
