"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and a
todo API backed by an in-memory store.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio

from todolist.adapters import InMemoryTaskRepository
from todolist.api import APIClient, TodosAPI
from todolist.config import ENV_OVERRIDES, Config, reset_config_managers
from todolist.server import create_app
from todolist.services import TaskService


# ---------------------------------------------------------------------------
# Filesystem / environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point platformdirs lookups at *tmp_path* and drop env overrides."""
    import todolist.utils.logger as logger_mod

    for env_name in ENV_OVERRIDES:
        monkeypatch.delenv(env_name, raising=False)

    logger_mod._logger = None
    logger_mod._console_handler = None
    reset_config_managers()

    with (
        patch("todolist.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")),
        patch("todolist.config.user_config_dir", return_value=str(tmp_path / "config")),
        patch(
            "todolist.adapters.sqlite.connection.user_data_dir",
            return_value=str(tmp_path / "data"),
        ),
    ):
        yield tmp_path

    app_logger = logging.getLogger("todolist")
    owned = [logging.handlers.RotatingFileHandler, logging.StreamHandler]
    for handler in list(app_logger.handlers):
        # Leave handlers attached by pytest itself in place
        if type(handler) in owned:
            handler.close()
            app_logger.removeHandler(handler)
    logger_mod._logger = None
    logger_mod._console_handler = None
    reset_config_managers()


# ---------------------------------------------------------------------------
# Server side
# ---------------------------------------------------------------------------


@pytest.fixture()
def repository():
    return InMemoryTaskRepository()


@pytest.fixture()
def service(repository):
    return TaskService(repository)


@pytest.fixture()
def app(repository):
    return create_app(Config(), repository=repository)


# ---------------------------------------------------------------------------
# Client side, talking to the app in-process
# ---------------------------------------------------------------------------


def make_api_client(app) -> APIClient:
    """APIClient whose requests are served by *app* without a socket."""
    return APIClient(Config(), transport=httpx.ASGITransport(app=app))


@pytest_asyncio.fixture()
async def todos_api(app):
    client = make_api_client(app)
    yield TodosAPI(client)
    await client.close()
