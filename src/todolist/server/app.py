"""FastAPI application factory for the todo API.

Launch:
    todolist serve                  # Via CLI
    uvicorn todolist.server.app:create_app --factory

The task store is opened once in the lifespan and handed to the service;
a store that cannot be opened aborts startup.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todolist import __version__
from todolist.adapters import InMemoryTaskRepository
from todolist.adapters.sqlite import DatabaseConnection, SqliteTaskRepository
from todolist.config import Config, DatabaseConfig, get_config_manager
from todolist.exceptions import AppError, StoreError
from todolist.repositories import TaskRepository
from todolist.server.routes import router
from todolist.services import TaskService
from todolist.utils.logger import get_logger

SERVER_ERROR = "Something went wrong on the server"


def open_repository(
    db_config: DatabaseConfig,
) -> tuple[TaskRepository, DatabaseConnection | None]:
    """Create the configured repository.

    Returns:
        The repository and the connection handle to close at shutdown
        (None for the in-memory backend)

    Raises:
        StoreError: If the database cannot be opened
    """
    if db_config.backend == "memory":
        return InMemoryTaskRepository(), None

    database = DatabaseConnection(db_config.path)
    database.open()
    return SqliteTaskRepository(database), database


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    if location:
        return f"Invalid request body: {location}: {message}"
    return f"Invalid request body: {message}"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"message": ...}``."""
    logger = get_logger()

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _describe_validation_error(exc)
        logger.info("invalid request %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": SERVER_ERROR})


def create_app(
    config: Config | None = None,
    repository: TaskRepository | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Configuration; loaded from the default profile when omitted
        repository: Pre-built repository; when given, the lifespan does not
            open a store of its own

    Returns:
        Configured FastAPI app
    """
    if config is None:
        config = get_config_manager().config
    logger = get_logger()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database: DatabaseConnection | None = None
        if repository is None:
            try:
                repo, database = open_repository(config.database)
            except StoreError as e:
                logger.critical("cannot start server, task store unavailable: %s", e.detail)
                raise
            app.state.task_service = TaskService(repo)
        logger.info(
            "todo API started (backend=%s)",
            type(app.state.task_service.repository).__name__,
        )
        try:
            yield
        finally:
            if database is not None:
                database.close()
            logger.info("todo API stopped")

    app = FastAPI(title="todolist", version=__version__, lifespan=lifespan)
    if repository is not None:
        # Usable without running the lifespan, e.g. behind httpx.ASGITransport
        app.state.task_service = TaskService(repository)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
