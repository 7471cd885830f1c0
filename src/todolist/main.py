"""Main entry point for the todolist CLI."""

from typing import Optional

import typer
import uvicorn

from todolist import __version__
from todolist.commands import config
from todolist.commands.decorators import command_wrapper
from todolist.commands.utils import (
    open_todo_list,
    raise_for_error,
    reraise_api_error,
    resolve_task_ref,
)
from todolist.config import get_config_manager
from todolist.exceptions import NetworkError, ValidationError
from todolist.server.app import create_app
from todolist.services import TODO_TEXT_REQUIRED
from todolist.utils.logger import enable_console_logging
from todolist.utils.ui.console import get_console
from todolist.utils.ui.formatters import format_output, format_success

app = typer.Typer(
    name="todolist",
    help="A small task list: HTTP API server and command-line client",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(config.app, name="config", help="Configuration management")

_PROFILE = typer.Option("default", "--profile", help="Profile name")
_OUTPUT = typer.Option(
    "pretty", "--output", "-o", help="Output format (pretty/json/yaml/quiet)"
)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todolist[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
@command_wrapper
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
    profile: str = _PROFILE,
) -> None:
    """Run the todo API server."""
    settings = get_config_manager(profile).config
    host = host or settings.server.host
    port = port or settings.server.port
    enable_console_logging(settings.logging.level)

    console.print(f"[bold]todolist[/bold] API on [cyan]http://{host}:{port}/api/todos[/cyan]")
    if reload:
        # Reload needs an import string; the factory reads the default profile
        uvicorn.run(
            "todolist.server.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
        )
    else:
        uvicorn.run(create_app(settings), host=host, port=port)


@app.command("list")
@command_wrapper
async def list_todos(profile: str = _PROFILE, output: str = _OUTPUT) -> None:
    """List todos, newest first."""
    async with open_todo_list(profile) as todo_list:
        await todo_list.load()
        raise_for_error(todo_list)
        format_output(todo_list.tasks, output)


@app.command("add")
@command_wrapper
async def add_todo(
    text: str = typer.Argument(..., help="Todo text"),
    profile: str = _PROFILE,
    output: str = _OUTPUT,
) -> None:
    """Add a todo."""
    if text.strip() == "":
        raise ValidationError(TODO_TEXT_REQUIRED)

    async with open_todo_list(profile) as todo_list:
        await todo_list.load()
        raise_for_error(todo_list)
        task = await todo_list.add(text)
        raise_for_error(todo_list)
        if output == "pretty":
            format_success(f"Added '{task.text}'")
            format_output(todo_list.tasks, output)
        else:
            format_output(task, output)


@app.command("toggle")
@command_wrapper
async def toggle_todo(
    ref: str = typer.Argument(..., help="Todo ID or unique ID suffix"),
    profile: str = _PROFILE,
    output: str = _OUTPUT,
) -> None:
    """Mark a todo done, or not done again."""
    async with open_todo_list(profile) as todo_list:
        await todo_list.load()
        raise_for_error(todo_list)
        task_id = resolve_task_ref(todo_list.tasks, ref)
        task = await todo_list.toggle(task_id)
        raise_for_error(todo_list)
        if output == "pretty":
            state = "done" if task.completed else "not done"
            format_success(f"Marked '{task.text}' {state}")
            format_output(todo_list.tasks, output)
        else:
            format_output(task, output)


@app.command("delete")
@command_wrapper
async def delete_todo(
    ref: str = typer.Argument(..., help="Todo ID or unique ID suffix"),
    profile: str = _PROFILE,
    output: str = _OUTPUT,
) -> None:
    """Delete a todo."""
    async with open_todo_list(profile) as todo_list:
        await todo_list.load()
        raise_for_error(todo_list)
        task_id = resolve_task_ref(todo_list.tasks, ref)
        await todo_list.delete(task_id)
        raise_for_error(todo_list)
        if output == "pretty":
            format_success("Todo deleted successfully")
            format_output(todo_list.tasks, output)
        elif output == "quiet":
            print(task_id)
        else:
            format_output({"id": task_id, "deleted": True}, output)


@app.command("show")
@command_wrapper
async def show_todo(
    ref: str = typer.Argument(..., help="Todo ID or unique ID suffix"),
    profile: str = _PROFILE,
    output: str = _OUTPUT,
) -> None:
    """Show one todo as the server has it now."""
    async with open_todo_list(profile) as todo_list:
        await todo_list.load()
        raise_for_error(todo_list)
        task_id = resolve_task_ref(todo_list.tasks, ref)
        try:
            task = await todo_list.api.get_todo(task_id)
        except NetworkError as e:
            reraise_api_error(e)
        format_output(task, output)


@app.command("edit")
@command_wrapper
async def edit_todo(
    ref: str = typer.Argument(..., help="Todo ID or unique ID suffix"),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="New todo text"),
    completed: Optional[bool] = typer.Option(
        None, "--completed/--not-completed", help="Set completion status"
    ),
    profile: str = _PROFILE,
    output: str = _OUTPUT,
) -> None:
    """Overwrite a todo's text and/or completion status."""
    if text is None and completed is None:
        raise ValidationError("Nothing to update; pass --text or --completed/--not-completed")

    async with open_todo_list(profile) as todo_list:
        await todo_list.load()
        raise_for_error(todo_list)
        task_id = resolve_task_ref(todo_list.tasks, ref)
        try:
            task = await todo_list.api.update_todo(task_id, text=text, completed=completed)
        except NetworkError as e:
            reraise_api_error(e)
        if output == "pretty":
            format_success("Todo updated")
        format_output(task, output)


def main():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
