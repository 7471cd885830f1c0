"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from todolist.models import Task
from todolist.utils.ui.console import get_console

console = get_console()

EMPTY_MESSAGE = "No todos yet. Add one!"
LOADING_MESSAGE = "Loading todos..."


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each task ID.

    Starts from length 1 and grows until unique among all IDs.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required suffix length
    """
    if not task_ids:
        return {}

    result = {}

    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            conflicts = [
                tid for tid in task_ids if tid != task_id and tid.endswith(suffix)
            ]
            if not conflicts:
                result[task_id] = length
                break
        else:
            # One ID is a suffix of another; only the full ID is unambiguous
            result[task_id] = len(task_id)

    return result


def _to_data(data: Any) -> Any:
    """Convert models (or lists of them) into JSON-friendly structures."""
    if isinstance(data, Task):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_to_data(item) for item in data]
    return data


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(_to_data(data), indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(_to_data(data), default_flow_style=False, sort_keys=False))
    elif output_format == "quiet":
        format_quiet(data)
    elif isinstance(data, list):
        format_todo_list(data)
    elif isinstance(data, Task):
        format_todo(data)
    else:
        console.print(data)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    if isinstance(data, list):
        for item in data:
            format_quiet(item)
    elif isinstance(data, Task):
        print(data.id)


def _todo_text(task: Task) -> Text:
    if task.completed:
        return Text(task.text, style="strike dim")
    return Text(task.text)


def _format_created(created_at: datetime) -> str:
    return created_at.astimezone().strftime("%Y-%m-%d %H:%M")


def _short_id(task_id: str, suffix_length: int) -> Text:
    """Full ID with the unique suffix highlighted."""
    head, tail = task_id[:-suffix_length], task_id[-suffix_length:]
    text = Text(head, style="dim")
    text.append(tail, style="bold cyan")
    return text


def format_todo_list(tasks: list[Task], initializing: bool = False) -> None:
    """Render the todo list as a table, completed items struck through."""
    if initializing:
        console.print(f"[dim]{LOADING_MESSAGE}[/dim]")
        return
    if not tasks:
        console.print(f"[yellow]{EMPTY_MESSAGE}[/yellow]")
        return

    suffixes = calculate_unique_suffixes([task.id for task in tasks])

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", no_wrap=True)
    table.add_column("", width=3)
    table.add_column("Todo")
    table.add_column("Created", no_wrap=True)

    for task in tasks:
        table.add_row(
            _short_id(task.id, suffixes[task.id]),
            "[green]✓[/green]" if task.completed else "[dim]○[/dim]",
            _todo_text(task),
            _format_created(task.created_at),
        )

    console.print(table)
    done = sum(1 for task in tasks if task.completed)
    console.print(f"[dim]{done}/{len(tasks)} completed[/dim]")


def format_todo(task: Task) -> None:
    """Render a single todo."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("ID", task.id)
    table.add_row("Text", _todo_text(task))
    table.add_row("Completed", "yes" if task.completed else "no")
    table.add_row("Created", _format_created(task.created_at))
    console.print(table)
