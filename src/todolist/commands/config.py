"""Configuration management commands."""

import typer
from pydantic import ValidationError as PydanticValidationError

from todolist.config import get_config_manager, is_known_key
from todolist.exceptions import ValidationError
from todolist.utils.ui.console import get_console
from todolist.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("show")
@command_wrapper
def show_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str = typer.Option("json", "--output", "-o", help="Output format (json/yaml)"),
) -> None:
    """Show the effective configuration, environment overrides included."""
    config_manager = get_config_manager(profile)
    format_output(config_manager.config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., api.endpoint)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    config_manager = get_config_manager(profile)
    if not is_known_key(key):
        raise ValidationError(f"Configuration key '{key}' not found")
    console.print(config_manager.get(key))


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., server.port)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    config_manager = get_config_manager(profile)
    try:
        config_manager.set(key, value)
    except KeyError as e:
        raise ValidationError(f"Configuration key '{key}' not found") from e
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid value for '{key}': {value}") from e
    format_success(f"Set {key} = {value}")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Key to reset (all if omitted)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Reset configuration to defaults."""
    config_manager = get_config_manager(profile)
    try:
        config_manager.reset(key)
    except KeyError as e:
        raise ValidationError(f"Configuration key '{key}' not found") from e
    format_success(f"Reset {key}" if key else "Configuration reset to defaults")
