"""todolist - a small task list service with an HTTP API and a CLI client."""

__version__ = "0.1.0"
