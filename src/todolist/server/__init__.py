"""HTTP API server."""

from todolist.server.app import create_app

__all__ = ["create_app"]
