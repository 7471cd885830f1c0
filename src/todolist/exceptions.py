"""Application error hierarchy.

Every error carries the HTTP status the server answers with and the exit
code the CLI terminates with, so both surfaces translate them the same way.
"""

from __future__ import annotations

from todolist.utils import exit_codes


class AppError(Exception):
    """Base application error with HTTP status and exit code."""

    status_code: int = 500
    exit_code: int = exit_codes.ERROR_GENERAL

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        exit_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if exit_code is not None:
            self.exit_code = exit_code


class ValidationError(AppError):
    """Bad or missing input, e.g. empty todo text."""

    status_code = 400
    exit_code = exit_codes.ERROR_INVALID_ARGS


class NotFoundError(AppError):
    """No todo matches the requested id."""

    status_code = 404
    exit_code = exit_codes.ERROR_NOT_FOUND

    def __init__(self, message: str = "Todo not found"):
        super().__init__(message)


class StoreError(AppError):
    """Underlying persistence failure.

    ``detail`` is meant for the operator log only and is never sent to
    HTTP clients.
    """

    status_code = 500
    exit_code = exit_codes.ERROR_GENERAL

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.detail = detail or message


class NetworkError(AppError):
    """Client side: request failed in transport or returned a non-2xx status."""

    exit_code = exit_codes.ERROR_NETWORK

    def __init__(self, message: str, response_status: int | None = None):
        super().__init__(message)
        # None for transport failures
        self.response_status = response_status
