"""Error taxonomy for todolist-cli.

Every error that reaches the user derives from :class:`AppError`, which
carries the process exit code the CLI should terminate with.
"""

from __future__ import annotations

from todolist_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
)


class AppError(Exception):
    """Custom application error with exit code."""

    exit_code = ERROR_GENERAL

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class StoreOpenError(AppError):
    """The local task store could not be opened. Unrecoverable."""

    exit_code = ERROR_STORAGE


class TaskNotFoundError(AppError):
    """A task reference did not resolve to exactly one task."""

    exit_code = ERROR_NOT_FOUND


class RemoteTodoError(AppError):
    """Base class for failures while fetching remote todos."""

    exit_code = ERROR_NETWORK


class InvalidEndpointError(RemoteTodoError):
    """The configured endpoint is not an absolute http(s) URL."""


class EmptyResponseError(RemoteTodoError):
    """The transport completed without a usable payload."""


class DecodeFailureError(RemoteTodoError):
    """The payload could not be parsed into the expected shape."""


class TransportFailureError(RemoteTodoError):
    """A lower-level network error (timeout, DNS, reset, HTTP status)."""
