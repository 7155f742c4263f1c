"""
Typed errors shared by the store adapters and the components.

Adapters raise these; component entry points convert them into
Result-style outputs carrying an error ``code``.
"""

from __future__ import annotations


class DevflowError(Exception):
    """Base class for all application errors."""

    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DevflowError):
    """A referenced record does not exist."""

    code = "not_found"


class ConnectionUnavailableError(DevflowError):
    """The database handle is not connected."""

    code = "connection_unavailable"


class StoreOperationError(DevflowError):
    """The store rejected or failed an operation."""

    code = "store_failure"


class ConflictError(DevflowError):
    """A record with the same unique key already exists."""

    code = "conflict"
