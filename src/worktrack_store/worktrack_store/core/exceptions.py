from __future__ import annotations

from typing import Optional


class StoreError(Exception):
    """Base exception for every failure raised by the record store."""


class ValidationError(StoreError):
    """Raised when caller-supplied data violates an entity invariant.

    Always raised before anything reaches the database.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class SchemaError(StoreError):
    """Raised when the tables cannot be created or do not match the expected layout."""

    def __init__(self, message: str, *, table: Optional[str] = None):
        super().__init__(message)
        self.table = table


class StorageError(StoreError):
    """Raised when SQLite rejects an operation inside a unit of work."""

    def __init__(self, message: str, *, table: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.table = table
        self.cause = cause


class BackupError(StoreError):
    """Raised when a snapshot of the store cannot be produced."""


class RestoreError(StoreError):
    """Raised when a snapshot cannot replace the active store."""
