"""Typed exception hierarchy for map store errors.

All exceptions inherit from MapStoreError for easy catching and include
descriptive messages with context to help with debugging.
"""

from typing import Optional

from migrate_confluence.export_index.errors import MigrationError


class MapStoreError(MigrationError):
    """Base exception for all map store errors."""
    pass


class UnknownTableError(MapStoreError):
    """Raised when a table name was not declared when creating the store."""

    def __init__(self, table: str):
        super().__init__(f"Unknown map store table '{table}'")
        self.table = table


class MapStoreFilesystemError(MapStoreError):
    """Raised when reading or writing a persisted table fails."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Map store operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
