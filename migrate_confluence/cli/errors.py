"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from migrate_confluence.export_index.errors import MigrationError


class CLIError(MigrationError):
    """Base exception for all CLI-related errors."""
    pass


class SourceNotFoundError(CLIError):
    """Raised when the export source path does not exist."""

    def __init__(self, source_path: str):
        super().__init__(f"Export source not found at {source_path}")
        self.source_path = source_path
