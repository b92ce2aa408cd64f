"""Typed exception hierarchy for analyzer errors.

This module defines all custom exceptions used by the analyzer. All
exceptions inherit from AnalyzerError for easy catching and include
descriptive messages with context to help with debugging.
"""

from typing import Optional

from migrate_confluence.export_index.errors import MigrationError

from .models import TitleFailureReason


class AnalyzerError(MigrationError):
    """Base exception for all analyzer errors."""
    pass


class InvalidTitleError(AnalyzerError):
    """Raised when a title segment cannot be turned into a valid target title."""

    def __init__(self, title: str, reason: TitleFailureReason, message: str):
        super().__init__(message)
        self.title = title
        self.reason = reason
        self.message = message


class ConfigError(AnalyzerError):
    """Raised when analyzer configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class ConfigFilesystemError(AnalyzerError):
    """Raised when the configuration file cannot be read."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
