"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): All documents analyzed
    - GENERAL_ERROR (1): Unexpected failure, missing source or unwritable workspace
    - DOCUMENT_ERROR (2): An export document could not be loaded
    - CONFIG_ERROR (3): Configuration file missing or invalid

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    DOCUMENT_ERROR = 2
    CONFIG_ERROR = 3
