"""Typed exception hierarchy for export document errors.

This module defines the base exception of the whole migrate_confluence
package and the errors raised while loading an export document. All
exceptions carry descriptive messages with context to help with debugging.
"""

from typing import Optional


class MigrationError(Exception):
    """Base exception for all migrate_confluence errors.

    Use this to catch any application-level error from the analyzer.
    """
    pass


class ExportIndexError(MigrationError):
    """Base exception for export document and object index errors."""
    pass


class DocumentLoadError(ExportIndexError):
    """Raised when the export document cannot be read or parsed."""

    def __init__(self, document_path: str, reason: Optional[str] = None):
        message = f"Could not load export document {document_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.document_path = document_path
        self.reason = reason
