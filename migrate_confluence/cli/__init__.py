"""Command-line interface for Confluence export analysis.

This package provides the `confluence-analyze` CLI tool that finds the
metadata documents of a Confluence export, runs the analyzer on them and
persists the resulting lookup tables in a migration workspace.
"""

from .analyze_command import AnalyzeCommand
from .errors import CLIError, SourceNotFoundError
from .models import ExitCode

__all__ = [
    'AnalyzeCommand',
    'CLIError',
    'ExitCode',
    'SourceNotFoundError',
]
