"""Confluence export analyzer.

This package resolves the object records of a Confluence export into the
lookup tables used by later migration stages: namespace prefixes per space,
hierarchical target titles per page, target filenames and source paths per
attachment, and revision fingerprints per page.
"""

from .attachment_resolver import AttachmentResolver
from .config_loader import ConfigLoader
from .confluence_analyzer import ConfluenceAnalyzer
from .errors import AnalyzerError, ConfigError, ConfigFilesystemError, InvalidTitleError
from .filename_builder import FilenameBuilder
from .models import (
    ANALYZER_TABLES,
    AnalysisSummary,
    AnalyzerConfig,
    TitleFailureReason,
    TitleResult,
)
from .revision_fingerprint import RevisionFingerprintBuilder
from .space_resolver import SpaceResolver
from .title_builder import TitleBuilder
from .title_resolver import TitleResolver

__all__ = [
    'ANALYZER_TABLES',
    'AnalysisSummary',
    'AnalyzerConfig',
    'AnalyzerError',
    'AttachmentResolver',
    'ConfigError',
    'ConfigFilesystemError',
    'ConfigLoader',
    'ConfluenceAnalyzer',
    'FilenameBuilder',
    'InvalidTitleError',
    'RevisionFingerprintBuilder',
    'SpaceResolver',
    'TitleBuilder',
    'TitleFailureReason',
    'TitleResolver',
    'TitleResult',
]
