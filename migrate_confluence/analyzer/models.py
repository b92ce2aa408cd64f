"""Data models for the Confluence analyzer.

This module defines the analyzer configuration, the table names the analyzer
writes, the title resolution result type and the per-document summary.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from migrate_confluence.map_store.models import Multiplicity

SPACE_ID_TO_PREFIX_MAP = 'space-id-to-prefix-map'
PAGES_TITLES_MAP = 'pages-titles-map'
PAGES_IDS_TO_TITLES_MAP = 'pages-ids-to-titles-map'
BODY_CONTENTS_TO_PAGES_MAP = 'body-contents-to-pages-map'
TITLE_REVISIONS = 'title-revisions'
TITLE_ATTACHMENTS = 'title-attachments'
FILES = 'files'
TITLE_INVALIDS = 'title-invalids'

# Every table the analyzer writes, with its multiplicity
ANALYZER_TABLES: Dict[str, Multiplicity] = {
    SPACE_ID_TO_PREFIX_MAP: Multiplicity.SINGLE,
    PAGES_TITLES_MAP: Multiplicity.SINGLE,
    PAGES_IDS_TO_TITLES_MAP: Multiplicity.SINGLE,
    BODY_CONTENTS_TO_PAGES_MAP: Multiplicity.SINGLE,
    TITLE_REVISIONS: Multiplicity.SINGLE,
    TITLE_ATTACHMENTS: Multiplicity.MULTI,
    FILES: Multiplicity.SINGLE,
    TITLE_INVALIDS: Multiplicity.SINGLE,
}


def default_content_type_extensions() -> Dict[str, str]:
    """Extensions for content types whose attachments often lack one."""
    return {
        'application/gliffy+json': 'json',
        'application/gliffy+xml': 'xml',
    }


@dataclass
class AnalyzerConfig:
    """Analyzer behavior options.

    Attributes:
        general_space_key: Space key mapped to the main namespace (empty prefix)
        metadata_filename: Name of the metadata document inside an export
        attachments_dir: Directory below the export root holding attachment files
        latest_version_marker: Path segment used when an attachment declares no version
        max_title_length: Maximum target title length in UTF-8 bytes
        max_extension_length: Longest suffix after the last '.' treated as a file extension
        content_type_extensions: Content type to extension (without dot) for
                                 attachments without an extension
    """
    general_space_key: str = 'GENERAL'
    metadata_filename: str = 'entities.xml'
    attachments_dir: str = 'attachments'
    latest_version_marker: str = '__LATEST__'
    max_title_length: int = 255
    max_extension_length: int = 10
    content_type_extensions: Dict[str, str] = field(
        default_factory=default_content_type_extensions
    )


class TitleFailureReason(Enum):
    """Why a page's target title could not be built."""
    UNRESOLVED_SPACE = "unresolved_space"
    MISSING_ANCESTOR = "missing_ancestor"
    CYCLIC_HIERARCHY = "cyclic_hierarchy"
    MISSING_TITLE = "missing_title"
    INVALID_CHARACTERS = "invalid_characters"
    INVALID_SEGMENT = "invalid_segment"
    TITLE_TOO_LONG = "title_too_long"


@dataclass(frozen=True)
class TitleResult:
    """Outcome of resolving one page's target title.

    Exactly one of title and reason is set.

    Attributes:
        page_id: Id of the page that was resolved
        title: Target title on success
        reason: Failure reason on failure
        message: Diagnostic message on failure

    Example:
        >>> result = TitleResult.success("10", "Home")
        >>> result.succeeded
        True
        >>> failed = TitleResult.failure(
        ...     "20", TitleFailureReason.MISSING_ANCESTOR, "Parent page 21 not found"
        ... )
        >>> failed.succeeded
        False
    """
    page_id: str
    title: Optional[str] = None
    reason: Optional[TitleFailureReason] = None
    message: str = ""

    @classmethod
    def success(cls, page_id: str, title: str) -> 'TitleResult':
        return cls(page_id=page_id, title=title)

    @classmethod
    def failure(cls, page_id: str, reason: TitleFailureReason, message: str) -> 'TitleResult':
        return cls(page_id=page_id, reason=reason, message=message)

    @property
    def succeeded(self) -> bool:
        return self.reason is None


@dataclass
class AnalysisSummary:
    """Counts of what one analysis pass registered.

    Attributes:
        document_path: Path of the analyzed document (empty for in-memory documents)
        spaces: Spaces mapped to a namespace prefix
        pages_resolved: Current pages with a target title
        pages_invalid: Current pages whose title could not be built
        pages_skipped: Pages filtered out (not current, legacy revision, no space)
        page_attachments: Attachments registered under a page title
        swept_files: Attachments registered by the standalone sweep
        conflicts: Conflicting writes refused during this pass
    """
    document_path: str = ""
    spaces: int = 0
    pages_resolved: int = 0
    pages_invalid: int = 0
    pages_skipped: int = 0
    page_attachments: int = 0
    swept_files: int = 0
    conflicts: int = 0
